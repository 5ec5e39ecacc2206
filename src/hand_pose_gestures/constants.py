JOINT_COUNT = 21
FINGER_JOINT_COUNT = 4

CONFIDENCE_THRESHOLD = 0.3

STRAIGHT_ANGLE_MIN = 160.0
STRAIGHT_ANGLE_MAX = 200.0
DEGENERATE_MAGNITUDE = 1e-4

JOINT_MARKER_RADIUS = 5.0
OVERLAY_LINE_WIDTH = 5.0
LABEL_FONT_SIZE = 40.0

# Tip-first per finger, wrist last.
DETECTOR_JOINT_NAMES: tuple[str, ...] = (
    "thumbTip",
    "thumbIP",
    "thumbMP",
    "thumbCMC",
    "indexTip",
    "indexDIP",
    "indexPIP",
    "indexMCP",
    "middleTip",
    "middleDIP",
    "middlePIP",
    "middleMCP",
    "ringTip",
    "ringDIP",
    "ringPIP",
    "ringMCP",
    "littleTip",
    "littleDIP",
    "littlePIP",
    "littleMCP",
    "wrist",
)
