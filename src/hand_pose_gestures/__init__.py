"""Public API surface for hand-pose gesture classification and overlays."""

from hand_pose_gestures.__about__ import __version__
from hand_pose_gestures.classifier import (
    Classification,
    ClassifierConfig,
    classify,
    classify_with_angle,
    is_bent,
    is_valid_frame,
    middle_finger_bend_angle,
)
from hand_pose_gestures.convert import (
    convert_hand_frame_detector_to_display,
    detector_to_display_point,
    scale_hand_frame_to_view,
)
from hand_pose_gestures.exceptions import (
    ConfigurationError,
    DetectionFailedError,
    HandPoseError,
    InvalidInputError,
    ParseError,
    ProcessorCallbackError,
    ProcessorError,
    VisualizationDependencyError,
)
from hand_pose_gestures.geometry import angle_for, distance, midpoint, vector_angle
from hand_pose_gestures.models import (
    FINGERS,
    FingerName,
    GestureLabel,
    HandFrame,
    Joint,
    JointName,
    Point,
)
from hand_pose_gestures.overlay import (
    Circle,
    FingerPath,
    LineSegment,
    Overlay,
    OverlayStyle,
    build_overlay,
    empty_overlay,
    finger_path,
)
from hand_pose_gestures.parser import parse_line, parse_observation
from hand_pose_gestures.processor import (
    Detector,
    ErrorPolicy,
    FrameLogEvent,
    FrameProcessor,
    FrameProcessorConfig,
    FrameResult,
    FrameStatus,
    LogEventKind,
    ProcessorStats,
)
from hand_pose_gestures.visualization import RerunVisualizer, RerunVisualizerConfig

__all__ = [
    "FINGERS",
    "Circle",
    "Classification",
    "ClassifierConfig",
    "ConfigurationError",
    "DetectionFailedError",
    "Detector",
    "ErrorPolicy",
    "FingerName",
    "FingerPath",
    "FrameLogEvent",
    "FrameProcessor",
    "FrameProcessorConfig",
    "FrameResult",
    "FrameStatus",
    "GestureLabel",
    "HandFrame",
    "HandPoseError",
    "InvalidInputError",
    "Joint",
    "JointName",
    "LineSegment",
    "LogEventKind",
    "Overlay",
    "OverlayStyle",
    "ParseError",
    "Point",
    "ProcessorCallbackError",
    "ProcessorError",
    "ProcessorStats",
    "RerunVisualizer",
    "RerunVisualizerConfig",
    "VisualizationDependencyError",
    "__version__",
    "angle_for",
    "build_overlay",
    "classify",
    "classify_with_angle",
    "convert_hand_frame_detector_to_display",
    "detector_to_display_point",
    "distance",
    "empty_overlay",
    "finger_path",
    "is_bent",
    "is_valid_frame",
    "middle_finger_bend_angle",
    "midpoint",
    "parse_line",
    "parse_observation",
    "scale_hand_frame_to_view",
    "vector_angle",
]
