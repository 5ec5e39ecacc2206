"""Declarative per-finger overlay geometry for a rendering collaborator."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from hand_pose_gestures.constants import (
    CONFIDENCE_THRESHOLD,
    FINGER_JOINT_COUNT,
    JOINT_MARKER_RADIUS,
    LABEL_FONT_SIZE,
    OVERLAY_LINE_WIDTH,
)
from hand_pose_gestures.exceptions import ConfigurationError, InvalidInputError
from hand_pose_gestures.models import FINGERS, FingerName, GestureLabel, HandFrame, JointName, Point

Color = tuple[int, int, int]

_DEFAULT_FINGER_COLORS: Mapping[FingerName, Color] = MappingProxyType(
    {
        FingerName.THUMB: (0, 255, 0),
        FingerName.INDEX: (0, 0, 255),
        FingerName.MIDDLE: (255, 255, 0),
        FingerName.RING: (0, 255, 255),
        FingerName.LITTLE: (255, 0, 0),
    }
)


@dataclass(frozen=True, slots=True)
class Circle:
    """Joint marker centered on one joint."""

    center: Point
    radius: float


@dataclass(frozen=True, slots=True)
class LineSegment:
    """Straight segment between two joints."""

    start: Point
    end: Point


@dataclass(frozen=True, slots=True)
class FingerPath:
    """Geometry for one finger: joint markers plus segments back to the wrist.

    :param finger:
        Finger this path draws.
    :param color:
        RGB fill and stroke color.
    :param circles:
        Joint markers, empty when no hand is shown.
    :param segments:
        Connecting segments, empty when no hand is shown.
    :param line_width:
        Stroke width for segments.
    """

    finger: FingerName
    color: Color
    circles: tuple[Circle, ...] = ()
    segments: tuple[LineSegment, ...] = ()
    line_width: float = OVERLAY_LINE_WIDTH

    @property
    def is_empty(self) -> bool:
        """Whether this path draws nothing."""
        return not self.circles and not self.segments


@dataclass(frozen=True, slots=True)
class OverlayStyle:
    """Colors and sizes used when building overlays.

    :param finger_colors:
        RGB color per drawable finger.
    :param label_color:
        RGB color of the gesture label.
    :param marker_radius:
        Joint marker radius in view units.
    :param line_width:
        Segment stroke width in view units.
    :param font_size:
        Gesture label font size.
    """

    finger_colors: Mapping[FingerName, Color] = field(
        default_factory=lambda: _DEFAULT_FINGER_COLORS
    )
    label_color: Color = (19, 93, 148)
    marker_radius: float = JOINT_MARKER_RADIUS
    line_width: float = OVERLAY_LINE_WIDTH
    font_size: float = LABEL_FONT_SIZE

    def __post_init__(self) -> None:
        """Validate style values.

        :raises ConfigurationError:
            If a finger color is missing, a channel is out of range, or a size
            is not positive.
        """
        missing = [finger.value for finger in FINGERS if finger not in self.finger_colors]
        if missing:
            raise ConfigurationError(f"finger_colors is missing: {', '.join(missing)}.")
        for color in (*self.finger_colors.values(), self.label_color):
            if len(color) != 3 or any(channel < 0 or channel > 255 for channel in color):
                raise ConfigurationError("colors must be RGB triples in range [0, 255].")
        if self.marker_radius <= 0 or self.line_width <= 0 or self.font_size <= 0:
            raise ConfigurationError("marker_radius, line_width and font_size must be positive.")

    def color_for(self, finger: FingerName) -> Color:
        """Return the RGB color used to draw ``finger``."""
        return self.finger_colors[finger]


@dataclass(frozen=True, slots=True)
class Overlay:
    """Complete overlay for one frame: five finger paths and a label.

    :param fingers:
        One path per drawable finger, thumb first.
    :param label:
        Gesture text, empty when nothing is recognized.
    :param label_color:
        RGB color of the label.
    :param font_size:
        Label font size.
    """

    fingers: tuple[FingerPath, ...]
    label: str = ""
    label_color: Color = (19, 93, 148)
    font_size: float = LABEL_FONT_SIZE

    @property
    def is_empty(self) -> bool:
        """Whether the overlay clears every finger and the label."""
        return not self.label and all(path.is_empty for path in self.fingers)

    def get_finger(self, finger: FingerName | str) -> FingerPath:
        """Return the path drawn for one finger.

        :raises ValueError:
            If ``finger`` is not a drawable finger.
        """
        finger_name = FingerName(finger)
        for path in self.fingers:
            if path.finger is finger_name:
                return path
        raise ValueError(f"No path for finger: {finger_name.value!r}")


def finger_path(
    joint_points: Sequence[Point],
    wrist: Point,
    *,
    finger: FingerName,
    color: Color,
    radius: float = JOINT_MARKER_RADIUS,
    line_width: float = OVERLAY_LINE_WIDTH,
) -> FingerPath:
    """Build the path for one finger rooted at the wrist.

    A circle is placed on each of the four joints, and segments connect
    ``j0 -> j1 -> j2 -> j3 -> wrist``.

    :param joint_points:
        Exactly four joint locations, tip first.
    :param wrist:
        Wrist location closing the last segment.
    :param finger:
        Finger being drawn.
    :param color:
        RGB color for the path.
    :param radius:
        Joint marker radius.
    :param line_width:
        Segment stroke width.
    :returns:
        Finger path with four circles and four segments.
    :raises InvalidInputError:
        If ``joint_points`` does not contain exactly four points.
    """
    if len(joint_points) != FINGER_JOINT_COUNT:
        raise InvalidInputError(
            f"Finger path requires {FINGER_JOINT_COUNT} joint points, got {len(joint_points)}"
        )

    circles = tuple(Circle(center=point, radius=radius) for point in joint_points)
    chain = (*joint_points, wrist)
    segments = tuple(
        LineSegment(start=chain[i], end=chain[i + 1]) for i in range(FINGER_JOINT_COUNT)
    )
    return FingerPath(
        finger=finger,
        color=color,
        circles=circles,
        segments=segments,
        line_width=line_width,
    )


def empty_overlay(style: OverlayStyle | None = None) -> Overlay:
    """Return an overlay that clears all five fingers and the label."""
    style = style or OverlayStyle()
    return Overlay(
        fingers=tuple(
            FingerPath(finger=finger, color=style.color_for(finger), line_width=style.line_width)
            for finger in FINGERS
        ),
        label="",
        label_color=style.label_color,
        font_size=style.font_size,
    )


def build_overlay(
    frame: HandFrame | None,
    label: GestureLabel = GestureLabel.NONE,
    *,
    style: OverlayStyle | None = None,
    confidence_threshold: float = CONFIDENCE_THRESHOLD,
) -> Overlay:
    """Build overlay geometry and label text for one frame.

    A frame with any joint at or below ``confidence_threshold`` is treated like
    a missing hand, so the overlay agrees with :func:`classify`.

    :param frame:
        Hand frame in view coordinates, or ``None`` when no hand was detected.
    :param label:
        Gesture label to display.
    :param style:
        Optional colors and sizes.
    :param confidence_threshold:
        Joints must be strictly above this confidence to be drawn.
    :returns:
        Overlay value; empty when ``frame`` is ``None`` or unreliable.
    :raises InvalidInputError:
        If ``frame`` is missing joints.
    """
    style = style or OverlayStyle()
    if frame is None:
        return empty_overlay(style)

    points = frame.points
    if frame.min_confidence <= confidence_threshold:
        return empty_overlay(style)

    wrist = frame.get_point(JointName.WRIST)
    paths = []
    for index, finger in enumerate(FINGERS):
        offset = index * FINGER_JOINT_COUNT
        paths.append(
            finger_path(
                points[offset : offset + FINGER_JOINT_COUNT],
                wrist,
                finger=finger,
                color=style.color_for(finger),
                radius=style.marker_radius,
                line_width=style.line_width,
            )
        )

    return Overlay(
        fingers=tuple(paths),
        label=label.text,
        label_color=style.label_color,
        font_size=style.font_size,
    )
