"""Coordinate conversion utilities for detector joints."""

from __future__ import annotations

from hand_pose_gestures.exceptions import InvalidInputError
from hand_pose_gestures.models import HandFrame, Joint, Point


def detector_to_display_point(x: float, y: float) -> tuple[float, float]:
    """Convert a bottom-left-origin detector point into top-left-origin coordinates.

    The detector reports normalized coordinates with Y pointing up, while
    display space has Y pointing down.

    :param x:
        Normalized X in detector coordinates.
    :param y:
        Normalized Y in detector coordinates.
    :returns:
        Converted ``(x, y)`` in display coordinates.
    """
    return (x, 1.0 - y)


def convert_hand_frame_detector_to_display(frame: HandFrame) -> HandFrame:
    """Flip every joint of ``frame`` into display coordinates.

    Joint names and confidences are preserved.

    :param frame:
        Frame in detector coordinates.
    :returns:
        Frame in display coordinates.
    """
    return HandFrame(
        joints=tuple(
            Joint(
                name=joint.name,
                location=Point(*detector_to_display_point(joint.location.x, joint.location.y)),
                confidence=joint.confidence,
            )
            for joint in frame.joints
        )
    )


def scale_hand_frame_to_view(frame: HandFrame, width: float, height: float) -> HandFrame:
    """Map normalized joint locations into view units.

    :param frame:
        Frame in normalized display coordinates.
    :param width:
        View width.
    :param height:
        View height.
    :returns:
        Frame with locations scaled by the view size.
    :raises InvalidInputError:
        If either dimension is not positive.
    """
    if width <= 0 or height <= 0:
        raise InvalidInputError(f"View size must be positive, got {width}x{height}")

    return HandFrame(
        joints=tuple(
            Joint(
                name=joint.name,
                location=Point(x=joint.location.x * width, y=joint.location.y * height),
                confidence=joint.confidence,
            )
            for joint in frame.joints
        )
    )
