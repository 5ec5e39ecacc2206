"""Single-frame thumbs-up/thumbs-down classification."""

from __future__ import annotations

from dataclasses import dataclass

from hand_pose_gestures.constants import (
    CONFIDENCE_THRESHOLD,
    JOINT_COUNT,
    STRAIGHT_ANGLE_MAX,
    STRAIGHT_ANGLE_MIN,
)
from hand_pose_gestures.exceptions import ConfigurationError
from hand_pose_gestures.geometry import angle_for
from hand_pose_gestures.models import GestureLabel, HandFrame, JointName


@dataclass(frozen=True, slots=True)
class ClassifierConfig:
    """Thresholds for :func:`classify`.

    :param confidence_threshold:
        Joints with confidence at or below this value make the frame invalid.
    :param straight_angle_min:
        Lower bound of the dead zone in which the middle finger counts as straight.
    :param straight_angle_max:
        Upper bound of the straight dead zone.
    """

    confidence_threshold: float = CONFIDENCE_THRESHOLD
    straight_angle_min: float = STRAIGHT_ANGLE_MIN
    straight_angle_max: float = STRAIGHT_ANGLE_MAX

    def __post_init__(self) -> None:
        """Validate configuration constraints.

        :raises ConfigurationError:
            If thresholds are out of range or the dead zone is empty.
        """
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ConfigurationError("confidence_threshold must be in range [0, 1].")
        for value in (self.straight_angle_min, self.straight_angle_max):
            if not 0.0 <= value <= 360.0:
                raise ConfigurationError("straight angle bounds must be in range [0, 360].")
        if self.straight_angle_min >= self.straight_angle_max:
            raise ConfigurationError("straight_angle_min must be less than straight_angle_max.")


@dataclass(frozen=True, slots=True)
class Classification:
    """Gesture label together with the bend angle it was derived from.

    :param label:
        Classified gesture.
    :param bend_angle:
        Middle-finger bend angle in degrees, ``None`` when the frame was invalid.
    """

    label: GestureLabel
    bend_angle: float | None = None


_DEFAULT_CONFIG = ClassifierConfig()


def is_valid_frame(
    frame: HandFrame | None,
    *,
    confidence_threshold: float = CONFIDENCE_THRESHOLD,
) -> bool:
    """Return whether ``frame`` holds all 21 joints above ``confidence_threshold``."""
    if frame is None or len(frame.joints) != JOINT_COUNT:
        return False
    return all(joint.is_reliable(confidence_threshold) for joint in frame.joints)


def middle_finger_bend_angle(frame: HandFrame) -> float:
    """Return the angle at the middle MCP joint between the PIP joint and the wrist.

    :param frame:
        Frame containing ``middlePIP``, ``middleMCP`` and ``wrist``.
    :returns:
        Counter-clockwise angle in degrees within ``[0, 360)``.
    """
    return angle_for(
        frame.get_point(JointName.MIDDLE_PIP),
        frame.get_point(JointName.MIDDLE_MCP),
        frame.get_point(JointName.WRIST),
        clockwise=False,
    )


def is_bent(angle: float, config: ClassifierConfig | None = None) -> bool:
    """Return whether ``angle`` lies outside the straight dead zone."""
    config = config or _DEFAULT_CONFIG
    return angle < config.straight_angle_min or angle > config.straight_angle_max


def classify_with_angle(
    frame: HandFrame | None,
    config: ClassifierConfig | None = None,
) -> Classification:
    """Classify one frame and report the bend angle used for the decision.

    Absent, incomplete, or low-confidence frames are treated as "no hand" and
    yield :attr:`GestureLabel.NONE` without raising.

    :param frame:
        Hand frame in top-left-origin coordinates, or ``None``.
    :param config:
        Optional thresholds.
    :returns:
        Classification result.
    """
    config = config or _DEFAULT_CONFIG
    if frame is None or not is_valid_frame(
        frame, confidence_threshold=config.confidence_threshold
    ):
        return Classification(label=GestureLabel.NONE)

    angle = middle_finger_bend_angle(frame)
    if not is_bent(angle, config):
        return Classification(label=GestureLabel.NONE, bend_angle=angle)

    thumb_y = frame.get_point(JointName.THUMB_TIP).y
    wrist_y = frame.get_point(JointName.WRIST).y
    if thumb_y < wrist_y:
        label = GestureLabel.THUMBS_UP
    elif thumb_y > wrist_y:
        label = GestureLabel.THUMBS_DOWN
    else:
        label = GestureLabel.NONE
    return Classification(label=label, bend_angle=angle)


def classify(frame: HandFrame | None, config: ClassifierConfig | None = None) -> GestureLabel:
    """Classify one frame as thumbs up, thumbs down, or none.

    :param frame:
        Hand frame in top-left-origin coordinates, or ``None``.
    :param config:
        Optional thresholds.
    :returns:
        Gesture label.
    """
    return classify_with_angle(frame, config).label
