from __future__ import annotations

import math

import pytest

from hand_pose_gestures import (
    ClassifierConfig,
    ConfigurationError,
    GestureLabel,
    HandFrame,
    Joint,
    JointName,
    Point,
    classify,
    classify_with_angle,
    is_bent,
    is_valid_frame,
    middle_finger_bend_angle,
)

_WRIST = Point(0.5, 0.5)
_MIDDLE_MCP = Point(0.5, 0.4)


def _make_frame(
    *,
    thumb_tip_y: float = 0.2,
    middle_pip: Point = Point(0.4, 0.4),
    confidence: float = 0.9,
) -> HandFrame:
    locations = {name: Point(0.5, 0.45) for name in JointName}
    locations[JointName.WRIST] = _WRIST
    locations[JointName.MIDDLE_MCP] = _MIDDLE_MCP
    locations[JointName.MIDDLE_PIP] = middle_pip
    locations[JointName.THUMB_TIP] = Point(0.4, thumb_tip_y)
    return HandFrame(
        joints=tuple(
            Joint(name=name, location=location, confidence=confidence)
            for name, location in locations.items()
        )
    )


def _pip_at_angle(degrees: float) -> Point:
    # The wrist ray from the MCP points along +Y (90 degrees).
    radians = math.radians(90.0 + degrees)
    return Point(_MIDDLE_MCP.x + 0.1 * math.cos(radians), _MIDDLE_MCP.y + 0.1 * math.sin(radians))


def test_bent_middle_finger_with_thumb_above_wrist_is_thumbs_up() -> None:
    frame = _make_frame(thumb_tip_y=0.2)

    assert middle_finger_bend_angle(frame) == pytest.approx(90.0)
    assert classify(frame) is GestureLabel.THUMBS_UP


def test_bent_middle_finger_with_thumb_below_wrist_is_thumbs_down() -> None:
    frame = _make_frame(thumb_tip_y=0.8)

    assert classify(frame) is GestureLabel.THUMBS_DOWN


def test_thumb_level_with_wrist_is_none() -> None:
    frame = _make_frame(thumb_tip_y=0.5)

    assert classify(frame) is GestureLabel.NONE


@pytest.mark.parametrize("degrees", [175.0, 180.0, 185.0])
@pytest.mark.parametrize("thumb_tip_y", [0.2, 0.8])
def test_straight_middle_finger_is_none(degrees: float, thumb_tip_y: float) -> None:
    frame = _make_frame(thumb_tip_y=thumb_tip_y, middle_pip=_pip_at_angle(degrees))

    assert middle_finger_bend_angle(frame) == pytest.approx(degrees)
    assert classify(frame) is GestureLabel.NONE


@pytest.mark.parametrize("degrees", [150.0, 210.0, 270.0, 30.0])
def test_bend_outside_dead_zone_is_classified(degrees: float) -> None:
    frame = _make_frame(middle_pip=_pip_at_angle(degrees))

    assert classify(frame) is GestureLabel.THUMBS_UP


def test_missing_frame_is_none() -> None:
    assert classify(None) is GestureLabel.NONE
    assert classify_with_angle(None).bend_angle is None


def test_confidence_at_threshold_is_none() -> None:
    frame = _make_frame(confidence=0.3)

    assert not is_valid_frame(frame)
    assert classify(frame) is GestureLabel.NONE


def test_single_low_confidence_joint_is_none() -> None:
    frame = _make_frame()
    joints = tuple(
        Joint(joint.name, joint.location, 0.1) if joint.name is JointName.RING_DIP else joint
        for joint in frame.joints
    )

    assert classify(HandFrame(joints=joints)) is GestureLabel.NONE


def test_incomplete_frame_is_none() -> None:
    frame = _make_frame()
    joints = tuple(joint for joint in frame.joints if joint.name is not JointName.LITTLE_TIP)

    assert classify(HandFrame(joints=joints)) is GestureLabel.NONE


def test_classify_with_angle_reports_angle() -> None:
    result = classify_with_angle(_make_frame(thumb_tip_y=0.8))

    assert result.label is GestureLabel.THUMBS_DOWN
    assert result.bend_angle == pytest.approx(90.0)


def test_custom_thresholds() -> None:
    config = ClassifierConfig(confidence_threshold=0.95, straight_angle_min=80.0)
    frame = _make_frame()

    assert classify(frame, config) is GestureLabel.NONE
    assert classify(_make_frame(confidence=0.99), config) is GestureLabel.NONE
    assert not is_bent(90.0, config)
    assert is_bent(90.0)


def test_invalid_classifier_config_raises() -> None:
    with pytest.raises(ConfigurationError):
        ClassifierConfig(confidence_threshold=1.5)
    with pytest.raises(ConfigurationError):
        ClassifierConfig(straight_angle_min=200.0, straight_angle_max=160.0)
    with pytest.raises(ConfigurationError):
        ClassifierConfig(straight_angle_max=400.0)
