"""Typed joint, frame, and gesture models for hand-pose detector output."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from hand_pose_gestures.constants import CONFIDENCE_THRESHOLD, DETECTOR_JOINT_NAMES, JOINT_COUNT
from hand_pose_gestures.exceptions import InvalidInputError


class JointName(StrEnum):
    """Canonical detector joint names in tip-first display order."""

    THUMB_TIP = "thumbTip"
    THUMB_IP = "thumbIP"
    THUMB_MP = "thumbMP"
    THUMB_CMC = "thumbCMC"
    INDEX_TIP = "indexTip"
    INDEX_DIP = "indexDIP"
    INDEX_PIP = "indexPIP"
    INDEX_MCP = "indexMCP"
    MIDDLE_TIP = "middleTip"
    MIDDLE_DIP = "middleDIP"
    MIDDLE_PIP = "middlePIP"
    MIDDLE_MCP = "middleMCP"
    RING_TIP = "ringTip"
    RING_DIP = "ringDIP"
    RING_PIP = "ringPIP"
    RING_MCP = "ringMCP"
    LITTLE_TIP = "littleTip"
    LITTLE_DIP = "littleDIP"
    LITTLE_PIP = "littlePIP"
    LITTLE_MCP = "littleMCP"
    WRIST = "wrist"


class FingerName(StrEnum):
    """Joint groups reported by the detector."""

    THUMB = "thumb"
    INDEX = "index"
    MIDDLE = "middle"
    RING = "ring"
    LITTLE = "little"
    WRIST = "wrist"


FINGERS: tuple[FingerName, ...] = (
    FingerName.THUMB,
    FingerName.INDEX,
    FingerName.MIDDLE,
    FingerName.RING,
    FingerName.LITTLE,
)
"""Drawable fingers in overlay order."""


class GestureLabel(StrEnum):
    """Per-frame gesture classification outcome."""

    THUMBS_UP = "thumbs_up"
    THUMBS_DOWN = "thumbs_down"
    NONE = "none"

    @property
    def text(self) -> str:
        """Display string shown in the overlay, empty for :attr:`NONE`."""
        return _LABEL_TEXT[self]


_LABEL_TEXT: dict[GestureLabel, str] = {
    GestureLabel.THUMBS_UP: "THUMBS UP",
    GestureLabel.THUMBS_DOWN: "THUMBS DOWN",
    GestureLabel.NONE: "",
}

_JOINT_INDEX_BY_NAME: dict[str, int] = {
    name: index for index, name in enumerate(DETECTOR_JOINT_NAMES)
}


def _resolve_joint_name(joint: JointName | str) -> JointName:
    joint_name = joint.value if isinstance(joint, JointName) else joint
    if joint_name not in _JOINT_INDEX_BY_NAME:
        raise ValueError(f"Unknown joint name: {joint_name!r}")
    return JointName(joint_name)


@dataclass(frozen=True, slots=True)
class Point:
    """2D point in normalized or view coordinates."""

    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        """Serialize point into a mapping-friendly dictionary."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> Point:
        """Build :class:`Point` from a mapping containing ``x`` and ``y``."""
        return cls(x=float(values["x"]), y=float(values["y"]))


@dataclass(frozen=True, slots=True)
class Joint:
    """One named landmark reported by the detector.

    :param name:
        Detector joint name.
    :param location:
        Joint location.
    :param confidence:
        Detector confidence in ``[0, 1]``.
    :raises ValueError:
        If ``name`` is not a detector joint name.
    """

    name: JointName
    location: Point
    confidence: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", _resolve_joint_name(self.name))

    def is_reliable(self, threshold: float = CONFIDENCE_THRESHOLD) -> bool:
        """Return whether confidence is strictly above ``threshold``."""
        return self.confidence > threshold

    def to_dict(self) -> dict[str, float]:
        """Serialize joint location and confidence.

        :returns:
            Dictionary with ``x``, ``y`` and ``confidence`` keys.
        """
        return {"x": self.location.x, "y": self.location.y, "confidence": self.confidence}


@dataclass(frozen=True, slots=True)
class HandFrame:
    """Snapshot of one detected hand in one video frame.

    The detector may omit joints, so a frame is not required to be complete.
    Joints are stored in canonical order regardless of construction order.

    :param joints:
        Joints reported for this frame, at most one per :class:`JointName`.
    :raises InvalidInputError:
        If a joint name appears more than once.
    """

    joints: tuple[Joint, ...]

    def __post_init__(self) -> None:
        seen: set[JointName] = set()
        for joint in self.joints:
            if joint.name in seen:
                raise InvalidInputError(f"Duplicate joint in frame: {joint.name.value!r}")
            seen.add(joint.name)
        ordered = tuple(sorted(self.joints, key=lambda joint: _JOINT_INDEX_BY_NAME[joint.name]))
        object.__setattr__(self, "joints", ordered)

    @classmethod
    def from_points(
        cls,
        points: tuple[Point, ...] | list[Point],
        *,
        confidence: float = 1.0,
    ) -> HandFrame:
        """Build a complete frame from 21 points in canonical order.

        :param points:
            Joint locations ordered like :data:`DETECTOR_JOINT_NAMES`.
        :param confidence:
            Confidence assigned to every joint.
        :returns:
            Complete hand frame.
        :raises InvalidInputError:
            If the number of points is not 21.
        """
        if len(points) != JOINT_COUNT:
            raise InvalidInputError(
                f"Hand frame requires {JOINT_COUNT} points, got {len(points)}"
            )
        return cls(
            joints=tuple(
                Joint(name=name, location=point, confidence=confidence)
                for name, point in zip(JointName, points, strict=True)
            )
        )

    @property
    def is_complete(self) -> bool:
        """Whether all 21 joints are present."""
        return len(self.joints) == JOINT_COUNT

    @property
    def min_confidence(self) -> float:
        """Lowest joint confidence, ``0.0`` for a frame without joints."""
        if not self.joints:
            return 0.0
        return min(joint.confidence for joint in self.joints)

    @property
    def points(self) -> tuple[Point, ...]:
        """All 21 joint locations in canonical order.

        :raises InvalidInputError:
            If the frame is incomplete.
        """
        if not self.is_complete:
            missing = ", ".join(name.value for name in self.missing_joints())
            raise InvalidInputError(f"Hand frame is missing joints: {missing}")
        return tuple(joint.location for joint in self.joints)

    def missing_joints(self) -> tuple[JointName, ...]:
        """Return canonical joint names absent from this frame."""
        present = {joint.name for joint in self.joints}
        return tuple(name for name in JointName if name not in present)

    def get_joint(self, joint: JointName | str) -> Joint:
        """Return one joint by name.

        :param joint:
            Joint to query, either as :class:`JointName` or detector string
            (for example ``"middleMCP"``).
        :returns:
            The matching joint.
        :raises ValueError:
            If the joint name is unknown.
        :raises InvalidInputError:
            If the joint is known but absent from this frame.
        """
        name = _resolve_joint_name(joint)
        for candidate in self.joints:
            if candidate.name is name:
                return candidate
        raise InvalidInputError(f"Joint not present in frame: {name.value!r}")

    def get_point(self, joint: JointName | str) -> Point:
        """Return the location of one joint."""
        return self.get_joint(joint).location

    def get_finger(self, finger: FingerName | str) -> dict[JointName, Joint]:
        """Return the present joints of one finger group, tip first.

        :param finger:
            Finger group, as :class:`FingerName` or one of ``thumb``, ``index``,
            ``middle``, ``ring``, ``little``, ``wrist``.
        :returns:
            Dictionary mapping :class:`JointName` to :class:`Joint`.
        :raises ValueError:
            If the finger group is unknown.
        """
        finger_name = finger.value if isinstance(finger, FingerName) else finger.lower()
        if finger_name not in {value.value for value in FingerName}:
            raise ValueError(f"Unknown finger name: {finger_name!r}")

        return {
            joint.name: joint
            for joint in self.joints
            if joint.name.value == finger_name or joint.name.value.startswith(finger_name)
        }

    def to_dict(self) -> dict[str, dict[str, dict[str, float]]]:
        """Serialize frame joints keyed by detector name.

        :returns:
            Dictionary with a ``joints`` mapping in canonical order.
        """
        return {"joints": {joint.name.value: joint.to_dict() for joint in self.joints}}

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> HandFrame:
        """Build :class:`HandFrame` from :meth:`to_dict` output.

        :param values:
            Mapping containing a ``joints`` mapping of name to
            ``{"x", "y", "confidence"}``.
        :returns:
            Parsed frame.
        """
        raw_joints: Mapping[str, Mapping[str, Any]] = values["joints"]
        return cls(
            joints=tuple(
                Joint(
                    name=_resolve_joint_name(name),
                    location=Point.from_dict(raw),
                    confidence=float(raw["confidence"]),
                )
                for name, raw in raw_joints.items()
            )
        )
