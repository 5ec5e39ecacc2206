"""Parsing helpers for detector observations and recorded JSON lines."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from hand_pose_gestures.convert import detector_to_display_point
from hand_pose_gestures.exceptions import ParseError
from hand_pose_gestures.models import HandFrame, Joint, JointName, Point

_VALUE_KEYS = ("x", "y", "confidence")


def parse_observation(values: Mapping[str, Any], *, flip_y: bool = True) -> HandFrame:
    """Parse one detector observation into a :class:`HandFrame`.

    Each entry maps a detector joint name to either a mapping with
    ``x``, ``y`` and ``confidence`` keys or a ``[x, y, confidence]`` sequence.
    Joints the detector omitted are simply absent from the resulting frame.

    :param values:
        Mapping of joint name to joint values.
    :param flip_y:
        If ``True``, convert bottom-left-origin detector coordinates into
        top-left-origin display coordinates.
    :returns:
        Parsed, possibly incomplete, hand frame.
    :raises ParseError:
        If a joint name is unknown or its values are malformed.
    """
    joints: list[Joint] = []
    for raw_name, raw_values in values.items():
        try:
            name = JointName(raw_name)
        except ValueError as exc:
            raise ParseError(f"Unknown joint name: {raw_name!r}") from exc

        x, y, confidence = _parse_joint_values(name, raw_values)
        if flip_y:
            x, y = detector_to_display_point(x, y)
        joints.append(Joint(name=name, location=Point(x=x, y=y), confidence=confidence))
    return HandFrame(joints=tuple(joints))


def parse_line(line: str, *, flip_y: bool = True) -> HandFrame | None:
    """Parse one recorded detector line.

    The line is a JSON object. ``{"joints": {...}}`` holds one observation as
    accepted by :func:`parse_observation`; a missing or ``null`` ``joints``
    value means no hand was detected in that frame.

    :param line:
        Raw UTF-8 decoded line.
    :param flip_y:
        Forwarded to :func:`parse_observation`.
    :returns:
        Parsed frame, or ``None`` when the frame has no hand.
    :raises ParseError:
        If the line is empty, is not a JSON object, or holds malformed joints.
    """
    stripped = line.strip()
    if not stripped:
        raise ParseError("Empty line.")

    try:
        payload = json.loads(stripped)
    except json.JSONDecodeError as exc:
        raise ParseError("Line is not valid JSON.") from exc

    if not isinstance(payload, dict):
        raise ParseError("Line must contain a JSON object.")

    joints = payload.get("joints")
    if joints is None:
        return None
    if not isinstance(joints, dict):
        raise ParseError("'joints' must be a JSON object.")
    return parse_observation(joints, flip_y=flip_y)


def _parse_joint_values(name: JointName, raw: Any) -> tuple[float, float, float]:
    """Extract ``(x, y, confidence)`` floats for one joint.

    :raises ParseError:
        If values are missing, have the wrong arity, or are not numeric.
    """
    if isinstance(raw, Mapping):
        try:
            chunks = [raw[key] for key in _VALUE_KEYS]
        except KeyError as exc:
            raise ParseError(f"Joint {name.value!r} is missing key {exc.args[0]!r}") from exc
    elif isinstance(raw, Sequence) and not isinstance(raw, str):
        if len(raw) != len(_VALUE_KEYS):
            raise ParseError(
                f"Joint {name.value!r} must contain {len(_VALUE_KEYS)} values, got {len(raw)}"
            )
        chunks = list(raw)
    else:
        raise ParseError(f"Joint {name.value!r} has unsupported value type.")

    try:
        x, y, confidence = (float(value) for value in chunks)
    except (TypeError, ValueError) as exc:
        raise ParseError(f"Joint {name.value!r} contains non-float values.") from exc
    return x, y, confidence
