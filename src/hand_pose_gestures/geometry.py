"""Planar angle and point helpers shared by classification and overlays."""

from __future__ import annotations

import math

from hand_pose_gestures.constants import DEGENERATE_MAGNITUDE
from hand_pose_gestures.models import Point


def vector_angle(x: float, y: float) -> float:
    """Return the direction of vector ``(x, y)`` in degrees.

    The angle is measured from the positive X axis and mapped into ``[0, 360)``
    by reflecting through ``360 - angle`` when ``y < 0``.

    :param x:
        Vector X component.
    :param y:
        Vector Y component.
    :returns:
        Angle in degrees. Vectors shorter than ``1e-4`` yield ``0``.
    """
    magnitude = math.hypot(x, y)
    if magnitude < DEGENERATE_MAGNITUDE:
        return 0.0

    # Rounding can push the ratio just outside acos' domain.
    ratio = max(-1.0, min(1.0, x / magnitude))
    angle = math.degrees(math.acos(ratio))
    if y < 0:
        angle = 360.0 - angle
    return angle % 360.0


def angle_for(start: Point, middle: Point, end: Point, *, clockwise: bool = False) -> float:
    """Return the directed angle at ``middle`` from ray ``middle->end`` to ``middle->start``.

    :param start:
        Point defining the first ray.
    :param middle:
        Vertex of the angle.
    :param end:
        Point defining the second ray.
    :param clockwise:
        If ``True``, return ``360 - angle``.
    :returns:
        Angle in degrees within ``[0, 360)``.
    """
    start_angle = vector_angle(start.x - middle.x, start.y - middle.y)
    end_angle = vector_angle(end.x - middle.x, end.y - middle.y)
    if start_angle > end_angle:
        angle = start_angle - end_angle
    else:
        angle = (360.0 + start_angle - end_angle) % 360.0

    if clockwise:
        angle = (360.0 - angle) % 360.0
    return angle


def distance(p: Point, q: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(q.x - p.x, q.y - p.y)


def midpoint(p: Point, q: Point) -> Point:
    """Point halfway between ``p`` and ``q``."""
    return Point(x=(p.x + q.x) / 2.0, y=(p.y + q.y) / 2.0)
