"""Vector helpers and point/segment distance shared by the stroke pipeline.

Points are plain ``(x, y)`` tuples here; the higher level modules carry
pressure and metadata on their own records and call into these helpers with
bare coordinates.
"""

from __future__ import annotations

from typing import Optional, Tuple
import math

Vec2 = Tuple[float, float]


def dot(ax: float, ay: float, bx: float, by: float) -> float:
    """Dot product of two 2D vectors given component-wise."""
    return ax * bx + ay * by


def perpendicular(vx: float, vy: float) -> Vec2:
    """Rotate a vector by -90 degrees: ``(vx, vy) -> (vy, -vx)``."""
    return (vy, -vx)


def normalize(vx: float, vy: float, eps: float = 1e-12) -> Optional[Vec2]:
    """Return the unit vector along ``(vx, vy)``, or None if it has no length."""
    length = math.hypot(vx, vy)
    if length < eps:
        return None
    return (vx / length, vy / length)


def lerp(a: Vec2, b: Vec2, t: float) -> Vec2:
    """Interpolate from ``a`` toward ``b`` by fraction ``t``."""
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def squared_distance(ax: float, ay: float, bx: float, by: float) -> float:
    dx = ax - bx
    dy = ay - by
    return dx * dx + dy * dy


def rotate_about(px: float, py: float, ox: float, oy: float, angle: float) -> Vec2:
    """Rotate the offset ``(ox, oy)`` by ``angle`` radians and add it to ``(px, py)``."""
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return (px + ox * cos_a - oy * sin_a, py + ox * sin_a + oy * cos_a)


def distance_to_segment_sq(
    px: float,
    py: float,
    ax: float,
    ay: float,
    bx: float,
    by: float,
) -> float:
    """Squared distance from point P to segment AB.

    The projection parameter is clamped to [0, 1]; a zero-length segment
    degrades to point distance.
    """
    dx = bx - ax
    dy = by - ay
    len2 = dx * dx + dy * dy
    if len2 == 0:
        return squared_distance(px, py, ax, ay)
    t = ((px - ax) * dx + (py - ay) * dy) / len2
    t = max(0.0, min(1.0, t))
    return squared_distance(px, py, ax + t * dx, ay + t * dy)


__all__ = [
    "Vec2",
    "dot",
    "perpendicular",
    "normalize",
    "lerp",
    "squared_distance",
    "rotate_about",
    "distance_to_segment_sq",
]
