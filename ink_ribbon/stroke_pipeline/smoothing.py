"""Catmull-Rom helpers for stroke centerlines.

Raw samples joined by straight lines look jagged. A Catmull-Rom spline passes
through every sample, and each of its segments converts to one cubic Bezier
(control points at 1/6 of the neighbour differences), which is what vector
renderers draw natively.
"""

from __future__ import annotations

from typing import List, Sequence

from .contour import Contour
from .point_processor import RawPoint, clamp_pressure


def _controls(points: Sequence, i: int):
    n = len(points)
    p0 = points[max(0, i - 1)]
    p1 = points[i]
    p2 = points[i + 1]
    p3 = points[min(n - 1, i + 2)]
    return (
        (p1.x + (p2.x - p0.x) / 6, p1.y + (p2.y - p0.y) / 6),
        (p2.x - (p3.x - p1.x) / 6, p2.y - (p3.y - p1.y) / 6),
    )


def points_to_bezier_path(points: Sequence) -> Contour:
    """Open centerline path through all points (move, then cubics).

    One point gives a lone move, two points a straight line.
    """
    path = Contour()
    if len(points) == 0:
        return path
    path.move_to(points[0].x, points[0].y)
    if len(points) == 2:
        path.line_to(points[1].x, points[1].y)
        return path
    for i in range(len(points) - 1):
        c1, c2 = _controls(points, i)
        path.cubic_to(c1[0], c1[1], c2[0], c2[1], points[i + 1].x, points[i + 1].y)
    return path


def _bezier(p1, c1, c2, p2, t: float):
    mt = 1 - t
    mt2 = mt * mt
    t2 = t * t
    return (
        mt2 * mt * p1[0] + 3 * mt2 * t * c1[0] + 3 * mt * t2 * c2[0] + t2 * t * p2[0],
        mt2 * mt * p1[1] + 3 * mt2 * t * c1[1] + 3 * mt * t2 * c2[1] + t2 * t * p2[1],
    )


def sample_centerline(points: Sequence, steps_per_segment: int = 4) -> List[RawPoint]:
    """Sample the Catmull-Rom centerline, interpolating pressure linearly.

    Every input point is kept; ``steps_per_segment`` points are inserted
    strictly between each consecutive pair.
    """
    if len(points) == 0:
        return []
    pts = [RawPoint(p.x, p.y, getattr(p, "pressure", None)) for p in points]
    if len(pts) == 1:
        return pts

    result = [pts[0]]
    for i in range(len(pts) - 1):
        p1 = pts[i]
        p2 = pts[i + 1]
        c1, c2 = _controls(pts, i)
        pr1 = clamp_pressure(p1.pressure)
        pr2 = clamp_pressure(p2.pressure)
        for s in range(1, steps_per_segment + 1):
            t = s / (steps_per_segment + 1)
            x, y = _bezier((p1.x, p1.y), c1, c2, (p2.x, p2.y), t)
            result.append(RawPoint(x, y, pr1 + t * (pr2 - pr1)))
        result.append(p2)
    return result


def sample_smoothed_path(points: Sequence, steps_per_segment: int = 4) -> List[RawPoint]:
    """Like ``sample_centerline``; two points are subdivided along a straight line."""
    if len(points) == 2:
        a, b = points
        pa = clamp_pressure(getattr(a, "pressure", None))
        pb = clamp_pressure(getattr(b, "pressure", None))
        out = [RawPoint(a.x, a.y, getattr(a, "pressure", None))]
        for s in range(1, steps_per_segment + 1):
            t = s / (steps_per_segment + 1)
            out.append(RawPoint(a.x + t * (b.x - a.x), a.y + t * (b.y - a.y), pa + t * (pb - pa)))
        out.append(RawPoint(b.x, b.y, getattr(b, "pressure", None)))
        return out
    return sample_centerline(points, steps_per_segment)


__all__ = [
    "points_to_bezier_path",
    "sample_centerline",
    "sample_smoothed_path",
]
