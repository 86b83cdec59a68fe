"""Renderer-neutral path representation.

A ``Contour`` is an ordered list of path commands (move/line/cubic/arc/circle
plus close) that any vector rasterizer supporting filled paths can consume.
It can also be exported as an SVG path string, flattened to a vertex array,
or turned into a shapely polygon for measurements.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, NamedTuple, Optional, Tuple, Union
import math

import numpy as np

from shapely.geometry import Polygon

POINT_EPS = 1e-6


class MoveTo(NamedTuple):
    x: float
    y: float


class LineTo(NamedTuple):
    x: float
    y: float


class CubicTo(NamedTuple):
    c1x: float
    c1y: float
    c2x: float
    c2y: float
    x: float
    y: float


class ArcTo(NamedTuple):
    """Arc along the circle (cx, cy, r) from ``start_angle`` sweeping ``sweep`` degrees.

    Angles follow the ``(cos, sin)`` parameterisation of the canvas axes, so a
    positive sweep turns from +x toward +y.
    """
    cx: float
    cy: float
    radius: float
    start_angle: float
    sweep: float

    def point_at(self, angle_deg: float) -> Tuple[float, float]:
        a = math.radians(angle_deg)
        return (self.cx + self.radius * math.cos(a), self.cy + self.radius * math.sin(a))

    @property
    def start(self) -> Tuple[float, float]:
        return self.point_at(self.start_angle)

    @property
    def end(self) -> Tuple[float, float]:
        return self.point_at(self.start_angle + self.sweep)


class Circle(NamedTuple):
    """A complete circle; a closed sub-path on its own."""
    cx: float
    cy: float
    radius: float


class Close(NamedTuple):
    pass


PathCommand = Union[MoveTo, LineTo, CubicTo, ArcTo, Circle, Close]


def _cubic_points(p0, c1, c2, p3, steps: int) -> List[Tuple[float, float]]:
    out = []
    for s in range(1, steps + 1):
        t = s / steps
        mt = 1 - t
        a = mt * mt * mt
        b = 3 * mt * mt * t
        c = 3 * mt * t * t
        d = t * t * t
        out.append((
            a * p0[0] + b * c1[0] + c * c2[0] + d * p3[0],
            a * p0[1] + b * c1[1] + c * c2[1] + d * p3[1],
        ))
    return out


def _fmt(value: float) -> str:
    return f"{value:.4f}".rstrip("0").rstrip(".")


@dataclass
class Contour:
    """A closed (or, for centerlines, open) sequence of path commands.

    ``volatile`` marks geometry that changes on every request (live strokes);
    renderers may use it to skip caching. It never changes the shape.
    """

    commands: List[PathCommand] = field(default_factory=list)
    volatile: bool = False

    def __len__(self) -> int:
        return len(self.commands)

    def __iter__(self) -> Iterator[PathCommand]:
        return iter(self.commands)

    @property
    def is_empty(self) -> bool:
        return not self.commands

    # -- building ---------------------------------------------------------

    def move_to(self, x: float, y: float) -> None:
        self.commands.append(MoveTo(x, y))

    def line_to(self, x: float, y: float) -> None:
        self.commands.append(LineTo(x, y))

    def cubic_to(self, c1x: float, c1y: float, c2x: float, c2y: float, x: float, y: float) -> None:
        self.commands.append(CubicTo(c1x, c1y, c2x, c2y, x, y))

    def arc_to(self, cx: float, cy: float, radius: float, start_angle: float, sweep: float) -> None:
        self.commands.append(ArcTo(cx, cy, radius, start_angle, sweep))

    def add_circle(self, cx: float, cy: float, radius: float) -> None:
        self.commands.append(Circle(cx, cy, radius))

    def close(self) -> None:
        self.commands.append(Close())

    # -- queries ----------------------------------------------------------

    @property
    def start_point(self) -> Optional[Tuple[float, float]]:
        """Point the first sub-path starts at."""
        for cmd in self.commands:
            if isinstance(cmd, MoveTo):
                return (cmd.x, cmd.y)
            if isinstance(cmd, Circle):
                return (cmd.cx + cmd.radius, cmd.cy)
        return None

    @property
    def end_point(self) -> Optional[Tuple[float, float]]:
        """Pen position after the last drawing command (``Close`` excluded)."""
        for cmd in reversed(self.commands):
            if isinstance(cmd, (MoveTo, LineTo, CubicTo)):
                return (cmd.x, cmd.y)
            if isinstance(cmd, ArcTo):
                return cmd.end
            if isinstance(cmd, Circle):
                return (cmd.cx + cmd.radius, cmd.cy)
        return None

    @property
    def is_closed(self) -> bool:
        """True when the contour ends where it started and is explicitly closed."""
        if self.is_empty:
            return False
        if all(isinstance(cmd, Circle) for cmd in self.commands):
            return True
        if not isinstance(self.commands[-1], Close):
            return False
        start = self.start_point
        end = self.end_point
        return math.hypot(start[0] - end[0], start[1] - end[1]) < POINT_EPS

    # -- export -----------------------------------------------------------

    def to_svg_path(self) -> str:
        """SVG ``d`` attribute for this contour."""
        parts: List[str] = []
        for cmd in self.commands:
            if isinstance(cmd, MoveTo):
                parts.append(f"M {_fmt(cmd.x)} {_fmt(cmd.y)}")
            elif isinstance(cmd, LineTo):
                parts.append(f"L {_fmt(cmd.x)} {_fmt(cmd.y)}")
            elif isinstance(cmd, CubicTo):
                parts.append(
                    f"C {_fmt(cmd.c1x)} {_fmt(cmd.c1y)} {_fmt(cmd.c2x)} {_fmt(cmd.c2y)} "
                    f"{_fmt(cmd.x)} {_fmt(cmd.y)}"
                )
            elif isinstance(cmd, ArcTo):
                sx, sy = cmd.start
                ex, ey = cmd.end
                sweep_flag = 1 if cmd.sweep > 0 else 0
                large_arc = 1 if abs(cmd.sweep) > 180 else 0
                r = _fmt(cmd.radius)
                parts.append(f"L {_fmt(sx)} {_fmt(sy)}")
                parts.append(f"A {r} {r} 0 {large_arc} {sweep_flag} {_fmt(ex)} {_fmt(ey)}")
            elif isinstance(cmd, Circle):
                r = _fmt(cmd.radius)
                parts.append(f"M {_fmt(cmd.cx + cmd.radius)} {_fmt(cmd.cy)}")
                parts.append(f"A {r} {r} 0 1 1 {_fmt(cmd.cx - cmd.radius)} {_fmt(cmd.cy)}")
                parts.append(f"A {r} {r} 0 1 1 {_fmt(cmd.cx + cmd.radius)} {_fmt(cmd.cy)} Z")
            elif isinstance(cmd, Close):
                parts.append("Z")
        return " ".join(parts)

    def flatten(self, steps_per_curve: int = 8, arc_step_deg: float = 15.0) -> np.ndarray:
        """Approximate the first sub-path by a polyline.

        Returns an ``(N, 2)`` float array of vertices (no duplicated closing
        vertex). Cubics are sampled uniformly in t, arcs every
        ``arc_step_deg`` degrees.
        """
        pts: List[Tuple[float, float]] = []
        for cmd in self.commands:
            if isinstance(cmd, MoveTo):
                if pts:
                    break
                pts.append((cmd.x, cmd.y))
            elif isinstance(cmd, LineTo):
                pts.append((cmd.x, cmd.y))
            elif isinstance(cmd, CubicTo):
                p0 = pts[-1] if pts else (cmd.x, cmd.y)
                pts.extend(_cubic_points(
                    p0, (cmd.c1x, cmd.c1y), (cmd.c2x, cmd.c2y), (cmd.x, cmd.y), steps_per_curve))
            elif isinstance(cmd, ArcTo):
                steps = max(1, int(math.ceil(abs(cmd.sweep) / arc_step_deg)))
                sx, sy = cmd.start
                if not pts or math.hypot(pts[-1][0] - sx, pts[-1][1] - sy) >= POINT_EPS:
                    pts.append((sx, sy))
                for s in range(1, steps + 1):
                    pts.append(cmd.point_at(cmd.start_angle + cmd.sweep * s / steps))
            elif isinstance(cmd, Circle):
                if pts:
                    break
                steps = max(3, int(math.ceil(360.0 / arc_step_deg)))
                for s in range(steps):
                    a = 2 * math.pi * s / steps
                    pts.append((cmd.cx + cmd.radius * math.cos(a), cmd.cy + cmd.radius * math.sin(a)))
            elif isinstance(cmd, Close):
                break

        if len(pts) > 1 and math.hypot(pts[0][0] - pts[-1][0], pts[0][1] - pts[-1][1]) < POINT_EPS:
            pts.pop()
        return np.asarray(pts, dtype=float).reshape(-1, 2)

    def to_polygon(self, steps_per_curve: int = 8) -> Polygon:
        """Shapely polygon of the flattened contour (empty if fewer than 3 vertices)."""
        verts = self.flatten(steps_per_curve)
        if len(verts) < 3:
            return Polygon()
        return Polygon(verts)

    def bounds(self) -> Optional[Tuple[float, float, float, float]]:
        """``(minx, miny, maxx, maxy)`` of the flattened contour."""
        verts = self.flatten()
        if len(verts) == 0:
            return None
        mins = verts.min(axis=0)
        maxs = verts.max(axis=0)
        return (float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1]))


__all__ = [
    "MoveTo",
    "LineTo",
    "CubicTo",
    "ArcTo",
    "Circle",
    "Close",
    "PathCommand",
    "Contour",
]
