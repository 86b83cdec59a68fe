"""Live (point-by-point) stroke construction.

``IncrementalRibbon`` keeps the streamline-smoothed buffer up to date as
points arrive and rebuilds the outline from it on demand. A live stroke is
never final, so ``last`` is always off; for every prefix the contour matches
``build_stroke_path`` with the ribbon's options over the same raw samples.

``CachedRibbon`` is the fixed min/max radius mode. Per-point radius, tangent
and rail data live in growable numpy arrays; appending a point only
invalidates the last two entries (the previous point's tangent depended on
whether a next point existed), so each append recomputes that suffix and
nothing else.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence, Tuple
import logging
import math

import numpy as np

from .contour import Contour
from .options import StrokePathOptions, ribbon_options, ribbon_size_and_thinning
from .outline_builder import build_outline
from .path_assembler import DOT_MIN_RADIUS, CapStyle, assemble_contour, assemble_rails
from .point_processor import (
    MIN_RADIUS,
    MIN_SEGMENT_DIST_SQ,
    RawPoint,
    SmoothedPoint,
    clamp_pressure,
    measure_points,
    streamline_step,
)

logger = logging.getLogger(__name__)

INITIAL_CAPACITY = 64


class IncrementalRibbon:
    """Stroke builder for live drawing.

    Usage:
        ribbon = IncrementalRibbon(min_radius=0.5, max_radius=14)
        ribbon.add_point(x, y, pressure)
        path = ribbon.get_path()  # volatile contour
        ...
        ribbon.reset()
    """

    def __init__(
        self,
        min_radius: float,
        max_radius: float,
        options: Optional[StrokePathOptions] = None,
    ):
        self.min_radius = min_radius
        self.max_radius = max_radius
        if options is None:
            options = ribbon_options(min_radius, max_radius, last=False)
        self.options = replace(options, last=False)
        self._raw: List[RawPoint] = []
        self._smoothed: List[SmoothedPoint] = []

    def add_point(self, x: float, y: float, pressure: Optional[float] = None) -> None:
        """Record a raw sample and extend the smoothed buffer by at most one point."""
        self._raw.append(RawPoint(x, y, pressure))
        p = clamp_pressure(pressure)
        if not self._smoothed:
            self._smoothed.append(SmoothedPoint(x, y, p))
            return
        point = streamline_step(self._smoothed[-1], x, y, p, self.options.streamline_t)
        if point is not None:
            self._smoothed.append(point)

    def get_path(self) -> Contour:
        """Contour of the stroke so far, flagged volatile."""
        if not self._smoothed:
            return Contour(volatile=True)
        processed = measure_points(self._smoothed, self.options)
        outline = build_outline(processed, self.options)
        path = assemble_contour(processed, outline, self.options)
        path.volatile = True
        return path

    @property
    def point_count(self) -> int:
        return len(self._raw)

    @property
    def points(self) -> List[RawPoint]:
        """Raw samples received so far."""
        return self._raw

    def reset(self) -> None:
        logger.debug("Resetting ribbon after %d points", len(self._raw))
        self._raw = []
        self._smoothed = []

    def update_settings(self, min_radius: float, max_radius: float) -> None:
        """Change the radius range; every other option is kept."""
        self.min_radius = min_radius
        self.max_radius = max_radius
        size, thinning = ribbon_size_and_thinning(min_radius, max_radius)
        self.options = replace(self.options, size=size, thinning=thinning)


class _RibbonArena:
    """Parallel per-point arrays with amortised growth."""

    def __init__(self, capacity: int = INITIAL_CAPACITY):
        self.size = 0
        self._alloc(capacity)

    def _alloc(self, capacity: int) -> None:
        self.x = np.zeros(capacity, dtype=float)
        self.y = np.zeros(capacity, dtype=float)
        self.pressure = np.zeros(capacity, dtype=float)
        self.radius = np.zeros(capacity, dtype=float)
        self.tx = np.zeros(capacity, dtype=float)  # Unit tangent
        self.ty = np.zeros(capacity, dtype=float)
        self.lx = np.zeros(capacity, dtype=float)  # Left rail point
        self.ly = np.zeros(capacity, dtype=float)
        self.rx = np.zeros(capacity, dtype=float)  # Right rail point
        self.ry = np.zeros(capacity, dtype=float)
        self.capacity = capacity

    def _arrays(self) -> Tuple[np.ndarray, ...]:
        return (
            self.x, self.y, self.pressure, self.radius,
            self.tx, self.ty, self.lx, self.ly, self.rx, self.ry,
        )

    def _grow(self) -> None:
        old = self._arrays()
        self._alloc(self.capacity * 2)
        for new, values in zip(self._arrays(), old):
            new[: self.size] = values[: self.size]

    def append(self, x: float, y: float, pressure: float) -> int:
        if self.size == self.capacity:
            self._grow()
        i = self.size
        self.x[i] = x
        self.y[i] = y
        self.pressure[i] = pressure
        self.size += 1
        return i

    def left_rail(self) -> List[Tuple[float, float]]:
        n = self.size
        return list(zip(self.lx[:n].tolist(), self.ly[:n].tolist()))

    def right_rail(self) -> List[Tuple[float, float]]:
        n = self.size
        return list(zip(self.rx[:n].tolist(), self.ry[:n].tolist()))


def _fixed_radius(pressure: float, min_radius: float, max_radius: float) -> float:
    return max(MIN_RADIUS, min_radius + pressure * (max_radius - min_radius))


class CachedRibbon:
    """Fixed min/max radius ribbon with per-point caching.

    ``valid_upto`` is the number of leading entries whose radius, tangent and
    rails are current. Appending point ``n - 1`` lowers it to ``n - 2``.
    """

    def __init__(self, min_radius: float, max_radius: float):
        self.min_radius = min_radius
        self.max_radius = max_radius
        self._arena = _RibbonArena()
        self._raw: List[RawPoint] = []
        self.valid_upto = 0

    @property
    def point_count(self) -> int:
        return len(self._raw)

    @property
    def cached_count(self) -> int:
        """Points retained after duplicate suppression."""
        return self._arena.size

    @property
    def points(self) -> List[RawPoint]:
        return self._raw

    def add_point(self, x: float, y: float, pressure: Optional[float] = None) -> None:
        self._raw.append(RawPoint(x, y, pressure))
        arena = self._arena
        n = arena.size
        if n > 0:
            dx = x - arena.x[n - 1]
            dy = y - arena.y[n - 1]
            if dx * dx + dy * dy < MIN_SEGMENT_DIST_SQ:
                return
        arena.append(x, y, clamp_pressure(pressure))
        self.valid_upto = min(self.valid_upto, max(0, arena.size - 2))
        self._refresh()

    def _refresh(self) -> None:
        arena = self._arena
        n = arena.size
        if self.valid_upto >= n:
            return
        logger.debug("Recomputing ribbon cache [%d, %d)", self.valid_upto, n)
        for i in range(self.valid_upto, n):
            _compute_entry(arena, i, n, self.min_radius, self.max_radius)
        self.valid_upto = n

    def tangents(self) -> np.ndarray:
        n = self._arena.size
        return np.column_stack([self._arena.tx[:n], self._arena.ty[:n]])

    def radii(self) -> np.ndarray:
        return self._arena.radius[: self._arena.size].copy()

    def rails(self) -> Tuple[List[Tuple[float, float]], List[Tuple[float, float]]]:
        return self._arena.left_rail(), self._arena.right_rail()

    def get_path(self) -> Contour:
        """Contour of the cached ribbon, flagged volatile."""
        path = _fixed_contour(self._arena)
        path.volatile = True
        return path

    def reset(self) -> None:
        self._arena = _RibbonArena()
        self._raw = []
        self.valid_upto = 0

    def update_settings(self, min_radius: float, max_radius: float) -> None:
        """Change the radius range; every cached entry is recomputed."""
        self.min_radius = min_radius
        self.max_radius = max_radius
        self.valid_upto = 0
        self._refresh()


def _compute_entry(arena: _RibbonArena, i: int, n: int, min_radius: float, max_radius: float) -> None:
    """Fill radius, tangent and rails of entry ``i`` given ``n`` live entries."""
    prev_i = max(0, i - 1)
    next_i = min(n - 1, i + 1)
    dx = arena.x[next_i] - arena.x[prev_i]
    dy = arena.y[next_i] - arena.y[prev_i]
    length = math.hypot(dx, dy)
    if length > 0:
        tx, ty = dx / length, dy / length
    elif i > 0:
        tx, ty = arena.tx[i - 1], arena.ty[i - 1]
    else:
        tx, ty = 1.0, 0.0

    r = _fixed_radius(arena.pressure[i], min_radius, max_radius)
    # Perpendicular (ty, -tx), same convention as the outline builder.
    ox, oy = ty, -tx
    arena.radius[i] = r
    arena.tx[i] = tx
    arena.ty[i] = ty
    arena.lx[i] = arena.x[i] - ox * r
    arena.ly[i] = arena.y[i] - oy * r
    arena.rx[i] = arena.x[i] + ox * r
    arena.ry[i] = arena.y[i] + oy * r


def _fixed_contour(arena: _RibbonArena) -> Contour:
    n = arena.size
    if n == 0:
        return Contour()
    if n == 1:
        path = Contour()
        path.add_circle(float(arena.x[0]), float(arena.y[0]), max(DOT_MIN_RADIUS, float(arena.radius[0])))
        return path
    return assemble_rails(
        arena.left_rail(),
        arena.right_rail(),
        CapStyle.ROUND,
        CapStyle.ROUND,
        (float(arena.tx[0]), float(arena.ty[0])),
        (float(arena.tx[n - 1]), float(arena.ty[n - 1])),
    )


def build_fixed_ribbon(points: Sequence, min_radius: float, max_radius: float) -> CachedRibbon:
    """Batch-compute a fixed radius ribbon in one pass (no incremental reuse)."""
    ribbon = CachedRibbon(min_radius, max_radius)
    arena = ribbon._arena
    for pt in points:
        ribbon._raw.append(RawPoint(pt.x, pt.y, getattr(pt, "pressure", None)))
        n = arena.size
        if n > 0:
            dx = pt.x - arena.x[n - 1]
            dy = pt.y - arena.y[n - 1]
            if dx * dx + dy * dy < MIN_SEGMENT_DIST_SQ:
                continue
        arena.append(pt.x, pt.y, clamp_pressure(getattr(pt, "pressure", None)))
    ribbon._refresh()
    return ribbon


def build_fixed_ribbon_path(points: Sequence, min_radius: float, max_radius: float) -> Contour:
    """Contour of a fixed min/max radius ribbon, rebuilt from scratch."""
    return _fixed_contour(build_fixed_ribbon(points, min_radius, max_radius)._arena)


__all__ = [
    "IncrementalRibbon",
    "CachedRibbon",
    "build_fixed_ribbon",
    "build_fixed_ribbon_path",
]
