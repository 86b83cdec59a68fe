"""Subtract a moving circular eraser from stroke samples.

The eraser path is densified so a fast swipe leaves no gaps, then every
stroke point and segment is tested against the swept disks. Surviving runs
of points come back as independent sample sequences, with cut points placed
exactly where a segment crosses an eraser circle.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple
import logging
import math

import numpy as np

from .geometry import lerp
from .point_processor import RawPoint

logger = logging.getLogger(__name__)

MIN_DENSIFY_STEP = 2.0
DENSIFY_RADIUS_FACTOR = 0.4
CROSSING_EPS = 1e-6


def densify_eraser_path(path: Sequence, radius: float) -> List[RawPoint]:
    """Interpolate points along the eraser path.

    Consecutive output samples are at most ``max(2, radius * 0.4)`` apart.
    Repeated samples are skipped.
    """
    if len(path) <= 1:
        return [RawPoint(p.x, p.y, getattr(p, "pressure", None)) for p in path]

    step = max(MIN_DENSIFY_STEP, radius * DENSIFY_RADIUS_FACTOR)
    first = path[0]
    out = [RawPoint(first.x, first.y, getattr(first, "pressure", None))]
    for i in range(1, len(path)):
        a = path[i - 1]
        b = path[i]
        length = math.hypot(b.x - a.x, b.y - a.y)
        if length == 0:
            continue
        n = max(1, math.ceil(length / step))
        for k in range(1, n + 1):
            x, y = lerp((a.x, a.y), (b.x, b.y), k / n)
            out.append(RawPoint(x, y))
    return out


def _as_array(points: Sequence) -> np.ndarray:
    return np.array([(p.x, p.y) for p in points], dtype=float).reshape(-1, 2)


def erased_mask(points: np.ndarray, centers: np.ndarray, radius: float) -> np.ndarray:
    """Boolean mask of stroke points inside any eraser circle (squared distances)."""
    if len(points) == 0 or len(centers) == 0:
        return np.zeros(len(points), dtype=bool)
    diff = points[:, None, :] - centers[None, :, :]
    d2 = np.einsum("ijk,ijk->ij", diff, diff)
    return (d2 <= radius * radius).any(axis=1)


def segment_touched(a: np.ndarray, b: np.ndarray, centers: np.ndarray, radius: float) -> bool:
    """True when some eraser center is within ``radius`` of segment AB."""
    if len(centers) == 0:
        return False
    d = b - a
    len2 = float(d @ d)
    rel = centers - a
    if len2 == 0:
        d2 = np.einsum("ij,ij->i", rel, rel)
    else:
        t = np.clip(rel @ d / len2, 0.0, 1.0)
        proj = a + t[:, None] * d
        delta = centers - proj
        d2 = np.einsum("ij,ij->i", delta, delta)
    return bool((d2 <= radius * radius).any())


def erased_intervals(a: np.ndarray, b: np.ndarray, centers: np.ndarray, radius: float) -> List[Tuple[float, float]]:
    """Merged parameter intervals of segment AB covered by eraser circles.

    Each circle contributes the roots of ``|a + t(b - a) - c|^2 = r^2``
    clipped to [0, 1]; tangential (zero-width) contacts are dropped.
    """
    d = b - a
    v2 = float(d @ d)
    if v2 == 0 or len(centers) == 0:
        return []
    u = a - centers
    half_b = u @ d
    c = np.einsum("ij,ij->i", u, u) - radius * radius
    disc = half_b * half_b - v2 * c
    hit = disc > 0
    if not hit.any():
        return []
    root = np.sqrt(disc[hit])
    t1 = np.clip((-half_b[hit] - root) / v2, 0.0, 1.0)
    t2 = np.clip((-half_b[hit] + root) / v2, 0.0, 1.0)
    keep = (t2 - t1) > CROSSING_EPS
    spans = sorted(zip(t1[keep].tolist(), t2[keep].tolist()))

    merged: List[Tuple[float, float]] = []
    for lo, hi in spans:
        if merged and lo <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], hi))
        else:
            merged.append((lo, hi))
    return merged


def _cut(p: RawPoint, q: RawPoint, t: float) -> RawPoint:
    x, y = lerp((p.x, p.y), (q.x, q.y), t)
    return RawPoint(x, y, p.pressure)


def split_stroke_by_eraser(
    points: Sequence,
    eraser_path: Sequence,
    radius: float,
) -> List[List[RawPoint]]:
    """Remove the parts of a stroke the eraser swept over.

    Args:
        points: Stroke samples (``x``, ``y``, optional ``pressure``)
        eraser_path: Eraser samples in drawing order
        radius: Eraser radius

    Returns:
        Surviving sub-strokes in stroke order. An untouched stroke comes back
        as a single group equal to the input; an empty stroke gives ``[]``.
    """
    if len(points) == 0:
        return []

    pts = [RawPoint(p.x, p.y, getattr(p, "pressure", None)) for p in points]
    radius = max(0.0, float(radius))
    dense = densify_eraser_path(eraser_path, radius)
    centers = _as_array(dense)
    coords = _as_array(pts)
    kept = ~erased_mask(coords, centers, radius)

    groups: List[List[RawPoint]] = []
    current: List[RawPoint] = []

    def flush():
        nonlocal current
        if current:
            groups.append(current)
        current = []

    for i, p in enumerate(pts):
        if kept[i]:
            current.append(p)
        else:
            flush()
        if i + 1 == len(pts):
            break
        a = coords[i]
        b = coords[i + 1]
        if not segment_touched(a, b, centers, radius):
            continue
        intervals = erased_intervals(a, b, centers, radius)
        if not intervals:
            continue

        q = pts[i + 1]
        first_lo = intervals[0][0]
        if kept[i] and first_lo > CROSSING_EPS:
            current.append(_cut(p, q, first_lo))
        flush()

        # Stretches of the segment between two erased spans survive on their own.
        for (_, hi), (lo, _) in zip(intervals, intervals[1:]):
            if lo - hi > CROSSING_EPS:
                groups.append([_cut(p, q, hi), _cut(p, q, lo)])

        last_hi = intervals[-1][1]
        if last_hi < 1 - CROSSING_EPS:
            current.append(_cut(p, q, last_hi))

    flush()
    logger.debug(
        "Eraser split %d points into %d group(s) (radius=%.2f, %d eraser samples)",
        len(pts), len(groups), radius, len(dense),
    )
    return groups


__all__ = [
    "densify_eraser_path",
    "erased_mask",
    "segment_touched",
    "erased_intervals",
    "split_stroke_by_eraser",
]
