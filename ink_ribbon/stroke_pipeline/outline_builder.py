"""Build the left/right rails of a stroke outline.

Each processed point is offset to both sides by its (tapered) radius. Sharp
direction reversals get a semicircular fan of rail points instead of a single
offset pair, so the two rails never cross through the corner.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence, Tuple
import math

from .geometry import dot, normalize, perpendicular, rotate_about, squared_distance
from .options import StrokePathOptions
from .point_processor import MIN_RADIUS, ProcessedPoint

FIXED_PI = math.pi + 0.0001
CORNER_CAP_SEGMENTS = 13
END_NOISE_THRESHOLD = 3.0
BLEND_EPS = 1e-6


@dataclass
class CornerCap:
    """A sharp turn that was fanned: where, which way, how wide."""
    x: float
    y: float
    vx: float
    vy: float
    radius: float


@dataclass
class Outline:
    """Rails of a stroke, both enumerated start -> end."""

    left: List[Tuple[float, float]] = field(default_factory=list)
    right: List[Tuple[float, float]] = field(default_factory=list)
    corner_caps: List[CornerCap] = field(default_factory=list)
    radii: List[float] = field(default_factory=list)  # Tapered radius per visited point

    @property
    def is_degenerate(self) -> bool:
        return len(self.left) < 2 and len(self.right) < 2


class CornerState(Enum):
    """What the previous visited point was, as far as corner fanning goes."""

    ORDINARY = "ordinary"
    CORNER = "corner"  # Fanned because of its own reversal
    SUPPRESSED = "suppressed"  # Fanned on lookahead; the next point must not re-trigger


def taper_strength(
    running_length: float,
    total_length: float,
    taper_start: float,
    taper_end: float,
    opts: StrokePathOptions,
) -> float:
    """Radius multiplier from the start/end taper zones (1 outside them)."""
    start_strength = 1.0
    end_strength = 1.0
    if running_length < taper_start:
        start_strength = opts.start.easing(running_length / taper_start)
    remaining = total_length - running_length
    if remaining < taper_end:
        end_strength = opts.end.easing(remaining / taper_end)
    return min(start_strength, end_strength)


def tapered_radii(points: Sequence[ProcessedPoint], opts: StrokePathOptions) -> List[float]:
    """Radius of every point after tapering, in stroke order."""
    if not points:
        return []
    total_length = points[-1].running_length
    taper_start = opts.start.taper_distance(opts.size, total_length)
    taper_end = opts.end.taper_distance(opts.size, total_length)
    return [
        max(MIN_RADIUS, pt.radius * taper_strength(
            pt.running_length, total_length, taper_start, taper_end, opts))
        for pt in points
    ]


def corner_fan(
    pt: ProcessedPoint,
    radius: float,
) -> Tuple[List[Tuple[float, float]], List[Tuple[float, float]]]:
    """Semicircle of rail points around a sharp corner.

    The left rail swings from the left offset through the back of the point,
    the right rail from the right offset around the front.
    """
    px, py = perpendicular(pt.vx, pt.vy)
    ox = px * radius
    oy = py * radius
    left = []
    right = []
    for k in range(CORNER_CAP_SEGMENTS + 1):
        angle = FIXED_PI * (k / CORNER_CAP_SEGMENTS)
        left.append(rotate_about(pt.x, pt.y, -ox, -oy, angle))
        right.append(rotate_about(pt.x, pt.y, ox, oy, angle))
    return left, right


def offset_direction(pt: ProcessedPoint, nxt: ProcessedPoint, is_last: bool) -> Tuple[float, float]:
    """Perpendicular used to offset an ordinary point.

    Blends this tangent with the next one for a mitred offset; falls back to
    the point's own perpendicular at the end or when the blend cancels out.
    """
    if not is_last:
        blend = normalize(nxt.vx + pt.vx, nxt.vy + pt.vy, BLEND_EPS)
        if blend is not None:
            return perpendicular(*blend)
    return perpendicular(pt.vx, pt.vy)


def _append_filtered(rail: List[Tuple[float, float]], point, index: int, min_dist_sq: float) -> None:
    if index <= 1 or not rail or squared_distance(rail[-1][0], rail[-1][1], point[0], point[1]) > min_dist_sq:
        rail.append(point)


def build_outline(points: Sequence[ProcessedPoint], opts: StrokePathOptions) -> Outline:
    """Walk processed points and produce the two rails plus corner caps."""
    outline = Outline()
    n = len(points)
    if n == 0:
        return outline

    total_length = points[-1].running_length
    radii = tapered_radii(points, opts)
    min_dist_sq = (opts.size * opts.smoothing) ** 2
    state = CornerState.ORDINARY

    for i, pt in enumerate(points):
        is_last = i == n - 1

        # The last few samples before pen-up wobble; only the final point survives.
        if not is_last and total_length - pt.running_length < END_NOISE_THRESHOLD:
            continue

        radius = radii[i]
        outline.radii.append(radius)
        nxt = pt if is_last else points[i + 1]
        next_dot = 1.0 if is_last else dot(pt.vx, pt.vy, nxt.vx, nxt.vy)
        prev_dot = dot(pt.vx, pt.vy, points[i - 1].vx, points[i - 1].vy) if i > 0 else 1.0

        sharp_here = prev_dot < 0 and state is not CornerState.SUPPRESSED
        sharp_next = next_dot < 0

        if sharp_here or sharp_next:
            outline.corner_caps.append(CornerCap(pt.x, pt.y, pt.vx, pt.vy, radius))
            left, right = corner_fan(pt, radius)
            outline.left.extend(left)
            outline.right.extend(right)
            state = CornerState.SUPPRESSED if sharp_next else CornerState.CORNER
            continue

        state = CornerState.ORDINARY

        ox, oy = offset_direction(pt, nxt, is_last)
        _append_filtered(outline.left, (pt.x - ox * radius, pt.y - oy * radius), i, min_dist_sq)
        _append_filtered(outline.right, (pt.x + ox * radius, pt.y + oy * radius), i, min_dist_sq)

    return outline


__all__ = [
    "FIXED_PI",
    "CORNER_CAP_SEGMENTS",
    "END_NOISE_THRESHOLD",
    "CornerCap",
    "Outline",
    "CornerState",
    "taper_strength",
    "tapered_radii",
    "corner_fan",
    "offset_direction",
    "build_outline",
]
