"""Stitch rails and caps into one closed contour.

Order of the emitted path: start cap (right[0] -> left[0]), the left rail
forward, end cap (left[-1] -> right[-1]), the right rail backward, close.
Rails are drawn as Catmull-Rom splines converted to cubic Beziers, so the
curve passes through every retained rail point.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence, Tuple
import math

from .contour import Contour
from .options import StrokePathOptions, ribbon_options
from .outline_builder import Outline, build_outline
from .point_processor import ProcessedPoint, process_points

DOT_MIN_RADIUS = 0.5
MIN_CAP_RADIUS = 0.1


class CapStyle(Enum):
    ROUND = "round"
    FLAT = "flat"
    TAPERED = "tapered"


def end_cap_styles(points: Sequence[ProcessedPoint], opts: StrokePathOptions) -> Tuple[CapStyle, CapStyle]:
    """Resolve how the start and end of a stroke are closed."""
    total_length = points[-1].running_length
    styles = []
    for end in (opts.start, opts.end):
        if end.taper_distance(opts.size, total_length) > 0:
            styles.append(CapStyle.TAPERED)
        elif end.cap:
            styles.append(CapStyle.ROUND)
        else:
            styles.append(CapStyle.FLAT)
    return styles[0], styles[1]


def catmull_rom_controls(rail: Sequence[Tuple[float, float]], i: int, j: int, step: int):
    """Bezier control points for the rail segment ``rail[i] -> rail[j]``.

    ``step`` is +1 when walking forward and -1 when walking backward; the
    phantom neighbours are clamped to the ends of the rail.
    """
    last = len(rail) - 1
    i0 = min(last, max(0, i - step))
    i3 = min(last, max(0, j + step))
    p0, p1, p2, p3 = rail[i0], rail[i], rail[j], rail[i3]
    return (
        p1[0] + (p2[0] - p0[0]) / 6,
        p1[1] + (p2[1] - p0[1]) / 6,
        p2[0] - (p3[0] - p1[0]) / 6,
        p2[1] - (p3[1] - p1[1]) / 6,
    )


def _add_rail(path: Contour, rail: Sequence[Tuple[float, float]], reverse: bool) -> None:
    n = len(rail)
    indices = range(n - 1, 0, -1) if reverse else range(n - 1)
    step = -1 if reverse else 1
    for i in indices:
        j = i + step
        c1x, c1y, c2x, c2y = catmull_rom_controls(rail, i, j, step)
        path.cubic_to(c1x, c1y, c2x, c2y, rail[j][0], rail[j][1])


def _add_cap(
    path: Contour,
    style: CapStyle,
    frm: Tuple[float, float],
    to: Tuple[float, float],
    outward: Tuple[float, float],
) -> None:
    """Join ``frm`` to ``to``: a half circle bulging along ``outward``, or a line."""
    if style is CapStyle.ROUND:
        cx = (frm[0] + to[0]) / 2
        cy = (frm[1] + to[1]) / 2
        r = math.hypot(frm[0] - to[0], frm[1] - to[1]) / 2
        if r > MIN_CAP_RADIUS:
            start_angle = math.atan2(frm[1] - cy, frm[0] - cx)
            # Turning +90 degrees from the start radius gives the arc's midpoint direction.
            mid_x = -math.sin(start_angle)
            mid_y = math.cos(start_angle)
            sweep = 180.0 if mid_x * outward[0] + mid_y * outward[1] >= 0 else -180.0
            path.arc_to(cx, cy, r, math.degrees(start_angle), sweep)
            return
    path.line_to(to[0], to[1])


def assemble_rails(
    left: Sequence[Tuple[float, float]],
    right: Sequence[Tuple[float, float]],
    start_style: CapStyle,
    end_style: CapStyle,
    start_dir: Tuple[float, float],
    end_dir: Tuple[float, float],
    path: Optional[Contour] = None,
) -> Contour:
    """Closed contour around two non-empty rails.

    ``start_dir``/``end_dir`` are the stroke tangents at its ends; round caps
    bulge backward at the start and forward at the end.
    """
    path = path if path is not None else Contour()
    path.move_to(right[0][0], right[0][1])
    _add_cap(path, start_style, right[0], left[0], (-start_dir[0], -start_dir[1]))
    _add_rail(path, left, reverse=False)
    _add_cap(path, end_style, left[-1], right[-1], end_dir)
    _add_rail(path, right, reverse=True)
    path.close()
    return path


def assemble_contour(
    points: Sequence[ProcessedPoint],
    outline: Outline,
    opts: StrokePathOptions,
) -> Contour:
    """Assemble processed points and their outline into a renderable contour."""
    path = Contour()
    if not points or not outline.left or not outline.right:
        return path

    if len(points) == 1 or outline.is_degenerate:
        first = points[0]
        path.add_circle(first.x, first.y, max(DOT_MIN_RADIUS, first.radius))
        return path

    start_style, end_style = end_cap_styles(points, opts)
    return assemble_rails(
        outline.left,
        outline.right,
        start_style,
        end_style,
        (points[0].vx, points[0].vy),
        (points[-1].vx, points[-1].vy),
        path=path,
    )


def build_stroke_path(points: Sequence, options: Optional[StrokePathOptions] = None) -> Contour:
    """Build the filled contour of a stroke from raw samples.

    Args:
        points: Raw samples (objects with ``x``, ``y`` and optional ``pressure``)
        options: Stroke options; defaults to ``StrokePathOptions()``

    Returns:
        A closed contour, or an empty one when there are no samples
    """
    opts = options or StrokePathOptions()
    if len(points) == 0:
        return Contour()
    processed: List[ProcessedPoint] = process_points(points, opts)
    if not processed:
        return Contour()
    outline = build_outline(processed, opts)
    return assemble_contour(processed, outline, opts)


def build_ribbon_path(points: Sequence, min_radius: float, max_radius: float) -> Contour:
    """Contour of a committed stroke described by a min/max radius pair."""
    return build_stroke_path(points, ribbon_options(min_radius, max_radius, last=True))


__all__ = [
    "DOT_MIN_RADIUS",
    "CapStyle",
    "end_cap_styles",
    "catmull_rom_controls",
    "assemble_rails",
    "assemble_contour",
    "build_stroke_path",
    "build_ribbon_path",
]
