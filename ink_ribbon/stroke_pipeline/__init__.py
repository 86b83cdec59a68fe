"""Stroke outline pipeline.

Modules:
- geometry: Vector helpers, point/segment distance
- options: StrokePathOptions, easing registry, min/max radius mapping
- point_processor: Streamline smoothing, pressure, radius, tangents
- outline_builder: Left/right rails with tapering and corner fans
- contour: Renderer-neutral path commands (SVG export, flattening)
- path_assembler: Rails + caps -> closed contour; batch entry points
- incremental: Live ribbons (smoothed rebuild and cached fixed-radius mode)
- eraser: Eraser densification, segment/circle roots, stroke splitting
- smoothing: Catmull-Rom centerline helpers
"""

from . import (
    geometry,
    options,
    point_processor,
    outline_builder,
    contour,
    path_assembler,
    incremental,
    eraser,
    smoothing,
)

from .contour import Contour
from .eraser import densify_eraser_path, split_stroke_by_eraser
from .incremental import CachedRibbon, IncrementalRibbon, build_fixed_ribbon_path
from .options import EndOptions, StrokePathOptions, ribbon_options
from .outline_builder import Outline, build_outline
from .path_assembler import assemble_contour, build_ribbon_path, build_stroke_path
from .point_processor import ProcessedPoint, RawPoint, process_points

__all__ = [
    "geometry",
    "options",
    "point_processor",
    "outline_builder",
    "contour",
    "path_assembler",
    "incremental",
    "eraser",
    "smoothing",
    "Contour",
    "densify_eraser_path",
    "split_stroke_by_eraser",
    "CachedRibbon",
    "IncrementalRibbon",
    "build_fixed_ribbon_path",
    "EndOptions",
    "StrokePathOptions",
    "ribbon_options",
    "Outline",
    "build_outline",
    "assemble_contour",
    "build_ribbon_path",
    "build_stroke_path",
    "ProcessedPoint",
    "RawPoint",
    "process_points",
]
