"""Pressure-sensitive ink ribbons for a drawing editor.

Modules:
- stroke_pipeline: Samples -> filled outline contours, live ribbons, eraser
- stroke: Durable stroke records
- drawing: Pen/eraser session over a list of committed strokes
- visualize: Matplotlib preview of contours
"""

from . import stroke_pipeline, stroke, drawing

__version__ = "0.1.0"

__all__ = [
    "stroke_pipeline",
    "stroke",
    "drawing",
]
