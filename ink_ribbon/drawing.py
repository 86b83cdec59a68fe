"""Pen and eraser session over a list of committed strokes.

This is the editor-side loop without any UI: pointer samples go in, the live
ribbon of the stroke being drawn and the outlines of committed strokes come
out. Eraser motion is buffered and applied in batches so that a long swipe
does not re-split every stroke for every pointer event.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple
import logging

from .stroke import (
    DEFAULT_COLOR,
    DEFAULT_MAX_RADIUS,
    DEFAULT_MIN_RADIUS,
    DEFAULT_WIDTH,
    Stroke,
    create_stroke,
    normalize_pressure,
)
from .stroke_pipeline.contour import Contour
from .stroke_pipeline.incremental import IncrementalRibbon
from .stroke_pipeline.point_processor import RawPoint

logger = logging.getLogger(__name__)

MIN_POINT_DIST_SQ = 4.0  # Pointer moves under 2px are dropped
DEFAULT_ERASER_RADIUS = 24.0
ERASE_BATCH_SIZE = 8


class Drawing:
    """Committed strokes plus the in-progress pen or eraser gesture.

    Usage:
        drawing = Drawing()
        drawing.begin_stroke(x, y, pressure)
        drawing.add_point(x, y, pressure)
        live = drawing.active_path()
        drawing.end_stroke()
        for stroke, contour in drawing.render():
            ...
    """

    def __init__(
        self,
        color: str = DEFAULT_COLOR,
        width: float = DEFAULT_WIDTH,
        min_radius: float = DEFAULT_MIN_RADIUS,
        max_radius: float = DEFAULT_MAX_RADIUS,
        eraser_radius: float = DEFAULT_ERASER_RADIUS,
    ):
        self.color = color
        self.width = width
        self.min_radius = min_radius
        self.max_radius = max_radius
        self.eraser_radius = eraser_radius
        self.strokes: List[Stroke] = []

        self._active: Optional[Stroke] = None
        self._ribbon = IncrementalRibbon(min_radius, max_radius)
        self._next_id = 0
        self._eraser: List[RawPoint] = []
        self._eraser_pending = False

    @property
    def is_drawing(self) -> bool:
        return self._active is not None

    @property
    def is_erasing(self) -> bool:
        return bool(self._eraser)

    # ------------------------------------------------------------------
    # Pen
    # ------------------------------------------------------------------

    def begin_stroke(
        self,
        x: float,
        y: float,
        pressure: Optional[float] = None,
        color: Optional[str] = None,
    ) -> Stroke:
        """Start a new stroke; an unfinished one is committed first."""
        if self._active is not None:
            self.end_stroke()

        stroke = create_stroke(
            f"stroke-{self._next_id}",
            color=color or self.color,
            width=self.width,
            min_radius=self.min_radius,
            max_radius=self.max_radius,
        )
        self._next_id += 1
        self._active = stroke
        self._ribbon.update_settings(self.min_radius, self.max_radius)
        self._append(x, y, normalize_pressure(pressure))
        return stroke

    def add_point(self, x: float, y: float, pressure: Optional[float] = None) -> bool:
        """Extend the active stroke. Returns False when the sample was dropped."""
        if self._active is None:
            return False
        last = self._active.points[-1]
        dx = x - last.x
        dy = y - last.y
        if dx * dx + dy * dy < MIN_POINT_DIST_SQ:
            return False
        self._append(x, y, normalize_pressure(pressure))
        return True

    def _append(self, x: float, y: float, pressure: float) -> None:
        self._active.add_point(x, y, pressure)
        self._ribbon.add_point(x, y, pressure)

    def active_path(self) -> Optional[Contour]:
        """Volatile contour of the stroke being drawn, or None."""
        if self._active is None:
            return None
        return self._ribbon.get_path()

    def end_stroke(self) -> Optional[Stroke]:
        """Seal and commit the active stroke."""
        stroke = self._active
        if stroke is None:
            return None
        self._active = None
        self._ribbon.reset()
        stroke.seal()
        self.strokes.append(stroke)
        logger.debug("Committed %s with %d points", stroke.id, len(stroke))
        return stroke

    # ------------------------------------------------------------------
    # Eraser
    # ------------------------------------------------------------------

    def begin_erase(self, x: float, y: float) -> None:
        self._eraser = [RawPoint(x, y)]
        self._eraser_pending = True

    def erase_to(self, x: float, y: float) -> None:
        """Buffer an eraser sample, flushing when the batch is full."""
        if not self._eraser:
            self.begin_erase(x, y)
            return
        self._eraser.append(RawPoint(x, y))
        self._eraser_pending = True
        if len(self._eraser) >= ERASE_BATCH_SIZE:
            self._flush_erase()

    def end_erase(self) -> int:
        """Apply the remaining eraser samples. Returns the committed stroke count."""
        if self._eraser and self._eraser_pending:
            self._flush_erase()
        self._eraser = []
        self._eraser_pending = False
        return len(self.strokes)

    def _flush_erase(self) -> None:
        batch = self._eraser
        updated: List[Stroke] = []
        changed = 0
        for stroke in self.strokes:
            pieces = stroke.erase(batch, self.eraser_radius)
            if len(pieces) == 1 and pieces[0].points == stroke.points:
                updated.append(stroke)
                continue
            changed += 1
            updated.extend(pieces)
        self.strokes = updated
        # The last sample starts the next batch so the swept path stays continuous.
        self._eraser = [batch[-1]]
        self._eraser_pending = False
        logger.debug(
            "Eraser batch of %d samples changed %d stroke(s), %d remain",
            len(batch), changed, len(self.strokes),
        )

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def render(self) -> Iterator[Tuple[Stroke, Contour]]:
        """Committed strokes with their filled outlines, oldest first."""
        for stroke in self.strokes:
            yield stroke, stroke.contour()

    def clear(self) -> None:
        self.strokes = []
        self._active = None
        self._ribbon.reset()
        self._eraser = []
        self._eraser_pending = False


__all__ = [
    "MIN_POINT_DIST_SQ",
    "DEFAULT_ERASER_RADIUS",
    "Drawing",
]
