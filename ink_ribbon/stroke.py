"""Durable stroke records.

A ``Stroke`` is an ordered list of samples captured between pen-down and
pen-up, plus the rendering style (color, width, radius range) captured when
the stroke began so later tool changes never alter existing ink. It only
grows by appending until ``seal()``; after that its points are a tuple and
erasing produces new strokes instead of editing it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, Sequence, Tuple, Union

from .stroke_pipeline.contour import Contour
from .stroke_pipeline.eraser import split_stroke_by_eraser
from .stroke_pipeline.path_assembler import build_ribbon_path
from .stroke_pipeline.point_processor import DEFAULT_PRESSURE, RawPoint

DEFAULT_COLOR = "#111"
DEFAULT_WIDTH = 2.5
DEFAULT_MIN_RADIUS = 0.5
DEFAULT_MAX_RADIUS = 14.0


class StrokeSealedError(RuntimeError):
    """Raised when points are appended to a finished stroke."""


def normalize_pressure(raw: Optional[float]) -> float:
    """Map a device pressure reading into [0, 1]; missing or negative means 0.5."""
    if raw is None or raw != raw or raw < 0:
        return DEFAULT_PRESSURE
    return max(0.0, min(1.0, float(raw)))


@dataclass
class Stroke:
    id: str
    points: Union[List[RawPoint], Tuple[RawPoint, ...]] = field(default_factory=list)
    color: str = DEFAULT_COLOR
    width: float = DEFAULT_WIDTH  # Constant width for renderers without pressure
    min_radius: float = DEFAULT_MIN_RADIUS
    max_radius: float = DEFAULT_MAX_RADIUS
    sealed: bool = False

    def add_point(self, x: float, y: float, pressure: Optional[float] = None) -> None:
        if self.sealed:
            raise StrokeSealedError(f"Stroke {self.id} is sealed")
        self.points.append(RawPoint(x, y, pressure))

    def seal(self) -> "Stroke":
        """Freeze the stroke at pen-up."""
        if not self.sealed:
            self.points = tuple(self.points)
            self.sealed = True
        return self

    def __len__(self) -> int:
        return len(self.points)

    def contour(self) -> Contour:
        """Filled outline of this stroke using its own radius range."""
        return build_ribbon_path(self.points, self.min_radius, self.max_radius)

    def erase(
        self,
        eraser_path: Sequence,
        radius: float,
        id_factory: Optional[Callable[[int], str]] = None,
    ) -> List["Stroke"]:
        """Surviving pieces after erasing, as new sealed strokes.

        The pieces keep this stroke's style. Ids default to ``"{id}-{k}"``.
        """
        pieces = split_stroke_by_eraser(self.points, eraser_path, radius)
        if id_factory is None:
            id_factory = lambda k: f"{self.id}-{k}"
        return [
            replace(self, id=id_factory(k), points=tuple(piece), sealed=True)
            for k, piece in enumerate(pieces)
        ]


def create_stroke(
    id: str,
    color: str = DEFAULT_COLOR,
    width: float = DEFAULT_WIDTH,
    min_radius: float = DEFAULT_MIN_RADIUS,
    max_radius: float = DEFAULT_MAX_RADIUS,
) -> Stroke:
    """Create an empty, open stroke."""
    return Stroke(id=id, color=color, width=width, min_radius=min_radius, max_radius=max_radius)


__all__ = [
    "RawPoint",
    "Stroke",
    "StrokeSealedError",
    "create_stroke",
    "normalize_pressure",
]
