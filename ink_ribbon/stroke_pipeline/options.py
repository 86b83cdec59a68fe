"""Stroke outline configuration.

``StrokePathOptions`` is a fully populated, immutable bundle: every field has
a documented default and nested start/end settings are their own dataclass,
so callers never merge partial dictionaries at render time. Use
``dataclasses.replace`` (or ``StrokePathOptions.from_dict``) to derive
variants.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Mapping, Union
import math

Easing = Callable[[float], float]
Taper = Union[bool, float, None]

# Streamline interpolation: t = MIN + (1 - streamline) * RANGE
MIN_STREAMLINE_T = 0.15
STREAMLINE_T_RANGE = 0.85


def linear(t: float) -> float:
    return t


def ease_out_quad(t: float) -> float:
    return t * (2 - t)


def ease_in_cubic(t: float) -> float:
    """Default end-taper curve: fast near the tip, flattening toward the body."""
    t -= 1
    return t * t * t + 1


def ease_in_quad(t: float) -> float:
    return t * t


def ease_in_out_sine(t: float) -> float:
    return -(math.cos(math.pi * t) - 1) / 2


EASINGS: Dict[str, Easing] = {
    "linear": linear,
    "ease_out_quad": ease_out_quad,
    "ease_in_cubic": ease_in_cubic,
    "ease_in_quad": ease_in_quad,
    "ease_in_out_sine": ease_in_out_sine,
}


def resolve_easing(value: Union[str, Easing]) -> Easing:
    """Look up an easing by name, or pass a callable through."""
    if callable(value):
        return value
    try:
        return EASINGS[value]
    except KeyError:
        raise ValueError(f"Unknown easing '{value}', expected one of {sorted(EASINGS)}") from None


def _check_finite(name: str, value: float) -> None:
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value!r}")


@dataclass(frozen=True)
class EndOptions:
    """Cap and taper settings for one end of a stroke.

    ``taper`` is False/None (off), True (taper over the whole stroke) or a
    distance in canvas units.
    """

    cap: bool = True
    taper: Taper = False
    easing: Easing = linear

    def __post_init__(self):
        if isinstance(self.taper, bool) or self.taper is None:
            return
        _check_finite("taper", float(self.taper))
        if self.taper < 0:
            raise ValueError("taper distance must be non-negative")

    def taper_distance(self, size: float, total_length: float) -> float:
        """Resolve ``taper`` into a distance along the stroke (0 = disabled)."""
        if self.taper is False or self.taper is None:
            return 0.0
        if self.taper is True:
            return max(size, total_length)
        return float(self.taper)


def _default_start() -> EndOptions:
    return EndOptions(cap=True, taper=False, easing=ease_out_quad)


def _default_end() -> EndOptions:
    return EndOptions(cap=True, taper=False, easing=ease_in_cubic)


@dataclass(frozen=True)
class StrokePathOptions:
    """Options controlling stroke processing, outline and assembly.

    Attributes:
        size: Base diameter of the stroke.
        thinning: How much pressure affects width. 0 gives constant width,
            positive widens with pressure, negative inverts the relationship.
        smoothing: Minimum distance between outline points, as a fraction of
            ``size``. Higher values give fewer polygon vertices.
        streamline: Input smoothing. 0 follows the input, 1 lags the most.
        easing: Applied to the pressure term before the radius is computed.
        simulate_pressure: Derive pressure from drawing speed instead of the
            reported pressure.
        start: Cap/taper settings at the first point.
        end: Cap/taper settings at the last point.
        last: The stroke is complete, so the final sample is used exactly.
    """

    size: float = 16.0
    thinning: float = 0.5
    smoothing: float = 0.5
    streamline: float = 0.5
    easing: Easing = linear
    simulate_pressure: bool = False
    start: EndOptions = field(default_factory=_default_start)
    end: EndOptions = field(default_factory=_default_end)
    last: bool = False

    def __post_init__(self):
        for name in ("size", "thinning", "smoothing", "streamline"):
            _check_finite(name, float(getattr(self, name)))
        if self.size < 0:
            raise ValueError("size must be non-negative")
        if not 0.0 <= self.streamline <= 1.0:
            raise ValueError("streamline must be within [0, 1]")
        if not 0.0 <= self.smoothing <= 1.0:
            raise ValueError("smoothing must be within [0, 1]")

    @property
    def streamline_t(self) -> float:
        """Fraction of the way each smoothed point moves toward its raw sample."""
        return MIN_STREAMLINE_T + (1 - self.streamline) * STREAMLINE_T_RANGE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StrokePathOptions":
        """Build options from a plain mapping (e.g. parsed JSON).

        ``start``/``end`` may be nested mappings and easings may be given by
        name (see ``EASINGS``). Unknown keys raise ``ValueError``.
        """
        known = set(cls.__dataclass_fields__)
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown stroke option(s): {sorted(unknown)}")

        kwargs: Dict[str, Any] = dict(data)
        if "easing" in kwargs:
            kwargs["easing"] = resolve_easing(kwargs["easing"])
        defaults = {"start": _default_start(), "end": _default_end()}
        for key in ("start", "end"):
            if key in kwargs and isinstance(kwargs[key], Mapping):
                kwargs[key] = _end_from_dict(kwargs[key], defaults[key])
        return cls(**kwargs)


def _end_from_dict(data: Mapping[str, Any], base: EndOptions) -> EndOptions:
    unknown = set(data) - {"cap", "taper", "easing"}
    if unknown:
        raise ValueError(f"Unknown end option(s): {sorted(unknown)}")
    values = dict(data)
    if "easing" in values:
        values["easing"] = resolve_easing(values["easing"])
    return replace(base, **values)


# Ribbon mode defaults used for live and committed strokes.
RIBBON_SMOOTHING = 0.3
RIBBON_STREAMLINE = 0.4


def ribbon_size_and_thinning(min_radius: float, max_radius: float) -> tuple:
    """Map a min/max radius pair onto the size/thinning model.

    At pressure 0 the radius is ``min_radius``, at pressure 0.5 ``max_radius``
    (pressure 1 reaches ``2 * max_radius - min_radius``).
    """
    size = max(0.0, max_radius * 2)
    thinning = 1 - (min_radius / max_radius) if max_radius > 0 else 0.5
    return size, thinning


def ribbon_options(
    min_radius: float,
    max_radius: float,
    last: bool = True,
) -> StrokePathOptions:
    """Options used for min/max radius ribbons (committed and live strokes)."""
    size, thinning = ribbon_size_and_thinning(min_radius, max_radius)
    return StrokePathOptions(
        size=size,
        thinning=thinning,
        smoothing=RIBBON_SMOOTHING,
        streamline=RIBBON_STREAMLINE,
        simulate_pressure=False,
        start=_default_start(),
        end=_default_end(),
        last=last,
    )


__all__ = [
    "Easing",
    "EASINGS",
    "linear",
    "ease_out_quad",
    "ease_in_cubic",
    "ease_in_quad",
    "ease_in_out_sine",
    "resolve_easing",
    "EndOptions",
    "StrokePathOptions",
    "MIN_STREAMLINE_T",
    "STREAMLINE_T_RANGE",
    "ribbon_size_and_thinning",
    "ribbon_options",
]
