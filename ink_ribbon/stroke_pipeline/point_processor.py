"""Turn raw stylus samples into processed stroke points.

Two stages:
1. ``streamline_points`` pulls each raw sample toward a lagging smoothed
   trajectory and drops samples that barely moved.
2. ``measure_points`` derives pressure (real or simulated from speed), the
   radius, the unit tangent and the running arc length of every retained
   point.

``process_points`` chains both. The incremental ribbon runs stage 1 point by
point and stage 2 over its own smoothed buffer, which is why the stages are
exposed separately.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence
import math

from .geometry import lerp
from .options import StrokePathOptions

DEFAULT_PRESSURE = 0.5
RATE_OF_PRESSURE_CHANGE = 0.275
MIN_RADIUS = 0.01
MIN_SEGMENT_DIST_SQ = 0.01
INITIAL_PRESSURE_WINDOW = 10


class RawPoint(NamedTuple):
    """An input sample as recorded. Missing pressure means 0.5 downstream."""
    x: float
    y: float
    pressure: Optional[float] = None


class SmoothedPoint(NamedTuple):
    """A streamlined sample: position plus resolved pressure."""
    x: float
    y: float
    pressure: float


@dataclass
class ProcessedPoint:
    """One point of a processed stroke."""

    x: float
    y: float
    pressure: float
    vx: float  # Unit vector from the previous point to this one
    vy: float
    distance: float  # Distance from the previous point
    running_length: float  # Arc length from the first point
    radius: float

    @property
    def position(self):
        return (self.x, self.y)


def clamp_pressure(pressure: Optional[float]) -> float:
    """Resolve a possibly missing pressure and clamp it into [0, 1]."""
    if pressure is None or math.isnan(pressure):
        return DEFAULT_PRESSURE
    return max(0.0, min(1.0, float(pressure)))


def simulate_pressure(prev_pressure: float, distance: float, size: float) -> float:
    """Pressure from speed: long steps (fast motion) converge toward thin."""
    sp = min(1.0, distance / size) if size > 0 else 1.0
    rp = min(1.0, 1.0 - sp)
    return min(1.0, prev_pressure + (rp - prev_pressure) * (sp * RATE_OF_PRESSURE_CHANGE))


def stroke_radius(size: float, thinning: float, pressure: float, easing) -> float:
    """Radius for a pressure value before the minimum floor is applied."""
    return size * easing(0.5 - thinning * (0.5 - pressure))


def point_radius(pressure: float, opts: StrokePathOptions) -> float:
    if not opts.thinning:
        return max(MIN_RADIUS, opts.size / 2)
    return max(MIN_RADIUS, stroke_radius(opts.size, opts.thinning, pressure, opts.easing))


def streamline_step(
    prev: SmoothedPoint,
    x: float,
    y: float,
    pressure: float,
    t: float,
    exact: bool = False,
) -> Optional[SmoothedPoint]:
    """Advance the smoothed trajectory by one raw sample.

    Returns None when the candidate moved less than the minimum distance.
    ``exact`` places the point on the raw sample (pen-up of a finished stroke).
    """
    if exact:
        px, py = x, y
    else:
        px, py = lerp((prev.x, prev.y), (x, y), t)
    dx = px - prev.x
    dy = py - prev.y
    if dx * dx + dy * dy < MIN_SEGMENT_DIST_SQ:
        return None
    return SmoothedPoint(px, py, pressure)


def streamline_points(samples: Sequence, opts: StrokePathOptions) -> List[SmoothedPoint]:
    """Apply streamline smoothing to raw samples.

    Samples are anything with ``x``, ``y`` and optional ``pressure``
    attributes (``RawPoint`` in practice).
    """
    if len(samples) == 0:
        return []

    t = opts.streamline_t
    first = samples[0]
    smoothed = [SmoothedPoint(first.x, first.y, clamp_pressure(getattr(first, "pressure", None)))]
    last_index = len(samples) - 1

    for i in range(1, len(samples)):
        raw = samples[i]
        point = streamline_step(
            smoothed[-1],
            raw.x,
            raw.y,
            clamp_pressure(getattr(raw, "pressure", None)),
            t,
            exact=opts.last and i == last_index,
        )
        if point is not None:
            smoothed.append(point)

    return smoothed


def initial_pressure(smoothed: Sequence[SmoothedPoint], opts: StrokePathOptions) -> float:
    """Average the first few pressures so a slow start does not bloat the head."""
    acc = smoothed[0].pressure
    for idx, pt in enumerate(smoothed[:INITIAL_PRESSURE_WINDOW]):
        p = pt.pressure
        if opts.simulate_pressure and idx > 0:
            prev = smoothed[idx - 1]
            p = simulate_pressure(acc, math.hypot(pt.x - prev.x, pt.y - prev.y), opts.size)
        acc = (acc + p) / 2
    return acc


def measure_points(
    smoothed: Sequence[SmoothedPoint],
    opts: StrokePathOptions,
) -> List[ProcessedPoint]:
    """Compute pressure, radius, tangent and arc length for smoothed points."""
    if len(smoothed) == 0:
        return []

    smoothed = list(smoothed)
    if len(smoothed) == 1:
        # A lone sample still needs a direction; nudge a companion point.
        only = smoothed[0]
        smoothed.append(SmoothedPoint(only.x + 1, only.y + 1, only.pressure))

    prev_pressure = initial_pressure(smoothed, opts)
    running_length = 0.0
    result: List[ProcessedPoint] = []

    for i, pt in enumerate(smoothed):
        vx = vy = distance = 0.0
        if i > 0:
            prev = smoothed[i - 1]
            dx = pt.x - prev.x
            dy = pt.y - prev.y
            distance = math.hypot(dx, dy)
            running_length += distance
            if distance > 0:
                vx = dx / distance
                vy = dy / distance
            else:
                vx = result[-1].vx
                vy = result[-1].vy

        pressure = pt.pressure
        if opts.simulate_pressure:
            pressure = simulate_pressure(prev_pressure, distance, opts.size)

        result.append(ProcessedPoint(
            x=pt.x,
            y=pt.y,
            pressure=pressure,
            vx=vx,
            vy=vy,
            distance=distance,
            running_length=running_length,
            radius=point_radius(pressure, opts),
        ))
        prev_pressure = pressure

    # The first point has no predecessor; borrow the second point's direction.
    result[0].vx = result[1].vx
    result[0].vy = result[1].vy
    return result


def process_points(samples: Sequence, opts: StrokePathOptions) -> List[ProcessedPoint]:
    """Full point processing: streamline, then measure."""
    return measure_points(streamline_points(samples, opts), opts)


__all__ = [
    "RawPoint",
    "DEFAULT_PRESSURE",
    "MIN_RADIUS",
    "MIN_SEGMENT_DIST_SQ",
    "SmoothedPoint",
    "ProcessedPoint",
    "clamp_pressure",
    "simulate_pressure",
    "stroke_radius",
    "point_radius",
    "streamline_step",
    "streamline_points",
    "initial_pressure",
    "measure_points",
    "process_points",
]
