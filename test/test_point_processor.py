import math

import pytest

from ink_ribbon.stroke_pipeline.options import StrokePathOptions
from ink_ribbon.stroke_pipeline.point_processor import (
    MIN_RADIUS,
    RawPoint,
    clamp_pressure,
    measure_points,
    point_radius,
    process_points,
    simulate_pressure,
    stroke_radius,
    streamline_points,
)
from ink_ribbon.stroke_pipeline.options import linear


def test_clamp_pressure():
    assert clamp_pressure(None) == 0.5
    assert clamp_pressure(math.nan) == 0.5
    assert clamp_pressure(-1) == 0
    assert clamp_pressure(2) == 1
    assert clamp_pressure(0.3) == 0.3


def test_stroke_radius_formula():
    assert stroke_radius(10, 0.5, 1.0, linear) == pytest.approx(7.5)
    assert stroke_radius(10, 0.5, 0.0, linear) == pytest.approx(2.5)
    # Negative thinning inverts the relationship.
    assert stroke_radius(10, -0.5, 1.0, linear) == pytest.approx(2.5)


def test_zero_thinning_is_constant():
    opts = StrokePathOptions(size=10, thinning=0)
    for p in (0.0, 0.2, 0.7, 1.0):
        assert point_radius(p, opts) == 5


def test_radius_floor():
    opts = StrokePathOptions(size=0, thinning=0.5)
    assert point_radius(0.5, opts) == MIN_RADIUS


def test_simulate_pressure_stays_in_range():
    p = 0.5
    for distance in (0, 1, 5, 50, 500):
        p = simulate_pressure(p, distance, 16)
        assert 0 <= p <= 1
    assert 0 <= simulate_pressure(0.5, 10, 0) <= 1


def test_zero_streamline_follows_input():
    samples = [RawPoint(0, 0), RawPoint(5, 1), RawPoint(9, 4)]
    smoothed = streamline_points(samples, StrokePathOptions(streamline=0))
    assert [(p.x, p.y) for p in smoothed] == [(0, 0), (5, 1), (9, 4)]


def test_near_duplicates_are_dropped():
    samples = [RawPoint(0, 0), RawPoint(0.05, 0), RawPoint(10, 0)]
    smoothed = streamline_points(samples, StrokePathOptions(streamline=0))
    assert len(smoothed) == 2


def test_last_places_final_point_exactly():
    samples = [RawPoint(0, 0), RawPoint(10, 0), RawPoint(20, 0)]
    done = streamline_points(samples, StrokePathOptions(streamline=0.5, last=True))
    live = streamline_points(samples, StrokePathOptions(streamline=0.5, last=False))
    assert (done[-1].x, done[-1].y) == (20, 0)
    assert live[-1].x < 20


def test_measure_tangents_and_length(wavy_samples):
    pts = process_points(wavy_samples, StrokePathOptions())
    assert len(pts) > 2
    for prev, pt in zip(pts, pts[1:]):
        assert pt.running_length >= prev.running_length
        assert math.hypot(pt.vx, pt.vy) == pytest.approx(1.0)
    assert (pts[0].vx, pts[0].vy) == (pts[1].vx, pts[1].vy)
    assert pts[0].running_length == 0


def test_single_point_gets_a_direction():
    pts = process_points([RawPoint(3, 3, 0.5)], StrokePathOptions())
    assert len(pts) == 2
    assert pts[0].position == (3, 3)
    assert math.hypot(pts[0].vx, pts[0].vy) == pytest.approx(1.0)


def test_empty_input():
    assert process_points([], StrokePathOptions()) == []
    assert measure_points([], StrokePathOptions()) == []


def test_simulated_pressure_in_range(wavy_samples):
    pts = process_points(wavy_samples, StrokePathOptions(simulate_pressure=True))
    assert all(0 <= p.pressure <= 1 for p in pts)
