import numpy as np
import pytest

from ink_ribbon.stroke_pipeline.contour import Circle
from ink_ribbon.stroke_pipeline.incremental import (
    CachedRibbon,
    IncrementalRibbon,
    build_fixed_ribbon,
    build_fixed_ribbon_path,
)
from ink_ribbon.stroke_pipeline.options import EndOptions, StrokePathOptions
from ink_ribbon.stroke_pipeline.path_assembler import build_stroke_path
from ink_ribbon.stroke_pipeline.point_processor import RawPoint


def assert_same_commands(a, b):
    assert len(a) == len(b)
    for ca, cb in zip(a, b):
        assert type(ca) is type(cb)
        if ca:
            assert tuple(ca) == pytest.approx(tuple(cb))


def test_incremental_matches_batch_at_every_prefix(wavy_samples):
    ribbon = IncrementalRibbon(min_radius=0.5, max_radius=14)
    for n, pt in enumerate(wavy_samples, start=1):
        ribbon.add_point(pt.x, pt.y, pt.pressure)
        live = ribbon.get_path()
        assert live.volatile
        batch = build_stroke_path(wavy_samples[:n], ribbon.options)
        assert_same_commands(live.commands, batch.commands)


def test_incremental_reset_and_settings():
    ribbon = IncrementalRibbon(1, 8)
    ribbon.add_point(0, 0, 0.5)
    ribbon.add_point(10, 0, 0.5)
    assert ribbon.point_count == 2
    ribbon.update_settings(2, 10)
    assert ribbon.options.size == 20
    assert ribbon.options.last is False
    ribbon.reset()
    assert ribbon.point_count == 0
    assert ribbon.get_path().is_empty


def test_cached_matches_batch_at_every_prefix(wavy_samples):
    ribbon = CachedRibbon(min_radius=1, max_radius=6)
    for n, pt in enumerate(wavy_samples, start=1):
        ribbon.add_point(pt.x, pt.y, pt.pressure)
        live = ribbon.get_path()
        assert live.volatile
        batch = build_fixed_ribbon_path(wavy_samples[:n], 1, 6)
        assert_same_commands(live.commands, batch.commands)


def test_cached_append_only_touches_last_two(wavy_samples):
    ribbon = CachedRibbon(1, 6)
    for pt in wavy_samples[:10]:
        ribbon.add_point(pt.x, pt.y, pt.pressure)
    tangents = ribbon.tangents().copy()
    left, right = ribbon.rails()

    ribbon.add_point(wavy_samples[10].x, wavy_samples[10].y, wavy_samples[10].pressure)
    assert ribbon.valid_upto == 11
    assert np.array_equal(ribbon.tangents()[:9], tangents[:9])
    new_left, new_right = ribbon.rails()
    assert new_left[:9] == left[:9]
    assert new_right[:9] == right[:9]
    # The old last point now has a successor, so its tangent changed.
    assert not np.allclose(ribbon.tangents()[9], tangents[9])


def test_cached_skips_duplicates_and_grows():
    ribbon = CachedRibbon(1, 6)
    ribbon.add_point(0, 0, 0.5)
    ribbon.add_point(0, 0, 0.5)
    assert ribbon.point_count == 2
    assert ribbon.cached_count == 1
    assert ribbon.get_path().commands == [Circle(0, 0, 3.5)]

    for i in range(1, 200):
        ribbon.add_point(i * 2.0, (i % 7) * 1.5, 0.5)
    assert ribbon.cached_count == 200
    assert ribbon.get_path().is_closed
    assert np.allclose(np.hypot(*ribbon.tangents().T), 1)


def test_cached_update_settings_recomputes_radii():
    ribbon = CachedRibbon(1, 6)
    for i in range(5):
        ribbon.add_point(i * 5.0, 0, 0.2 * i)
    ribbon.update_settings(2, 4)
    assert np.allclose(ribbon.radii(), [2 + 0.2 * i * 2 for i in range(5)])
    ribbon.reset()
    assert ribbon.cached_count == 0
    assert ribbon.get_path().is_empty


def test_fixed_ribbon_rails():
    ribbon = build_fixed_ribbon([RawPoint(0, 0, 0), RawPoint(10, 0, 1)], 1, 3)
    left, right = ribbon.rails()
    assert left == [(0, 1), (10, 3)]
    assert right == [(0, -1), (10, -3)]


def test_update_settings_keeps_custom_options():
    custom = StrokePathOptions(
        smoothing=0.9,
        streamline=0.0,
        simulate_pressure=True,
        end=EndOptions(taper=True),
    )
    ribbon = IncrementalRibbon(1, 4, options=custom)
    ribbon.update_settings(1, 6)
    opts = ribbon.options
    assert (opts.smoothing, opts.streamline, opts.simulate_pressure, opts.end.taper) == (0.9, 0.0, True, True)
    assert opts.size == 12
    assert opts.thinning == pytest.approx(1 - 1 / 6)


def test_live_ribbon_is_never_final(wavy_samples):
    ribbon = IncrementalRibbon(0.5, 14, options=StrokePathOptions(last=True))
    assert ribbon.options.last is False
    for n, pt in enumerate(wavy_samples, start=1):
        ribbon.add_point(pt.x, pt.y, pt.pressure)
        batch = build_stroke_path(wavy_samples[:n], ribbon.options)
        assert_same_commands(ribbon.get_path().commands, batch.commands)


def test_cached_arena_keeps_data_across_growth():
    ribbon = CachedRibbon(1, 6)
    for i in range(70):
        ribbon.add_point(i * 3.0, 0, 0.5)
    arena = ribbon._arena
    assert arena.capacity == 128
    assert np.allclose(arena.x[:70], np.arange(70) * 3.0)
    left, right = ribbon.rails()
    assert left == arena.left_rail() and right == arena.right_rail()
    assert np.allclose([y for _, y in left], 3.5)
    assert np.allclose([y for _, y in right], -3.5)
