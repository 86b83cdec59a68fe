import math

import pytest

from ink_ribbon.stroke_pipeline.options import (
    EASINGS,
    EndOptions,
    StrokePathOptions,
    ease_in_cubic,
    ease_out_quad,
    linear,
    resolve_easing,
    ribbon_options,
    ribbon_size_and_thinning,
)


def test_defaults():
    opts = StrokePathOptions()
    assert opts.size == 16
    assert opts.thinning == 0.5
    assert opts.smoothing == 0.5
    assert opts.streamline == 0.5
    assert opts.easing is linear
    assert opts.simulate_pressure is False
    assert opts.start.cap and opts.start.taper is False and opts.start.easing is ease_out_quad
    assert opts.end.cap and opts.end.taper is False and opts.end.easing is ease_in_cubic
    assert opts.last is False


def test_streamline_t():
    assert StrokePathOptions(streamline=0).streamline_t == pytest.approx(1.0)
    assert StrokePathOptions(streamline=1).streamline_t == pytest.approx(0.15)
    assert StrokePathOptions(streamline=0.5).streamline_t == pytest.approx(0.575)


@pytest.mark.parametrize("kwargs", [
    {"size": -1},
    {"size": math.nan},
    {"thinning": math.inf},
    {"streamline": 1.5},
    {"smoothing": -0.1},
])
def test_invalid_options_raise(kwargs):
    with pytest.raises(ValueError):
        StrokePathOptions(**kwargs)


def test_negative_taper_raises():
    with pytest.raises(ValueError):
        EndOptions(taper=-1)


def test_taper_distance():
    assert EndOptions(taper=False).taper_distance(16, 100) == 0
    assert EndOptions(taper=None).taper_distance(16, 100) == 0
    assert EndOptions(taper=True).taper_distance(16, 100) == 100
    assert EndOptions(taper=True).taper_distance(16, 4) == 16
    assert EndOptions(taper=12).taper_distance(16, 100) == 12


def test_from_dict_nested_and_named_easings():
    opts = StrokePathOptions.from_dict({
        "size": 8,
        "easing": "ease_in_quad",
        "end": {"taper": 20},
    })
    assert opts.size == 8
    assert opts.easing is EASINGS["ease_in_quad"]
    assert opts.end.taper == 20
    assert opts.end.easing is ease_in_cubic
    assert opts.start == StrokePathOptions().start


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ValueError):
        StrokePathOptions.from_dict({"sise": 8})
    with pytest.raises(ValueError):
        StrokePathOptions.from_dict({"start": {"tapr": 3}})
    with pytest.raises(ValueError):
        resolve_easing("bouncy")


def test_easing_endpoints():
    for easing in EASINGS.values():
        assert easing(0) == pytest.approx(0)
        assert easing(1) == pytest.approx(1)


def test_ribbon_mapping():
    size, thinning = ribbon_size_and_thinning(0.5, 14)
    assert size == 28
    assert thinning == pytest.approx(1 - 0.5 / 14)
    assert ribbon_size_and_thinning(1, 0) == (0.0, 0.5)

    opts = ribbon_options(2, 8)
    assert opts.size == 16
    assert opts.smoothing == 0.3
    assert opts.streamline == 0.4
    assert opts.last is True
    assert ribbon_options(2, 8, last=False).last is False
