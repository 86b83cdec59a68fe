import math

import numpy as np
import pytest

from ink_ribbon.stroke_pipeline.contour import ArcTo, Contour
from ink_ribbon.stroke_pipeline.options import StrokePathOptions
from ink_ribbon.stroke_pipeline.path_assembler import build_stroke_path


@pytest.fixture
def straight_contour(straight_samples):
    return build_stroke_path(straight_samples, StrokePathOptions(size=10, thinning=0, streamline=0, last=True))


def test_svg_path(straight_contour):
    d = straight_contour.to_svg_path()
    assert d.startswith("M 0 -5")
    assert d.count("A ") == 2
    assert d.count("C ") == 4
    assert d.endswith("Z")


def test_circle_export():
    path = Contour()
    path.add_circle(10, 10, 4)
    assert path.is_closed
    assert path.to_svg_path().startswith("M 14 10 A 4 4")
    verts = path.flatten()
    assert verts.shape == (24, 2)
    assert np.allclose(np.hypot(verts[:, 0] - 10, verts[:, 1] - 10), 4)
    assert path.to_polygon().area == pytest.approx(math.pi * 16, rel=0.02)


def test_flatten_has_no_closing_duplicate(straight_contour):
    verts = straight_contour.flatten()
    assert not np.allclose(verts[0], verts[-1])
    assert np.allclose(verts[0], (0, -5))


def test_bounds(straight_contour):
    assert straight_contour.bounds() == pytest.approx((-5, -5, 25, 5), abs=1e-6)
    assert Contour().bounds() is None


def test_open_contour_is_not_closed():
    path = Contour()
    path.move_to(0, 0)
    path.line_to(10, 0)
    assert not path.is_closed
    path.line_to(0, 0)
    path.close()
    assert path.is_closed
    assert path.end_point == (0, 0)


def test_arc_endpoints():
    arc = ArcTo(0, 0, 2, 0, 90)
    assert arc.start == pytest.approx((2, 0))
    assert arc.end == pytest.approx((0, 2), abs=1e-12)


def test_degenerate_polygon_is_empty():
    path = Contour()
    path.move_to(0, 0)
    path.line_to(1, 0)
    assert path.to_polygon().is_empty
