import math

import pytest

from ink_ribbon.drawing import Drawing
from ink_ribbon.stroke import (
    Stroke,
    StrokeSealedError,
    create_stroke,
    normalize_pressure,
)
from ink_ribbon.stroke_pipeline.point_processor import RawPoint


def test_normalize_pressure():
    assert normalize_pressure(None) == 0.5
    assert normalize_pressure(-1) == 0.5
    assert normalize_pressure(3) == 1
    assert normalize_pressure(0) == 0
    assert normalize_pressure(0.25) == 0.25


def test_sealed_stroke_rejects_points():
    stroke = create_stroke("a", color="#f00")
    stroke.add_point(0, 0, 0.5)
    stroke.seal()
    assert isinstance(stroke.points, tuple)
    with pytest.raises(StrokeSealedError):
        stroke.add_point(1, 1)
    assert issubclass(StrokeSealedError, RuntimeError)


def test_erase_creates_new_strokes():
    stroke = Stroke("s", [RawPoint(0, 0, 0.5), RawPoint(10, 0, 0.5)], color="#0a0", max_radius=4).seal()
    pieces = stroke.erase([RawPoint(5, 0)], 3)
    assert [p.id for p in pieces] == ["s-0", "s-1"]
    assert all(p.sealed and p.color == "#0a0" and p.max_radius == 4 for p in pieces)
    assert len(stroke) == 2
    assert all(p.contour().is_closed for p in pieces)


def _draw_line(drawing, x0=0, x1=100, y=0, step=5):
    drawing.begin_stroke(x0, y, 0.5)
    for x in range(x0 + step, x1 + 1, step):
        drawing.add_point(x, y, 0.5)
    return drawing.end_stroke()


def test_pen_session():
    drawing = Drawing(color="#123")
    assert drawing.end_stroke() is None
    assert drawing.active_path() is None

    drawing.begin_stroke(0, 0, None)
    assert drawing.is_drawing
    assert not drawing.add_point(1, 0, 0.5)
    assert drawing.add_point(3, 0, -2)
    live = drawing.active_path()
    assert live.volatile

    stroke = drawing.end_stroke()
    assert stroke.sealed
    assert [p.pressure for p in stroke.points] == [0.5, 0.5]
    assert drawing.strokes == [stroke]
    assert drawing.active_path() is None
    assert not drawing.is_drawing


def test_style_is_captured_at_creation():
    drawing = Drawing()
    drawing.begin_stroke(0, 0, 0.5, color="#f00")
    drawing.color = "#00f"
    drawing.max_radius = 30
    drawing.add_point(10, 0)
    stroke = drawing.end_stroke()
    assert stroke.color == "#f00"
    assert stroke.max_radius == 14


def test_begin_commits_unfinished_stroke():
    drawing = Drawing()
    drawing.begin_stroke(0, 0)
    drawing.add_point(10, 0)
    drawing.begin_stroke(50, 50)
    drawing.end_stroke()
    assert [s.id for s in drawing.strokes] == ["stroke-0", "stroke-1"]


def test_eraser_swipe_splits_stroke():
    drawing = Drawing(eraser_radius=10)
    _draw_line(drawing)

    drawing.begin_erase(50, -30)
    for y in range(-25, 31, 5):
        drawing.erase_to(50, y)
    assert drawing.end_erase() == 2

    left, right = drawing.strokes
    assert (left.id, right.id) == ("stroke-0-0", "stroke-0-1")
    assert max(p.x for p in left.points) <= 40
    assert min(p.x for p in right.points) >= 60
    for stroke in drawing.strokes:
        for p in stroke.points:
            assert math.hypot(p.x - 50, max(0.0, abs(p.y) - 30)) >= 10 - 1e-6

    rendered = list(drawing.render())
    assert [s for s, _ in rendered] == drawing.strokes
    assert all(c.is_closed for _, c in rendered)


def test_eraser_miss_keeps_stroke():
    drawing = Drawing(eraser_radius=5)
    original = _draw_line(drawing)
    drawing.begin_erase(50, 40)
    drawing.erase_to(60, 40)
    drawing.end_erase()
    assert drawing.strokes[0] is original
    assert not drawing.is_erasing


def test_eraser_tap():
    drawing = Drawing(eraser_radius=6)
    _draw_line(drawing)
    drawing.begin_erase(0, 0)
    drawing.end_erase()
    assert len(drawing.strokes) == 1
    assert drawing.strokes[0].points[0].x == pytest.approx(6)


def test_clear():
    drawing = Drawing()
    _draw_line(drawing)
    drawing.begin_stroke(0, 0)
    drawing.clear()
    assert drawing.strokes == []
    assert drawing.active_path() is None


def test_default_eraser_radius():
    assert Drawing().eraser_radius == 24
