from __future__ import annotations

import pytest

from docsnap.core.builders import CIRCLE_KAPPA, PathBuilder
from docsnap.core.errors import BuilderStateError, EmptyPathError, PositionNotSettable
from docsnap.core.model.geometry import BoundingRect, Color, Point, Position
from docsnap.core.model.path import Bezier, Line, Path, PathSegment


def _bezier() -> Bezier:
    return Bezier(p0=Point(0.0, 0.0), p1=Point(10.0, 20.0), p2=Point(30.0, 20.0), p3=Point(40.0, 0.0))


def test_bezier_evaluate_hits_endpoints() -> None:
    curve = _bezier()
    assert curve.evaluate(0.0) == Point(0.0, 0.0)
    assert curve.evaluate(1.0) == Point(40.0, 0.0)


def test_bezier_evaluate_midpoint() -> None:
    mid = _bezier().evaluate(0.5)
    assert mid.x == pytest.approx(20.0)
    assert mid.y == pytest.approx(15.0)


def test_line_evaluate_extrapolates() -> None:
    line = Line(p0=Point(0.0, 0.0), p1=Point(10.0, 10.0))
    assert line.evaluate(0.5) == Point(5.0, 5.0)
    assert line.evaluate(2.0) == Point(20.0, 20.0)


def test_segment_position_follows_start_point() -> None:
    line = Line(p0=Point(3.0, 4.0), p1=Point(9.0, 9.0), page_index=2)
    assert line.position == Position(x=3.0, y=4.0, page_index=2)


def test_path_position_is_min_x_max_y() -> None:
    path = Path(
        segments=[
            Line(p0=Point(10.0, 5.0), p1=Point(20.0, 5.0)),
            Line(p0=Point(4.0, 1.0), p1=Point(4.0, 50.0)),
            Line(p0=Point(7.0, 30.0), p1=Point(0.0, 0.0)),
        ]
    )
    position = path.position
    assert (position.x, position.y) == (4.0, 30.0)


def test_empty_path_has_no_position() -> None:
    with pytest.raises(EmptyPathError):
        _ = Path().position
    with pytest.raises(EmptyPathError):
        Path().bounds()


def test_path_position_cannot_be_assigned() -> None:
    path = Path(segments=[_bezier()])
    with pytest.raises(PositionNotSettable):
        path.position = Position.at(1.0, 1.0)


def test_path_bounds_enclose_control_points() -> None:
    path = Path(segments=[_bezier(), Line(p0=Point(40.0, 0.0), p1=Point(50.0, -5.0))])
    assert path.bounds() == BoundingRect(0.0, -5.0, 50.0, 25.0)


def test_builder_rect_closes_back_to_start() -> None:
    path = PathBuilder(page_index=0).color(Color.RED).line_width(2.0).rect(10.0, 10.0, 100.0, 50.0).build()
    segments = path.segments
    assert len(segments) == 4
    assert segments[-1].p1 == Point(10.0, 10.0)
    assert all(segment.stroke_color == Color.RED for segment in segments)
    assert all(segment.stroke_width == 2.0 for segment in segments)
    assert path.page_index == 0


def test_builder_styling_applies_to_later_segments_only() -> None:
    path = (
        PathBuilder()
        .move_to(0.0, 0.0)
        .line_to(10.0, 0.0)
        .dash(3.0, 1.0, phase=0.5)
        .line_to(10.0, 10.0)
        .even_odd_fill()
        .build()
    )
    first, second = path.segments
    assert first.dash_array is None
    assert second.dash_array == (3.0, 1.0)
    assert second.dash_phase == 0.5
    assert path.even_odd_fill is True


def test_builder_circle_uses_four_beziers() -> None:
    path = PathBuilder().circle(0.0, 0.0, 10.0).build()
    segments = path.segments
    assert len(segments) == 4
    assert all(isinstance(segment, Bezier) for segment in segments)
    assert segments[0].p1 == Point(CIRCLE_KAPPA * 10.0, 10.0)
    assert segments[-1].p3 == Point(0.0, 10.0)


def test_builder_requires_move_to() -> None:
    with pytest.raises(BuilderStateError):
        PathBuilder().line_to(1.0, 1.0)
    with pytest.raises(BuilderStateError):
        PathBuilder().move_to(1.0, 1.0).build()


def test_segment_base_cannot_be_instantiated() -> None:
    with pytest.raises(TypeError):
        PathSegment(page_index=0)
    line = Line(page_index=0, p0=Point(1.0, 2.0), p1=Point(3.0, 4.0))
    assert isinstance(line, PathSegment)
    assert line.position == Position(x=1.0, y=2.0, page_index=0)
