from __future__ import annotations

import pytest

from docsnap.core.model.geometry import BoundingRect, Color, Font, PageSize, Position
from docsnap.core.model.types import Orientation, PositionMode, ShapeType


def test_position_derives_point_rect_from_coordinates() -> None:
    position = Position(x=10.0, y=20.0, page_index=1)
    assert position.bounding_rect == BoundingRect(10.0, 20.0, 0.0, 0.0)
    assert position.shape == ShapeType.POINT
    assert position.mode == PositionMode.CONTAINS


def test_position_coordinates_stay_absent_without_rect() -> None:
    position = Position(page_index=3)
    assert position.x is None
    assert position.y is None
    assert position.bounding_rect is None
    assert not position.is_defined


def test_position_half_known_coordinates_are_not_coerced() -> None:
    position = Position(x=5.0)
    assert position.x == 5.0
    assert position.y is None
    assert position.bounding_rect is None


def test_position_rejects_mismatched_rect_origin() -> None:
    with pytest.raises(ValueError):
        Position(x=1.0, y=1.0, bounding_rect=BoundingRect(2.0, 2.0, 5.0, 5.0))


def test_moved_returns_new_position() -> None:
    original = Position.at_page_coordinates(0, 10.0, 10.0)
    moved = original.moved(5.0, -2.5)
    assert (moved.x, moved.y) == (15.0, 7.5)
    assert (original.x, original.y) == (10.0, 10.0)
    assert moved.page_index == 0


def test_moved_requires_both_coordinates() -> None:
    with pytest.raises(ValueError):
        Position(x=1.0).moved(1.0, 1.0)


def test_text_matches_is_full_match_across_lines() -> None:
    position = Position(text_pattern="Total.*EUR")
    assert position.text_matches("Total\n12 EUR")
    assert not position.text_matches("Grand Total 12 EUR")
    assert not position.text_matches(None)


def test_rect_contains_is_inclusive_with_epsilon() -> None:
    rect = BoundingRect(0.0, 0.0, 10.0, 10.0)
    assert rect.contains(0.0, 0.0)
    assert rect.contains(10.0, 10.0)
    assert not rect.contains(10.5, 5.0)
    assert rect.contains(10.5, 5.0, epsilon=0.5)


def test_rect_rejects_negative_size() -> None:
    with pytest.raises(ValueError):
        BoundingRect(0.0, 0.0, -1.0, 4.0)


def test_rect_intersects_with_tolerance() -> None:
    a = BoundingRect(0.0, 0.0, 10.0, 10.0)
    b = BoundingRect(10.5, 0.0, 5.0, 5.0)
    assert not a.intersects(b)
    assert a.intersects(b, tolerance=0.25)


def test_color_validation_and_hex() -> None:
    assert Color(255, 0, 128).to_hex() == "#FF0080"
    assert Color.BLACK == Color(0, 0, 0, 255)
    with pytest.raises(ValueError):
        Color(256, 0, 0)


def test_font_detects_subset_prefix() -> None:
    assert Font("ABCDEF+Helvetica", 12.0).is_embedded
    assert not Font("Helvetica", 12.0).is_embedded
    assert Font("Helvetica", 12.0, is_embedded=True).is_embedded


def test_page_size_matches_standard_in_either_orientation() -> None:
    assert PageSize.of(595.2, 841.9).name == "A4"
    assert PageSize.of(792.0, 612.0).name == "LETTER"
    custom = PageSize.of(100.0, 50.0)
    assert custom.name is None
    assert custom.orientation == Orientation.LANDSCAPE
    assert PageSize.named("letter") == PageSize("LETTER", 612.0, 792.0)
