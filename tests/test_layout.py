from __future__ import annotations

import pytest

from docsnap.core.builders import ParagraphBuilder
from docsnap.core.errors import SpacingMismatchError
from docsnap.core.layout.measurement import baseline_distance
from docsnap.core.layout.paragraph import layout_paragraph, split_lines
from docsnap.core.model.geometry import Color, Font, Position
from docsnap.core.model.refs import TextObjectRef
from docsnap.core.model.text import Paragraph, TextLine
from docsnap.core.model.types import ObjectType


def test_three_lines_use_uniform_baseline_offsets() -> None:
    start = Position.at_page_coordinates(0, 100.0, 500.0)
    paragraph = layout_paragraph("A\nB\nC", start, Font("Helvetica", 10.0), 1.2)

    lines = paragraph.lines
    assert [line.text for line in lines] == ["A", "B", "C"]
    assert [line.position.y - 500.0 for line in lines] == pytest.approx([0.0, 12.0, 24.0])
    assert all(line.position.x == 100.0 for line in lines)
    assert all(line.position.page_index == 0 for line in lines)
    assert paragraph.line_spacings == [1.2, 1.2]
    paragraph.validate()


def test_blank_text_yields_no_lines() -> None:
    paragraph = layout_paragraph("   \n  ", Position.at(0.0, 0.0), Font("Helvetica", 10.0), 1.2)
    assert paragraph.lines == []
    assert paragraph.line_spacings == []
    paragraph.validate()


def test_interior_empty_lines_are_kept() -> None:
    assert split_lines("A\n\nB") == ["A", "", "B"]
    assert split_lines("A\n") == ["A"]
    assert split_lines(None) == []


def test_missing_font_uses_nominal_baseline() -> None:
    assert baseline_distance(None, 3.0) == pytest.approx(14.4)
    paragraph = layout_paragraph("one\ntwo", Position.at(0.0, 0.0), None, 2.0)
    assert paragraph.lines[1].position.y == pytest.approx(14.4)


def test_undefined_anchor_starts_at_origin() -> None:
    paragraph = layout_paragraph("a\nb", Position(page_index=2), Font("Helvetica", 10.0), 1.0)
    first, second = paragraph.lines
    assert (first.position.x, first.position.y) == (0.0, 0.0)
    assert (second.position.x, second.position.y) == (0.0, 10.0)
    assert second.position.page_index == 2


def test_replacing_lines_drops_text_override() -> None:
    paragraph = layout_paragraph("x\ny", Position.at(0.0, 0.0), Font("Helvetica", 10.0), 1.2)
    paragraph.text = "override"
    assert paragraph.text == "override"
    paragraph.set_lines([TextLine.from_text("z", Position.at(0.0, 0.0), None, None)])
    assert not paragraph.has_text_override
    assert paragraph.text == "z"


def test_validate_rejects_spacing_count_mismatch() -> None:
    paragraph = Paragraph(lines=[TextLine(explicit_text="a"), TextLine(explicit_text="b")], line_spacings=[])
    with pytest.raises(SpacingMismatchError):
        paragraph.validate()


def test_text_line_text_falls_back_to_runs() -> None:
    line = TextLine.from_text("abc", Position.at(0.0, 0.0), Color.BLACK, Font("Helvetica", 9.0))
    line.text = None
    assert line.text == "abc"
    runs = line.split_runs()
    assert [run.text for run in runs] == ["a", "b", "c"]
    assert all(run.font == Font("Helvetica", 9.0) for run in runs)


def test_paragraph_ref_nests_lines_and_runs() -> None:
    paragraph = layout_paragraph("A\nB", Position.at(0.0, 0.0), Font("Helvetica", 10.0), 1.5, Color.RED)
    ref = paragraph.to_object_ref()
    assert ref.type == ObjectType.PARAGRAPH
    assert ref.color == Color.RED
    assert ref.line_spacings == (1.5,)
    assert [child.type for child in ref.children] == [ObjectType.TEXT_LINE, ObjectType.TEXT_LINE]
    assert ref.children[0].object_ref_type == ObjectType.PARAGRAPH
    assert ref.children[0].children[0].type == ObjectType.TEXT_ELEMENT
    assert ref.effective_text == "A\nB"


def test_builder_lays_out_new_text_in_black() -> None:
    paragraph = ParagraphBuilder().at(0, 50.0, 700.0).font(Font("Helvetica", 12.0)).text("Hi\nThere").build()
    assert len(paragraph.lines) == 2
    assert paragraph.color == Color.BLACK
    assert paragraph.line_spacings == [1.2]
    assert paragraph.lines[1].position.y == pytest.approx(714.4)


def _existing_paragraph_ref() -> TextObjectRef:
    children = tuple(
        TextObjectRef(
            internal_id=f"line-{index}",
            position=Position.at_page_coordinates(0, 10.0, 100.0 + index * 12.0),
            type=ObjectType.TEXT_LINE,
            object_ref_type=ObjectType.PARAGRAPH,
            font_name="Helvetica",
            font_size=10.0,
            text=text,
            color=Color.BLACK,
        )
        for index, text in enumerate(["One", "Two"])
    )
    return TextObjectRef(
        internal_id="para-1",
        position=Position.at_page_coordinates(0, 10.0, 100.0),
        type=ObjectType.PARAGRAPH,
        font_name="Helvetica",
        font_size=10.0,
        line_spacings=(1.2,),
        children=children,
    )


def test_builder_restyles_and_moves_existing_lines() -> None:
    builder = ParagraphBuilder.from_object_ref(_existing_paragraph_ref())
    paragraph = builder.color(Color.RED).at(0, 20.0, 200.0).build()

    lines = paragraph.lines
    assert [line.text for line in lines] == ["One", "Two"]
    assert all(line.color == Color.RED for line in lines)
    assert [(line.position.x, line.position.y) for line in lines] == [(20.0, 200.0), (20.0, 212.0)]
    assert [[(run.position.x, run.position.y) for run in line.runs] for line in lines] == [[(20.0, 200.0)], [(20.0, 212.0)]]
    assert paragraph.line_spacings == [1.2]
    assert paragraph.id == "para-1"
    assert lines[0].id == "line-0"


def test_builder_only_text_changed() -> None:
    builder = ParagraphBuilder.from_object_ref(_existing_paragraph_ref()).text("New")
    assert builder.only_text_changed
    assert not builder.line_spacing(2.0).only_text_changed
