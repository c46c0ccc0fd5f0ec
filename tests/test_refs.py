from __future__ import annotations

import pytest

from docsnap.core.errors import PositionNotSettable
from docsnap.core.model.geometry import DocumentFontInfo, Font, PageSize, Point, Position, Size
from docsnap.core.model.objects import FormField, FormXObject, Image, Page
from docsnap.core.model.path import Line, Path
from docsnap.core.model.refs import FormFieldRef, ObjectRef, PageRef
from docsnap.core.model.text import TextElement, TextLine, Word
from docsnap.core.model.text_status import EMBEDDED_FONT_WARNING, TextStatus
from docsnap.core.model.types import FontType, FormType, ObjectType, Orientation
from docsnap.core.selection.service import adjust_form_field_type


def test_missing_tag_mirrors_the_other() -> None:
    ref = ObjectRef(internal_id="a", position=None, type=ObjectType.IMAGE)
    assert ref.object_ref_type == ObjectType.IMAGE
    structural = ObjectRef(internal_id="b", position=None, object_ref_type=ObjectType.PATH)
    assert structural.type == ObjectType.PATH


def test_live_objects_report_their_tags() -> None:
    position = Position.at_page_coordinates(0, 1.0, 2.0)
    image = Image(id="img", position=position, format="png", size=Size(4.0, 3.0), data=b"\x89PNG")
    assert image.to_object_ref().type == ObjectType.IMAGE
    assert image.size.area == 12.0

    word = Word(id="w", text="hi", position=position).to_object_ref()
    assert (word.type, word.object_ref_type) == (ObjectType.WORD, ObjectType.WORD)

    run = TextElement(id="t", text="x", font=Font("Helvetica", 8.0), position=position).to_object_ref()
    assert run.type == ObjectType.TEXT_ELEMENT
    assert run.font_size == 8.0

    line = TextLine.from_text("xy", position, None, None).to_object_ref()
    assert (line.type, line.object_ref_type) == (ObjectType.TEXT_LINE, ObjectType.PARAGRAPH)

    xobject = FormXObject(id="x", position=position, name="Fm1").to_object_ref()
    assert (xobject.type, xobject.object_ref_type) == (ObjectType.FORM_X_OBJECT, ObjectType.FORM_X_OBJECT)

    path = Path(id="p", segments=[Line(p0=Point(1.0, 2.0), p1=Point(3.0, 4.0))]).to_object_ref()
    assert path.type == ObjectType.PATH
    assert (path.position.x, path.position.y) == (1.0, 2.0)


def test_form_field_ref_carries_concrete_type() -> None:
    field = FormField(id="f", position=Position.at(0.0, 0.0), name="agree", form_type=FormType.CHECKBOX, value="Yes")
    ref = field.to_object_ref()
    assert isinstance(ref, FormFieldRef)
    assert ref.type == ObjectType.CHECKBOX
    assert ref.object_ref_type == ObjectType.FORM_FIELD
    assert ref.is_checkbox
    assert not ref.is_text_field


def test_page_ref_and_fixed_position() -> None:
    page = Page(id="pg", page_number=3, size=PageSize.of(842.0, 595.0), orientation=Orientation.LANDSCAPE)
    ref = page.to_object_ref()
    assert isinstance(ref, PageRef)
    assert ref.page_index == 3
    assert ref.orientation == Orientation.LANDSCAPE
    assert ref.page_size.name == "A4"
    with pytest.raises(PositionNotSettable):
        page.position = Position.at_page(0)


def test_reconcile_retags_with_fetched_filter() -> None:
    ref = FormFieldRef(internal_id="f", position=None, type=ObjectType.FORM_FIELD, name="n")
    adjusted = adjust_form_field_type(ref, "checkbox")
    assert adjusted.type == ObjectType.CHECKBOX
    assert adjusted.object_ref_type == ObjectType.FORM_FIELD
    assert adjusted.name == "n"
    assert ref.type == ObjectType.FORM_FIELD


def test_reconcile_fails_open() -> None:
    ref = FormFieldRef(internal_id="f", position=None, type=ObjectType.TEXT_FIELD)
    assert adjust_form_field_type(ref, "signature") is ref
    assert adjust_form_field_type(ref, None) is ref
    assert adjust_form_field_type(ref, FormType.TEXT_FIELD) is ref
    assert adjust_form_field_type(None, "CHECKBOX") is None


def test_reconcile_ignores_non_form_type_names() -> None:
    ref = FormFieldRef(internal_id="f", position=None, type=ObjectType.TEXT_FIELD)
    assert adjust_form_field_type(ref, "IMAGE") is ref
    assert adjust_form_field_type(ref, "paragraph") is ref
    assert adjust_form_field_type(ref, "FORM_FIELD") is ref
    assert adjust_form_field_type(ref, " checkbox ").type == ObjectType.CHECKBOX


def test_text_status_merge() -> None:
    info = DocumentFontInfo("ABCDEF+Arial", "Arial")
    merged = TextStatus.of_runs(
        [
            TextStatus(modified=False, encodable=True),
            None,
            TextStatus(modified=True, encodable=False, font_type=FontType.EMBEDDED, font_info=info),
            TextStatus(font_type=FontType.SYSTEM),
        ]
    )
    assert merged.modified
    assert not merged.encodable
    assert merged.font_type == FontType.EMBEDDED
    assert merged.font_info == info
    assert "Arial" in merged.warning


def test_text_status_embedded_warning() -> None:
    status = TextStatus(modified=True, font_type=FontType.EMBEDDED)
    assert status.warning == EMBEDDED_FONT_WARNING
    assert TextStatus().warning is None
