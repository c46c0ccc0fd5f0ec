from __future__ import annotations

import base64
from typing import Annotated, Any, Literal, Union

from pydantic import Discriminator, Field, Tag, field_validator

from docsnap.core.model.geometry import Font, Point
from docsnap.core.model.objects import DocumentObject, FormField, Image
from docsnap.core.model.path import Bezier, Line, Path, PathSegment
from docsnap.core.model.text import Paragraph, TextElement, TextLine
from docsnap.core.model.types import FormType
from docsnap.schemas.wire import (
    ColorWire,
    FontWire,
    PointWire,
    PositionWire,
    TextStatusWire,
    WireModel,
)


def _point(value: PointWire) -> Point:
    return Point(value.x, value.y)


def _point_wire(value: Point) -> PointWire:
    return PointWire(x=value.x, y=value.y)


class SegmentStyleWire(WireModel):
    page_index: int | None = None
    stroke_color: ColorWire | None = None
    fill_color: ColorWire | None = None
    stroke_width: float | None = Field(None, ge=0)
    dash_array: list[float] | None = None
    dash_phase: float | None = None

    @field_validator("segment_type", mode="before", check_fields=False)
    @classmethod
    def normalize_segment_type(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    def _style(self) -> dict[str, Any]:
        return {
            "page_index": self.page_index,
            "stroke_color": self.stroke_color.to_domain() if self.stroke_color is not None else None,
            "fill_color": self.fill_color.to_domain() if self.fill_color is not None else None,
            "stroke_width": self.stroke_width,
            "dash_array": tuple(self.dash_array) if self.dash_array else None,
            "dash_phase": self.dash_phase,
        }

    @staticmethod
    def _style_of(segment: PathSegment) -> dict[str, Any]:
        return {
            "page_index": segment.page_index,
            "stroke_color": ColorWire.from_domain(segment.stroke_color),
            "fill_color": ColorWire.from_domain(segment.fill_color),
            "stroke_width": segment.stroke_width,
            "dash_array": list(segment.dash_array) if segment.dash_array else None,
            "dash_phase": segment.dash_phase,
        }


class LineWire(SegmentStyleWire):
    segment_type: Literal["LINE"] = "LINE"
    p0: PointWire
    p1: PointWire

    def to_domain(self) -> Line:
        return Line(p0=_point(self.p0), p1=_point(self.p1), **self._style())


class BezierWire(SegmentStyleWire):
    segment_type: Literal["BEZIER"] = "BEZIER"
    p0: PointWire
    p1: PointWire
    p2: PointWire
    p3: PointWire

    def to_domain(self) -> Bezier:
        return Bezier(
            p0=_point(self.p0),
            p1=_point(self.p1),
            p2=_point(self.p2),
            p3=_point(self.p3),
            **self._style(),
        )


def _segment_kind(value: Any) -> str | None:
    if isinstance(value, dict):
        raw = value.get("segmentType") or value.get("segment_type")
    else:
        raw = getattr(value, "segment_type", None)
    return raw.upper() if isinstance(raw, str) else None


SegmentWire = Annotated[
    Union[Annotated[LineWire, Tag("LINE")], Annotated[BezierWire, Tag("BEZIER")]],
    Discriminator(_segment_kind),
]


class PathWire(WireModel):
    type: Literal["PATH"] = "PATH"
    id: str | None = None
    even_odd_fill: bool | None = None
    path_segments: list[SegmentWire] = Field(default_factory=list)

    def to_domain(self) -> Path:
        return Path(
            id=self.id,
            segments=[segment.to_domain() for segment in self.path_segments],
            even_odd_fill=self.even_odd_fill,
        )


class TextElementWire(WireModel):
    type: Literal["TEXT_ELEMENT"] = "TEXT_ELEMENT"
    id: str | None = None
    text: str = ""
    font: FontWire | None = None
    color: ColorWire | None = None
    position: PositionWire | None = None
    status: TextStatusWire | None = None


class TextLineWire(WireModel):
    type: Literal["TEXT_LINE"] = "TEXT_LINE"
    id: str | None = None
    position: PositionWire | None = None
    font_name: str | None = None
    font_size: float | None = None
    color: ColorWire | None = None
    text: str | None = None
    text_elements: list[TextElementWire] = Field(default_factory=list)


class ParagraphWire(WireModel):
    type: Literal["PARAGRAPH"] = "PARAGRAPH"
    id: str | None = None
    position: PositionWire | None = None
    font: FontWire | None = None
    text: str | None = None
    line_spacings: list[float] = Field(default_factory=list)
    lines: list[TextLineWire] = Field(default_factory=list)


class ImageWire(WireModel):
    type: Literal["IMAGE"] = "IMAGE"
    id: str | None = None
    position: PositionWire | None = None
    format: str | None = None
    width: float | None = None
    height: float | None = None
    data: str | None = None


class FormFieldWire(WireModel):
    type: Literal["FORM_FIELD"] = "FORM_FIELD"
    id: str | None = None
    position: PositionWire | None = None
    name: str | None = None
    form_type: FormType | None = None
    value: str | None = None


def segment_to_wire(segment: PathSegment) -> LineWire | BezierWire:
    style = SegmentStyleWire._style_of(segment)
    if isinstance(segment, Line):
        return LineWire(p0=_point_wire(segment.p0), p1=_point_wire(segment.p1), **style)
    if isinstance(segment, Bezier):
        return BezierWire(
            p0=_point_wire(segment.p0),
            p1=_point_wire(segment.p1),
            p2=_point_wire(segment.p2),
            p3=_point_wire(segment.p3),
            **style,
        )
    raise TypeError(f"Unsupported path segment {type(segment).__name__}")


def _font_wire(font: Font | None) -> FontWire | None:
    return FontWire(name=font.name, size=font.size) if font is not None else None


def text_element_to_wire(run: TextElement) -> TextElementWire:
    return TextElementWire(
        id=run.id,
        text=run.text,
        font=_font_wire(run.font),
        color=ColorWire.from_domain(run.color),
        position=PositionWire.from_domain(run.position),
        status=TextStatusWire.from_domain(run.status),
    )


def text_line_to_wire(line: TextLine) -> TextLineWire:
    return TextLineWire(
        id=line.id,
        position=PositionWire.from_domain(line.position),
        font_name=line.font_name,
        font_size=line.font_size,
        color=ColorWire.from_domain(line.color),
        text=line.text,
        text_elements=[text_element_to_wire(run) for run in line.runs],
    )


def paragraph_to_wire(paragraph: Paragraph) -> ParagraphWire:
    return ParagraphWire(
        id=paragraph.id,
        position=PositionWire.from_domain(paragraph.position),
        font=_font_wire(paragraph.font),
        text=paragraph.text if paragraph.has_text_override else None,
        line_spacings=list(paragraph.line_spacings),
        lines=[text_line_to_wire(line) for line in paragraph.lines],
    )


def path_to_wire(path: Path) -> PathWire:
    return PathWire(
        id=path.id,
        even_odd_fill=path.even_odd_fill,
        path_segments=[segment_to_wire(segment) for segment in path.segments],
    )


def serialize_object(obj: DocumentObject) -> dict[str, Any]:
    """Camel-cased payload for a mutation request built by the transport layer."""
    if isinstance(obj, Paragraph):
        wire: WireModel = paragraph_to_wire(obj)
    elif isinstance(obj, TextLine):
        wire = text_line_to_wire(obj)
    elif isinstance(obj, TextElement):
        wire = text_element_to_wire(obj)
    elif isinstance(obj, Path):
        wire = path_to_wire(obj)
    elif isinstance(obj, Image):
        wire = ImageWire(
            id=obj.id,
            position=PositionWire.from_domain(obj.position),
            format=obj.format,
            width=obj.size.width if obj.size is not None else None,
            height=obj.size.height if obj.size is not None else None,
            data=base64.b64encode(obj.data).decode("ascii") if obj.data is not None else None,
        )
    elif isinstance(obj, FormField):
        wire = FormFieldWire(
            id=obj.id,
            position=PositionWire.from_domain(obj.position),
            name=obj.name,
            form_type=obj.form_type,
            value=obj.value,
        )
    else:
        raise TypeError(f"No wire form for {type(obj).__name__}")
    return wire.model_dump(by_alias=True, mode="json", exclude_none=True)
