from __future__ import annotations

import logging
from typing import Annotated, Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    SerializerFunctionWrapHandler,
    Tag,
    field_validator,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

from docsnap.core.model.geometry import BoundingRect, Color, DocumentFontInfo, Font, PageSize, Position
from docsnap.core.model.refs import FormFieldRef, ObjectRef, PageRef, TextObjectRef
from docsnap.core.model.snapshot import DocumentSnapshot, PageSnapshot
from docsnap.core.model.text_status import TextStatus
from docsnap.core.model.types import (
    FORM_FIELD_TYPES,
    TEXT_TYPES,
    FontType,
    ObjectType,
    Orientation,
    PositionMode,
    ShapeType,
)


logger = logging.getLogger("docsnap")


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PointWire(WireModel):
    x: float
    y: float


class BoundingRectWire(WireModel):
    x: float
    y: float
    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)

    def to_domain(self) -> BoundingRect:
        return BoundingRect(x=self.x, y=self.y, width=self.width, height=self.height)

    @classmethod
    def from_domain(cls, rect: BoundingRect) -> "BoundingRectWire":
        return cls(x=rect.x, y=rect.y, width=rect.width, height=rect.height)


class PositionWire(WireModel):
    x: float | None = None
    y: float | None = None
    page_index: int | None = None
    shape: ShapeType | None = None
    mode: PositionMode | None = None
    bounding_rect: BoundingRectWire | None = None
    name: str | None = None
    text_starts_with: str | None = None
    text_pattern: str | None = None

    @model_validator(mode="after")
    def validate_origin(self) -> "PositionWire":
        rect = self.bounding_rect
        if rect is None:
            return self
        if (self.x is not None and self.x != rect.x) or (self.y is not None and self.y != rect.y):
            raise ValueError("x/y must match the bounding rectangle origin")
        return self

    @model_serializer(mode="wrap")
    def keep_coordinates(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        # A null coordinate means "engine assigns"; the key stays even when nulls are dropped.
        data = handler(self)
        data.setdefault("x", self.x)
        data.setdefault("y", self.y)
        return data

    def to_domain(self) -> Position:
        return Position(
            x=self.x,
            y=self.y,
            page_index=self.page_index,
            shape=self.shape,
            mode=self.mode,
            bounding_rect=self.bounding_rect.to_domain() if self.bounding_rect is not None else None,
            name=self.name,
            text_starts_with=self.text_starts_with,
            text_pattern=self.text_pattern,
        )

    @classmethod
    def from_domain(cls, position: Position | None) -> "PositionWire | None":
        if position is None:
            return None
        rect = position.bounding_rect
        return cls(
            x=position.x,
            y=position.y,
            page_index=position.page_index,
            shape=position.shape,
            mode=position.mode,
            bounding_rect=BoundingRectWire.from_domain(rect) if rect is not None else None,
            name=position.name,
            text_starts_with=position.text_starts_with,
            text_pattern=position.text_pattern,
        )


class ColorWire(WireModel):
    red: int = Field(..., ge=0, le=255)
    green: int = Field(..., ge=0, le=255)
    blue: int = Field(..., ge=0, le=255)
    alpha: int = Field(255, ge=0, le=255)

    def to_domain(self) -> Color:
        return Color(self.red, self.green, self.blue, self.alpha)

    @classmethod
    def from_domain(cls, color: Color | None) -> "ColorWire | None":
        if color is None:
            return None
        return cls(red=color.red, green=color.green, blue=color.blue, alpha=color.alpha)


class FontWire(WireModel):
    name: str
    size: float = Field(..., gt=0)

    def to_domain(self) -> Font:
        return Font(self.name, self.size)


class DocumentFontInfoWire(WireModel):
    document_font_name: str | None = None
    system_font_name: str | None = None

    def to_domain(self) -> DocumentFontInfo:
        return DocumentFontInfo(self.document_font_name, self.system_font_name)

    @classmethod
    def from_domain(cls, info: DocumentFontInfo | None) -> "DocumentFontInfoWire | None":
        if info is None:
            return None
        return cls(document_font_name=info.document_font_name, system_font_name=info.system_font_name)


class TextStatusWire(WireModel):
    modified: bool = False
    encodable: bool = True
    font_type: FontType | None = None
    font_info: DocumentFontInfoWire | None = None

    def to_domain(self) -> TextStatus:
        return TextStatus(
            modified=self.modified,
            encodable=self.encodable,
            font_type=self.font_type,
            font_info=self.font_info.to_domain() if self.font_info is not None else None,
        )

    @classmethod
    def from_domain(cls, status: TextStatus | None) -> "TextStatusWire | None":
        if status is None:
            return None
        return cls(
            modified=status.modified,
            encodable=status.encodable,
            font_type=status.font_type,
            font_info=DocumentFontInfoWire.from_domain(status.font_info),
        )


class PageSizeWire(WireModel):
    name: str | None = None
    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)

    def to_domain(self) -> PageSize:
        if self.name:
            standard = PageSize.named(self.name)
            if standard is not None:
                return standard
        return PageSize(self.name, self.width, self.height)


def _normalize_tag(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().upper()
    return value


class ObjectRefWire(WireModel):
    internal_id: str | None = None
    position: PositionWire | None = None
    type: ObjectType | None = None
    object_ref_type: ObjectType | None = None

    @field_validator("type", "object_ref_type", mode="before")
    @classmethod
    def normalize_tag(cls, value: Any) -> Any:
        return _normalize_tag(value)

    def _base_fields(self) -> dict[str, Any]:
        return {
            "internal_id": self.internal_id,
            "position": self.position.to_domain() if self.position is not None else None,
            "type": self.type,
            "object_ref_type": self.object_ref_type,
        }

    def to_domain(self) -> ObjectRef:
        return ObjectRef(**self._base_fields())


class TextObjectRefWire(ObjectRefWire):
    font_name: str | None = None
    font_size: float | None = None
    text: str | None = None
    line_spacings: list[float] | None = None
    color: ColorWire | None = None
    status: TextStatusWire | None = None
    children: list["TextObjectRefWire"] = Field(default_factory=list)

    def to_domain(self) -> TextObjectRef:
        return TextObjectRef(
            **self._base_fields(),
            font_name=self.font_name,
            font_size=self.font_size,
            text=self.text,
            line_spacings=tuple(self.line_spacings or ()),
            color=self.color.to_domain() if self.color is not None else None,
            status=self.status.to_domain() if self.status is not None else None,
            children=tuple(child.to_domain() for child in self.children),
        )


class FormFieldRefWire(ObjectRefWire):
    name: str | None = None
    value: str | None = None

    def to_domain(self) -> FormFieldRef:
        return FormFieldRef(**self._base_fields(), name=self.name, value=self.value)


class PageRefWire(ObjectRefWire):
    page_size: PageSizeWire | None = None
    orientation: Orientation | None = None

    @field_validator("orientation", mode="before")
    @classmethod
    def normalize_orientation(cls, value: Any) -> Any:
        return _normalize_tag(value)

    def to_domain(self) -> PageRef:
        return PageRef(
            **self._base_fields(),
            page_size=self.page_size.to_domain() if self.page_size is not None else None,
            orientation=self.orientation,
        )


def _tag_of(value: Any) -> ObjectType | None:
    if isinstance(value, dict):
        raw = value.get("objectRefType") or value.get("object_ref_type") or value.get("type")
    else:
        raw = getattr(value, "object_ref_type", None) or getattr(value, "type", None)
    if isinstance(raw, ObjectType):
        return raw
    return ObjectType.lookup(raw) if isinstance(raw, str) else None


def _ref_kind(value: Any) -> str:
    tag = _tag_of(value)
    if tag in TEXT_TYPES:
        return "text"
    if tag in FORM_FIELD_TYPES:
        return "form_field"
    if tag == ObjectType.PAGE:
        return "page"
    return "plain"


ElementWire = Annotated[
    Union[
        Annotated[TextObjectRefWire, Tag("text")],
        Annotated[FormFieldRefWire, Tag("form_field")],
        Annotated[PageRefWire, Tag("page")],
        Annotated[ObjectRefWire, Tag("plain")],
    ],
    Discriminator(_ref_kind),
]


def _has_unknown_tag(item: dict[str, Any]) -> bool:
    for key in ("type", "objectRefType", "object_ref_type"):
        raw = item.get(key)
        if isinstance(raw, str) and ObjectType.lookup(raw) is None:
            return True
    return False


class PageSnapshotWire(WireModel):
    page_ref: PageRefWire | None = None
    elements: Optional[list[Optional[ElementWire]]] = None
    fonts: list[DocumentFontInfoWire] = Field(default_factory=list)

    @field_validator("elements", mode="before")
    @classmethod
    def drop_unknown_types(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        kept = []
        for item in value:
            if isinstance(item, dict) and _has_unknown_tag(item):
                logger.warning(
                    "Skipping snapshot element with unknown type internal_id=%s type=%s",
                    item.get("internalId"),
                    item.get("type") or item.get("objectRefType"),
                )
                continue
            kept.append(item)
        return kept

    def to_domain(self) -> PageSnapshot:
        return PageSnapshot(
            page_ref=self.page_ref.to_domain() if self.page_ref is not None else None,
            elements=(
                tuple(element.to_domain() if element is not None else None for element in self.elements)
                if self.elements is not None
                else None
            ),
            fonts=tuple(font.to_domain() for font in self.fonts),
        )


class DocumentSnapshotWire(WireModel):
    page_count: int = Field(0, ge=0)
    fonts: list[DocumentFontInfoWire] = Field(default_factory=list)
    pages: list[PageSnapshotWire | None] | None = None

    def to_domain(self) -> DocumentSnapshot:
        return DocumentSnapshot(
            page_count=self.page_count,
            pages=(
                tuple(page.to_domain() if page is not None else None for page in self.pages)
                if self.pages is not None
                else None
            ),
            fonts=tuple(font.to_domain() for font in self.fonts),
        )


def ref_to_wire(ref: ObjectRef) -> ObjectRefWire:
    base = {
        "internal_id": ref.internal_id,
        "position": PositionWire.from_domain(ref.position),
        "type": ref.type,
        "object_ref_type": ref.object_ref_type,
    }
    if isinstance(ref, TextObjectRef):
        return TextObjectRefWire(
            **base,
            font_name=ref.font_name,
            font_size=ref.font_size,
            text=ref.text,
            line_spacings=list(ref.line_spacings),
            color=ColorWire.from_domain(ref.color),
            status=TextStatusWire.from_domain(ref.status),
            children=[ref_to_wire(child) for child in ref.children],
        )
    if isinstance(ref, FormFieldRef):
        return FormFieldRefWire(**base, name=ref.name, value=ref.value)
    if isinstance(ref, PageRef):
        size = ref.page_size
        return PageRefWire(
            **base,
            page_size=PageSizeWire(name=size.name, width=size.width, height=size.height) if size is not None else None,
            orientation=ref.orientation,
        )
    return ObjectRefWire(**base)
