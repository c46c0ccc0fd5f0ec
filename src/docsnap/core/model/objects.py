from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from docsnap.core.errors import PositionNotSettable
from docsnap.core.model.geometry import Font, PageSize, Position, Size
from docsnap.core.model.refs import FormFieldRef, ObjectRef, PageRef
from docsnap.core.model.types import FormType, ObjectType, Orientation


@dataclass
class DocumentObject:
    """Live, locally composed object. Authoritative until sent to the remote side."""

    object_type: ClassVar[ObjectType]
    structural_type: ClassVar[ObjectType | None] = None

    id: str | None = None

    def to_object_ref(self) -> ObjectRef:
        return ObjectRef(
            internal_id=self.id,
            position=self.position,
            type=self.object_type,
            object_ref_type=self.structural_type or self.object_type,
        )


@dataclass
class Image(DocumentObject):
    object_type: ClassVar[ObjectType] = ObjectType.IMAGE

    position: Position | None = None
    format: str | None = None
    size: Size | None = None
    data: bytes | None = None


@dataclass
class FormXObject(DocumentObject):
    object_type: ClassVar[ObjectType] = ObjectType.FORM_X_OBJECT

    position: Position | None = None
    name: str | None = None
    form_type: FormType | None = None
    value: str | None = None
    size: Size | None = None
    font: Font | None = None


@dataclass
class FormField(DocumentObject):
    object_type: ClassVar[ObjectType] = ObjectType.FORM_FIELD

    position: Position | None = None
    name: str | None = None
    form_type: FormType | None = None
    value: str | None = None

    def to_object_ref(self) -> FormFieldRef:
        concrete = ObjectType(self.form_type.value) if self.form_type is not None else ObjectType.FORM_FIELD
        return FormFieldRef(
            internal_id=self.id,
            position=self.position,
            type=concrete,
            object_ref_type=ObjectType.FORM_FIELD,
            name=self.name,
            value=self.value,
        )


class Page(DocumentObject):
    object_type: ClassVar[ObjectType] = ObjectType.PAGE

    def __init__(
        self,
        id: str | None = None,
        page_number: int = 0,
        size: PageSize | None = None,
        orientation: Orientation | None = None,
    ) -> None:
        self.id = id
        self.page_number = page_number
        self.size = size
        self.orientation = orientation or (size.orientation if size is not None else Orientation.PORTRAIT)

    @property
    def position(self) -> Position:
        return Position.at_page(self.page_number)

    @position.setter
    def position(self, value: Position) -> None:
        raise PositionNotSettable("A page's position is its page number and cannot be assigned")

    def to_object_ref(self) -> PageRef:
        return PageRef(
            internal_id=self.id,
            position=self.position,
            type=ObjectType.PAGE,
            object_ref_type=ObjectType.PAGE,
            page_size=self.size,
            orientation=self.orientation,
        )
