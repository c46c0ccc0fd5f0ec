from __future__ import annotations

from dataclasses import dataclass, field, replace

from docsnap.core.model.geometry import Color, PageSize, Position
from docsnap.core.model.text_status import TextStatus
from docsnap.core.model.types import ObjectType, Orientation


@dataclass(frozen=True)
class ObjectRef:
    """Read-only projection of a live object, used for querying and diffing.

    ``type`` is the concrete tag, ``object_ref_type`` the structural category
    used to group variants (a text line is structurally a PARAGRAPH). When only
    one of the two tags is known, the other mirrors it.
    """

    internal_id: str | None
    position: Position | None
    type: ObjectType | None = None
    object_ref_type: ObjectType | None = None

    def __post_init__(self) -> None:
        base = self.object_ref_type if self.object_ref_type is not None else self.type
        object.__setattr__(self, "object_ref_type", base)
        if self.type is None:
            object.__setattr__(self, "type", base)

    def with_type(self, object_type: ObjectType) -> "ObjectRef":
        return replace(self, type=object_type)


@dataclass(frozen=True)
class TextObjectRef(ObjectRef):
    font_name: str | None = None
    font_size: float | None = None
    text: str | None = None
    line_spacings: tuple[float, ...] = ()
    color: Color | None = None
    status: TextStatus | None = None
    children: tuple["TextObjectRef", ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "line_spacings", tuple(self.line_spacings or ()))
        object.__setattr__(self, "children", tuple(self.children or ()))

    @property
    def effective_text(self) -> str:
        if self.text is not None:
            return self.text
        return "\n".join(child.effective_text for child in self.children)


@dataclass(frozen=True)
class FormFieldRef(ObjectRef):
    name: str | None = None
    value: str | None = None

    @property
    def is_checkbox(self) -> bool:
        return self.type == ObjectType.CHECKBOX

    @property
    def is_radio_button(self) -> bool:
        return self.type == ObjectType.RADIO_BUTTON

    @property
    def is_text_field(self) -> bool:
        return self.type == ObjectType.TEXT_FIELD

    @property
    def is_button(self) -> bool:
        return self.type == ObjectType.BUTTON

    @property
    def is_dropdown(self) -> bool:
        return self.type == ObjectType.DROPDOWN


@dataclass(frozen=True)
class PageRef(ObjectRef):
    page_size: PageSize | None = None
    orientation: Orientation | None = None

    @property
    def page_index(self) -> int | None:
        return self.position.page_index if self.position is not None else None
