from __future__ import annotations

from enum import Enum


class ObjectType(str, Enum):
    """Closed set of object tags used both on the wire and as filter keys."""

    PDF = "PDF"
    PAGE = "PAGE"
    TEXT_ELEMENT = "TEXT_ELEMENT"
    PARAGRAPH = "PARAGRAPH"
    IMAGE = "IMAGE"
    PATH = "PATH"
    LINE = "LINE"
    RECTANGLE = "RECTANGLE"
    BEZIER = "BEZIER"
    CLIPPING = "CLIPPING"
    FORM_X_OBJECT = "FORM_X_OBJECT"
    FORM_FIELD = "FORM_FIELD"
    WORD = "WORD"
    TEXT_LINE = "TEXT_LINE"
    TEXT_FIELD = "TEXT_FIELD"
    RADIO_BUTTON = "RADIO_BUTTON"
    BUTTON = "BUTTON"
    DROPDOWN = "DROPDOWN"
    CHECKBOX = "CHECKBOX"

    @classmethod
    def lookup(cls, name: str | None) -> "ObjectType | None":
        if not name:
            return None
        try:
            return cls(name.strip().upper())
        except ValueError:
            return None


class FormType(str, Enum):
    TEXT_FIELD = "TEXT_FIELD"
    CHECKBOX = "CHECKBOX"
    RADIO_BUTTON = "RADIO_BUTTON"
    DROPDOWN = "DROPDOWN"
    BUTTON = "BUTTON"


class ShapeType(str, Enum):
    POINT = "POINT"
    LINE = "LINE"
    CIRCLE = "CIRCLE"
    RECT = "RECT"


class PositionMode(str, Enum):
    INTERSECT = "INTERSECT"
    CONTAINS = "CONTAINS"


class Orientation(str, Enum):
    PORTRAIT = "PORTRAIT"
    LANDSCAPE = "LANDSCAPE"


class FontType(str, Enum):
    SYSTEM = "SYSTEM"
    STANDARD = "STANDARD"
    EMBEDDED = "EMBEDDED"


TEXT_TYPES = frozenset(
    {ObjectType.PARAGRAPH, ObjectType.TEXT_LINE, ObjectType.TEXT_ELEMENT, ObjectType.WORD}
)

FORM_FIELD_TYPES = frozenset(
    {
        ObjectType.FORM_FIELD,
        ObjectType.TEXT_FIELD,
        ObjectType.CHECKBOX,
        ObjectType.RADIO_BUTTON,
        ObjectType.DROPDOWN,
        ObjectType.BUTTON,
    }
)

PATH_TYPES = frozenset({ObjectType.PATH, ObjectType.LINE, ObjectType.BEZIER, ObjectType.RECTANGLE})
