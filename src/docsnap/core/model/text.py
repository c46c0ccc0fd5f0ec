from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import ClassVar, Iterable

from docsnap.core.errors import SpacingMismatchError
from docsnap.core.model.geometry import Color, Font, Position
from docsnap.core.model.objects import DocumentObject
from docsnap.core.model.refs import TextObjectRef
from docsnap.core.model.text_status import TextStatus
from docsnap.core.model.types import ObjectType


@dataclass
class TextElement(DocumentObject):
    object_type: ClassVar[ObjectType] = ObjectType.TEXT_ELEMENT

    text: str = ""
    font: Font | None = None
    color: Color | None = None
    position: Position | None = None
    status: TextStatus | None = None

    def to_object_ref(self) -> TextObjectRef:
        return TextObjectRef(
            internal_id=self.id,
            position=self.position,
            type=self.object_type,
            object_ref_type=self.object_type,
            font_name=self.font.name if self.font is not None else None,
            font_size=self.font.size if self.font is not None else None,
            text=self.text,
            color=self.color,
            status=self.status,
        )


@dataclass
class Word(DocumentObject):
    object_type: ClassVar[ObjectType] = ObjectType.WORD

    text: str = ""
    position: Position | None = None

    def to_object_ref(self) -> TextObjectRef:
        return TextObjectRef(
            internal_id=self.id,
            position=self.position,
            type=ObjectType.WORD,
            object_ref_type=ObjectType.WORD,
            text=self.text,
        )


@dataclass
class TextLine(DocumentObject):
    """One positioned line of text made of runs.

    ``text`` returns the explicit line text when one was set and otherwise the
    concatenation of the runs, so callers always read a single value.
    """

    object_type: ClassVar[ObjectType] = ObjectType.TEXT_LINE
    structural_type: ClassVar[ObjectType | None] = ObjectType.PARAGRAPH

    position: Position | None = None
    font_name: str | None = None
    font_size: float | None = None
    color: Color | None = None
    runs: list[TextElement] = field(default_factory=list)
    explicit_text: str | None = None

    @property
    def text(self) -> str:
        if self.explicit_text is not None:
            return self.explicit_text
        return "".join(run.text for run in self.runs)

    @text.setter
    def text(self, value: str | None) -> None:
        self.explicit_text = value

    @property
    def font(self) -> Font | None:
        if self.font_name is None or self.font_size is None:
            return None
        return Font(self.font_name, self.font_size)

    @property
    def status(self) -> TextStatus:
        return TextStatus.of_runs(run.status for run in self.runs)

    @classmethod
    def from_text(
        cls,
        text: str,
        position: Position | None,
        color: Color | None,
        font: Font | None,
        status: TextStatus | None = None,
    ) -> "TextLine":
        run = TextElement(text=text, font=font, color=color, position=position, status=status)
        return cls(
            position=position,
            font_name=font.name if font is not None else None,
            font_size=font.size if font is not None else None,
            color=color,
            runs=[run],
            explicit_text=text,
        )

    @classmethod
    def from_object_ref(cls, ref: TextObjectRef) -> "TextLine":
        font = Font(ref.font_name, ref.font_size) if ref.font_name is not None and ref.font_size is not None else None
        line = cls.from_text(ref.effective_text, ref.position, ref.color, font, ref.status)
        line.id = ref.internal_id
        return line

    def split_runs(self) -> list[TextElement]:
        """Per-character runs anchored at the line position (advance widths are not measured)."""
        font = self.font
        status = self.status
        return [
            TextElement(text=char, font=font, color=self.color, position=self.position, status=status)
            for char in self.text
        ]

    def restyled(self, color: Color | None = None, font: Font | None = None) -> "TextLine":
        updated = replace(self, runs=list(self.runs))
        if color is not None:
            updated.color = color
        if font is not None:
            updated.font_name = font.name
            updated.font_size = font.size
            updated.runs = [replace(run, font=font) for run in updated.runs]
        return updated

    def to_object_ref(self) -> TextObjectRef:
        return TextObjectRef(
            internal_id=self.id,
            position=self.position,
            type=ObjectType.TEXT_LINE,
            object_ref_type=ObjectType.PARAGRAPH,
            font_name=self.font_name,
            font_size=self.font_size,
            text=self.text,
            color=self.color,
            status=self.status,
            children=tuple(run.to_object_ref() for run in self.runs),
        )


class Paragraph(DocumentObject):
    """Ordered text lines plus the spacing factors between adjacent lines.

    ``line_spacings`` holds multipliers of the font size, one per adjacent
    line pair. An explicit ``text`` override is dropped whenever the lines are
    replaced or cleared, so the override never outlives the lines it described.
    """

    object_type: ClassVar[ObjectType] = ObjectType.PARAGRAPH

    def __init__(
        self,
        id: str | None = None,
        lines: Iterable[TextLine] | None = None,
        position: Position | None = None,
        font: Font | None = None,
        line_spacings: Iterable[float] | None = None,
    ) -> None:
        self.id = id
        self.position = position
        self.font = font
        self._lines: list[TextLine] = list(lines or [])
        self.line_spacings: list[float] = list(line_spacings or [])
        self._text_override: str | None = None

    def __repr__(self) -> str:
        return f"Paragraph(id={self.id!r}, lines={len(self._lines)}, line_spacings={self.line_spacings!r})"

    @property
    def lines(self) -> list[TextLine]:
        return list(self._lines)

    def set_lines(self, lines: Iterable[TextLine]) -> None:
        self._lines = list(lines)
        self._text_override = None

    def add_line(self, line: TextLine) -> None:
        self._lines.append(line)
        self._text_override = None

    def clear_lines(self) -> None:
        self._lines.clear()
        self.line_spacings = []
        self._text_override = None

    @property
    def text(self) -> str:
        if self._text_override is not None:
            return self._text_override
        return "\n".join(line.text for line in self._lines)

    @text.setter
    def text(self, value: str | None) -> None:
        self._text_override = value

    @property
    def has_text_override(self) -> bool:
        return self._text_override is not None

    @property
    def color(self) -> Color | None:
        for line in self._lines:
            if line.color is not None:
                return line.color
        return None

    @property
    def status(self) -> TextStatus:
        return TextStatus.of_runs(run.status for line in self._lines for run in line.runs)

    def validate(self) -> None:
        expected = max(len(self._lines) - 1, 0)
        if len(self.line_spacings) != expected:
            raise SpacingMismatchError(
                f"Paragraph has {len(self._lines)} lines but {len(self.line_spacings)} spacing factors (expected {expected})"
            )

    def to_object_ref(self) -> TextObjectRef:
        return TextObjectRef(
            internal_id=self.id,
            position=self.position,
            type=ObjectType.PARAGRAPH,
            object_ref_type=ObjectType.PARAGRAPH,
            font_name=self.font.name if self.font is not None else None,
            font_size=self.font.size if self.font is not None else None,
            text=self.text,
            line_spacings=tuple(self.line_spacings),
            color=self.color,
            status=self.status,
            children=tuple(line.to_object_ref() for line in self._lines),
        )
