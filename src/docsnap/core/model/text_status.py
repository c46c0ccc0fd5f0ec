from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from docsnap.core.model.geometry import DocumentFontInfo
from docsnap.core.model.types import FontType


EMBEDDED_FONT_WARNING = (
    "You are using an embedded font and modified the text. Even though the font reports to be able "
    "to render the new text, this is not guaranteed."
)


@dataclass(frozen=True)
class TextStatus:
    modified: bool = False
    encodable: bool = True
    font_type: FontType | None = None
    font_info: DocumentFontInfo | None = None

    def merge(self, other: "TextStatus | None") -> "TextStatus":
        """Fold another run's status into this one.

        Modified if either is modified, encodable only if both are, and the
        first known font type and font info win.
        """
        if other is None:
            return self
        return TextStatus(
            modified=self.modified or other.modified,
            encodable=self.encodable and other.encodable,
            font_type=self.font_type if self.font_type is not None else other.font_type,
            font_info=self.font_info if self.font_info is not None else other.font_info,
        )

    @classmethod
    def of_runs(cls, statuses: Iterable["TextStatus | None"]) -> "TextStatus":
        result = cls()
        for status in statuses:
            result = result.merge(status)
        return result

    @property
    def warning(self) -> str | None:
        if not self.encodable and self.font_info is not None:
            return (
                "Text is not encodable with your current font, we are using "
                f"'{self.font_info.system_font_name}' as a fallback font instead."
            )
        if self.modified and self.font_type == FontType.EMBEDDED:
            if self.font_info is not None and self.font_info.system_font_name is not None:
                return None
            return EMBEDDED_FONT_WARNING
        return None
