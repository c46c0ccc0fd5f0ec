from __future__ import annotations

import logging

from docsnap.core.layout.measurement import line_position
from docsnap.core.model.geometry import Color, Font, Position
from docsnap.core.model.text import Paragraph, TextLine
from docsnap.core.model.text_status import TextStatus


logger = logging.getLogger("docsnap")


def split_lines(text: str | None) -> list[str]:
    """Split on literal newlines, keeping interior blanks and dropping trailing ones."""
    if text is None or not text.strip():
        return []
    raw_lines = text.split("\n")
    while raw_lines and raw_lines[-1] == "":
        raw_lines.pop()
    return raw_lines


def finalize_text(
    paragraph: Paragraph,
    text: str | None,
    color: Color | None,
    spacing_factor: float,
    font: Font | None,
    status: TextStatus | None = None,
) -> Paragraph:
    """Replace the paragraph's lines with ``text`` laid out from its position."""
    paragraph.clear_lines()
    paragraph.font = font
    raw_lines = split_lines(text)
    lines = [
        TextLine.from_text(raw, line_position(paragraph.position, index, font, spacing_factor), color, font, status)
        for index, raw in enumerate(raw_lines)
    ]
    paragraph.set_lines(lines)
    # Uniform spacing: the requested factor is recorded for every adjacent pair.
    paragraph.line_spacings = [spacing_factor] * max(len(lines) - 1, 0)
    logger.debug("layout paragraph lines=%s spacing=%s", len(lines), spacing_factor)
    return paragraph


def layout_paragraph(
    text: str | None,
    start: Position | None,
    font: Font | None,
    spacing_factor: float,
    color: Color | None = None,
    status: TextStatus | None = None,
) -> Paragraph:
    paragraph = Paragraph(position=start)
    return finalize_text(paragraph, text, color, spacing_factor, font, status)
