from __future__ import annotations

from docsnap.core.model.geometry import Font, Position


DEFAULT_LINE_SPACING_FACTOR = 1.2
NOMINAL_FONT_SIZE = 12.0


def baseline_distance(font: Font | None, spacing_factor: float) -> float:
    """Distance between two consecutive baselines, in points.

    Without a font the nominal 12pt size and the default factor are used,
    whatever factor was requested.
    """
    if font is None:
        return NOMINAL_FONT_SIZE * DEFAULT_LINE_SPACING_FACTOR
    factor = spacing_factor if spacing_factor > 0 else DEFAULT_LINE_SPACING_FACTOR
    return font.size * factor


def line_position(anchor: Position | None, line_index: int, font: Font | None, spacing_factor: float) -> Position:
    offset = line_index * baseline_distance(font, spacing_factor)
    if anchor is None or not anchor.is_defined:
        # Best-effort anchor: the remote engine repositions the block later.
        page_index = anchor.page_index if anchor is not None else None
        return Position(x=0.0, y=offset, page_index=page_index)
    return Position(x=anchor.x, y=anchor.y + offset, page_index=anchor.page_index)
