from __future__ import annotations

from dataclasses import replace

from docsnap.core.errors import BuilderStateError
from docsnap.core.layout.measurement import DEFAULT_LINE_SPACING_FACTOR
from docsnap.core.layout.paragraph import finalize_text
from docsnap.core.model.geometry import Color, Font, Point, Position
from docsnap.core.model.path import Bezier, Line, Path, PathSegment
from docsnap.core.model.refs import TextObjectRef
from docsnap.core.model.text import Paragraph, TextLine


CIRCLE_KAPPA = 0.5522847498


class ParagraphBuilder:
    """Compose a new paragraph, or restyle and move an existing one."""

    def __init__(self, paragraph: Paragraph | None = None) -> None:
        self._paragraph = paragraph or Paragraph()
        self._text: str | None = None
        self._font: Font | None = None
        self._font_changed = False
        self._color: Color | None = None
        self._line_spacing: float | None = None
        self._original_position: Position | None = None

    @classmethod
    def from_object_ref(cls, ref: TextObjectRef) -> "ParagraphBuilder":
        paragraph = Paragraph(
            id=ref.internal_id,
            position=ref.position,
            font=Font(ref.font_name, ref.font_size) if ref.font_name and ref.font_size else None,
            lines=[TextLine.from_object_ref(child) for child in ref.children],
            line_spacings=ref.line_spacings,
        )
        builder = cls(paragraph)
        builder._original_position = ref.position
        return builder

    def text(self, text: str, color: Color | None = None) -> "ParagraphBuilder":
        self._text = text
        if color is not None:
            self._color = color
        return self

    def font(self, font: Font) -> "ParagraphBuilder":
        self._font = font
        self._font_changed = True
        return self

    def color(self, color: Color) -> "ParagraphBuilder":
        self._color = color
        return self

    def line_spacing(self, factor: float) -> "ParagraphBuilder":
        self._line_spacing = factor
        return self

    def at(self, page_index: int, x: float, y: float) -> "ParagraphBuilder":
        self._paragraph.position = Position.at_page_coordinates(page_index, x, y)
        return self

    def at_position(self, position: Position) -> "ParagraphBuilder":
        self._paragraph.position = position
        return self

    @property
    def only_text_changed(self) -> bool:
        return self._color is None and self._font is None and self._line_spacing is None

    def build(self) -> Paragraph:
        paragraph = self._paragraph
        if self._text is not None:
            finalize_text(
                paragraph,
                self._text,
                self._color or Color.BLACK,
                self._line_spacing if self._line_spacing is not None else DEFAULT_LINE_SPACING_FACTOR,
                self._font or paragraph.font,
                paragraph.status,
            )
            return paragraph

        if self._font is not None:
            paragraph.font = self._font
        if self._line_spacing is not None:
            paragraph.line_spacings = [self._line_spacing] * max(len(paragraph.lines) - 1, 0)
        restyled = [
            line.restyled(color=self._color, font=self._font if self._font_changed else None)
            for line in paragraph.lines
        ]
        paragraph.set_lines(self._shift(restyled, paragraph.position))
        return paragraph

    def _shift(self, lines: list[TextLine], target: Position | None) -> list[TextLine]:
        if target is None or not target.is_defined or not lines:
            return lines
        base = self._original_position
        if base is None or not base.is_defined:
            base = lines[0].position
        if base is None or not base.is_defined:
            return lines
        dx = target.x - base.x
        dy = target.y - base.y
        for line in lines:
            if line.position is not None and line.position.is_defined:
                line.position = line.position.moved(dx, dy)
            line.runs = [
                replace(run, position=run.position.moved(dx, dy))
                if run.position is not None and run.position.is_defined
                else run
                for run in line.runs
            ]
        return lines


class PathBuilder:
    """Pen-style path construction. Styling applies to segments added afterwards."""

    def __init__(self, page_index: int | None = None) -> None:
        self._page_index = page_index
        self._segments: list[PathSegment] = []
        self._current: Point | None = None
        self._start: Point | None = None
        self._stroke_color: Color | None = None
        self._fill_color: Color | None = None
        self._stroke_width: float | None = None
        self._dash_array: tuple[float, ...] | None = None
        self._dash_phase: float | None = None
        self._even_odd_fill: bool | None = None

    def move_to(self, x: float, y: float) -> "PathBuilder":
        self._current = Point(x, y)
        self._start = self._current
        return self

    def line_to(self, x: float, y: float) -> "PathBuilder":
        current = self._require_cursor("line_to")
        end = Point(x, y)
        self._append(Line(p0=current, p1=end))
        self._current = end
        return self

    def bezier_to(self, cx1: float, cy1: float, cx2: float, cy2: float, x: float, y: float) -> "PathBuilder":
        current = self._require_cursor("bezier_to")
        end = Point(x, y)
        self._append(Bezier(p0=current, p1=Point(cx1, cy1), p2=Point(cx2, cy2), p3=end))
        self._current = end
        return self

    def close_path(self) -> "PathBuilder":
        current = self._require_cursor("close_path")
        start = self._start
        if current != start:
            self.line_to(start.x, start.y)
        self._current = start
        return self

    def rect(self, x: float, y: float, width: float, height: float) -> "PathBuilder":
        self.move_to(x, y)
        self.line_to(x + width, y)
        self.line_to(x + width, y + height)
        self.line_to(x, y + height)
        return self.close_path()

    def circle(self, cx: float, cy: float, r: float) -> "PathBuilder":
        k = CIRCLE_KAPPA * r
        self.move_to(cx, cy + r)
        self.bezier_to(cx + k, cy + r, cx + r, cy + k, cx + r, cy)
        self.bezier_to(cx + r, cy - k, cx + k, cy - r, cx, cy - r)
        self.bezier_to(cx - k, cy - r, cx - r, cy - k, cx - r, cy)
        self.bezier_to(cx - r, cy + k, cx - k, cy + r, cx, cy + r)
        return self.close_path()

    def color(self, color: Color) -> "PathBuilder":
        self._stroke_color = color
        return self

    def fill_color(self, color: Color) -> "PathBuilder":
        self._fill_color = color
        return self

    def line_width(self, width: float) -> "PathBuilder":
        self._stroke_width = width
        return self

    def dash(self, *pattern: float, phase: float = 0.0) -> "PathBuilder":
        self._dash_array = tuple(pattern)
        self._dash_phase = phase
        return self

    def even_odd_fill(self, even_odd: bool = True) -> "PathBuilder":
        self._even_odd_fill = even_odd
        return self

    def build(self) -> Path:
        if not self._segments:
            raise BuilderStateError("No segments in path; use move_to()/line_to()/bezier_to() first")
        return Path(segments=self._segments, even_odd_fill=self._even_odd_fill)

    def _require_cursor(self, operation: str) -> Point:
        if self._current is None or self._start is None:
            raise BuilderStateError(f"Call move_to() before {operation}()")
        return self._current

    def _append(self, segment: PathSegment) -> None:
        segment.page_index = self._page_index
        segment.stroke_color = self._stroke_color
        segment.fill_color = self._fill_color
        segment.stroke_width = self._stroke_width
        if self._dash_array:
            segment.dash_array = self._dash_array
        segment.dash_phase = self._dash_phase
        self._segments.append(segment)
