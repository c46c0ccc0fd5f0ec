from __future__ import annotations

import math
from dataclasses import dataclass

from docsnap.core.model.geometry import BoundingRect
from docsnap.core.model.refs import ObjectRef
from docsnap.core.model.snapshot import PageSnapshot
from docsnap.core.selection.service import contains_point, iter_elements


DEFAULT_CELL_SIZE = 96.0
MAX_CELLS_PER_ELEMENT = 4096


@dataclass(frozen=True)
class HitTestCandidate:
    ref: ObjectRef
    score: float
    draw_index: int


def _cell_span(lo: float, hi: float, cell_size: float, limit: int | None) -> range | None:
    """Cell indices covering ``[lo, hi]``, clamped to ``[0, limit)`` when the grid is bounded.

    ``None`` when the extent cannot be mapped onto the grid (non-finite input).
    """
    start_q = lo / cell_size
    end_q = hi / cell_size
    if not (math.isfinite(start_q) and math.isfinite(end_q)):
        return None
    start = math.floor(min(start_q, end_q))
    end = math.floor(max(start_q, end_q))
    if limit is not None:
        start = min(max(start, 0), limit - 1)
        end = min(max(end, 0), limit - 1)
    return range(start, end + 1)


def _cell_count(xs: range, ys: range) -> int:
    # Span arithmetic; len() overflows on ranges past sys.maxsize.
    return (xs.stop - xs.start) * (ys.stop - ys.start)


@dataclass(frozen=True)
class SpatialIndex:
    """Uniform grid over the refs of one page snapshot.

    Bins hold draw-order indices; every query re-checks the exact rectangle so
    the grid only prunes, it never decides membership. When the page size is
    known the grid is clamped to it and out-of-page extents land in the border
    cells. Refs that would still span more than ``MAX_CELLS_PER_ELEMENT`` cells
    are kept in ``overflow`` and checked by every query.
    """

    cell_size: float
    elements: tuple[ObjectRef, ...]
    bins: dict[tuple[int, int], list[int]]
    overflow: tuple[int, ...] = ()
    grid: tuple[int, int] | None = None

    @classmethod
    def build(cls, page: PageSnapshot, cell_size: float = DEFAULT_CELL_SIZE) -> "SpatialIndex":
        if cell_size <= 0:
            raise ValueError("cell_size must be positive")
        elements = tuple(iter_elements(page))
        grid = _page_grid(page, cell_size)
        cols, rows = grid if grid is not None else (None, None)
        bins: dict[tuple[int, int], list[int]] = {}
        overflow: list[int] = []
        for idx, element in enumerate(elements):
            rect = element.position.bounding_rect if element.position is not None else None
            if rect is None:
                continue
            xs = _cell_span(rect.x, rect.right, cell_size, cols)
            ys = _cell_span(rect.y, rect.top, cell_size, rows)
            if xs is None or ys is None or _cell_count(xs, ys) > MAX_CELLS_PER_ELEMENT:
                overflow.append(idx)
                continue
            for cx in xs:
                for cy in ys:
                    bins.setdefault((cx, cy), []).append(idx)
        return cls(cell_size=cell_size, elements=elements, bins=bins, overflow=tuple(overflow), grid=grid)

    def _candidate_indices(self, x0: float, y0: float, x1: float, y1: float) -> list[int]:
        cols, rows = self.grid if self.grid is not None else (None, None)
        xs = _cell_span(x0, x1, self.cell_size, cols)
        ys = _cell_span(y0, y1, self.cell_size, rows)
        found: set[int] = set(self.overflow)
        if xs is None or ys is None:
            for cell in self.bins.values():
                found.update(cell)
        elif _cell_count(xs, ys) > len(self.bins):
            # Wide query: walk the occupied bins instead of every covered cell.
            for (cx, cy), cell in self.bins.items():
                if cx in xs and cy in ys:
                    found.update(cell)
        else:
            for cx in xs:
                for cy in ys:
                    found.update(self.bins.get((cx, cy), ()))
        return sorted(found)

    def candidates_at(self, x: float, y: float, epsilon: float = 0.0) -> list[ObjectRef]:
        indices = self._candidate_indices(x - epsilon, y - epsilon, x + epsilon, y + epsilon)
        return [self.elements[idx] for idx in indices if contains_point(self.elements[idx], x, y, epsilon)]

    def candidates_in_rect(self, rect: BoundingRect, tolerance: float = 0.0) -> list[ObjectRef]:
        return [candidate.ref for candidate in self.rect_test(rect, tolerance)]

    def hit_test(self, x: float, y: float, epsilon: float = 0.0) -> list[HitTestCandidate]:
        """Refs containing the point in draw order, each scored by squared distance to its centre."""
        candidates: list[HitTestCandidate] = []
        for idx in self._candidate_indices(x - epsilon, y - epsilon, x + epsilon, y + epsilon):
            element = self.elements[idx]
            if not contains_point(element, x, y, epsilon):
                continue
            center = element.position.bounding_rect.center
            candidates.append(
                HitTestCandidate(ref=element, score=(x - center.x) ** 2 + (y - center.y) ** 2, draw_index=idx)
            )
        return candidates

    def rect_test(self, rect: BoundingRect, tolerance: float = 0.0) -> list[HitTestCandidate]:
        """Refs meeting the rectangle in draw order, scored by overlap area.

        Touching edges (or meeting within ``tolerance``) count as a hit with a
        zero score.
        """
        candidates: list[HitTestCandidate] = []
        indices = self._candidate_indices(rect.x - tolerance, rect.y - tolerance, rect.right + tolerance, rect.top + tolerance)
        for idx in indices:
            element = self.elements[idx]
            bounds = element.position.bounding_rect
            if not bounds.intersects(rect, tolerance):
                continue
            candidates.append(HitTestCandidate(ref=element, score=_overlap_area(bounds, rect), draw_index=idx))
        return candidates


def _overlap_area(a: BoundingRect, b: BoundingRect) -> float:
    width = min(a.right, b.right) - max(a.x, b.x)
    height = min(a.top, b.top) - max(a.y, b.y)
    if width <= 0 or height <= 0:
        return 0.0
    return width * height


def _page_grid(page: PageSnapshot, cell_size: float) -> tuple[int, int] | None:
    size = page.page_ref.page_size if page.page_ref is not None else None
    if size is None or size.width <= 0 or size.height <= 0:
        return None
    cols_q = size.width / cell_size
    rows_q = size.height / cell_size
    if not (math.isfinite(cols_q) and math.isfinite(rows_q)):
        return None
    cols = max(math.ceil(cols_q), 1)
    rows = max(math.ceil(rows_q), 1)
    if cols * rows > MAX_CELLS_PER_ELEMENT * 16:
        return None
    return cols, rows
