from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar, Iterable

from docsnap.core.errors import EmptyPathError, PositionNotSettable
from docsnap.core.model.geometry import BoundingRect, Color, Point, Position
from docsnap.core.model.objects import DocumentObject
from docsnap.core.model.types import ObjectType


@dataclass
class PathSegment(DocumentObject, ABC):
    """Stroke styling shared by every segment variant.

    Dash pattern and phase are carried for the renderer only and never affect
    position or bounds.
    """

    page_index: int | None = None
    stroke_color: Color | None = None
    fill_color: Color | None = None
    stroke_width: float | None = None
    dash_array: tuple[float, ...] | None = None
    dash_phase: float | None = None

    @property
    @abstractmethod
    def start(self) -> Point: ...

    @property
    def position(self) -> Position:
        anchor = self.start
        return Position(x=anchor.x, y=anchor.y, page_index=self.page_index)

    @abstractmethod
    def control_points(self) -> list[Point]: ...

    @abstractmethod
    def evaluate(self, t: float) -> Point: ...


@dataclass
class Line(PathSegment):
    object_type: ClassVar[ObjectType] = ObjectType.LINE

    p0: Point = field(default_factory=lambda: Point(0.0, 0.0))
    p1: Point = field(default_factory=lambda: Point(0.0, 0.0))

    @property
    def start(self) -> Point:
        return self.p0

    def control_points(self) -> list[Point]:
        return [self.p0, self.p1]

    def evaluate(self, t: float) -> Point:
        return Point(
            self.p0.x + (self.p1.x - self.p0.x) * t,
            self.p0.y + (self.p1.y - self.p0.y) * t,
        )


@dataclass
class Bezier(PathSegment):
    object_type: ClassVar[ObjectType] = ObjectType.BEZIER

    p0: Point = field(default_factory=lambda: Point(0.0, 0.0))
    p1: Point = field(default_factory=lambda: Point(0.0, 0.0))
    p2: Point = field(default_factory=lambda: Point(0.0, 0.0))
    p3: Point = field(default_factory=lambda: Point(0.0, 0.0))

    @property
    def start(self) -> Point:
        return self.p0

    def control_points(self) -> list[Point]:
        return [self.p0, self.p1, self.p2, self.p3]

    def evaluate(self, t: float) -> Point:
        # t outside [0, 1] extrapolates along the same polynomial.
        u = 1.0 - t
        b0 = u * u * u
        b1 = 3.0 * u * u * t
        b2 = 3.0 * u * t * t
        b3 = t * t * t
        return Point(
            b0 * self.p0.x + b1 * self.p1.x + b2 * self.p2.x + b3 * self.p3.x,
            b0 * self.p0.y + b1 * self.p1.y + b2 * self.p2.y + b3 * self.p3.y,
        )


class Path(DocumentObject):
    """Ordered segments whose anchor is derived, never stored.

    The anchor is the minimum segment x and the maximum segment y (y grows
    upward, so that is the top-left corner). ``even_odd_fill`` of ``None`` means
    the nonzero winding rule.
    """

    object_type: ClassVar[ObjectType] = ObjectType.PATH

    def __init__(
        self,
        id: str | None = None,
        segments: Iterable[PathSegment] | None = None,
        even_odd_fill: bool | None = None,
    ) -> None:
        self.id = id
        self._segments: list[PathSegment] = list(segments or [])
        self.even_odd_fill = even_odd_fill

    def __repr__(self) -> str:
        return f"Path(id={self.id!r}, segments={len(self._segments)}, even_odd_fill={self.even_odd_fill!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return (self.id, self._segments, self.even_odd_fill) == (other.id, other._segments, other.even_odd_fill)

    @property
    def segments(self) -> list[PathSegment]:
        return list(self._segments)

    @segments.setter
    def segments(self, value: Iterable[PathSegment] | None) -> None:
        self._segments = list(value or [])

    def add_segment(self, segment: PathSegment) -> None:
        self._segments.append(segment)

    @property
    def page_index(self) -> int | None:
        for segment in self._segments:
            if segment.page_index is not None:
                return segment.page_index
        return None

    @property
    def position(self) -> Position:
        if not self._segments:
            raise EmptyPathError("A path without segments has no position")
        anchors = [segment.position for segment in self._segments]
        return Position(
            x=min(anchor.x for anchor in anchors),
            y=max(anchor.y for anchor in anchors),
            page_index=self.page_index,
        )

    @position.setter
    def position(self, value: Position) -> None:
        raise PositionNotSettable("Path position is derived from its segments; move or replace segments instead")

    def bounds(self) -> BoundingRect:
        if not self._segments:
            raise EmptyPathError("A path without segments has no bounds")
        points = [point for segment in self._segments for point in segment.control_points()]
        return BoundingRect.enclosing(points)
