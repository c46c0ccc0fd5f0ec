from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import ClassVar

from docsnap.core.model.types import Orientation, PositionMode, ShapeType


PAGE_SIZE_TOLERANCE = 0.5
_SUBSET_PREFIX = re.compile(r"^[A-Z]{6}\+")


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class BoundingRect:
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"BoundingRect width/height must be non-negative, got {self.width}x{self.height}")

    @property
    def origin(self) -> Point:
        return Point(self.x, self.y)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2.0, self.y + self.height / 2.0)

    def contains(self, x: float, y: float, epsilon: float = 0.0) -> bool:
        return (
            self.x - epsilon <= x <= self.right + epsilon
            and self.y - epsilon <= y <= self.top + epsilon
        )

    def intersects(self, other: "BoundingRect", tolerance: float = 0.0) -> bool:
        # Both rectangles grow by the tolerance, so point rectangles can still meet.
        if self.right + tolerance < other.x - tolerance or other.right + tolerance < self.x - tolerance:
            return False
        if self.top + tolerance < other.y - tolerance or other.top + tolerance < self.y - tolerance:
            return False
        return True

    @classmethod
    def enclosing(cls, points: list[Point]) -> "BoundingRect":
        if not points:
            raise ValueError("Cannot enclose an empty point set")
        min_x = min(point.x for point in points)
        min_y = min(point.y for point in points)
        max_x = max(point.x for point in points)
        max_y = max(point.y for point in points)
        return cls(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)


@dataclass(frozen=True)
class Position:
    """Anchor of a document object.

    ``x`` and ``y`` are individually optional; ``None`` means the remote engine
    assigns the coordinate. When both are known and no rectangle is given, a
    zero-sized point rectangle is derived so spatial queries can use it.
    """

    x: float | None = None
    y: float | None = None
    page_index: int | None = None
    shape: ShapeType | None = None
    mode: PositionMode | None = None
    bounding_rect: BoundingRect | None = None
    name: str | None = None
    text_starts_with: str | None = None
    text_pattern: str | None = None

    def __post_init__(self) -> None:
        rect = self.bounding_rect
        if rect is not None:
            if self.x is None:
                object.__setattr__(self, "x", rect.x)
            if self.y is None:
                object.__setattr__(self, "y", rect.y)
            if (self.x, self.y) != (rect.x, rect.y):
                raise ValueError(f"Position ({self.x}, {self.y}) disagrees with its rectangle origin ({rect.x}, {rect.y})")
        elif self.x is not None and self.y is not None:
            object.__setattr__(self, "bounding_rect", BoundingRect(self.x, self.y, 0.0, 0.0))
            if self.shape is None:
                object.__setattr__(self, "shape", ShapeType.POINT)
            if self.mode is None:
                object.__setattr__(self, "mode", PositionMode.CONTAINS)

    @property
    def is_defined(self) -> bool:
        return self.x is not None and self.y is not None

    @classmethod
    def at(cls, x: float, y: float) -> "Position":
        return cls(x=x, y=y, shape=ShapeType.POINT, mode=PositionMode.CONTAINS)

    @classmethod
    def at_page(cls, page_index: int) -> "Position":
        return cls(page_index=page_index, mode=PositionMode.CONTAINS)

    @classmethod
    def at_page_coordinates(cls, page_index: int, x: float, y: float) -> "Position":
        return cls(x=x, y=y, page_index=page_index, shape=ShapeType.POINT, mode=PositionMode.CONTAINS)

    @classmethod
    def by_name(cls, name: str) -> "Position":
        return cls(name=name)

    def with_point(self, x: float, y: float) -> "Position":
        return replace(
            self,
            x=x,
            y=y,
            bounding_rect=BoundingRect(x, y, 0.0, 0.0),
            shape=ShapeType.POINT,
            mode=PositionMode.CONTAINS,
        )

    def moved(self, dx: float = 0.0, dy: float = 0.0) -> "Position":
        if not self.is_defined:
            raise ValueError("Cannot move a position without both coordinates")
        return self.with_point(self.x + dx, self.y + dy)

    def text_matches(self, text: str | None) -> bool:
        if self.text_pattern is None or text is None:
            return False
        return re.fullmatch(self.text_pattern, text, flags=re.DOTALL) is not None


@dataclass(frozen=True)
class Color:
    red: int
    green: int
    blue: int
    alpha: int = 255

    BLACK: ClassVar["Color"]
    WHITE: ClassVar["Color"]
    RED: ClassVar["Color"]

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue, self.alpha):
            if channel < 0 or channel > 255:
                raise ValueError(f"Color channel out of range: {channel}")

    def to_hex(self) -> str:
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"


Color.BLACK = Color(0, 0, 0)
Color.WHITE = Color(255, 255, 255)
Color.RED = Color(255, 0, 0)


@dataclass(frozen=True)
class Font:
    name: str
    size: float
    is_embedded: bool | None = None

    def __post_init__(self) -> None:
        if self.is_embedded is None:
            object.__setattr__(self, "is_embedded", bool(_SUBSET_PREFIX.match(self.name or "")))


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class PageSize:
    name: str | None
    width: float
    height: float

    @property
    def orientation(self) -> Orientation:
        return Orientation.LANDSCAPE if self.width > self.height else Orientation.PORTRAIT

    @classmethod
    def custom(cls, width: float, height: float) -> "PageSize":
        return cls(name=None, width=width, height=height)

    @classmethod
    def of(cls, width: float, height: float) -> "PageSize":
        for standard in STANDARD_PAGE_SIZES:
            if abs(standard.width - width) < PAGE_SIZE_TOLERANCE and abs(standard.height - height) < PAGE_SIZE_TOLERANCE:
                return standard
            if abs(standard.width - height) < PAGE_SIZE_TOLERANCE and abs(standard.height - width) < PAGE_SIZE_TOLERANCE:
                return standard
        return cls.custom(width, height)

    @classmethod
    def named(cls, name: str) -> "PageSize | None":
        wanted = name.strip().upper()
        for standard in STANDARD_PAGE_SIZES:
            if standard.name == wanted:
                return standard
        return None


STANDARD_PAGE_SIZES: tuple[PageSize, ...] = (
    PageSize("A0", 2384.0, 3370.0),
    PageSize("A1", 1684.0, 2384.0),
    PageSize("A2", 1191.0, 1684.0),
    PageSize("A3", 842.0, 1191.0),
    PageSize("A4", 595.0, 842.0),
    PageSize("A5", 420.0, 595.0),
    PageSize("A6", 298.0, 420.0),
    PageSize("B4", 709.0, 1001.0),
    PageSize("B5", 499.0, 709.0),
    PageSize("LETTER", 612.0, 792.0),
    PageSize("LEGAL", 612.0, 1008.0),
    PageSize("TABLOID", 792.0, 1224.0),
    PageSize("EXECUTIVE", 522.0, 756.0),
    PageSize("POSTCARD", 288.0, 432.0),
    PageSize("INDEX_3X5", 216.0, 360.0),
)


@dataclass(frozen=True)
class DocumentFontInfo:
    document_font_name: str | None
    system_font_name: str | None = None

