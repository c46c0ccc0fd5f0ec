from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

from docsnap.core.model.geometry import DocumentFontInfo
from docsnap.core.model.refs import ObjectRef, PageRef


RefT = TypeVar("RefT", bound=ObjectRef)


@dataclass(frozen=True)
class PageSnapshot:
    """Elements of one page in draw order. Produced wholesale, never patched."""

    page_ref: PageRef | None
    elements: Sequence[ObjectRef | None] | None
    fonts: Sequence[DocumentFontInfo] = field(default_factory=tuple)


@dataclass(frozen=True)
class DocumentSnapshot:
    page_count: int
    pages: Sequence[PageSnapshot | None] | None
    fonts: Sequence[DocumentFontInfo] = field(default_factory=tuple)


@dataclass(frozen=True)
class TypedPageSnapshot(Generic[RefT]):
    page_ref: PageRef | None
    elements: Sequence[RefT] | None


@dataclass(frozen=True)
class TypedDocumentSnapshot(Generic[RefT]):
    page_count: int
    pages: Sequence[TypedPageSnapshot[RefT]]
    fonts: Sequence[DocumentFontInfo] = field(default_factory=tuple)
