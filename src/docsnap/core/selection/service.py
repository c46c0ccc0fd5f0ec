from __future__ import annotations

import logging
import re
from typing import Callable, Collection, Iterable, Iterator, TypeVar

from docsnap.core.errors import HeterogeneousElementsError
from docsnap.core.model.geometry import Position
from docsnap.core.model.refs import FormFieldRef, ObjectRef, TextObjectRef
from docsnap.core.model.snapshot import DocumentSnapshot, PageSnapshot, TypedDocumentSnapshot, TypedPageSnapshot
from docsnap.core.model.types import FORM_FIELD_TYPES, FormType, ObjectType


logger = logging.getLogger("docsnap")

RefT = TypeVar("RefT", bound=ObjectRef)
Snapshot = DocumentSnapshot | PageSnapshot

DEFAULT_TOLERANCE = 0.01


def _pages(snapshot: Snapshot | None) -> Iterable[PageSnapshot | None]:
    if snapshot is None:
        return ()
    if isinstance(snapshot, PageSnapshot):
        return (snapshot,)
    return snapshot.pages or ()


def iter_elements(snapshot: Snapshot | None) -> Iterator[ObjectRef]:
    """Walk pages in snapshot order, then elements in draw order, skipping gaps."""
    for page in _pages(snapshot):
        if page is None or page.elements is None:
            continue
        for element in page.elements:
            if element is None or element.type is None:
                continue
            yield element


def contains_point(ref: ObjectRef, x: float, y: float, epsilon: float = DEFAULT_TOLERANCE) -> bool:
    position = ref.position
    if position is None or position.bounding_rect is None:
        return False
    return position.bounding_rect.contains(x, y, epsilon)


def starts_with_ignore_case(value: str | None, prefix: str | None) -> bool:
    if value is None or prefix is None:
        return False
    if len(prefix) > len(value):
        return False
    # Ordinal per-character folding, no normalization.
    return all(
        a == b or a.upper() == b.upper() or a.lower() == b.lower()
        for a, b in zip(value[: len(prefix)], prefix)
    )


def collect_all_elements(snapshot: Snapshot | None) -> list[ObjectRef]:
    return list(iter_elements(snapshot))


def collect_objects_by_type(snapshot: Snapshot | None, types: Collection[ObjectType]) -> list[ObjectRef]:
    return [element for element in iter_elements(snapshot) if element.type in types]


def get_typed_elements(page: TypedPageSnapshot[RefT], element_class: type[RefT]) -> list[RefT]:
    elements = page.elements
    if not elements:
        return []
    for element in elements:
        if not isinstance(element, element_class):
            raise HeterogeneousElementsError(
                f"Expected elements of type {element_class.__name__} but got {type(element).__name__}"
            )
    return list(elements)


def flatten_typed_document(snapshot: TypedDocumentSnapshot[RefT], element_class: type[RefT]) -> list[RefT]:
    results: list[RefT] = []
    for page in snapshot.pages:
        results.extend(get_typed_elements(page, element_class))
    return results


def adjust_form_field_type(ref: FormFieldRef | None, filter_name: str | FormType | None) -> FormFieldRef | None:
    """Re-tag a form-field ref with the sub-type it was fetched under.

    Only form sub-type names count; anything else leaves the ref untouched.
    """
    if ref is None:
        return None
    form_type = _lookup_form_type(filter_name)
    if form_type is None:
        return ref
    desired = ObjectType(form_type.value)
    if desired == ref.type:
        return ref
    return ref.with_type(desired)


def _lookup_form_type(filter_name: str | FormType | None) -> FormType | None:
    if isinstance(filter_name, FormType):
        return filter_name
    if not filter_name:
        return None
    return FormType.__members__.get(filter_name.strip().upper())


def _matches_types(element: ObjectRef, object_type: ObjectType | Collection[ObjectType]) -> bool:
    if isinstance(object_type, ObjectType):
        if object_type == ObjectType.FORM_FIELD:
            return element.type in FORM_FIELD_TYPES
        return element.type == object_type
    return element.type in object_type


def _ref_text(element: ObjectRef) -> str | None:
    if isinstance(element, TextObjectRef):
        return element.effective_text
    return None


def filter_elements(
    elements: Iterable[ObjectRef | None],
    object_type: ObjectType | Collection[ObjectType],
    position: Position | None = None,
    tolerance: float = DEFAULT_TOLERANCE,
) -> list[ObjectRef]:
    """Client-side narrowing of snapshot elements by type and position criteria."""
    result = [element for element in elements if element is not None and _matches_types(element, object_type)]
    if position is None:
        return result

    if position.text_starts_with:
        result = [e for e in result if starts_with_ignore_case(_ref_text(e), position.text_starts_with)]

    if position.text_pattern:
        pattern = re.compile(position.text_pattern)
        result = [e for e in result if (text := _ref_text(e)) and pattern.search(text)]

    if position.bounding_rect is not None:
        rect = position.bounding_rect
        result = [
            e
            for e in result
            if e.position is not None
            and e.position.bounding_rect is not None
            and e.position.bounding_rect.intersects(rect, tolerance)
        ]

    if position.name:
        result = [e for e in result if isinstance(e, FormFieldRef) and e.name == position.name]

    return result


class SelectionService:
    """Stateless queries over snapshots; safe to share between threads."""

    def __init__(self, tolerance: float = DEFAULT_TOLERANCE) -> None:
        self.tolerance = tolerance

    def contains_point(self, ref: ObjectRef, x: float, y: float, epsilon: float | None = None) -> bool:
        return contains_point(ref, x, y, self.tolerance if epsilon is None else epsilon)

    def starts_with_ignore_case(self, value: str | None, prefix: str | None) -> bool:
        return starts_with_ignore_case(value, prefix)

    def collect_all_elements(self, snapshot: DocumentSnapshot | None) -> list[ObjectRef]:
        return collect_all_elements(snapshot)

    def collect_objects_by_type(self, snapshot: Snapshot | None, types: Collection[ObjectType]) -> list[ObjectRef]:
        return collect_objects_by_type(snapshot, types)

    def get_typed_elements(self, page: TypedPageSnapshot[RefT], element_class: type[RefT]) -> list[RefT]:
        return get_typed_elements(page, element_class)

    def flatten_typed_document(self, snapshot: TypedDocumentSnapshot[RefT], element_class: type[RefT]) -> list[RefT]:
        return flatten_typed_document(snapshot, element_class)

    def adjust_form_field_type(self, ref: FormFieldRef | None, filter_name: str | FormType | None) -> FormFieldRef | None:
        return adjust_form_field_type(ref, filter_name)

    def select(
        self,
        snapshot: Snapshot | None,
        object_type: ObjectType | Collection[ObjectType],
        position: Position | None = None,
        tolerance: float | None = None,
    ) -> list[ObjectRef]:
        elements = iter_elements(snapshot)
        return filter_elements(elements, object_type, position, self.tolerance if tolerance is None else tolerance)

    def select_at(
        self,
        snapshot: Snapshot | None,
        types: Collection[ObjectType],
        x: float,
        y: float,
        epsilon: float | None = None,
    ) -> list[ObjectRef]:
        return [
            element
            for element in collect_objects_by_type(snapshot, types)
            if self.contains_point(element, x, y, epsilon)
        ]

    def first_text_starting_with(
        self,
        snapshot: Snapshot | None,
        types: Collection[ObjectType],
        prefix: str,
    ) -> TextObjectRef | None:
        for element in collect_objects_by_type(snapshot, types):
            if isinstance(element, TextObjectRef) and starts_with_ignore_case(element.effective_text, prefix):
                return element
        return None

    def collect_form_field_refs(
        self,
        fetch: Callable[[str], TypedDocumentSnapshot[FormFieldRef]],
    ) -> list[FormFieldRef]:
        """Fetch one typed snapshot per form sub-type and re-tag every field with it."""
        results: list[FormFieldRef] = []
        for form_type in FormType:
            snapshot = fetch(form_type.value)
            for ref in flatten_typed_document(snapshot, FormFieldRef):
                adjusted = adjust_form_field_type(ref, form_type)
                if adjusted is not None:
                    results.append(adjusted)
        logger.debug("collected form fields count=%s", len(results))
        return results

    def collect_form_field_refs_from_page(
        self,
        fetch: Callable[[str], TypedPageSnapshot[FormFieldRef]],
    ) -> list[FormFieldRef]:
        results: list[FormFieldRef] = []
        for form_type in FormType:
            snapshot = fetch(form_type.value)
            for ref in get_typed_elements(snapshot, FormFieldRef):
                adjusted = adjust_form_field_type(ref, form_type)
                if adjusted is not None:
                    results.append(adjusted)
        return results
