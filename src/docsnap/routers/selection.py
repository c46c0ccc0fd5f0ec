from __future__ import annotations

from fastapi import APIRouter

from docsnap.core.model.refs import FormFieldRef
from docsnap.core.model.types import FormType
from docsnap.core.selection.service import SelectionService, adjust_form_field_type
from docsnap.core.selection.spatial_index import SpatialIndex
from docsnap.schemas.api import (
    HitTestCandidateWire,
    HitTestRequest,
    HitTestResponse,
    ReconcileRequest,
    ReconcileResponse,
    SelectRequest,
    SelectResponse,
)
from docsnap.schemas.wire import ref_to_wire
from docsnap.settings import get_settings

router = APIRouter(prefix="/v1", tags=["selection"])


@router.post("/select", response_model=SelectResponse, response_model_exclude_none=True)
def select(payload: SelectRequest) -> SelectResponse:
    settings = get_settings()
    tolerance = payload.tolerance if payload.tolerance is not None else settings.DOCSNAP_SELECTION_TOLERANCE
    service = SelectionService(tolerance)
    snapshot = payload.document.to_domain() if payload.document is not None else payload.page.to_domain()
    object_type = payload.types[0] if len(payload.types) == 1 else frozenset(payload.types)
    position = payload.position.to_domain() if payload.position is not None else None

    elements = service.select(snapshot, object_type, position)
    if payload.at is not None:
        elements = [element for element in elements if service.contains_point(element, payload.at.x, payload.at.y)]
    return SelectResponse(count=len(elements), elements=[ref_to_wire(element) for element in elements])


@router.post("/hittest", response_model=HitTestResponse, response_model_exclude_none=True)
def hit_test(payload: HitTestRequest) -> HitTestResponse:
    settings = get_settings()
    tolerance = payload.tolerance if payload.tolerance is not None else settings.DOCSNAP_SELECTION_TOLERANCE
    page = payload.page.to_domain()
    index = SpatialIndex.build(page, settings.DOCSNAP_INDEX_CELL_SIZE)
    if payload.point is not None:
        candidates = index.hit_test(payload.point.x, payload.point.y, tolerance)
    else:
        candidates = index.rect_test(payload.rect.to_domain(), tolerance)

    return HitTestResponse(
        page_index=page.page_ref.page_index if page.page_ref is not None else None,
        candidates=[
            HitTestCandidateWire(
                internal_id=candidate.ref.internal_id,
                type=candidate.ref.type,
                score=candidate.score,
                draw_index=candidate.draw_index,
            )
            for candidate in candidates
        ],
    )


@router.post("/form-fields/reconcile", response_model=ReconcileResponse, response_model_exclude_none=True)
def reconcile_form_fields(payload: ReconcileRequest) -> ReconcileResponse:
    adjusted: list[FormFieldRef] = []
    for field in payload.fields:
        if field is None:
            continue
        ref = adjust_form_field_type(field.to_domain(), payload.filter)
        if ref is not None:
            adjusted.append(ref)
    known = payload.filter.strip().upper() if payload.filter else None
    return ReconcileResponse(
        filter=FormType(known) if known in FormType.__members__ else None,
        fields=[ref_to_wire(ref) for ref in adjusted],
    )
