from __future__ import annotations

from fastapi import APIRouter

from docsnap.core.errors import InvariantViolation, invariant_to_api_error
from docsnap.core.layout.measurement import baseline_distance
from docsnap.core.layout.paragraph import layout_paragraph
from docsnap.schemas.api import DescribePathRequest, DescribePathResponse, LayoutRequest, LayoutResponse
from docsnap.schemas.objects import paragraph_to_wire
from docsnap.schemas.wire import BoundingRectWire, PositionWire
from docsnap.settings import get_settings

router = APIRouter(prefix="/v1", tags=["layout"])


@router.post("/layout/paragraph", response_model=LayoutResponse, response_model_exclude_none=True)
def layout(payload: LayoutRequest) -> LayoutResponse:
    settings = get_settings()
    spacing = payload.line_spacing if payload.line_spacing is not None else settings.DOCSNAP_DEFAULT_LINE_SPACING
    font = payload.font.to_domain() if payload.font is not None else None
    paragraph = layout_paragraph(
        payload.text,
        payload.position.to_domain() if payload.position is not None else None,
        font,
        spacing,
        payload.color.to_domain() if payload.color is not None else None,
    )
    paragraph.validate()
    return LayoutResponse(
        paragraph=paragraph_to_wire(paragraph),
        line_count=len(paragraph.lines),
        baseline_distance=baseline_distance(font, spacing),
    )


@router.post("/paths/describe", response_model=DescribePathResponse, response_model_exclude_none=True)
def describe_path(payload: DescribePathRequest) -> DescribePathResponse:
    path = payload.path.to_domain()
    try:
        position = path.position
        bounds = path.bounds()
    except InvariantViolation as exc:
        raise invariant_to_api_error(exc) from exc
    return DescribePathResponse(
        position=PositionWire.from_domain(position),
        bounds=BoundingRectWire.from_domain(bounds),
        segment_count=len(path.segments),
    )
