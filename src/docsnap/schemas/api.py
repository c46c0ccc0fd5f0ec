from __future__ import annotations

import re
from typing import Any

from pydantic import Field, field_validator, model_validator

from docsnap.core.model.types import FormType, ObjectType
from docsnap.schemas.objects import ParagraphWire, PathWire
from docsnap.schemas.wire import (
    BoundingRectWire,
    ColorWire,
    DocumentSnapshotWire,
    ElementWire,
    FontWire,
    FormFieldRefWire,
    PageSnapshotWire,
    PointWire,
    PositionWire,
    WireModel,
)


class LayoutRequest(WireModel):
    text: str | None = None
    position: PositionWire | None = None
    font: FontWire | None = None
    line_spacing: float | None = Field(None, gt=0)
    color: ColorWire | None = None


class LayoutResponse(WireModel):
    paragraph: ParagraphWire
    line_count: int
    baseline_distance: float


class DescribePathRequest(WireModel):
    path: PathWire


class DescribePathResponse(WireModel):
    position: PositionWire
    bounds: BoundingRectWire
    segment_count: int


class SelectRequest(WireModel):
    document: DocumentSnapshotWire | None = None
    page: PageSnapshotWire | None = None
    types: list[ObjectType] = Field(..., min_length=1)
    position: PositionWire | None = None
    at: PointWire | None = None
    tolerance: float | None = Field(None, ge=0)

    @field_validator("types", mode="before")
    @classmethod
    def normalize_types(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [item.strip().upper() if isinstance(item, str) else item for item in value]
        return value

    @model_validator(mode="after")
    def validate_choice(self) -> "SelectRequest":
        if (self.document is None) == (self.page is None):
            raise ValueError("Provide exactly one of document or page")
        pattern = self.position.text_pattern if self.position is not None else None
        if pattern:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ValueError(f"Invalid textPattern: {exc}") from exc
        return self


class SelectResponse(WireModel):
    count: int
    elements: list[ElementWire] = Field(default_factory=list)


class HitTestRequest(WireModel):
    page: PageSnapshotWire
    point: PointWire | None = None
    rect: BoundingRectWire | None = None
    tolerance: float | None = Field(None, ge=0)

    @model_validator(mode="after")
    def validate_choice(self) -> "HitTestRequest":
        if (self.point is None) == (self.rect is None):
            raise ValueError("Provide exactly one of point or rect")
        return self


class HitTestCandidateWire(WireModel):
    internal_id: str | None = None
    type: ObjectType | None = None
    score: float
    draw_index: int


class HitTestResponse(WireModel):
    page_index: int | None = None
    candidates: list[HitTestCandidateWire] = Field(default_factory=list)


class ReconcileRequest(WireModel):
    fields: list[FormFieldRefWire | None] = Field(default_factory=list)
    filter: str | None = None


class ReconcileResponse(WireModel):
    filter: FormType | None = None
    fields: list[FormFieldRefWire] = Field(default_factory=list)
