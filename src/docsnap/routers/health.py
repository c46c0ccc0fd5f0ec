from __future__ import annotations

from fastapi import APIRouter

from docsnap.settings import get_settings

router = APIRouter()


@router.get("/health")
def health() -> dict[str, str | float]:
    settings = get_settings()
    return {
        "status": "ok",
        "build_version": settings.DOCSNAP_BUILD_VERSION or "dev",
        "environment": settings.DOCSNAP_ENV,
        "selection_tolerance": settings.DOCSNAP_SELECTION_TOLERANCE,
    }
