from __future__ import annotations

import logging
import traceback
from typing import Any
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from docsnap.core.errors import APIError
from docsnap.routers.health import router as health_router
from docsnap.routers.layout import router as layout_router
from docsnap.routers.selection import router as selection_router
from docsnap.settings import get_settings


logging.basicConfig(level=get_settings().LOG_LEVEL.upper())
logger = logging.getLogger("docsnap")


def _cors_origins() -> list[str]:
    settings = get_settings()
    if settings.WEB_ORIGIN:
        return [origin.strip() for origin in settings.WEB_ORIGIN.split(",") if origin.strip()]
    if settings.DOCSNAP_ENV.lower() == "production":
        return []
    return ["http://localhost:3000", "http://127.0.0.1:3000"]


def _request_id(request: Request) -> str:
    """Caller-supplied correlation id, or a fresh one."""
    return request.headers.get("x-request-id") or request.headers.get("x-correlation-id") or str(uuid4())


def _error_response(request_id: str, status_code: int, error: str, **body: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, **body, "request_id": request_id})


app = FastAPI(title="docsnap", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    request_id = _request_id(request)
    trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    logger.error("unhandled error path=%s request_id=%s\n%s", request.url.path, request_id, trace)
    return _error_response(request_id, 500, "internal_error", path=request.url.path)


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError):
    request_id = _request_id(request)
    logger.warning("api error path=%s code=%s request_id=%s", request.url.path, exc.code, request_id)
    return _error_response(request_id, exc.status_code, exc.code, message=exc.message, details=exc.details)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    request_id = _request_id(request)
    logger.info("invalid payload path=%s request_id=%s", request.url.path, request_id)
    return _error_response(
        request_id,
        422,
        "validation_error",
        message="Invalid request payload",
        details=jsonable_encoder(exc.errors()),
    )


@app.on_event("startup")
async def log_settings() -> None:
    settings = get_settings()
    logger.info(
        "docsnap ready env=%s tolerance=%s cell_size=%s",
        settings.DOCSNAP_ENV,
        settings.DOCSNAP_SELECTION_TOLERANCE,
        settings.DOCSNAP_INDEX_CELL_SIZE,
    )


for _router in (health_router, layout_router, selection_router):
    app.include_router(_router)
