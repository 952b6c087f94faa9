"""Global error handlers for the application.

Every error body carries a `kind` so clients can decide whether a retry
makes sense: `transient`, `unauthorized` or `permanent`.
"""
import logging

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

logger = logging.getLogger(__name__)


def error_kind(status_code: int) -> str:
    if status_code in (502, 503, 504):
        return "transient"
    if status_code in (401, 403):
        return "unauthorized"
    return "permanent"


async def http_exception_handler(request: Request, exc):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "kind": error_kind(exc.status_code)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_encoder(exc.errors()), "kind": "permanent"},
    )


async def database_unavailable_handler(request: Request, exc: OperationalError):
    logger.error(f"Database unavailable during {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": "Database connection not ready", "kind": "transient"},
    )
