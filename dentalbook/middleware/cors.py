"""CORS setup for the public site and the admin console."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dentalbook.core.config import settings


def _origins() -> list[str]:
    raw = settings.BACKEND_CORS_ORIGINS or ""
    return [o.strip() for o in raw.split(",") if o.strip()]


def configure_cors(app: FastAPI) -> None:
    origins = _origins()
    if not origins:
        return
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
