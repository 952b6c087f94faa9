"""Liveness and readiness checks.

The booking client calls `/health/ready` before it considers the store
connection usable.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dentalbook.core.config import settings
from dentalbook.core.database import get_db
from dentalbook.utils.errors import BackendNotReadyError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health():
    return {"status": "ok", "service": settings.APP_NAME}


@router.head("")
async def health_head():
    return None


@router.get("/ready")
async def ready(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning(f"Readiness check failed: {e}")
        raise BackendNotReadyError("Backend not ready: database is still initializing")
    return {"status": "ready"}
