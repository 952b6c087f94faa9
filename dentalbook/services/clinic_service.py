import json
import logging
from typing import Dict, Optional

from sqlalchemy.orm import Session

from dentalbook.cache.cache_service import redis_cache
from dentalbook.core.config import settings
from dentalbook.core.constants import Weekday
from dentalbook.models.clinic import ClinicSettings, ClinicTiming
from dentalbook.utils.errors import OpeningHoursNotFoundError
from dentalbook.utils.validators import validate_hours

logger = logging.getLogger(__name__)

STATUS_CACHE_KEY = "clinic:status"


class ClinicService:
    """
    Clinic operating state:
    - open/closed flag (single settings row, created on first access)
    - per-weekday opening hours
    - cached status snapshot for the public site
    """

    @staticmethod
    def _settings_row(db: Session) -> ClinicSettings:
        row = db.query(ClinicSettings).order_by(ClinicSettings.id.asc()).first()
        if not row:
            row = ClinicSettings(is_open=settings.DEFAULT_CLINIC_OPEN)
            db.add(row)
            db.commit()
            db.refresh(row)
        return row

    @staticmethod
    def is_open(db: Session) -> bool:
        return bool(ClinicService._settings_row(db).is_open)

    @staticmethod
    async def set_open(db: Session, is_open: bool) -> bool:
        row = ClinicService._settings_row(db)
        row.is_open = is_open
        db.commit()
        await redis_cache.delete_pattern(STATUS_CACHE_KEY)
        logger.info(f"Clinic marked as {'open' if is_open else 'closed'}")
        return row.is_open

    @staticmethod
    def get_opening_hours(db: Session, day: str) -> ClinicTiming:
        weekday = Weekday.parse(day)
        timing = db.query(ClinicTiming).filter(ClinicTiming.day == weekday.value).first()
        if not timing:
            raise OpeningHoursNotFoundError(f"No opening hours configured for {weekday.value}")
        return timing

    @staticmethod
    def list_opening_hours(db: Session) -> Dict[str, ClinicTiming]:
        order = [d.value for d in Weekday]
        timings = db.query(ClinicTiming).all()
        return {t.day: t for t in sorted(timings, key=lambda t: order.index(t.day))}

    @staticmethod
    async def set_opening_hours(db: Session, day: str, open_hour: int, close_hour: int) -> ClinicTiming:
        weekday = Weekday.parse(day)
        validate_hours(open_hour, close_hour)

        timing = db.query(ClinicTiming).filter(ClinicTiming.day == weekday.value).first()
        if not timing:
            timing = ClinicTiming(day=weekday.value, open_hour=open_hour, close_hour=close_hour)
            db.add(timing)
        else:
            timing.open_hour = open_hour
            timing.close_hour = close_hour
        db.commit()
        db.refresh(timing)

        await redis_cache.delete_pattern(STATUS_CACHE_KEY)
        return timing

    @staticmethod
    async def clear_opening_hours(db: Session, day: str) -> None:
        timing = ClinicService.get_opening_hours(db, day)
        db.delete(timing)
        db.commit()
        await redis_cache.delete_pattern(STATUS_CACHE_KEY)

    @staticmethod
    async def get_status(db: Session) -> Dict:
        """
        Snapshot of the open flag and weekly hours.

        Cached in Redis; every configuration write drops the cached copy.
        """
        cached: Optional[str] = await redis_cache.get(STATUS_CACHE_KEY)
        if cached:
            return json.loads(cached)

        row = ClinicService._settings_row(db)
        status = {
            "is_open": bool(row.is_open),
            "opening_hours": {
                day: {"open_hour": t.open_hour, "close_hour": t.close_hour}
                for day, t in ClinicService.list_opening_hours(db).items()
            },
            "updated_at": row.updated_at.isoformat() if row.updated_at else None,
        }

        await redis_cache.set(STATUS_CACHE_KEY, json.dumps(status), ttl=settings.CACHE_TTL_SECONDS)
        return status
