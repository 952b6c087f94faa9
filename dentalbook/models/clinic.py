"""Clinic operating state and weekly opening hours."""
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, Boolean, DateTime, CheckConstraint
from dentalbook.core.database import Base


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class ClinicSettings(Base):
    """Single-row table holding the open/closed flag."""

    __tablename__ = "clinic_settings"

    id = Column(Integer, primary_key=True, index=True)
    is_open = Column(Boolean, nullable=False, default=True)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)


class ClinicTiming(Base):
    __tablename__ = "clinic_timings"
    __table_args__ = (
        CheckConstraint("open_hour >= 0 AND open_hour <= 23", name="ck_clinic_timings_open_hour"),
        CheckConstraint("close_hour >= 0 AND close_hour <= 23", name="ck_clinic_timings_close_hour"),
        CheckConstraint("open_hour < close_hour", name="ck_clinic_timings_order"),
    )

    id = Column(Integer, primary_key=True, index=True)
    day = Column(String(10), nullable=False, unique=True, index=True)  # e.g., Monday
    open_hour = Column(Integer, nullable=False)
    close_hour = Column(Integer, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)
