import logging
from datetime import datetime, date as date_type, time, timedelta, timezone
from typing import List, Dict, Any, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from dentalbook.core.constants import ServiceType
from dentalbook.models.appointment import Appointment
from dentalbook.services.clinic_service import ClinicService
from dentalbook.utils.errors import AppointmentNotFoundError, ClinicClosedError

logger = logging.getLogger(__name__)


def _to_utc_naive(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class AppointmentService:
    """
    Core business logic for:
    - Booking / cancelling appointments
    - Listing appointments (all, by service, by patient, upcoming, past)
    """

    # -------------------------------------------------------------------------
    # Booking / cancel
    # -------------------------------------------------------------------------
    @staticmethod
    def book_appointment(
        db: Session,
        patient_name: str,
        contact_info: str,
        date: datetime,
        service_type: ServiceType,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create an appointment.

        The store refuses bookings while the clinic is closed; it does not
        check whether the date is in the past.
        """
        if not ClinicService.is_open(db):
            raise ClinicClosedError()

        patient_name = (patient_name or "").strip()
        contact_info = (contact_info or "").strip()
        if not patient_name:
            raise ValueError("Patient name is required")
        if not contact_info:
            raise ValueError("Contact information is required")

        appointment = Appointment(
            patient_name=patient_name,
            contact_info=contact_info,
            date=_to_utc_naive(date),
            service_type=ServiceType(service_type).value,
            notes=notes,
        )

        db.add(appointment)
        db.commit()
        db.refresh(appointment)

        logger.info(
            f"Appointment {appointment.id} booked for {appointment.service_type} "
            f"on {appointment.date.isoformat()}"
        )

        return {
            "appointment_id": appointment.id,
            "status": "booked",
            "message": "Appointment booked successfully. We will contact you shortly to confirm.",
        }

    @staticmethod
    def cancel_appointment(db: Session, appointment_id: int) -> Dict[str, Any]:
        appt: Optional[Appointment] = (
            db.query(Appointment).filter(Appointment.id == appointment_id).first()
        )
        if not appt:
            raise AppointmentNotFoundError()

        db.delete(appt)
        db.commit()
        logger.info(f"Appointment {appointment_id} cancelled")

        return {
            "appointment_id": appointment_id,
            "status": "cancelled",
            "message": "Appointment cancelled.",
        }

    # -------------------------------------------------------------------------
    # Listing helpers
    # -------------------------------------------------------------------------
    @staticmethod
    def list_appointments(
        db: Session,
        name: Optional[str] = None,
        service_type: Optional[ServiceType] = None,
        start_date: Optional[date_type] = None,
        end_date: Optional[date_type] = None,
        order: str = "desc",
        skip: int = 0,
        limit: int = 100,
    ) -> List[Appointment]:
        q = db.query(Appointment)

        if name and name.strip():
            q = q.filter(func.lower(Appointment.patient_name).contains(name.strip().lower()))
        if service_type:
            q = q.filter(Appointment.service_type == ServiceType(service_type).value)

        # Date range is inclusive of whole calendar days.
        if start_date:
            q = q.filter(Appointment.date >= datetime.combine(start_date, time.min))
        if end_date:
            q = q.filter(Appointment.date < datetime.combine(end_date + timedelta(days=1), time.min))

        if order == "asc":
            q = q.order_by(Appointment.date.asc(), Appointment.id.asc())
        else:
            q = q.order_by(Appointment.date.desc(), Appointment.id.desc())

        return q.offset(skip).limit(limit).all()

    @staticmethod
    def list_by_service(db: Session, service_type: ServiceType) -> List[Appointment]:
        return (
            db.query(Appointment)
            .filter(Appointment.service_type == ServiceType(service_type).value)
            .order_by(Appointment.date.asc())
            .all()
        )

    @staticmethod
    def list_by_patient(db: Session, patient_name: str) -> List[Appointment]:
        return (
            db.query(Appointment)
            .filter(func.lower(Appointment.patient_name) == patient_name.strip().lower())
            .order_by(Appointment.date.asc())
            .all()
        )

    @staticmethod
    def list_upcoming(db: Session, now: Optional[datetime] = None) -> List[Appointment]:
        now = _to_utc_naive(now) if now else _utcnow()
        return (
            db.query(Appointment)
            .filter(Appointment.date >= now)
            .order_by(Appointment.date.asc())
            .all()
        )

    @staticmethod
    def list_past(db: Session, now: Optional[datetime] = None) -> List[Appointment]:
        now = _to_utc_naive(now) if now else _utcnow()
        return (
            db.query(Appointment)
            .filter(Appointment.date < now)
            .order_by(Appointment.date.desc())
            .all()
        )
