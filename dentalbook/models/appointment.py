from sqlalchemy import Column, Integer, String, DateTime, Text
from datetime import datetime, timezone
from dentalbook.core.database import Base


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    patient_name = Column(String(255), nullable=False, index=True)
    contact_info = Column(String(255), nullable=False)

    # Naive UTC; converted on the way in by AppointmentService.
    date = Column(DateTime, nullable=False, index=True)

    service_type = Column(String(64), nullable=False, index=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=_utcnow, index=True)

    def __repr__(self):
        return f"<Appointment {self.id} {self.service_type} @ {self.date}>"
