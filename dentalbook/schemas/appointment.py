from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from dentalbook.core.constants import SERVICE_LABELS, ServiceType
from dentalbook.utils.validators import require_text


class AppointmentCreateRequest(BaseModel):
    patient_name: str = Field(..., max_length=255)
    contact_info: str = Field(..., max_length=255)
    date: datetime
    service_type: ServiceType
    notes: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("patient_name")
    @classmethod
    def _patient_name(cls, value: str) -> str:
        return require_text(value, "patient_name")

    @field_validator("contact_info")
    @classmethod
    def _contact_info(cls, value: str) -> str:
        return require_text(value, "contact_info")


class AppointmentCreateResponse(BaseModel):
    appointment_id: int
    status: str = "booked"
    message: str


class AppointmentRead(BaseModel):
    id: int
    patient_name: str
    contact_info: str
    date: datetime
    service_type: ServiceType
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def service_label(self) -> str:
        return SERVICE_LABELS[self.service_type]


class AppointmentListResponse(BaseModel):
    items: List[AppointmentRead]
    total: int
