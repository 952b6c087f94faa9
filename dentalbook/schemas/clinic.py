"""Clinic configuration schemas."""
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Dict, Optional

from dentalbook.utils.validators import validate_hours


class OpeningHours(BaseModel):
    open_hour: int = Field(..., ge=0, le=23)
    close_hour: int = Field(..., ge=0, le=23)

    @model_validator(mode="after")
    def _ordered(self):
        validate_hours(self.open_hour, self.close_hour)
        return self


class ClinicTimingRead(OpeningHours):
    day: str

    model_config = ConfigDict(from_attributes=True)


class ClinicOpenUpdate(BaseModel):
    is_open: bool


class ClinicStatus(BaseModel):
    is_open: bool
    opening_hours: Dict[str, OpeningHours] = {}
    updated_at: Optional[str] = None
