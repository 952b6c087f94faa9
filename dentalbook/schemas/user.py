"""User profile and role schemas."""
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

from dentalbook.core.constants import UserRole
from dentalbook.utils.validators import require_text


class UserProfileUpdate(BaseModel):
    name: str = Field(..., max_length=255)

    @field_validator("name")
    @classmethod
    def _name(cls, value: str) -> str:
        return require_text(value, "name")


class UserProfileRead(BaseModel):
    principal: str
    name: str
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class RoleUpdate(BaseModel):
    role: UserRole


class RoleRead(BaseModel):
    principal: str
    role: UserRole

    model_config = ConfigDict(from_attributes=True)
