"""Service layer package."""

__all__ = [
    "appointment_service",
    "clinic_service",
    "user_service",
]
