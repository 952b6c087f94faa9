"""ORM models for appointments, clinic configuration and users."""

__all__ = [
    "base",
    "appointment",
    "clinic",
    "user",
]
