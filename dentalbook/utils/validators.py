"""Input checks shared by request schemas and the booking form."""
import re

PHONE_PATTERN = re.compile(r"^[0-9+\-\s()]+$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def is_valid_contact(value: str) -> bool:
    """True when the value looks like a phone number or an e-mail address."""
    value = (value or "").strip()
    if not value:
        return False
    return bool(PHONE_PATTERN.match(value) or EMAIL_PATTERN.match(value))


def require_text(value: str, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError(f"{field} must not be empty")
    return value


def validate_hours(open_hour: int, close_hour: int) -> None:
    for label, hour in (("open_hour", open_hour), ("close_hour", close_hour)):
        if not 0 <= hour <= 23:
            raise ValueError(f"{label} must be between 0 and 23")
    if open_hour >= close_hour:
        raise ValueError("open_hour must be earlier than close_hour")
