"""Errors raised by the booking client.

A `StoreError` carries a structured `kind` when the server supplied one (or
when the failure mode is unambiguous, e.g. a transport timeout). Errors that
come from elsewhere are classified by their message text instead.
"""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    TRANSIENT = "transient"
    PERMANENT = "permanent"
    UNAUTHORIZED = "unauthorized"

    @classmethod
    def from_value(cls, value) -> Optional["ErrorKind"]:
        try:
            return cls(value)
        except ValueError:
            return None


class StoreError(Exception):
    """A failed call to the appointment or configuration store."""

    def __init__(self, message: str, kind: Optional[ErrorKind] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code

    def __str__(self):
        return self.message


class OperationTimeoutError(StoreError):
    """An attempt did not finish within its per-attempt timeout."""

    def __init__(self, seconds: float):
        super().__init__(
            f"Operation timeout: no response within {seconds:g} seconds",
            kind=ErrorKind.TRANSIENT,
        )
        self.seconds = seconds
