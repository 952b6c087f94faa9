"""Custom error definitions for API exceptions."""
from fastapi import HTTPException
from starlette import status


class Unauthorized(HTTPException):
    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class Forbidden(HTTPException):
    def __init__(self, detail: str = "Admin access required"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class AppointmentNotFoundError(HTTPException):
    def __init__(self, detail: str = "Appointment not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class OpeningHoursNotFoundError(HTTPException):
    def __init__(self, detail: str = "No opening hours configured for this day"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ClinicClosedError(HTTPException):
    def __init__(self, detail: str = "Clinic is closed and not accepting bookings"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class BackendNotReadyError(HTTPException):
    def __init__(self, detail: str = "Backend not ready"):
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)
