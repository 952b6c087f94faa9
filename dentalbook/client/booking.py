"""Booking submission flow used by the public appointment form.

One `BookingSubmissionFlow` backs one form. A submission walks through

    IDLE -> VALIDATING -> SUBMITTING -> SUCCEEDED -> (after a pause) IDLE
                 |              |
                 v              v
              REJECTED        FAILED  -> IDLE

Rejections never reach the store. Only the create call goes through the
retry wrapper; everything the user sees is pushed through `notify`.
"""
import asyncio
import logging
from datetime import date as date_type, datetime, time, timezone
from enum import Enum
from typing import Awaitable, Callable, Literal, Optional, Union

from pydantic import BaseModel

from dentalbook.client.api import ConnectionState
from dentalbook.client.retry import backoff_delay, with_retry
from dentalbook.core.config import settings
from dentalbook.core.constants import ServiceType, resolve_service
from dentalbook.utils.validators import is_valid_contact

logger = logging.getLogger(__name__)


class BookingState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    REJECTED = "rejected"


class RejectionReason(str, Enum):
    BUSY = "busy"
    MISSING_NAME = "missing_name"
    INVALID_CONTACT = "invalid_contact"
    MISSING_DATE = "missing_date"
    PAST_DATE = "past_date"
    MISSING_SERVICE = "missing_service"
    UNKNOWN_SERVICE = "unknown_service"
    OFFLINE = "offline"
    CLINIC_CLOSED = "clinic_closed"
    CLINIC_STATUS_UNAVAILABLE = "clinic_status_unavailable"
    STORE_INITIALIZING = "store_initializing"
    STORE_NOT_READY = "store_not_ready"


class FailureCategory(str, Enum):
    TIMEOUT = "timeout"
    SYSTEM_INITIALIZING = "system_initializing"
    NETWORK = "network"
    NOT_READY = "not_ready"
    GENERIC = "generic"


class BookingForm(BaseModel):
    patient_name: str = ""
    contact_info: str = ""
    date: Optional[Union[datetime, date_type]] = None
    service: Optional[Union[ServiceType, str]] = None
    notes: Optional[str] = None


class Notification(BaseModel):
    level: Literal["info", "success", "error"]
    title: str
    description: str = ""


class BookingOutcome(BaseModel):
    state: BookingState
    title: str
    description: str = ""
    reason: Optional[RejectionReason] = None
    category: Optional[FailureCategory] = None
    appointment_id: Optional[int] = None
    attempts: int = 0


# (title, description) shown for each rejection.
REJECTION_MESSAGES = {
    RejectionReason.BUSY: ("Booking already in progress", "Please wait for the current request to finish."),
    RejectionReason.MISSING_NAME: ("Name is required", "Please enter your full name."),
    RejectionReason.INVALID_CONTACT: (
        "Please enter a valid phone number",
        "Enter a phone number or e-mail address we can reach you at.",
    ),
    RejectionReason.MISSING_DATE: ("Please select a date", ""),
    RejectionReason.PAST_DATE: ("Please select a future date", "Appointments cannot be booked in the past."),
    RejectionReason.MISSING_SERVICE: ("Please select a service", ""),
    RejectionReason.UNKNOWN_SERVICE: ("Unknown service", "Please choose one of the listed services."),
    RejectionReason.OFFLINE: ("You are offline", "Please check your internet connection and try again."),
    RejectionReason.CLINIC_CLOSED: (
        "The clinic is currently closed",
        "We are not accepting new bookings right now. Please try again later.",
    ),
    RejectionReason.CLINIC_STATUS_UNAVAILABLE: (
        "Unable to check clinic status",
        "Please wait a moment and try again.",
    ),
    RejectionReason.STORE_INITIALIZING: ("System is still initializing", "Please wait a moment and try again."),
    RejectionReason.STORE_NOT_READY: (
        "Backend connection not ready",
        "Please wait a moment for the system to initialize and try again.",
    ),
}

FAILURE_MESSAGES = {
    FailureCategory.TIMEOUT: (
        "Request timed out",
        "The booking system took too long to respond. Please try again.",
    ),
    FailureCategory.SYSTEM_INITIALIZING: (
        "System is still initializing",
        "The booking system is starting up. Please wait a moment and try again.",
    ),
    FailureCategory.NETWORK: ("Connection error", "Please check your internet connection and try again."),
    FailureCategory.NOT_READY: (
        "Backend not ready",
        "Please wait a moment for the system to initialize and try again.",
    ),
}


def classify_failure(error: BaseException) -> FailureCategory:
    message = str(error).lower()
    if "timeout" in message or "timed out" in message:
        return FailureCategory.TIMEOUT
    if "installing" in message or "initializing" in message:
        return FailureCategory.SYSTEM_INITIALIZING
    if "network" in message or "connection" in message:
        return FailureCategory.NETWORK
    if "not ready" in message or "not available" in message:
        return FailureCategory.NOT_READY
    return FailureCategory.GENERIC


def _as_utc_datetime(value: Union[datetime, date_type]) -> datetime:
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _Rejected(Exception):
    def __init__(self, reason: RejectionReason):
        super().__init__(reason.value)
        self.reason = reason


class BookingSubmissionFlow:
    """
    Validates a booking form and submits it to the appointment store.

    Args:
        store: object with `create_appointment(...)` and, optionally,
               `connection_state` (e.g. ClinicClient)
        config_store: object with `get_clinic_open()`; defaults to `store`
        network: object with an `is_online` flag (e.g. NetworkMonitor);
                 None means always online
        notify: receives every Notification the user should see
        sleep: coroutine used for backoff and the success pause
        now: returns the current time (tz-aware)
    """

    def __init__(
        self,
        store,
        config_store=None,
        network=None,
        max_retries: Optional[int] = None,
        attempt_timeout: Optional[float] = None,
        success_display_seconds: Optional[float] = None,
        notify: Optional[Callable[[Notification], None]] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        now: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.config_store = config_store or store
        self.network = network
        self.max_retries = max_retries if max_retries is not None else settings.BOOKING_MAX_RETRIES
        self.attempt_timeout = (
            attempt_timeout if attempt_timeout is not None else settings.BOOKING_ATTEMPT_TIMEOUT_SECONDS
        )
        self.success_display_seconds = (
            success_display_seconds
            if success_display_seconds is not None
            else settings.BOOKING_SUCCESS_DISPLAY_SECONDS
        )
        self.notify = notify
        self._sleep = sleep
        self._now = now

        self.state = BookingState.IDLE
        self.form = BookingForm()
        self.retry_attempt = 0
        self.last_outcome: Optional[BookingOutcome] = None
        self._reset_task: Optional[asyncio.Task] = None

    @property
    def store_state(self) -> ConnectionState:
        return getattr(self.store, "connection_state", ConnectionState.READY)

    @property
    def can_submit(self) -> bool:
        """False while a submission is in flight or the store is not ready (submit button disabled)."""
        return self.state == BookingState.IDLE and self.store_state == ConnectionState.READY

    def _emit(self, level: str, title: str, description: str = "") -> None:
        if self.notify is not None:
            self.notify(Notification(level=level, title=title, description=description))

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    async def _validate(self, form: BookingForm) -> ServiceType:
        if not form.patient_name.strip():
            raise _Rejected(RejectionReason.MISSING_NAME)
        if not is_valid_contact(form.contact_info):
            raise _Rejected(RejectionReason.INVALID_CONTACT)

        if form.date is None:
            raise _Rejected(RejectionReason.MISSING_DATE)
        if _as_utc_datetime(form.date).date() < self._now().date():
            raise _Rejected(RejectionReason.PAST_DATE)

        if not form.service:
            raise _Rejected(RejectionReason.MISSING_SERVICE)
        try:
            service = resolve_service(form.service)
        except ValueError:
            raise _Rejected(RejectionReason.UNKNOWN_SERVICE) from None

        if self.network is not None and not self.network.is_online:
            raise _Rejected(RejectionReason.OFFLINE)

        try:
            is_open = await self.config_store.get_clinic_open()
        except Exception as e:
            logger.warning(f"Could not read clinic status: {e!r}")
            raise _Rejected(RejectionReason.CLINIC_STATUS_UNAVAILABLE) from e
        if not is_open:
            raise _Rejected(RejectionReason.CLINIC_CLOSED)

        if self.store_state == ConnectionState.INITIALIZING:
            raise _Rejected(RejectionReason.STORE_INITIALIZING)
        if self.store_state != ConnectionState.READY:
            raise _Rejected(RejectionReason.STORE_NOT_READY)

        return service

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------
    async def submit(self, form: Optional[BookingForm] = None) -> BookingOutcome:
        if self.state != BookingState.IDLE:
            title, description = REJECTION_MESSAGES[RejectionReason.BUSY]
            self._emit("error", title, description)
            return BookingOutcome(
                state=BookingState.REJECTED, title=title, description=description, reason=RejectionReason.BUSY
            )

        if form is not None:
            self.form = form
        form = self.form

        self.state = BookingState.VALIDATING
        try:
            return await self._run(form)
        finally:
            if self.state in (BookingState.VALIDATING, BookingState.SUBMITTING):
                # Cancelled or crashed mid-submission; the form stays editable.
                logger.warning(f"Booking submission interrupted while {self.state.value}")
                self.state = BookingState.IDLE
                self.retry_attempt = 0

    async def _run(self, form: BookingForm) -> BookingOutcome:
        try:
            service = await self._validate(form)
        except _Rejected as rejection:
            return self._finish_rejected(rejection.reason)

        self.state = BookingState.SUBMITTING
        self.retry_attempt = 0
        attempts = 0
        when = _as_utc_datetime(form.date)

        logger.info(f"Submitting appointment booking for {service.value} on {when.date().isoformat()}")

        async def create():
            nonlocal attempts
            attempts += 1
            return await self.store.create_appointment(
                patient_name=form.patient_name.strip(),
                contact_info=form.contact_info.strip(),
                date=when,
                service_type=service,
                notes=form.notes,
            )

        try:
            appointment_id = await with_retry(
                create,
                max_retries=self.max_retries,
                timeout=self.attempt_timeout,
                on_retry=self._on_retry,
                sleep=self._sleep,
            )
        except Exception as error:
            return self._finish_failed(error, attempts)

        return self._finish_succeeded(appointment_id, attempts)

    def _on_retry(self, attempt: int, error: BaseException) -> None:
        self.retry_attempt = attempt
        logger.info(f"Retry attempt {attempt} after error: {error}")
        self._emit(
            "info",
            f"Retrying... (Attempt {attempt} of {self.max_retries})",
            f"Waiting {backoff_delay(attempt)} seconds before the next attempt.",
        )

    def _finish_rejected(self, reason: RejectionReason) -> BookingOutcome:
        title, description = REJECTION_MESSAGES[reason]
        logger.info(f"Booking rejected before submission: {reason.value}")
        self._emit("error", title, description)
        self.state = BookingState.IDLE
        self.last_outcome = BookingOutcome(
            state=BookingState.REJECTED, title=title, description=description, reason=reason
        )
        return self.last_outcome

    def _finish_failed(self, error: BaseException, attempts: int) -> BookingOutcome:
        category = classify_failure(error)
        if category == FailureCategory.GENERIC:
            title, description = "Failed to book appointment", str(error) or "Unknown error occurred"
        else:
            title, description = FAILURE_MESSAGES[category]

        logger.error(f"Booking failed after {attempts} attempt(s): {error!r}")
        self._emit("error", title, description)

        self.retry_attempt = 0
        self.state = BookingState.IDLE
        self.last_outcome = BookingOutcome(
            state=BookingState.FAILED,
            title=title,
            description=description,
            category=category,
            attempts=attempts,
        )
        return self.last_outcome

    def _finish_succeeded(self, appointment_id, attempts: int) -> BookingOutcome:
        title = "Appointment booked successfully!"
        description = "We will contact you shortly to confirm your appointment."
        logger.info(f"Booking successful (appointment {appointment_id}, {attempts} attempt(s))")

        self.retry_attempt = 0
        self.form = BookingForm()
        self.state = BookingState.SUCCEEDED
        self._emit("success", title, description)
        self._reset_task = asyncio.create_task(self._return_to_idle())

        self.last_outcome = BookingOutcome(
            state=BookingState.SUCCEEDED,
            title=title,
            description=description,
            appointment_id=appointment_id,
            attempts=attempts,
        )
        return self.last_outcome

    async def _return_to_idle(self) -> None:
        await self._sleep(self.success_display_seconds)
        if self.state == BookingState.SUCCEEDED:
            self.state = BookingState.IDLE

    async def wait_until_idle(self) -> None:
        """Wait for the confirmation pause after a success to end."""
        if self._reset_task is not None:
            await self._reset_task
            self._reset_task = None
