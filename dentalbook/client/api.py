"""Typed async client for the Dentalbook backend.

Every store operation the site and the admin console use is exposed as a
coroutine returning pydantic models. Transport and HTTP failures are turned
into `StoreError` with a structured kind.
"""
import logging
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

import httpx

from dentalbook.client.errors import ErrorKind, StoreError
from dentalbook.core.config import settings
from dentalbook.core.constants import ServiceType, UserRole
from dentalbook.schemas.appointment import AppointmentListResponse, AppointmentRead
from dentalbook.schemas.clinic import ClinicStatus, ClinicTimingRead
from dentalbook.schemas.user import RoleRead, UserProfileRead

logger = logging.getLogger(__name__)


class ConnectionState(str, Enum):
    INITIALIZING = "initializing"
    READY = "ready"
    UNAVAILABLE = "unavailable"


def _error_from_response(response: httpx.Response) -> StoreError:
    detail: Any = None
    kind: Optional[ErrorKind] = None
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        detail = body.get("detail")
        kind = ErrorKind.from_value(body.get("kind"))

    if isinstance(detail, list):
        # FastAPI validation errors
        detail = "; ".join(str(item.get("msg", item)) for item in detail if isinstance(item, dict)) or None
    message = str(detail) if detail else f"Request failed with status {response.status_code}"

    if kind is None:
        if response.status_code in (502, 503, 504):
            kind = ErrorKind.TRANSIENT
        elif response.status_code in (401, 403):
            kind = ErrorKind.UNAUTHORIZED
        else:
            kind = ErrorKind.PERMANENT
    return StoreError(message, kind=kind, status_code=response.status_code)


class ClinicClient:
    """
    Client for the appointment store and the clinic configuration store.

    `connect()` must succeed before the booking flow will submit through this
    client; until then `connection_state` is INITIALIZING.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self.base_url = base_url or settings.BACKEND_URL
        self.connection_state = ConnectionState.INITIALIZING
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout if timeout is not None else settings.BOOKING_ATTEMPT_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def __aenter__(self) -> "ClinicClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    @property
    def is_ready(self) -> bool:
        return self.connection_state == ConnectionState.READY

    async def connect(self) -> bool:
        """Call the readiness endpoint and update `connection_state`."""
        try:
            await self._request("GET", "/health/ready")
        except StoreError as e:
            logger.warning(f"Backend connection not ready: {e}")
            self.connection_state = ConnectionState.UNAVAILABLE
            return False
        self.connection_state = ConnectionState.READY
        return True

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise StoreError(f"Request timeout calling {url}: {e}", kind=ErrorKind.TRANSIENT) from e
        except httpx.NetworkError as e:
            raise StoreError(f"Network connection error calling {url}: {e}", kind=ErrorKind.TRANSIENT) from e
        except httpx.TransportError as e:
            raise StoreError(f"Network error calling {url}: {e}", kind=ErrorKind.TRANSIENT) from e

        if response.is_error:
            error = _error_from_response(response)
            logger.debug(f"{method} {url} failed: {error.status_code} {error}")
            raise error
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise StoreError(
                f"Malformed response from {response.url.path}: {e}",
                kind=ErrorKind.PERMANENT,
                status_code=response.status_code,
            ) from e

    # ------------------------------------------------------------------
    # Appointment store
    # ------------------------------------------------------------------
    async def create_appointment(
        self,
        patient_name: str,
        contact_info: str,
        date: datetime,
        service_type: ServiceType,
        notes: Optional[str] = None,
    ) -> int:
        payload = {
            "patient_name": patient_name,
            "contact_info": contact_info,
            "date": date.isoformat(),
            "service_type": ServiceType(service_type).value,
            "notes": notes,
        }
        response = await self._request("POST", "/appointments", json=payload)
        return int(self._json(response)["appointment_id"])

    async def cancel_appointment(self, appointment_id: int) -> None:
        await self._request("DELETE", f"/appointments/{appointment_id}")

    async def list_appointments(
        self,
        name: Optional[str] = None,
        service_type: Optional[ServiceType] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        order: str = "desc",
    ) -> List[AppointmentRead]:
        params: Dict[str, Any] = {"order": order}
        if name:
            params["name"] = name
        if service_type:
            params["service_type"] = ServiceType(service_type).value
        if start_date:
            params["start_date"] = start_date.isoformat()
        if end_date:
            params["end_date"] = end_date.isoformat()
        response = await self._request("GET", "/appointments", params=params)
        return AppointmentListResponse.model_validate(self._json(response)).items

    async def list_appointments_by_service(self, service_type: ServiceType) -> List[AppointmentRead]:
        response = await self._request("GET", f"/appointments/by-service/{ServiceType(service_type).value}")
        return AppointmentListResponse.model_validate(self._json(response)).items

    async def list_appointments_by_patient(self, patient_name: str) -> List[AppointmentRead]:
        response = await self._request("GET", "/appointments/by-patient", params={"name": patient_name})
        return AppointmentListResponse.model_validate(self._json(response)).items

    async def list_upcoming_appointments(self) -> List[AppointmentRead]:
        response = await self._request("GET", "/appointments/upcoming")
        return AppointmentListResponse.model_validate(self._json(response)).items

    async def list_past_appointments(self) -> List[AppointmentRead]:
        response = await self._request("GET", "/appointments/past")
        return AppointmentListResponse.model_validate(self._json(response)).items

    # ------------------------------------------------------------------
    # Configuration store
    # ------------------------------------------------------------------
    async def get_clinic_open(self) -> bool:
        response = await self._request("GET", "/clinic/open")
        return bool(self._json(response))

    async def set_clinic_open(self, is_open: bool) -> bool:
        response = await self._request("PUT", "/clinic/open", json={"is_open": is_open})
        return bool(self._json(response))

    async def get_clinic_status(self) -> ClinicStatus:
        response = await self._request("GET", "/clinic/status")
        return ClinicStatus.model_validate(self._json(response))

    async def get_opening_hours(self, day: str) -> Optional[tuple[int, int]]:
        """(open_hour, close_hour) for the weekday, or None when not configured."""
        try:
            response = await self._request("GET", f"/clinic/hours/{day}")
        except StoreError as e:
            if e.status_code == 404:
                return None
            raise
        timing = ClinicTimingRead.model_validate(self._json(response))
        return timing.open_hour, timing.close_hour

    async def set_opening_hours(self, day: str, open_hour: int, close_hour: int) -> ClinicTimingRead:
        response = await self._request(
            "PUT",
            f"/clinic/hours/{day}",
            json={"open_hour": open_hour, "close_hour": close_hour},
        )
        return ClinicTimingRead.model_validate(self._json(response))

    async def clear_opening_hours(self, day: str) -> None:
        await self._request("DELETE", f"/clinic/hours/{day}")

    # ------------------------------------------------------------------
    # Profiles and roles
    # ------------------------------------------------------------------
    async def get_profile(self) -> Optional[UserProfileRead]:
        response = await self._request("GET", "/users/me/profile")
        body = self._json(response)
        return UserProfileRead.model_validate(body) if body else None

    async def save_profile(self, name: str) -> UserProfileRead:
        response = await self._request("PUT", "/users/me/profile", json={"name": name})
        return UserProfileRead.model_validate(self._json(response))

    async def get_role(self) -> UserRole:
        response = await self._request("GET", "/users/me/role")
        return RoleRead.model_validate(self._json(response)).role

    async def assign_role(self, principal: str, role: UserRole) -> RoleRead:
        response = await self._request("PUT", f"/admin/roles/{principal}", json={"role": UserRole(role).value})
        return RoleRead.model_validate(self._json(response))

    async def list_roles(self) -> List[RoleRead]:
        response = await self._request("GET", "/admin/roles")
        return [RoleRead.model_validate(item) for item in self._json(response)]
