# dentalbook/routers/appointments.py
from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from dentalbook.core.constants import ServiceType
from dentalbook.core.database import get_db
from dentalbook.dependencies.auth import get_current_admin
from dentalbook.dependencies.rate_limit import rate_limit
from dentalbook.schemas.common import ErrorResponse, SuccessResponse
from dentalbook.schemas.appointment import (
    AppointmentCreateRequest,
    AppointmentCreateResponse,
    AppointmentListResponse,
    AppointmentRead,
)
from dentalbook.services.appointment_service import AppointmentService
from dentalbook.utils.helpers import format_response

router = APIRouter(prefix="/appointments", tags=["appointments"])


def _as_list(appts) -> AppointmentListResponse:
    return AppointmentListResponse(
        items=[AppointmentRead.model_validate(a) for a in appts],
        total=len(appts),
    )


@router.post(
    "",
    response_model=AppointmentCreateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
)
async def create_appointment(
    payload: AppointmentCreateRequest,
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit),
):
    """
    Book an appointment. Open to anonymous visitors of the public site.
    Refused with 409 while the clinic is closed.
    """
    try:
        result = AppointmentService.book_appointment(
            db=db,
            patient_name=payload.patient_name,
            contact_info=payload.contact_info,
            date=payload.date,
            service_type=payload.service_type,
            notes=payload.notes,
        )
        return AppointmentCreateResponse(**result)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete(
    "/{appointment_id}",
    response_model=SuccessResponse,
    responses={404: {"model": ErrorResponse}},
)
async def cancel_appointment(
    appointment_id: int,
    current_admin=Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    result = AppointmentService.cancel_appointment(db=db, appointment_id=appointment_id)
    return format_response(result)


@router.get("", response_model=AppointmentListResponse)
async def list_appointments(
    current_admin=Depends(get_current_admin),
    db: Session = Depends(get_db),
    name: Optional[str] = Query(None, description="Case-insensitive patient name search"),
    service_type: Optional[ServiceType] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    order: Literal["asc", "desc"] = Query("desc"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    """
    All appointments for the admin console, with the dashboard's filters.
    """
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")

    appts = AppointmentService.list_appointments(
        db=db,
        name=name,
        service_type=service_type,
        start_date=start_date,
        end_date=end_date,
        order=order,
        skip=skip,
        limit=limit,
    )
    return _as_list(appts)


@router.get("/by-service/{service_type}", response_model=AppointmentListResponse)
async def list_by_service(
    service_type: ServiceType,
    current_admin=Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return _as_list(AppointmentService.list_by_service(db, service_type))


@router.get("/by-patient", response_model=AppointmentListResponse)
async def list_by_patient(
    name: str = Query(..., min_length=1),
    current_admin=Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return _as_list(AppointmentService.list_by_patient(db, name))


@router.get("/upcoming", response_model=AppointmentListResponse)
async def list_upcoming(
    current_admin=Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return _as_list(AppointmentService.list_upcoming(db))


@router.get("/past", response_model=AppointmentListResponse)
async def list_past(
    current_admin=Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return _as_list(AppointmentService.list_past(db))
