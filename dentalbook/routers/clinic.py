"""Clinic configuration endpoints: open/closed flag and opening hours."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from dentalbook.core.database import get_db
from dentalbook.dependencies.auth import get_current_admin
from dentalbook.schemas.clinic import ClinicOpenUpdate, ClinicStatus, ClinicTimingRead, OpeningHours
from dentalbook.services.clinic_service import ClinicService

router = APIRouter(prefix="/clinic", tags=["clinic"])


@router.get("/status", response_model=ClinicStatus)
async def get_status(db: Session = Depends(get_db)):
    return await ClinicService.get_status(db)


@router.get("/open", response_model=bool)
async def get_clinic_open(db: Session = Depends(get_db)):
    return ClinicService.is_open(db)


@router.put("/open", response_model=bool)
async def set_clinic_open(
    payload: ClinicOpenUpdate,
    current_admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return await ClinicService.set_open(db, payload.is_open)


@router.get("/hours/{day}", response_model=ClinicTimingRead)
async def get_opening_hours(day: str, db: Session = Depends(get_db)):
    try:
        return ClinicService.get_opening_hours(db, day)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/hours/{day}", response_model=ClinicTimingRead)
async def set_opening_hours(
    day: str,
    payload: OpeningHours,
    current_admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    try:
        return await ClinicService.set_opening_hours(db, day, payload.open_hour, payload.close_hour)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/hours/{day}", status_code=status.HTTP_204_NO_CONTENT)
async def clear_opening_hours(
    day: str,
    current_admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    try:
        await ClinicService.clear_opening_hours(db, day)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
