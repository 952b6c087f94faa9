"""Admin endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from dentalbook.core.database import get_db
from dentalbook.dependencies.auth import get_current_admin
from dentalbook.dependencies.rate_limit import rate_limit
from dentalbook.schemas.user import RoleRead, RoleUpdate
from dentalbook.services.user_service import UserService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/roles", response_model=list[RoleRead])
async def list_roles(
    current_admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return UserService.list_roles(db)


@router.put("/roles/{principal}", response_model=RoleRead)
async def assign_role(
    principal: str,
    payload: RoleUpdate,
    current_admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit),
):
    try:
        return UserService.assign_role(db, current_admin["sub"], principal, payload.role)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
