"""Caller profile and role endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dentalbook.core.database import get_db
from dentalbook.dependencies.auth import get_current_user
from dentalbook.schemas.user import RoleRead, UserProfileRead, UserProfileUpdate
from dentalbook.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me/profile", response_model=Optional[UserProfileRead])
async def get_profile(current_user = Depends(get_current_user), db: Session = Depends(get_db)):
    return UserService.get_profile(db, current_user["sub"])


@router.put("/me/profile", response_model=UserProfileRead)
async def save_profile(
    payload: UserProfileUpdate,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return UserService.save_profile(db, current_user["sub"], payload.name)


@router.get("/me/role", response_model=RoleRead)
async def get_role(current_user = Depends(get_current_user), db: Session = Depends(get_db)):
    principal = current_user["sub"]
    return RoleRead(principal=principal, role=UserService.get_role(db, principal))
