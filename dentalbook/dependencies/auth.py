from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from dentalbook.core.database import get_db
from dentalbook.core.security import decode_token
from dentalbook.services.user_service import UserService
from dentalbook.utils.errors import Forbidden, Unauthorized

security = HTTPBearer(auto_error=False)


def get_current_user_from_token(token: str):
    """
    Verify JWT token string and return its payload.
    """
    payload = decode_token(token)

    if payload is None or not payload.get("sub"):
        raise Unauthorized("Invalid token")

    return payload


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
):
    """Verify JWT token and return current user"""
    if credentials is None:
        raise Unauthorized("Not authenticated")
    return get_current_user_from_token(credentials.credentials)


async def get_current_admin(
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Verify current user holds the admin role"""
    if not UserService.is_admin(db, current_user["sub"]):
        raise Forbidden("Admin access required")
    return current_user
