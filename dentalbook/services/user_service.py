import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from dentalbook.core.config import settings
from dentalbook.core.constants import UserRole
from dentalbook.models.user import RoleAssignment, UserProfile

logger = logging.getLogger(__name__)


class UserService:
    @staticmethod
    def get_profile(db: Session, principal: str) -> Optional[UserProfile]:
        return db.query(UserProfile).filter(UserProfile.principal == principal).first()

    @staticmethod
    def save_profile(db: Session, principal: str, name: str) -> UserProfile:
        profile = UserService.get_profile(db, principal)
        if not profile:
            profile = UserProfile(principal=principal, name=name)
            db.add(profile)
        else:
            profile.name = name
        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def get_role(db: Session, principal: str) -> UserRole:
        if settings.ADMIN_PRINCIPAL and principal == settings.ADMIN_PRINCIPAL:
            return UserRole.ADMIN
        assignment = db.query(RoleAssignment).filter(RoleAssignment.principal == principal).first()
        if not assignment:
            return UserRole.GUEST
        return UserRole(assignment.role)

    @staticmethod
    def is_admin(db: Session, principal: str) -> bool:
        return UserService.get_role(db, principal) == UserRole.ADMIN

    @staticmethod
    def assign_role(db: Session, assigned_by: str, principal: str, role: UserRole) -> RoleAssignment:
        principal = (principal or "").strip()
        if not principal:
            raise ValueError("Principal must not be empty")
        if principal == assigned_by and role != UserRole.ADMIN:
            raise ValueError("Admins cannot demote themselves")

        assignment = db.query(RoleAssignment).filter(RoleAssignment.principal == principal).first()
        if not assignment:
            assignment = RoleAssignment(principal=principal, role=UserRole(role).value)
            db.add(assignment)
        else:
            assignment.role = UserRole(role).value
        db.commit()
        db.refresh(assignment)

        logger.info(f"{assigned_by} assigned role {assignment.role} to {principal}")
        return assignment

    @staticmethod
    def list_roles(db: Session) -> List[RoleAssignment]:
        return db.query(RoleAssignment).order_by(RoleAssignment.principal.asc()).all()
