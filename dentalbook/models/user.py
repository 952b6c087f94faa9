from sqlalchemy import Column, String
from dentalbook.core.database import Base
from dentalbook.models.base import IDMixin, TimestampMixin


class UserProfile(IDMixin, TimestampMixin, Base):
    __tablename__ = "user_profiles"

    principal = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)

    def __repr__(self):
        return f"<UserProfile {self.principal}>"


class RoleAssignment(IDMixin, TimestampMixin, Base):
    __tablename__ = "role_assignments"

    principal = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(String(20), nullable=False, index=True)

    def __repr__(self):
        return f"<RoleAssignment {self.principal}={self.role}>"
