"""Domain 1: User & Authentication Model"""

from sqlalchemy import Column, String

from app.models.base import BaseModel, StatusMixin, enum_column_type
from app.models.enums import UserRole


class User(BaseModel, StatusMixin):
    """
    Login account for every role (admin, clinical staff, desk staff, patients).
    Profile records (Doctor, Nurse, Patient) point back here.
    """
    __tablename__ = "users"

    # Authentication
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)

    # Personal Information
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=True)

    # Role (RBAC)
    role = Column(enum_column_type(UserRole, "user_role"), nullable=False, index=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role})>"
