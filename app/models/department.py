"""Domain 2: Hospital Departments"""

from sqlalchemy import Column, String, Text

from app.models.base import BaseModel, StatusMixin


class Department(BaseModel, StatusMixin):
    """Clinical department that owns doctors, nurses and beds."""
    __tablename__ = "departments"

    name = Column(String(255), unique=True, nullable=False)
    description = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Department {self.name}>"
