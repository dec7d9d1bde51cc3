"""Domain 2: Patient Registry Model"""

from sqlalchemy import Column, String, Date, ForeignKey
from sqlalchemy.dialects.postgresql import UUID

from app.models.base import BaseModel, enum_column_type
from app.models.enums import Gender


class Patient(BaseModel):
    """
    Registered patient. A patient may exist without a login account
    (walk-ins registered by the front desk), so user_id is optional.
    """
    __tablename__ = "patients"

    patient_code = Column(String(32), unique=True, nullable=False, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=True, index=True)
    date_of_birth = Column(Date, nullable=True)
    gender = Column(enum_column_type(Gender, "gender"), nullable=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Patient {self.patient_code}>"
