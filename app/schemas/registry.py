"""Registry Schemas (departments, patients, doctors, nurses)"""

from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.models.enums import Gender, NurseShift


class DepartmentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class DepartmentResponse(DepartmentCreate):
    id: UUID
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class PatientCreate(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    phone: Optional[str] = Field(None, max_length=20)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    user_id: Optional[UUID] = None


class PatientResponse(PatientCreate):
    id: UUID
    patient_code: str

    model_config = ConfigDict(from_attributes=True)


class StaffAccount(BaseModel):
    """Login account created together with a doctor or nurse profile."""
    email: EmailStr
    password: str = Field(..., min_length=8, description="Password must be at least 8 characters")
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    phone: Optional[str] = Field(None, max_length=20)


class DoctorCreate(StaffAccount):
    department_id: UUID
    specialization: Optional[str] = None
    consultation_fee: Decimal = Field(Decimal("0"), ge=0)


class DoctorResponse(BaseModel):
    id: UUID
    doctor_code: str
    user_id: UUID
    department_id: UUID
    specialization: Optional[str] = None
    consultation_fee: Decimal

    model_config = ConfigDict(from_attributes=True)


class NurseCreate(StaffAccount):
    department_id: UUID
    assigned_ward: Optional[str] = Field(None, max_length=50)
    shift: NurseShift = NurseShift.MORNING


class NurseResponse(BaseModel):
    id: UUID
    nurse_code: str
    user_id: UUID
    department_id: UUID
    assigned_ward: Optional[str] = None
    shift: NurseShift

    model_config = ConfigDict(from_attributes=True)
