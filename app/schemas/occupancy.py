"""Bed, Admission and Nurse Assignment Schemas"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import (
    AdmissionStatus, AdmissionType, AssignmentStatus, BedStatus, WardType,
)


# Beds
class BedCreate(BaseModel):
    bed_number: str = Field(..., min_length=1, max_length=30)
    ward_number: str = Field(..., min_length=1, max_length=30)
    floor: int = 0
    department_id: Optional[UUID] = None
    ward_type: WardType
    bed_type: Optional[WardType] = None
    daily_charge: Decimal = Field(..., ge=0)
    notes: Optional[str] = None


class BedStatusUpdate(BaseModel):
    status: BedStatus
    notes: Optional[str] = None


class BedResponse(BaseModel):
    id: UUID
    bed_number: str
    ward_number: str
    floor: int
    department_id: Optional[UUID] = None
    ward_type: WardType
    bed_type: WardType
    status: BedStatus
    daily_charge: Decimal
    current_patient_id: Optional[UUID] = None
    assigned_doctor_id: Optional[UUID] = None
    assigned_nurse_id: Optional[UUID] = None
    admitted_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class OccupancyStats(BaseModel):
    total: int = 0
    occupied: int = 0
    vacant: int = 0
    reserved: int = 0
    maintenance: int = 0
    cleaning: int = 0


class BedOccupancy(BaseModel):
    stats: OccupancyStats
    beds: List[BedResponse]


# Admissions
class AdmissionCreate(BaseModel):
    patient_id: UUID
    doctor_id: UUID
    bed_id: UUID
    department_id: Optional[UUID] = None
    admission_type: AdmissionType = AdmissionType.SCHEDULED
    reason_for_admission: str = Field(..., min_length=1)
    provisional_diagnosis: Optional[str] = None
    treatment_plan: Optional[str] = None
    admission_date: Optional[datetime] = None


class DischargeRequest(BaseModel):
    final_diagnosis: Optional[str] = None
    discharge_summary: Optional[str] = None
    discharge_date: Optional[datetime] = None


class AdmissionClose(BaseModel):
    """Terminal closure other than a regular discharge."""
    status: AdmissionStatus
    notes: Optional[str] = None


class VitalsCreate(BaseModel):
    blood_pressure: Optional[str] = Field(None, max_length=20)
    temperature: Optional[Decimal] = None
    pulse: Optional[int] = None
    respiratory_rate: Optional[int] = None
    oxygen_saturation: Optional[int] = Field(None, ge=0, le=100)


class VitalsResponse(VitalsCreate):
    id: UUID
    recorded_at: datetime
    recorded_by_id: Optional[UUID] = None

    model_config = ConfigDict(from_attributes=True)


class AdmissionResponse(BaseModel):
    id: UUID
    admission_code: str
    patient_id: UUID
    doctor_id: UUID
    department_id: UUID
    bed_id: UUID
    admission_type: AdmissionType
    admission_date: datetime
    discharge_date: Optional[datetime] = None
    status: AdmissionStatus
    reason_for_admission: str
    provisional_diagnosis: Optional[str] = None
    final_diagnosis: Optional[str] = None
    treatment_plan: Optional[str] = None
    discharge_summary: Optional[str] = None
    total_stay_days: Optional[int] = None
    vitals: List[VitalsResponse] = []

    model_config = ConfigDict(from_attributes=True)


# Nurse assignments
class NurseAssignmentCreate(BaseModel):
    patient_id: UUID
    bed_number: Optional[str] = Field(None, max_length=30)


class NurseAssignmentResponse(BaseModel):
    id: UUID
    nurse_id: UUID
    patient_id: UUID
    bed_number: str
    assigned_date: datetime
    status: AssignmentStatus

    model_config = ConfigDict(from_attributes=True)
