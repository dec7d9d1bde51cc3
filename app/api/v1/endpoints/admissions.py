"""Admission endpoints - admit, discharge, close, vitals"""

from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.models.user import User
from app.schemas.occupancy import (
    AdmissionClose, AdmissionCreate, AdmissionResponse, DischargeRequest, VitalsCreate, VitalsResponse,
)
from app.schemas.responses import SuccessResponse
from app.services.occupancy_service import OccupancyTracker

router = APIRouter()


@router.post("", response_model=SuccessResponse[AdmissionResponse], status_code=status.HTTP_201_CREATED)
async def admit_patient(
    admission_in: AdmissionCreate,
    current_user: User = Depends(deps.require_clinical_staff),
    tracker: OccupancyTracker = Depends(deps.get_occupancy),
) -> Any:
    """
    Admit a patient into a vacant bed.
    The bed becomes occupied and records the patient and attending doctor.
    """
    admission = await tracker.admit(admission_in)
    return SuccessResponse(data=AdmissionResponse.model_validate(admission), message="Patient admitted successfully")


@router.get("/patients/{patient_id}/current", response_model=SuccessResponse[Optional[AdmissionResponse]])
async def current_admission(
    patient_id: UUID,
    current_user: User = Depends(deps.require_ward_staff),
    tracker: OccupancyTracker = Depends(deps.get_occupancy),
) -> Any:
    admission = await tracker.current_admission(patient_id)
    if not admission:
        return SuccessResponse(data=None, message="Patient is not currently admitted")
    return SuccessResponse(data=AdmissionResponse.model_validate(admission))


@router.get("/{admission_id}", response_model=SuccessResponse[AdmissionResponse])
async def get_admission(
    admission_id: UUID,
    current_user: User = Depends(deps.require_ward_staff),
    tracker: OccupancyTracker = Depends(deps.get_occupancy),
) -> Any:
    admission = await tracker.get_admission(admission_id)
    return SuccessResponse(data=AdmissionResponse.model_validate(admission))


@router.post("/{admission_id}/discharge", response_model=SuccessResponse[AdmissionResponse])
async def discharge_patient(
    admission_id: UUID,
    body: Optional[DischargeRequest] = None,
    current_user: User = Depends(deps.require_clinical_staff),
    tracker: OccupancyTracker = Depends(deps.get_occupancy),
) -> Any:
    """Discharge, free the bed and end the patient's nurse assignments."""
    admission = await tracker.discharge(admission_id, body)
    return SuccessResponse(data=AdmissionResponse.model_validate(admission), message="Patient discharged successfully")


@router.post("/{admission_id}/close", response_model=SuccessResponse[AdmissionResponse])
async def close_admission(
    admission_id: UUID,
    body: AdmissionClose,
    current_user: User = Depends(deps.require_clinical_staff),
    tracker: OccupancyTracker = Depends(deps.get_occupancy),
) -> Any:
    admission = await tracker.close_admission(admission_id, body.status, body.notes)
    return SuccessResponse(data=AdmissionResponse.model_validate(admission), message=f"Admission {body.status.value}")


@router.post(
    "/{admission_id}/vitals",
    response_model=SuccessResponse[VitalsResponse],
    status_code=status.HTTP_201_CREATED,
)
async def record_vitals(
    admission_id: UUID,
    vitals_in: VitalsCreate,
    current_user: User = Depends(deps.require_ward_staff),
    tracker: OccupancyTracker = Depends(deps.get_occupancy),
) -> Any:
    entry = await tracker.record_vitals(admission_id, vitals_in, recorded_by_id=current_user.id)
    return SuccessResponse(data=VitalsResponse.model_validate(entry), message="Vitals recorded")
