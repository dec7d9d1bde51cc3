"""Nurse assignment endpoints"""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.user import User
from app.schemas.occupancy import NurseAssignmentCreate, NurseAssignmentResponse
from app.schemas.responses import ListResponse, SuccessResponse
from app.services.occupancy_service import OccupancyTracker
from app.services.registry_service import RegistryService

router = APIRouter()


@router.get("/me/assignments", response_model=ListResponse[NurseAssignmentResponse])
async def my_assignments(
    current_user: User = Depends(deps.require_ward_staff),
    db: AsyncSession = Depends(deps.get_db),
    tracker: OccupancyTracker = Depends(deps.get_occupancy),
) -> Any:
    """Active patients of the signed-in nurse."""
    nurse = await RegistryService.get_nurse_by_user(db, current_user.id)
    assignments = await tracker.list_assignments(nurse.id)
    return ListResponse.of([NurseAssignmentResponse.model_validate(a) for a in assignments])


@router.post(
    "/{nurse_id}/assignments",
    response_model=SuccessResponse[NurseAssignmentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def assign_patient(
    nurse_id: UUID,
    body: NurseAssignmentCreate,
    current_user: User = Depends(deps.require_ward_staff),
    tracker: OccupancyTracker = Depends(deps.get_occupancy),
) -> Any:
    assignment = await tracker.assign_nurse(nurse_id, body.patient_id, body.bed_number)
    return SuccessResponse(
        data=NurseAssignmentResponse.model_validate(assignment),
        message="Patient assigned to nurse",
    )


@router.get("/{nurse_id}/assignments", response_model=ListResponse[NurseAssignmentResponse])
async def list_assignments(
    nurse_id: UUID,
    active_only: bool = True,
    current_user: User = Depends(deps.require_ward_staff),
    tracker: OccupancyTracker = Depends(deps.get_occupancy),
) -> Any:
    assignments = await tracker.list_assignments(nurse_id, active_only=active_only)
    return ListResponse.of([NurseAssignmentResponse.model_validate(a) for a in assignments])


@router.delete("/{nurse_id}/assignments/{patient_id}", response_model=SuccessResponse[NurseAssignmentResponse])
async def unassign_patient(
    nurse_id: UUID,
    patient_id: UUID,
    current_user: User = Depends(deps.require_ward_staff),
    tracker: OccupancyTracker = Depends(deps.get_occupancy),
) -> Any:
    assignment = await tracker.unassign_nurse(nurse_id, patient_id)
    return SuccessResponse(
        data=NurseAssignmentResponse.model_validate(assignment),
        message="Patient removed from nurse",
    )
