"""Patient registry endpoints"""

from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.enums import UserRole
from app.models.user import User
from app.schemas.registry import PatientCreate, PatientResponse
from app.schemas.responses import ListResponse, SuccessResponse
from app.services.registry_service import RegistryService

router = APIRouter()

require_front_desk = deps.require_roles(UserRole.ADMIN, UserRole.DOCTOR, UserRole.NURSE, UserRole.BILLING)


@router.post("", response_model=SuccessResponse[PatientResponse], status_code=status.HTTP_201_CREATED)
async def register_patient(
    patient_in: PatientCreate,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    patient = await RegistryService.create_patient(db, patient_in)
    return SuccessResponse(data=PatientResponse.model_validate(patient), message="Patient registered successfully")


@router.get("", response_model=ListResponse[PatientResponse])
async def list_patients(
    search: Optional[str] = None,
    current_user: User = Depends(require_front_desk),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Search by name or patient code."""
    patients = await RegistryService.list_patients(db, search=search)
    return ListResponse.of([PatientResponse.model_validate(p) for p in patients])


@router.get("/{patient_id}", response_model=SuccessResponse[PatientResponse])
async def get_patient(
    patient_id: UUID,
    current_user: User = Depends(require_front_desk),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    patient = await RegistryService.get_patient(db, patient_id)
    return SuccessResponse(data=PatientResponse.model_validate(patient))
