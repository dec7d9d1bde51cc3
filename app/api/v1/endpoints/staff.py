"""Staff endpoints - doctors and nurses with their login accounts"""

from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.user import User
from app.schemas.registry import DoctorCreate, DoctorResponse, NurseCreate, NurseResponse
from app.schemas.responses import ListResponse, SuccessResponse
from app.services.registry_service import RegistryService

router = APIRouter()


@router.post("/doctors", response_model=SuccessResponse[DoctorResponse], status_code=status.HTTP_201_CREATED)
async def create_doctor(
    doctor_in: DoctorCreate,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Create a doctor profile and its login account in one step."""
    doctor = await RegistryService.create_doctor(db, doctor_in)
    return SuccessResponse(data=DoctorResponse.model_validate(doctor), message="Doctor created successfully")


@router.get("/doctors", response_model=ListResponse[DoctorResponse])
async def list_doctors(
    department_id: Optional[UUID] = None,
    current_user: User = Depends(deps.get_current_user),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    doctors = await RegistryService.list_doctors(db, department_id=department_id)
    return ListResponse.of([DoctorResponse.model_validate(d) for d in doctors])


@router.post("/nurses", response_model=SuccessResponse[NurseResponse], status_code=status.HTTP_201_CREATED)
async def create_nurse(
    nurse_in: NurseCreate,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    nurse = await RegistryService.create_nurse(db, nurse_in)
    return SuccessResponse(data=NurseResponse.model_validate(nurse), message="Nurse created successfully")


@router.get("/nurses", response_model=ListResponse[NurseResponse])
async def list_nurses(
    current_user: User = Depends(deps.require_ward_staff),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    nurses = await RegistryService.list_nurses(db)
    return ListResponse.of([NurseResponse.model_validate(n) for n in nurses])
