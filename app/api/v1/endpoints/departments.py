from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.user import User
from app.schemas.registry import DepartmentCreate, DepartmentResponse
from app.schemas.responses import ListResponse, SuccessResponse
from app.services.registry_service import RegistryService

router = APIRouter()


@router.post("", response_model=SuccessResponse[DepartmentResponse], status_code=status.HTTP_201_CREATED)
async def create_department(
    department_in: DepartmentCreate,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    department = await RegistryService.create_department(db, department_in)
    return SuccessResponse(data=DepartmentResponse.model_validate(department), message="Department created successfully")


@router.get("", response_model=ListResponse[DepartmentResponse])
async def list_departments(
    current_user: User = Depends(deps.get_current_user),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    departments = await RegistryService.list_departments(db)
    return ListResponse.of([DepartmentResponse.model_validate(d) for d in departments])
