"""Bed endpoints - registry, availability, occupancy, status"""

from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.enums import BedStatus, UserRole, WardType
from app.models.user import User
from app.schemas.occupancy import BedCreate, BedOccupancy, BedResponse, BedStatusUpdate
from app.schemas.responses import ListResponse, SuccessResponse
from app.services.occupancy_service import OccupancyTracker
from app.services.registry_service import RegistryService

router = APIRouter()

require_bed_managers = deps.require_roles(UserRole.NURSE, UserRole.ADMIN)


@router.post("", response_model=SuccessResponse[BedResponse], status_code=status.HTTP_201_CREATED)
async def create_bed(
    bed_in: BedCreate,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    bed = await RegistryService.create_bed(db, bed_in)
    return SuccessResponse(data=BedResponse.model_validate(bed), message="Bed created successfully")


@router.get("", response_model=ListResponse[BedResponse])
async def list_beds(
    bed_status: Optional[BedStatus] = None,
    ward_number: Optional[str] = None,
    ward_type: Optional[WardType] = None,
    floor: Optional[int] = None,
    current_user: User = Depends(deps.require_ward_staff),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    beds = await RegistryService.list_beds(
        db, status=bed_status, ward_number=ward_number, ward_type=ward_type, floor=floor
    )
    return ListResponse.of([BedResponse.model_validate(b) for b in beds])


@router.get("/available", response_model=ListResponse[BedResponse])
async def available_beds(
    ward_type: Optional[WardType] = None,
    floor: Optional[int] = None,
    current_user: User = Depends(deps.require_ward_staff),
    tracker: OccupancyTracker = Depends(deps.get_occupancy),
) -> Any:
    """Vacant beds, optionally narrowed by ward type or floor."""
    beds = await tracker.available_beds(ward_type=ward_type, floor=floor)
    return ListResponse.of([BedResponse.model_validate(b) for b in beds])


@router.get("/occupancy", response_model=SuccessResponse[BedOccupancy])
async def bed_occupancy(
    ward_number: Optional[str] = None,
    current_user: User = Depends(deps.require_ward_staff),
    tracker: OccupancyTracker = Depends(deps.get_occupancy),
) -> Any:
    """Counts per bed status plus the beds themselves."""
    stats, beds = await tracker.bed_occupancy(ward_number=ward_number)
    return SuccessResponse(
        data=BedOccupancy(stats=stats, beds=[BedResponse.model_validate(b) for b in beds])
    )


@router.patch("/{bed_id}/status", response_model=SuccessResponse[BedResponse])
async def update_bed_status(
    bed_id: UUID,
    body: BedStatusUpdate,
    current_user: User = Depends(require_bed_managers),
    tracker: OccupancyTracker = Depends(deps.get_occupancy),
) -> Any:
    """Housekeeping status change. Occupied is managed by admit and discharge only."""
    bed = await tracker.set_bed_status(bed_id, body)
    return SuccessResponse(data=BedResponse.model_validate(bed), message="Bed status updated")
