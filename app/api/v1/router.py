"""API V1 Router"""

from fastapi import APIRouter

# Import endpoint routers
from app.api.v1.endpoints import (
    auth, billing, beds, admissions,
    nurses, departments, patients, staff
)

# Create API v1 router
api_router = APIRouter()

# Include endpoint routers with prefixes and tags
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(billing.router, prefix="/billing", tags=["Billing"])
api_router.include_router(beds.router, prefix="/beds", tags=["Beds"])
api_router.include_router(admissions.router, prefix="/admissions", tags=["Admissions"])
api_router.include_router(nurses.router, prefix="/nurses", tags=["Nurse Assignments"])
api_router.include_router(departments.router, prefix="/departments", tags=["Departments"])
api_router.include_router(patients.router, prefix="/patients", tags=["Patients"])
api_router.include_router(staff.router, prefix="/staff", tags=["Staff"])
