"""API Dependencies"""

from typing import Callable
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.database import get_db
from app.core.security import ACCESS, decode_token
from app.models.enums import UserRole
from app.models.user import User
from app.services.ledger_service import LedgerEngine
from app.services.occupancy_service import OccupancyTracker
from app.services.user_service import UserService

# Security scheme for bearer token
security = HTTPBearer()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> User:
    """
    Get current authenticated user from JWT token.

    Raises:
        HTTPException: If token is invalid, expired, of the wrong type,
            or the user is missing or inactive
    """
    payload = decode_token(credentials.credentials, expected_type=ACCESS)
    if not payload:
        raise _unauthorized("Could not validate credentials")

    try:
        user_id = UUID(payload["sub"])
    except ValueError:
        raise _unauthorized("Invalid user ID")

    user = await UserService.get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user"
        )

    return user


def require_roles(*roles: UserRole) -> Callable:
    """Build a dependency that admits only users holding one of ``roles``."""
    allowed = frozenset(roles)

    async def _check(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not enough permissions"
            )
        return current_user

    return _check


require_admin = require_roles(UserRole.ADMIN)
require_billing_staff = require_roles(UserRole.BILLING, UserRole.ADMIN)
require_ward_staff = require_roles(UserRole.DOCTOR, UserRole.NURSE, UserRole.ADMIN)
require_clinical_staff = require_roles(UserRole.DOCTOR, UserRole.ADMIN)


def get_ledger(db: AsyncSession = Depends(get_db)) -> LedgerEngine:
    return LedgerEngine(db)


def get_occupancy(db: AsyncSession = Depends(get_db)) -> OccupancyTracker:
    return OccupancyTracker(db)
