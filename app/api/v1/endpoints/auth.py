from datetime import timedelta
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.core import security
from app.core.rate_limit import limiter
from app.config import settings
from app.models.user import User
from app.services.user_service import UserService
from app.schemas.auth import LoginRequest, Token, RefreshRequest, RegisterRequest
from app.schemas.user import UserResponse
from app.schemas.responses import SuccessResponse

router = APIRouter()


def _issue_tokens(user: User) -> Token:
    token_data = {"sub": str(user.id), "role": user.role.value}
    return Token(
        access_token=security.create_access_token(
            data=token_data,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        ),
        refresh_token=security.create_refresh_token(data=token_data),
        token_type="bearer",
        role=user.role,
        user_id=str(user.id),
    )


@router.post("/login", response_model=SuccessResponse[Token])
@limiter.limit(settings.login_rate_limit)
async def login(
    request: Request,
    login_data: LoginRequest,
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Unified login for all roles.
    Returns JWT access token, refresh token, and user role.
    """
    user = await UserService.authenticate_user(db, email=login_data.email, password=login_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )
    return SuccessResponse(data=_issue_tokens(user), message="Login successful")


@router.post("/refresh", response_model=SuccessResponse[Token])
async def refresh(
    body: RefreshRequest,
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """Exchange a refresh token for a new token pair."""
    payload = security.decode_token(body.refresh_token, expected_type=security.REFRESH)
    if not payload:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")
    try:
        user_id = UUID(payload["sub"])
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")
    user = await UserService.get_user_by_id(db, user_id)
    if not user or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")
    return SuccessResponse(data=_issue_tokens(user), message="Token refreshed")


@router.post("/register", response_model=SuccessResponse[UserResponse])
async def register(
    user_in: RegisterRequest,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """Create an account for any role. Admin only."""
    user = await UserService.create_user(
        db,
        email=user_in.email,
        password=user_in.password,
        first_name=user_in.first_name,
        last_name=user_in.last_name,
        phone=user_in.phone,
        role=user_in.role,
    )
    return SuccessResponse(data=UserResponse.model_validate(user), message="User created successfully")


@router.get("/me", response_model=SuccessResponse[UserResponse])
async def me(current_user: User = Depends(deps.get_current_user)) -> Any:
    return SuccessResponse(data=UserResponse.model_validate(current_user))
