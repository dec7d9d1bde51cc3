"""User Service - Business Logic Layer"""

from typing import Optional
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError
from app.core.logging import get_logger
from app.core.security import get_password_hash, verify_password
from app.models.enums import UserRole
from app.models.user import User

logger = get_logger(__name__)


class UserService:
    """Service layer for login accounts"""

    @staticmethod
    async def create_user(
        db: AsyncSession,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        role: UserRole,
        phone: Optional[str] = None,
        auto_commit: bool = True,
    ) -> User:
        """
        Create a login account.
        When auto_commit=False, uses flush instead of commit so the caller can
        add a profile row (doctor, nurse) in the same transaction.

        Raises:
            ConflictError: email already registered
        """
        if await UserService.get_user_by_email(db, email):
            raise ConflictError(f"A user with email {email} already exists")

        db_user = User(
            email=email,
            hashed_password=get_password_hash(password),
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            role=role,
            is_active=True,
        )
        db.add(db_user)
        if auto_commit:
            await db.commit()
        else:
            await db.flush()
        logger.info("User created", extra={"user_id": str(db_user.id), "role": role.value})
        return db_user

    @staticmethod
    async def get_user_by_id(db: AsyncSession, user_id: UUID) -> Optional[User]:
        """
        Get user by ID.

        Args:
            db: Database session
            user_id: User ID

        Returns:
            User or None if not found
        """
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    @staticmethod
    async def authenticate_user(db: AsyncSession, email: str, password: str) -> Optional[User]:
        """Return the active user whose password matches, else None."""
        user = await UserService.get_user_by_email(db, email)
        if not user or not user.is_active:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user
