"""Password hashing and JWT access/refresh tokens"""

from datetime import timedelta
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from app.config import settings
from app.utils.time import get_utc_now

ACCESS = "access"
REFRESH = "refresh"

_BCRYPT_MAX_BYTES = 72


def _bcrypt_bytes(password: str) -> bytes:
    """UTF-8 bytes cut to bcrypt's 72-byte limit without splitting a character."""
    encoded = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
    return encoded.decode("utf-8", errors="ignore").encode("utf-8")


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(_bcrypt_bytes(password), bcrypt.gensalt()).decode("ascii")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_bcrypt_bytes(plain_password), hashed_password.encode("ascii"))
    except ValueError:
        # malformed stored hash
        return False


def _encode(claims: dict, expires_delta: timedelta, token_type: str) -> str:
    payload = {**claims, "exp": get_utc_now() + expires_delta, "type": token_type}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a short-lived access token.

    Args:
        data: Claims to encode, ``{"sub": user_id, "role": role}``
        expires_delta: Lifetime; defaults to ACCESS_TOKEN_EXPIRE_MINUTES
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode(data, expires_delta, ACCESS)


def create_refresh_token(data: dict) -> str:
    """Refresh token, valid for REFRESH_TOKEN_EXPIRE_DAYS; only /auth/refresh accepts it."""
    return _encode(data, timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS), REFRESH)


def decode_token(token: str, expected_type: Optional[str] = None) -> Optional[dict]:
    """
    Verify signature and expiry.

    Returns:
        The payload, or None when the token is invalid, expired, has no
        subject, or is not of ``expected_type``
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    if not payload.get("sub"):
        return None
    if expected_type is not None and payload.get("type") != expected_type:
        return None
    return payload
