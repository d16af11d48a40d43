"""
Security utilities for authentication.
Handles JWT tokens and password hashing.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Any
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext

from skillswap.core.config import settings


# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    return pwd_context.verify(plain_password, hashed_password)


def hash_password(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def _encode(user_id: UUID, token_type: str, lifetime: timedelta) -> str:
    payload = {
        "sub": str(user_id),
        "type": token_type,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def create_access_token(user_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token for a user.

    Args:
        user_id: Subject of the token
        expires_delta: Custom expiration time

    Returns:
        Encoded JWT token string
    """
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    return _encode(user_id, "access", lifetime)


def create_refresh_token(user_id: UUID) -> str:
    """Create a JWT refresh token for a user."""
    return _encode(user_id, "refresh", timedelta(days=settings.refresh_token_expire_days))


def decode_token(token: str) -> Optional[dict[str, Any]]:
    """
    Decode and validate a JWT token.

    Returns:
        Decoded payload or None if invalid/expired
    """
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
        )
    except JWTError:
        return None


def subject_from_token(token: str, expected_type: str) -> Optional[UUID]:
    """
    Return the user id a token was issued for, or None.

    None covers every rejection: bad signature, expiry, wrong token type,
    missing or malformed subject.
    """
    payload = decode_token(token)
    if not payload or payload.get("type") != expected_type:
        return None

    subject = payload.get("sub")
    if not subject:
        return None

    try:
        return UUID(subject)
    except ValueError:
        return None
