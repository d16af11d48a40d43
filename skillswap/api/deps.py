"""
API dependencies for dependency injection.
"""
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.core.database import get_db
from skillswap.core.security import subject_from_token
from skillswap.core.exceptions import (
    UnauthorizedException,
    InvalidTokenException,
)
from skillswap.models.user import User
from skillswap.repositories.user_repository import UserRepository


# Security scheme
security = HTTPBearer(auto_error=False)

user_repo = UserRepository()


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Get the current authenticated user.

    The user is also stored on ``request.state`` so the rate limiter can key
    on it.

    Raises:
        UnauthorizedException: If no token provided
        InvalidTokenException: If token is invalid, expired or the user is gone
    """
    if not credentials:
        raise UnauthorizedException("Authentication required")

    user_id = subject_from_token(credentials.credentials, "access")
    if not user_id:
        raise InvalidTokenException()

    user = await user_repo.get_active_by_id(db, user_id)
    if not user:
        raise InvalidTokenException()

    request.state.current_user = user
    return user
