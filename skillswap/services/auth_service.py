"""
Authentication service - handles registration, login, and token management.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.core.config import settings
from skillswap.core.security import (
    verify_password,
    hash_password,
    create_access_token,
    create_refresh_token,
    subject_from_token,
)
from skillswap.core.exceptions import (
    InvalidCredentialsException,
    EmailAlreadyExistsException,
    InvalidTokenException,
)
from skillswap.core.logging import get_logger
from skillswap.models.user import User
from skillswap.repositories.user_repository import UserRepository
from skillswap.schemas.auth import TokenResponse
from skillswap.services.user_service import UserService

logger = get_logger(__name__)


class AuthService:
    """Handles all authentication business logic."""

    def __init__(self):
        self.user_repo = UserRepository()
        self.user_service = UserService()

    async def register(
        self,
        db: AsyncSession,
        *,
        email: str,
        password: str,
        display_name: str,
        bio: Optional[str] = None,
        photo_url: Optional[str] = None,
    ) -> TokenResponse:
        """
        Register a new user, creating their empty profile, and return tokens.

        Raises:
            EmailAlreadyExistsException: If email is already registered.
        """
        email = email.lower()
        if await self.user_repo.email_exists(db, email):
            raise EmailAlreadyExistsException()

        user = await self.user_repo.create(
            db,
            email=email,
            password_hash=hash_password(password),
            display_name=display_name.strip(),
            bio=bio,
            photo_url=photo_url,
            rating=0.0,
            last_active_at=datetime.now(timezone.utc),
        )
        await db.commit()

        logger.info("user_registered", user_id=str(user.id))
        return self._generate_tokens(user)

    async def login(
        self,
        db: AsyncSession,
        *,
        email: str,
        password: str,
    ) -> TokenResponse:
        """
        Authenticate user and return tokens.

        Raises:
            InvalidCredentialsException: If email/password is wrong.
        """
        user = await self.user_repo.get_active_by_email(db, email.lower())

        if not user or not verify_password(password, user.password_hash):
            logger.info("login_failed")
            raise InvalidCredentialsException()

        await self.user_service.touch_last_active(db, user)

        return self._generate_tokens(user)

    async def refresh(
        self,
        db: AsyncSession,
        *,
        refresh_token: str,
    ) -> TokenResponse:
        """
        Issue new tokens using a valid refresh token.

        Raises:
            InvalidTokenException: If refresh token is invalid or expired.
        """
        user_id = subject_from_token(refresh_token, "refresh")
        if not user_id:
            raise InvalidTokenException()

        user = await self.user_repo.get_active_by_id(db, user_id)
        if not user:
            raise InvalidTokenException()

        return self._generate_tokens(user)

    def _generate_tokens(self, user: User) -> TokenResponse:
        """Generate access and refresh tokens for a user."""
        return TokenResponse(
            access_token=create_access_token(user.id),
            refresh_token=create_refresh_token(user.id),
            expires_in=settings.access_token_expire_minutes * 60,
        )
