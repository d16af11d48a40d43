"""
Authentication routes.
"""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.core.database import get_db
from skillswap.core.rate_limit import limiter, RATE_AUTH
from skillswap.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    RefreshTokenRequest,
)
from skillswap.schemas.base import MessageResponse
from skillswap.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])

auth_service = AuthService()


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_AUTH)
async def register(
    request: Request,
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a new user and create their profile.

    Returns access and refresh tokens on successful registration.
    """
    return await auth_service.register(
        db,
        email=body.email,
        password=body.password,
        display_name=body.display_name,
        bio=body.bio,
        photo_url=body.photo_url,
    )


@router.post("/login", response_model=TokenResponse)
@limiter.limit(RATE_AUTH)
async def login(
    request: Request,
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Login with email and password.

    Returns access and refresh tokens on successful login.
    """
    return await auth_service.login(db, email=body.email, password=body.password)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    body: RefreshTokenRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Refresh access token using refresh token.
    """
    return await auth_service.refresh(db, refresh_token=body.refresh_token)


@router.post("/logout", response_model=MessageResponse)
async def logout():
    """
    Logout current user.

    Note: With JWT, logout is handled client-side by discarding tokens.
    """
    return MessageResponse(message="Logged out successfully")
