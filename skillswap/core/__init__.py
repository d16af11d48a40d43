"""Core module exports."""
from skillswap.core.config import settings, get_settings
from skillswap.core.database import Base, get_db, init_db, close_db, engine, async_session_maker
from skillswap.core.security import (
    verify_password,
    hash_password,
    create_access_token,
    create_refresh_token,
    decode_token,
    subject_from_token,
)
from skillswap.core.exceptions import (
    APIException,
    BadRequestException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    ConflictException,
    ValidationException,
    InvalidCredentialsException,
    InvalidTokenException,
    EmailAlreadyExistsException,
    UserNotFoundException,
    SkillNotFoundException,
    ConnectionRequestNotFoundException,
    SkillExchangeNotFoundException,
    ProgressNotFoundException,
    SessionNotFoundException,
    ChatNotFoundException,
    NotificationNotFoundException,
    SelfConnectionException,
    AlreadyConnectedException,
    NotConnectedException,
    InvalidTransitionException,
)

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "get_db",
    "init_db",
    "close_db",
    "engine",
    "async_session_maker",
    # Security
    "verify_password",
    "hash_password",
    "create_access_token",
    "create_refresh_token",
    "decode_token",
    "subject_from_token",
    # Exceptions
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "ConflictException",
    "ValidationException",
    "InvalidCredentialsException",
    "InvalidTokenException",
    "EmailAlreadyExistsException",
    "UserNotFoundException",
    "SkillNotFoundException",
    "ConnectionRequestNotFoundException",
    "SkillExchangeNotFoundException",
    "ProgressNotFoundException",
    "SessionNotFoundException",
    "ChatNotFoundException",
    "NotificationNotFoundException",
    "SelfConnectionException",
    "AlreadyConnectedException",
    "NotConnectedException",
    "InvalidTransitionException",
]
