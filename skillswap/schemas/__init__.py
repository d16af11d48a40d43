"""
Pydantic schemas for API validation and serialization.
"""
from skillswap.schemas.base import (
    BaseSchema,
    PaginatedResponse,
    MessageResponse,
    ErrorResponse,
)
from skillswap.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    RefreshTokenRequest,
)
from skillswap.schemas.skill import (
    SkillCreate,
    SkillUpdate,
    SkillResponse,
)
from skillswap.schemas.connection import (
    ExchangeDetails,
    ConnectionRequestCreate,
    ConnectionRequestRespond,
    ConnectionRequestResponse,
)
from skillswap.schemas.user import (
    UserSummary,
    UserProfile,
    UserUpdate,
)
from skillswap.schemas.discovery import DiscoveryFilters
from skillswap.schemas.exchange import (
    SkillExchangeCreate,
    ExchangeStatusUpdate,
    ExchangeRatingRequest,
    PendingExchange,
    InProgressExchange,
    CompletedExchange,
    CancelledExchange,
    SkillExchangeResponse,
    exchange_to_response,
)
from skillswap.schemas.progress import (
    Milestone,
    SkillProgressCreate,
    MilestoneUpdate,
    ProgressNotesUpdate,
    SkillProgressResponse,
)
from skillswap.schemas.session import (
    SessionCreate,
    SessionRespond,
    SessionResponse,
    UpcomingSession,
)
from skillswap.schemas.notification import (
    NotificationResponse,
    UnreadCountResponse,
    ActivityResponse,
)
from skillswap.schemas.chat import (
    ChatCreate,
    MessageCreate,
    ChatResponse,
    ChatMessageResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "PaginatedResponse",
    "MessageResponse",
    "ErrorResponse",
    # Auth
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    "RefreshTokenRequest",
    # Skill
    "SkillCreate",
    "SkillUpdate",
    "SkillResponse",
    # Connection
    "ExchangeDetails",
    "ConnectionRequestCreate",
    "ConnectionRequestRespond",
    "ConnectionRequestResponse",
    # User
    "UserSummary",
    "UserProfile",
    "UserUpdate",
    # Discovery
    "DiscoveryFilters",
    # Exchange
    "SkillExchangeCreate",
    "ExchangeStatusUpdate",
    "ExchangeRatingRequest",
    "PendingExchange",
    "InProgressExchange",
    "CompletedExchange",
    "CancelledExchange",
    "SkillExchangeResponse",
    "exchange_to_response",
    # Progress
    "Milestone",
    "SkillProgressCreate",
    "MilestoneUpdate",
    "ProgressNotesUpdate",
    "SkillProgressResponse",
    # Session
    "SessionCreate",
    "SessionRespond",
    "SessionResponse",
    "UpcomingSession",
    # Notification
    "NotificationResponse",
    "UnreadCountResponse",
    "ActivityResponse",
    # Chat
    "ChatCreate",
    "MessageCreate",
    "ChatResponse",
    "ChatMessageResponse",
]
