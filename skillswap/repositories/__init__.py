"""
Repository layer - data access abstraction.

Repositories handle all database queries, keeping SQL/ORM logic
out of the service and route layers.
"""
from skillswap.repositories.base import BaseRepository
from skillswap.repositories.user_repository import UserRepository
from skillswap.repositories.skill_repository import SkillRepository
from skillswap.repositories.connection_repository import ConnectionRequestRepository
from skillswap.repositories.exchange_repository import (
    SkillExchangeRepository,
    SkillProgressRepository,
)
from skillswap.repositories.session_repository import LearningSessionRepository
from skillswap.repositories.notification_repository import (
    NotificationRepository,
    ActivityRepository,
)
from skillswap.repositories.chat_repository import ChatRepository, MessageRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "SkillRepository",
    "ConnectionRequestRepository",
    "SkillExchangeRepository",
    "SkillProgressRepository",
    "LearningSessionRepository",
    "NotificationRepository",
    "ActivityRepository",
    "ChatRepository",
    "MessageRepository",
]
