"""
Database models for SkillSwap.

All models use UUID primary keys and include created_at/updated_at timestamps.
"""
from skillswap.models.base import BaseModel, TimestampMixin, UUIDMixin
from skillswap.models.user import User
from skillswap.models.user_skill import UserSkill
from skillswap.models.connection import UserConnection, ConnectionRequest
from skillswap.models.skill_exchange import SkillExchange
from skillswap.models.skill_progress import SkillProgress
from skillswap.models.learning_session import LearningSession
from skillswap.models.notification import Notification
from skillswap.models.activity import Activity
from skillswap.models.chat import Chat, ChatParticipant, Message

__all__ = [
    "BaseModel",
    "TimestampMixin",
    "UUIDMixin",
    "User",
    "UserSkill",
    "UserConnection",
    "ConnectionRequest",
    "SkillExchange",
    "SkillProgress",
    "LearningSession",
    "Notification",
    "Activity",
    "Chat",
    "ChatParticipant",
    "Message",
]
