"""
Service layer - business logic and orchestration.

Services contain the application's business logic, coordinate between
repositories, and own the transaction boundary (they commit).

RULE: Routes call services. Services call repositories. Never the reverse.
"""
from skillswap.services.auth_service import AuthService
from skillswap.services.user_service import UserService
from skillswap.services.skill_service import SkillService
from skillswap.services.discovery_service import DiscoveryService
from skillswap.services.connection_service import ConnectionService
from skillswap.services.exchange_service import SkillExchangeService
from skillswap.services.progress_service import SkillProgressService
from skillswap.services.session_service import LearningSessionService
from skillswap.services.notification_service import NotificationService, ActivityService
from skillswap.services.chat_service import ChatService

__all__ = [
    "AuthService",
    "UserService",
    "SkillService",
    "DiscoveryService",
    "ConnectionService",
    "SkillExchangeService",
    "SkillProgressService",
    "LearningSessionService",
    "NotificationService",
    "ActivityService",
    "ChatService",
]
