"""
Notification and activity schemas.
"""
from datetime import datetime
from typing import Literal, Optional
from uuid import UUID
from skillswap.schemas.base import BaseSchema, IDSchema

NotificationType = Literal[
    "connection_request",
    "connection_accepted",
    "connection_rejected",
    "session_request",
    "session_accepted",
    "session_rejected",
    "skill_exchange",
    "rating",
    "message",
    "system",
]

ActivityType = Literal[
    "skill_added",
    "connection_made",
    "session_initiated",
    "session_completed",
    "rating_received",
]


class NotificationResponse(IDSchema):
    user_id: UUID
    type: NotificationType
    related_id: Optional[UUID] = None
    message: str
    is_read: bool
    created_at: datetime


class UnreadCountResponse(BaseSchema):
    unread: int


class ActivityResponse(IDSchema):
    user_id: UUID
    type: ActivityType
    description: str
    related_user_id: Optional[UUID] = None
    related_skill_id: Optional[UUID] = None
    created_at: datetime
