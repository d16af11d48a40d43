"""
Notification service - in-app notifications and the activity feed.

notify() is fire-and-forget: callers hand over a message and carry on. A
failed write is logged and dropped, never retried, and never aborts the
operation that triggered it.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.core.config import settings
from skillswap.core.exceptions import NotificationNotFoundException
from skillswap.core.logging import get_logger
from skillswap.models.activity import Activity
from skillswap.models.notification import Notification
from skillswap.repositories.notification_repository import (
    ActivityRepository,
    NotificationRepository,
)
from skillswap.schemas.base import PaginatedResponse
from skillswap.schemas.notification import ActivityResponse, NotificationResponse

logger = get_logger(__name__)


class NotificationService:
    """Creates, lists and acknowledges notifications."""

    def __init__(self):
        self.notification_repo = NotificationRepository()

    async def notify(
        self,
        db: AsyncSession,
        user_id: UUID,
        type: str,
        message: str,
        related_id: Optional[UUID] = None,
    ) -> Optional[Notification]:
        """
        Queue a notification in the caller's transaction.

        The insert runs inside a SAVEPOINT so a failure only discards the
        notification. Returns None when it could not be stored.
        """
        try:
            async with db.begin_nested():
                notification = await self.notification_repo.create(
                    db,
                    user_id=user_id,
                    type=type,
                    message=message,
                    related_id=related_id,
                )
        except SQLAlchemyError as exc:
            logger.warning(
                "notification_failed",
                user_id=str(user_id),
                type=type,
                error=str(exc),
            )
            return None

        logger.debug("notification_queued", user_id=str(user_id), type=type)
        return notification

    async def notify_many(
        self,
        db: AsyncSession,
        user_ids: List[UUID],
        type: str,
        message: str,
        related_id: Optional[UUID] = None,
    ) -> None:
        for user_id in user_ids:
            await self.notify(db, user_id, type, message, related_id)

    async def list_notifications(
        self,
        db: AsyncSession,
        user_id: UUID,
        *,
        is_read: Optional[bool] = None,
        page: int = 1,
        limit: int = 20,
    ) -> PaginatedResponse[NotificationResponse]:
        notifications, total = await self.notification_repo.find_for_user(
            db, user_id, is_read=is_read, page=page, limit=limit
        )
        return PaginatedResponse[NotificationResponse].build(
            items=[NotificationResponse.model_validate(n) for n in notifications],
            total=total,
            page=page,
            limit=limit,
        )

    async def mark_read(
        self,
        db: AsyncSession,
        user_id: UUID,
        notification_id: UUID,
    ) -> NotificationResponse:
        """
        Mark one notification as read.

        Raises:
            NotificationNotFoundException: Unknown id or not addressed to the user.
        """
        notification = await self.notification_repo.get_by_id(db, notification_id)
        if not notification or notification.user_id != user_id:
            raise NotificationNotFoundException()

        if not notification.is_read:
            notification = await self.notification_repo.update(db, notification, is_read=True)
            await db.commit()

        return NotificationResponse.model_validate(notification)

    async def mark_all_read(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> int:
        updated = await self.notification_repo.mark_all_read(db, user_id)
        await db.commit()
        return updated

    async def unread_count(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> int:
        return await self.notification_repo.count_unread(db, user_id)


class ActivityService:
    """Records and reads the per-user activity feed."""

    def __init__(self):
        self.activity_repo = ActivityRepository()

    async def record(
        self,
        db: AsyncSession,
        user_id: UUID,
        type: str,
        description: str,
        *,
        related_user_id: Optional[UUID] = None,
        related_skill_id: Optional[UUID] = None,
    ) -> Activity:
        """Add an activity to the caller's transaction. The caller commits."""
        return await self.activity_repo.create(
            db,
            user_id=user_id,
            type=type,
            description=description,
            related_user_id=related_user_id,
            related_skill_id=related_skill_id,
        )

    async def recent(
        self,
        db: AsyncSession,
        user_id: UUID,
        limit: Optional[int] = None,
    ) -> List[ActivityResponse]:
        activities = await self.activity_repo.recent_for_user(
            db, user_id, limit or settings.recent_activities_limit
        )
        return [ActivityResponse.model_validate(a) for a in activities]
