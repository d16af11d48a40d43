"""
Notification and activity repositories.
"""
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, func, update
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.models.activity import Activity
from skillswap.models.notification import Notification
from skillswap.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    def __init__(self):
        super().__init__(Notification)

    async def find_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        *,
        is_read: Optional[bool] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Notification], int]:
        """Get notifications for a user with optional read filter."""
        query = select(Notification).where(Notification.user_id == user_id)

        if is_read is not None:
            query = query.where(Notification.is_read == is_read)

        # Count
        count_query = select(func.count()).select_from(query.subquery())
        total_result = await db.execute(count_query)
        total = total_result.scalar() or 0

        # Paginate
        query = query.order_by(Notification.created_at.desc())
        query = query.offset((page - 1) * limit).limit(limit)

        result = await db.execute(query)
        return list(result.scalars().all()), total

    async def count_unread(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> int:
        """Count unread notifications for a user."""
        result = await db.execute(
            select(func.count()).where(
                Notification.user_id == user_id,
                Notification.is_read == False,
            )
        )
        return result.scalar() or 0

    async def mark_all_read(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> int:
        """Mark all notifications as read for a user. Returns count updated."""
        result = await db.execute(
            update(Notification)
            .where(
                Notification.user_id == user_id,
                Notification.is_read == False,
            )
            .values(is_read=True)
            .execution_options(synchronize_session="evaluate")
        )
        await db.flush()
        return result.rowcount


class ActivityRepository(BaseRepository[Activity]):
    def __init__(self):
        super().__init__(Activity)

    async def recent_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        limit: int = 5,
    ) -> List[Activity]:
        result = await db.execute(
            select(Activity)
            .where(Activity.user_id == user_id)
            .order_by(Activity.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
