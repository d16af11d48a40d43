"""
Learning session repository - data access for LearningSession entity.
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.models.learning_session import (
    LearningSession,
    SESSION_ACCEPTED,
    SESSION_PENDING,
)
from skillswap.repositories.base import BaseRepository


class LearningSessionRepository(BaseRepository[LearningSession]):
    def __init__(self):
        super().__init__(LearningSession)

    async def get_for_participant(
        self,
        db: AsyncSession,
        session_id: UUID,
        user_id: UUID,
    ) -> Optional[LearningSession]:
        result = await db.execute(
            select(LearningSession).where(
                LearningSession.id == session_id,
                or_(
                    LearningSession.initiator_id == user_id,
                    LearningSession.recipient_id == user_id,
                ),
            )
        )
        return result.scalar_one_or_none()

    async def find_upcoming(
        self,
        db: AsyncSession,
        user_id: UUID,
        *,
        now: datetime,
        limit: int = 5,
    ) -> List[LearningSession]:
        """Pending or accepted sessions of the user scheduled from ``now`` on, soonest first."""
        result = await db.execute(
            select(LearningSession)
            .where(
                or_(
                    LearningSession.initiator_id == user_id,
                    LearningSession.recipient_id == user_id,
                ),
                LearningSession.status.in_([SESSION_PENDING, SESSION_ACCEPTED]),
                LearningSession.scheduled_time >= now,
            )
            .order_by(LearningSession.scheduled_time.asc())
            .limit(limit)
        )
        return list(result.scalars().all())
