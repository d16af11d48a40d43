"""
Skill exchange repository - data access for SkillExchange and SkillProgress.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.models.skill_exchange import SkillExchange, EXCHANGE_COMPLETED
from skillswap.models.skill_progress import SkillProgress
from skillswap.repositories.base import BaseRepository


class SkillExchangeRepository(BaseRepository[SkillExchange]):
    def __init__(self):
        super().__init__(SkillExchange)

    async def get_for_participant(
        self,
        db: AsyncSession,
        exchange_id: UUID,
        user_id: UUID,
    ) -> Optional[SkillExchange]:
        """Fetch an exchange only if ``user_id`` is its teacher or student."""
        result = await db.execute(
            select(SkillExchange).where(
                SkillExchange.id == exchange_id,
                or_(
                    SkillExchange.teacher_id == user_id,
                    SkillExchange.student_id == user_id,
                ),
            )
        )
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        *,
        role: str = "both",
        status: Optional[str] = None,
    ) -> List[SkillExchange]:
        """Exchanges the user teaches and/or learns in, most recent start first."""
        if role == "teacher":
            participant = SkillExchange.teacher_id == user_id
        elif role == "student":
            participant = SkillExchange.student_id == user_id
        else:
            participant = or_(
                SkillExchange.teacher_id == user_id,
                SkillExchange.student_id == user_id,
            )

        query = select(SkillExchange).where(participant)
        if status is not None:
            query = query.where(SkillExchange.status == status)

        result = await db.execute(query.order_by(SkillExchange.start_date.desc()))
        return list(result.scalars().all())

    async def average_teacher_rating(
        self,
        db: AsyncSession,
        teacher_id: UUID,
    ) -> Optional[float]:
        """Mean rating over the teacher's completed, rated exchanges (None if none)."""
        result = await db.execute(
            select(func.avg(SkillExchange.rating)).where(
                SkillExchange.teacher_id == teacher_id,
                SkillExchange.status == EXCHANGE_COMPLETED,
                SkillExchange.rating.isnot(None),
            )
        )
        average = result.scalar()
        return float(average) if average is not None else None


class SkillProgressRepository(BaseRepository[SkillProgress]):
    def __init__(self):
        super().__init__(SkillProgress)

    async def get_by_exchange(
        self,
        db: AsyncSession,
        exchange_id: UUID,
    ) -> Optional[SkillProgress]:
        result = await db.execute(
            select(SkillProgress).where(SkillProgress.skill_exchange_id == exchange_id)
        )
        return result.scalar_one_or_none()
