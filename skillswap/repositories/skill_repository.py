"""
Skill repository - data access for UserSkill entity.
"""
from collections import defaultdict
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.models.user_skill import UserSkill
from skillswap.repositories.base import BaseRepository


class SkillRepository(BaseRepository[UserSkill]):
    def __init__(self):
        super().__init__(UserSkill)

    async def get_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        skill_id: UUID,
        *,
        kind: Optional[str] = None,
    ) -> Optional[UserSkill]:
        """Fetch a skill only if it belongs to ``user_id`` (and has ``kind``, if given)."""
        query = select(UserSkill).where(
            UserSkill.id == skill_id,
            UserSkill.user_id == user_id,
        )
        if kind is not None:
            query = query.where(UserSkill.kind == kind)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        kind: Optional[str] = None,
    ) -> List[UserSkill]:
        """Skills of one user in insertion order, optionally of one kind."""
        query = select(UserSkill).where(UserSkill.user_id == user_id)
        if kind is not None:
            query = query.where(UserSkill.kind == kind)
        result = await db.execute(query.order_by(UserSkill.created_at))
        return list(result.scalars().all())

    async def list_for_users(
        self,
        db: AsyncSession,
        user_ids: List[UUID],
    ) -> Dict[UUID, List[UserSkill]]:
        """Skills for several users in a single query, grouped by owner."""
        grouped: Dict[UUID, List[UserSkill]] = defaultdict(list)
        if not user_ids:
            return grouped
        result = await db.execute(
            select(UserSkill)
            .where(UserSkill.user_id.in_(user_ids))
            .order_by(UserSkill.created_at)
        )
        for skill in result.scalars().all():
            grouped[skill.user_id].append(skill)
        return grouped

    async def get_name(
        self,
        db: AsyncSession,
        skill_id: UUID,
    ) -> Optional[str]:
        result = await db.execute(
            select(UserSkill.name).where(UserSkill.id == skill_id)
        )
        return result.scalar_one_or_none()
