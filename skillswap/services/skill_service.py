"""
Skill service - owned and desired skills on a profile.
"""
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.core.exceptions import SkillNotFoundException, UserNotFoundException
from skillswap.core.logging import get_logger
from skillswap.models.user_skill import SKILL_KIND_TEACHING
from skillswap.repositories.skill_repository import SkillRepository
from skillswap.repositories.user_repository import UserRepository
from skillswap.schemas.skill import SkillCreate, SkillResponse, SkillUpdate
from skillswap.services.notification_service import ActivityService

logger = get_logger(__name__)


class SkillService:
    """Adds, edits and removes the skills on a user's own profile."""

    def __init__(self):
        self.skill_repo = SkillRepository()
        self.user_repo = UserRepository()
        self.activity_service = ActivityService()

    async def list_skills(
        self,
        db: AsyncSession,
        user_id: UUID,
        kind: str,
    ) -> List[SkillResponse]:
        skills = await self.skill_repo.list_for_user(db, user_id, kind)
        return [SkillResponse.model_validate(s) for s in skills]

    async def add_skill(
        self,
        db: AsyncSession,
        user_id: UUID,
        kind: str,
        data: SkillCreate,
    ) -> SkillResponse:
        """
        Add a skill of ``kind`` (teaching or learning) to the user's profile.

        Teaching skills are also recorded in the activity feed.
        """
        if not await self.user_repo.get_active_by_id(db, user_id):
            raise UserNotFoundException()

        skill = await self.skill_repo.create(
            db,
            user_id=user_id,
            kind=kind,
            name=data.name,
            category=data.category,
            level=data.level,
            tags=list(data.tags),
        )

        if kind == SKILL_KIND_TEACHING:
            await self.activity_service.record(
                db,
                user_id,
                "skill_added",
                f"Added {skill.name} to your skills",
                related_skill_id=skill.id,
            )

        await db.commit()
        logger.info("skill_added", user_id=str(user_id), skill_id=str(skill.id), kind=kind)
        return SkillResponse.model_validate(skill)

    async def update_skill(
        self,
        db: AsyncSession,
        user_id: UUID,
        kind: str,
        skill_id: UUID,
        data: SkillUpdate,
    ) -> SkillResponse:
        """
        Raises:
            SkillNotFoundException: Not one of the user's skills of this kind.
        """
        skill = await self.skill_repo.get_for_user(db, user_id, skill_id, kind=kind)
        if not skill:
            raise SkillNotFoundException()

        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        if "tags" in updates:
            updates["tags"] = list(updates["tags"])

        if updates:
            skill = await self.skill_repo.update(db, skill, **updates)
            await db.commit()

        return SkillResponse.model_validate(skill)

    async def remove_skill(
        self,
        db: AsyncSession,
        user_id: UUID,
        kind: str,
        skill_id: UUID,
    ) -> None:
        skill = await self.skill_repo.get_for_user(db, user_id, skill_id, kind=kind)
        if not skill:
            raise SkillNotFoundException()

        await self.skill_repo.delete(db, skill.id)
        await db.commit()
        logger.info("skill_removed", user_id=str(user_id), skill_id=str(skill_id))
