"""
Skill progress service - milestone checklists attached to skill exchanges.
"""
import math
from datetime import datetime, timezone
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.core.exceptions import (
    ConflictException,
    NotFoundException,
    ProgressNotFoundException,
)
from skillswap.core.logging import get_logger
from skillswap.models.skill_progress import SkillProgress
from skillswap.repositories.exchange_repository import SkillProgressRepository
from skillswap.schemas.progress import SkillProgressResponse
from skillswap.services.chat_service import ChatService
from skillswap.services.exchange_service import SkillExchangeService
from skillswap.services.notification_service import NotificationService

logger = get_logger(__name__)


def completion_percentage(milestones: List[dict]) -> int:
    """Share of completed milestones as a whole percent, halves rounded up."""
    if not milestones:
        return 0
    done = sum(1 for m in milestones if m.get("completed"))
    return math.floor(done / len(milestones) * 100 + 0.5)


def _to_response(progress: SkillProgress) -> SkillProgressResponse:
    return SkillProgressResponse.model_validate(progress)


class SkillProgressService:
    """Creates and updates the milestone plan of an exchange."""

    def __init__(self):
        self.progress_repo = SkillProgressRepository()
        self.exchange_service = SkillExchangeService()
        self.notification_service = NotificationService()
        self.chat_service = ChatService()

    async def create_skill_progress(
        self,
        db: AsyncSession,
        acting_user_id: UUID,
        exchange_id: UUID,
        milestone_titles: List[str],
    ) -> SkillProgressResponse:
        """
        Attach a milestone plan to an exchange. All milestones start incomplete.

        Raises:
            SkillExchangeNotFoundException: Unknown id or not a participant.
            ConflictException: The exchange already has a plan.
        """
        exchange = await self.exchange_service.get_for_participant(db, acting_user_id, exchange_id)

        if await self.progress_repo.get_by_exchange(db, exchange.id):
            raise ConflictException("Progress already exists for this exchange", code="PROGRESS_EXISTS")

        milestones = [
            {
                "id": f"milestone-{index}",
                "title": title.strip(),
                "completed": False,
                "completed_at": None,
            }
            for index, title in enumerate(milestone_titles)
        ]

        progress = await self.progress_repo.create(
            db,
            skill_exchange_id=exchange.id,
            progress_percentage=0,
            milestones=milestones,
            notes="",
        )
        await db.commit()

        logger.info("progress_created", exchange_id=str(exchange.id), milestones=len(milestones))
        return _to_response(progress)

    async def get_skill_progress(
        self,
        db: AsyncSession,
        acting_user_id: UUID,
        exchange_id: UUID,
    ) -> SkillProgressResponse:
        progress = await self._get_progress(db, acting_user_id, exchange_id)
        return _to_response(progress)

    async def set_milestone(
        self,
        db: AsyncSession,
        acting_user_id: UUID,
        exchange_id: UUID,
        milestone_id: str,
        completed: bool,
    ) -> SkillProgressResponse:
        """
        Mark one milestone done or not done and recompute the percentage.

        Both participants are notified; if the exchange has a chat, a
        progress message is posted there too.

        Raises:
            ProgressNotFoundException: No plan for this exchange.
            NotFoundException: Unknown milestone id.
        """
        exchange = await self.exchange_service.get_for_participant(db, acting_user_id, exchange_id)
        progress = await self.progress_repo.get_by_exchange(db, exchange.id)
        if not progress:
            raise ProgressNotFoundException()

        target = None
        milestones = []
        for milestone in progress.milestones:
            milestone = dict(milestone)
            if milestone["id"] == milestone_id:
                milestone["completed"] = completed
                milestone["completed_at"] = (
                    datetime.now(timezone.utc).isoformat() if completed else None
                )
                target = milestone
            milestones.append(milestone)

        if target is None:
            raise NotFoundException("Milestone not found", code="MILESTONE_NOT_FOUND")

        percentage = completion_percentage(milestones)
        progress = await self.progress_repo.update(
            db,
            progress,
            milestones=milestones,
            progress_percentage=percentage,
        )

        await self.notification_service.notify_many(
            db,
            [exchange.teacher_id, exchange.student_id],
            "skill_exchange",
            f"Skill progress has been updated to {percentage}%",
            related_id=exchange.id,
        )

        if percentage == 100:
            chat_message = "🎉 All milestones completed! Great job on finishing this skill exchange."
        elif completed:
            chat_message = f"✅ Milestone completed: {target['title']}"
        else:
            chat_message = f"↩️ Milestone marked as not completed: {target['title']}"
        await self.chat_service.post_to_exchange_chat(db, exchange.id, acting_user_id, chat_message)

        await db.commit()

        logger.info(
            "milestone_updated",
            exchange_id=str(exchange.id),
            milestone_id=milestone_id,
            completed=completed,
            progress=percentage,
        )
        return _to_response(progress)

    async def update_progress_notes(
        self,
        db: AsyncSession,
        acting_user_id: UUID,
        exchange_id: UUID,
        notes: str,
    ) -> SkillProgressResponse:
        progress = await self._get_progress(db, acting_user_id, exchange_id)
        progress = await self.progress_repo.update(db, progress, notes=notes)
        await db.commit()
        return _to_response(progress)

    async def _get_progress(
        self,
        db: AsyncSession,
        acting_user_id: UUID,
        exchange_id: UUID,
    ) -> SkillProgress:
        exchange = await self.exchange_service.get_for_participant(db, acting_user_id, exchange_id)
        progress = await self.progress_repo.get_by_exchange(db, exchange.id)
        if not progress:
            raise ProgressNotFoundException()
        return progress
