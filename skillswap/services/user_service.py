"""
User service - profile assembly and profile updates.

A profile is spread over several tables (user row, skills, connections,
incoming requests); this service stitches them into UserProfile and
UserSummary snapshots. Routes never touch the repositories directly.
"""
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.core.exceptions import UserNotFoundException
from skillswap.core.logging import get_logger
from skillswap.models.user import User
from skillswap.models.user_skill import SKILL_KIND_TEACHING, UserSkill
from skillswap.repositories.connection_repository import ConnectionRequestRepository
from skillswap.repositories.skill_repository import SkillRepository
from skillswap.repositories.user_repository import UserRepository
from skillswap.schemas.connection import ConnectionRequestResponse
from skillswap.schemas.skill import SkillResponse
from skillswap.schemas.user import UserProfile, UserSummary

logger = get_logger(__name__)


def _split_skills(skills: List[UserSkill]) -> tuple[List[SkillResponse], List[SkillResponse]]:
    owned, desired = [], []
    for skill in skills:
        target = owned if skill.kind == SKILL_KIND_TEACHING else desired
        target.append(SkillResponse.model_validate(skill))
    return owned, desired


class UserService:
    """Handles user profile operations."""

    def __init__(self):
        self.user_repo = UserRepository()
        self.skill_repo = SkillRepository()
        self.request_repo = ConnectionRequestRepository()

    async def get_active_user(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> User:
        """
        Raises:
            UserNotFoundException: Unknown or deactivated user.
        """
        user = await self.user_repo.get_active_by_id(db, user_id)
        if not user:
            raise UserNotFoundException()
        return user

    async def get_profile(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> UserProfile:
        """Full profile: skills, connection set and incoming requests."""
        user = await self.get_active_user(db, user_id)

        skills = await self.skill_repo.list_for_user(db, user.id)
        owned, desired = _split_skills(skills)
        connections = await self.user_repo.get_connection_ids(db, user.id)
        requests = await self.request_repo.list_incoming(db, user.id)

        return UserProfile(
            id=user.id,
            email=user.email,
            display_name=user.display_name,
            bio=user.bio,
            photo_url=user.photo_url,
            skills=owned,
            desired_skills=desired,
            rating=user.rating,
            last_active_at=user.last_active_at,
            connections=connections,
            connection_requests=[ConnectionRequestResponse.from_model(r) for r in requests],
            created_at=user.created_at,
        )

    async def get_user_summary(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> UserSummary:
        user = await self.get_active_user(db, user_id)
        summaries = await self.build_summaries(db, [user])
        return summaries[0]

    async def build_summaries(
        self,
        db: AsyncSession,
        users: List[User],
    ) -> List[UserSummary]:
        """Public snapshots for several users, in the order given. Two queries total."""
        skills_by_user = await self.skill_repo.list_for_users(db, [u.id for u in users])

        summaries = []
        for user in users:
            owned, desired = _split_skills(skills_by_user.get(user.id, []))
            summaries.append(
                UserSummary(
                    id=user.id,
                    display_name=user.display_name,
                    bio=user.bio,
                    photo_url=user.photo_url,
                    skills=owned,
                    desired_skills=desired,
                    rating=user.rating,
                    last_active_at=user.last_active_at,
                )
            )
        return summaries

    async def list_connections(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> List[UserSummary]:
        """Summaries of the users ``user_id`` is connected to."""
        connection_ids = await self.user_repo.get_connection_ids(db, user_id)
        users = await self.user_repo.get_active_by_ids(db, connection_ids)
        return await self.build_summaries(db, users)

    async def update_profile(
        self,
        db: AsyncSession,
        user_id: UUID,
        *,
        display_name: Optional[str] = None,
        bio: Optional[str] = None,
        photo_url: Optional[str] = None,
    ) -> UserProfile:
        """Update profile fields. None leaves a field unchanged."""
        user = await self.get_active_user(db, user_id)

        updates = {}
        if display_name is not None:
            updates["display_name"] = display_name.strip()
        if bio is not None:
            updates["bio"] = bio
        if photo_url is not None:
            updates["photo_url"] = photo_url

        if updates:
            await self.user_repo.update(db, user, **updates)
            await db.commit()
            logger.info("profile_updated", user_id=str(user_id), fields=sorted(updates))

        return await self.get_profile(db, user_id)

    async def touch_last_active(
        self,
        db: AsyncSession,
        user: User,
    ) -> None:
        user.last_active_at = datetime.now(timezone.utc)
        await db.commit()
