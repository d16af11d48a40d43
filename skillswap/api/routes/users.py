"""
User routes.

Thin controllers - all business logic lives in UserService / SkillService.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.api.deps import get_current_user
from skillswap.core.database import get_db
from skillswap.models.user import User
from skillswap.models.user_skill import SKILL_KIND_LEARNING, SKILL_KIND_TEACHING
from skillswap.schemas.notification import ActivityResponse
from skillswap.schemas.skill import SkillCreate, SkillResponse, SkillUpdate
from skillswap.schemas.user import UserProfile, UserSummary, UserUpdate
from skillswap.services.notification_service import ActivityService
from skillswap.services.skill_service import SkillService
from skillswap.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])

user_service = UserService()
skill_service = SkillService()
activity_service = ActivityService()


@router.get("/me", response_model=UserProfile)
async def get_current_user_profile(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get current user's full profile."""
    return await user_service.get_profile(db, current_user.id)


@router.patch("/me", response_model=UserProfile)
async def update_current_user(
    body: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update current user's profile."""
    return await user_service.update_profile(
        db,
        current_user.id,
        display_name=body.display_name,
        bio=body.bio,
        photo_url=body.photo_url,
    )


@router.get("/me/activities", response_model=List[ActivityResponse])
async def list_my_activities(
    limit: Optional[int] = Query(None, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Most recent entries of the current user's activity feed."""
    return await activity_service.recent(db, current_user.id, limit)


# ── Skills I can teach ──────────────────────────────────────────────────────

@router.get("/me/skills", response_model=List[SkillResponse])
async def list_my_skills(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await skill_service.list_skills(db, current_user.id, SKILL_KIND_TEACHING)


@router.post("/me/skills", response_model=SkillResponse, status_code=status.HTTP_201_CREATED)
async def add_my_skill(
    body: SkillCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Add a skill the current user can teach."""
    return await skill_service.add_skill(db, current_user.id, SKILL_KIND_TEACHING, body)


@router.patch("/me/skills/{skill_id}", response_model=SkillResponse)
async def update_my_skill(
    skill_id: UUID,
    body: SkillUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await skill_service.update_skill(db, current_user.id, SKILL_KIND_TEACHING, skill_id, body)


@router.delete("/me/skills/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_my_skill(
    skill_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await skill_service.remove_skill(db, current_user.id, SKILL_KIND_TEACHING, skill_id)


# ── Skills I want to learn ──────────────────────────────────────────────────

@router.get("/me/desired-skills", response_model=List[SkillResponse])
async def list_my_desired_skills(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await skill_service.list_skills(db, current_user.id, SKILL_KIND_LEARNING)


@router.post("/me/desired-skills", response_model=SkillResponse, status_code=status.HTTP_201_CREATED)
async def add_my_desired_skill(
    body: SkillCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Add a skill the current user wants to learn."""
    return await skill_service.add_skill(db, current_user.id, SKILL_KIND_LEARNING, body)


@router.patch("/me/desired-skills/{skill_id}", response_model=SkillResponse)
async def update_my_desired_skill(
    skill_id: UUID,
    body: SkillUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await skill_service.update_skill(db, current_user.id, SKILL_KIND_LEARNING, skill_id, body)


@router.delete("/me/desired-skills/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_my_desired_skill(
    skill_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await skill_service.remove_skill(db, current_user.id, SKILL_KIND_LEARNING, skill_id)


@router.get("/{user_id}", response_model=UserSummary)
async def get_user(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Public profile of another member."""
    return await user_service.get_user_summary(db, user_id)
