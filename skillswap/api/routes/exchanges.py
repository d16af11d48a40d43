"""
Skill exchange routes, including the milestone plan of each exchange.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.api.deps import get_current_user
from skillswap.core.database import get_db
from skillswap.models.user import User
from skillswap.schemas.exchange import (
    ExchangeRatingRequest,
    ExchangeRole,
    ExchangeStatus,
    ExchangeStatusUpdate,
    SkillExchangeCreate,
    SkillExchangeResponse,
)
from skillswap.schemas.progress import (
    MilestoneUpdate,
    ProgressNotesUpdate,
    SkillProgressCreate,
    SkillProgressResponse,
)
from skillswap.services.exchange_service import SkillExchangeService
from skillswap.services.progress_service import SkillProgressService

router = APIRouter(prefix="/exchanges", tags=["exchanges"])

exchange_service = SkillExchangeService()
progress_service = SkillProgressService()


@router.get("", response_model=List[SkillExchangeResponse])
async def list_exchanges(
    role: ExchangeRole = Query("both"),
    status_filter: Optional[ExchangeStatus] = Query(None, alias="status"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """The caller's exchanges, most recently started first."""
    return await exchange_service.get_user_skill_exchanges(
        db, current_user.id, role=role, status=status_filter
    )


@router.post("", response_model=SkillExchangeResponse, status_code=status.HTTP_201_CREATED)
async def create_exchange(
    body: SkillExchangeCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Start a pending exchange with a connection."""
    return await exchange_service.create_skill_exchange(
        db,
        current_user.id,
        teacher_id=body.teacher_id,
        student_id=body.student_id,
        skill_id=body.skill_id,
    )


@router.get("/{exchange_id}", response_model=SkillExchangeResponse)
async def get_exchange(
    exchange_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await exchange_service.get_skill_exchange(db, current_user.id, exchange_id)


@router.patch("/{exchange_id}/status", response_model=SkillExchangeResponse)
async def update_exchange_status(
    exchange_id: UUID,
    body: ExchangeStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Move the exchange to its next status."""
    return await exchange_service.update_skill_exchange_status(
        db, current_user.id, exchange_id, body.status
    )


@router.post("/{exchange_id}/rating", response_model=SkillExchangeResponse)
async def rate_exchange(
    exchange_id: UUID,
    body: ExchangeRatingRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Rate a completed exchange (student only, once)."""
    return await exchange_service.rate_skill_exchange(
        db, current_user.id, exchange_id, body.rating, body.feedback
    )


# ── Progress ────────────────────────────────────────────────────────────────

@router.post(
    "/{exchange_id}/progress",
    response_model=SkillProgressResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_progress(
    exchange_id: UUID,
    body: SkillProgressCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await progress_service.create_skill_progress(
        db, current_user.id, exchange_id, body.milestones
    )


@router.get("/{exchange_id}/progress", response_model=SkillProgressResponse)
async def get_progress(
    exchange_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await progress_service.get_skill_progress(db, current_user.id, exchange_id)


@router.patch(
    "/{exchange_id}/progress/milestones/{milestone_id}",
    response_model=SkillProgressResponse,
)
async def set_milestone(
    exchange_id: UUID,
    milestone_id: str,
    body: MilestoneUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Tick or untick one milestone."""
    return await progress_service.set_milestone(
        db, current_user.id, exchange_id, milestone_id, body.completed
    )


@router.put("/{exchange_id}/progress/notes", response_model=SkillProgressResponse)
async def update_progress_notes(
    exchange_id: UUID,
    body: ProgressNotesUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await progress_service.update_progress_notes(
        db, current_user.id, exchange_id, body.notes
    )
