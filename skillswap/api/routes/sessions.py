"""
Learning session routes.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.api.deps import get_current_user
from skillswap.core.database import get_db
from skillswap.models.user import User
from skillswap.schemas.session import (
    SessionCreate,
    SessionRespond,
    SessionResponse,
    UpcomingSession,
)
from skillswap.services.session_service import LearningSessionService

router = APIRouter(prefix="/sessions", tags=["sessions"])

session_service = LearningSessionService()


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def initiate_session(
    body: SessionCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Invite a connection to a learning session."""
    return await session_service.initiate_session(
        db,
        current_user.id,
        body.recipient_id,
        body.skill_id,
        scheduled_time=body.scheduled_time,
        notes=body.notes,
    )


@router.get("/upcoming", response_model=List[UpcomingSession])
async def upcoming_sessions(
    limit: Optional[int] = Query(None, ge=1, le=50),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await session_service.get_upcoming_sessions(db, current_user.id, limit)


@router.post("/{session_id}/respond", response_model=SessionResponse)
async def respond_to_session(
    session_id: UUID,
    body: SessionRespond,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await session_service.respond_to_session(db, current_user.id, session_id, body.accept)


@router.post("/{session_id}/complete", response_model=SessionResponse)
async def complete_session(
    session_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await session_service.complete_session(db, current_user.id, session_id)
