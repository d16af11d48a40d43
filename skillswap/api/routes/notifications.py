"""
Notification routes.
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.api.deps import get_current_user
from skillswap.core.database import get_db
from skillswap.models.user import User
from skillswap.schemas.base import MessageResponse, PaginatedResponse
from skillswap.schemas.notification import NotificationResponse, UnreadCountResponse
from skillswap.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])

notification_service = NotificationService()


@router.get("", response_model=PaginatedResponse[NotificationResponse])
async def list_notifications(
    is_read: Optional[bool] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the caller's notifications, newest first."""
    return await notification_service.list_notifications(
        db, current_user.id, is_read=is_read, page=page, limit=limit
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return UnreadCountResponse(unread=await notification_service.unread_count(db, current_user.id))


@router.post("/read-all", response_model=MessageResponse)
async def mark_all_read(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    updated = await notification_service.mark_all_read(db, current_user.id)
    return MessageResponse(message=f"Marked {updated} notifications as read")


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await notification_service.mark_read(db, current_user.id, notification_id)
