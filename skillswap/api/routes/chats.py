"""
Chat routes.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.api.deps import get_current_user
from skillswap.core.database import get_db
from skillswap.core.rate_limit import limiter, RATE_MESSAGE
from skillswap.models.user import User
from skillswap.schemas.base import MessageResponse
from skillswap.schemas.chat import (
    ChatCreate,
    ChatMessageResponse,
    ChatResponse,
    MessageCreate,
)
from skillswap.services.chat_service import ChatService

router = APIRouter(prefix="/chats", tags=["chats"])

chat_service = ChatService()


@router.get("", response_model=List[ChatResponse])
async def list_chats(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """The caller's chats, most recently active first."""
    return await chat_service.list_user_chats(db, current_user.id)


@router.post("", response_model=ChatResponse, status_code=status.HTTP_201_CREATED)
async def create_chat(
    body: ChatCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await chat_service.create_chat(
        db,
        current_user.id,
        body.participants,
        title=body.title,
        skill_exchange_id=body.skill_exchange_id,
    )


@router.post("/direct/{user_id}", response_model=ChatResponse)
async def get_or_create_direct_chat(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Open the one-to-one chat with a user, creating it on first use."""
    return await chat_service.get_or_create_direct_chat(db, current_user.id, user_id)


@router.get("/{chat_id}", response_model=ChatResponse)
async def get_chat(
    chat_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await chat_service.get_chat(db, chat_id, current_user.id)


@router.get("/{chat_id}/messages", response_model=List[ChatMessageResponse])
async def get_messages(
    chat_id: UUID,
    limit: Optional[int] = Query(None, ge=1, le=200),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Latest messages, oldest first."""
    return await chat_service.get_chat_messages(db, chat_id, current_user.id, limit)


@router.post(
    "/{chat_id}/messages",
    response_model=ChatMessageResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(RATE_MESSAGE)
async def send_message(
    request: Request,
    chat_id: UUID,
    body: MessageCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await chat_service.send_message(
        db, chat_id, current_user.id, body.content, body.attachments
    )


@router.post("/{chat_id}/read", response_model=MessageResponse)
async def mark_messages_read(
    chat_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    updated = await chat_service.mark_messages_read(db, chat_id, current_user.id)
    return MessageResponse(message=f"Marked {updated} messages as read")
