"""
Chat schemas.
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import Field
from skillswap.schemas.base import BaseSchema, IDSchema


class ChatCreate(BaseSchema):
    """Body for creating a chat. The creator is always added."""

    participants: List[UUID] = Field(..., min_length=1)
    title: Optional[str] = Field(None, max_length=255)
    skill_exchange_id: Optional[UUID] = None


class MessageCreate(BaseSchema):
    content: str = Field(..., min_length=1, max_length=5000)
    attachments: List[str] = Field(default_factory=list, max_length=10)


class LastMessage(BaseSchema):
    id: UUID
    sender_id: UUID
    content: str
    timestamp: datetime


class ChatResponse(IDSchema):
    participants: List[UUID]
    title: Optional[str] = None
    skill_exchange_id: Optional[UUID] = None
    last_message: Optional[LastMessage] = None
    created_at: datetime
    updated_at: datetime


class ChatMessageResponse(IDSchema):
    chat_id: UUID
    sender_id: UUID
    content: str
    attachments: List[str] = []
    is_read: bool
    created_at: datetime
