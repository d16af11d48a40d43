"""
Chat models - conversations, their participants and messages.
"""
import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import Boolean, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from skillswap.models.base import BaseModel, JSONType, UTCDateTime


class Chat(BaseModel):
    """
    Chat entity.

    The last message is denormalised onto the chat so chat lists need no
    extra query.
    """

    __tablename__ = "chats"

    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    skill_exchange_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("skill_exchanges.id"),
        nullable=True,
        index=True,
    )

    last_message_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(as_uuid=True), nullable=True)
    last_message_sender_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(as_uuid=True), nullable=True)
    last_message_content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    last_message_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)

    def __repr__(self) -> str:
        return f"<Chat {self.id} {self.title or ''}>"


class ChatParticipant(BaseModel):
    """Membership of a user in a chat."""

    __tablename__ = "chat_participants"

    __table_args__ = (
        UniqueConstraint("chat_id", "user_id", name="uq_chat_participant"),
    )

    chat_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("chats.id"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )


class Message(BaseModel):
    """Chat message entity. attachments holds URLs only."""

    __tablename__ = "messages"

    chat_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("chats.id"),
        nullable=False,
        index=True,
    )
    sender_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    attachments: Mapped[List[str]] = mapped_column(JSONType, default=list)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False)

    def __repr__(self) -> str:
        return f"<Message {self.id} in chat_id={self.chat_id}>"
