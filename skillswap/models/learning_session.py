"""
LearningSession model - a single scheduled teaching session between connected users.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from skillswap.models.base import BaseModel, UTCDateTime

SESSION_PENDING = "pending"
SESSION_ACCEPTED = "accepted"
SESSION_REJECTED = "rejected"
SESSION_COMPLETED = "completed"


class LearningSession(BaseModel):
    """Learning session entity. The initiator teaches, the recipient learns."""

    __tablename__ = "learning_sessions"

    initiator_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    recipient_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    skill_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        default=SESSION_PENDING,
        nullable=False,
        index=True,
    )  # 'pending', 'accepted', 'rejected', 'completed'
    scheduled_time: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True, index=True)
    completed_time: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)
    notes: Mapped[str] = mapped_column(Text, default="", nullable=False)

    def __repr__(self) -> str:
        return f"<LearningSession {self.initiator_id} -> {self.recipient_id} ({self.status})>"
