"""
Activity model - the user's recent-activity feed.
"""
import uuid
from typing import Optional

from sqlalchemy import ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from skillswap.models.base import BaseModel


class Activity(BaseModel):
    """Activity entity."""

    __tablename__ = "activities"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    type: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
    )  # 'skill_added', 'connection_made', 'session_initiated', 'session_completed', 'rating_received'
    description: Mapped[str] = mapped_column(Text, nullable=False)
    related_user_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(as_uuid=True), nullable=True)
    related_skill_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(as_uuid=True), nullable=True)

    def __repr__(self) -> str:
        return f"<Activity {self.type} for user_id={self.user_id}>"
