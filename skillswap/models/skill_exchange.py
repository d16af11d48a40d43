"""
SkillExchange model - a teacher/student arrangement around one skill.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Float, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from skillswap.models.base import BaseModel, UTCDateTime, utcnow

EXCHANGE_PENDING = "pending"
EXCHANGE_IN_PROGRESS = "in_progress"
EXCHANGE_COMPLETED = "completed"
EXCHANGE_CANCELLED = "cancelled"

# current status -> statuses it may move to
EXCHANGE_TRANSITIONS = {
    EXCHANGE_PENDING: {EXCHANGE_IN_PROGRESS, EXCHANGE_CANCELLED},
    EXCHANGE_IN_PROGRESS: {EXCHANGE_COMPLETED, EXCHANGE_CANCELLED},
    EXCHANGE_COMPLETED: set(),
    EXCHANGE_CANCELLED: set(),
}


class SkillExchange(BaseModel):
    """
    Skill exchange entity.

    start_date is stamped at creation and refreshed when teaching starts;
    end_date is stamped on completion. rating/feedback are written once by
    the student after completion.
    """

    __tablename__ = "skill_exchanges"

    teacher_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    student_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    # No FK: the teacher may later delete the skill, the exchange history stays
    skill_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        default=EXCHANGE_PENDING,
        nullable=False,
        index=True,
    )
    start_date: Mapped[datetime] = mapped_column(UTCDateTime(), default=utcnow, nullable=False)
    end_date: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)

    # Student feedback
    rating: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    feedback: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rated_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)

    def __repr__(self) -> str:
        return f"<SkillExchange {self.teacher_id} teaches {self.student_id} ({self.status})>"
