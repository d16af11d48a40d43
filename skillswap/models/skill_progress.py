"""
SkillProgress model - milestone checklist attached to a skill exchange.
"""
import uuid
from typing import List

from sqlalchemy import ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from skillswap.models.base import BaseModel, JSONType


class SkillProgress(BaseModel):
    """
    Skill progress entity.

    milestones is a JSON list of
    ``{"id": "milestone-<n>", "title": str, "completed": bool, "completed_at": iso|None}``.
    Always assign a new list when changing it; in-place edits are not tracked.
    """

    __tablename__ = "skill_progress"

    skill_exchange_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("skill_exchanges.id"),
        nullable=False,
        unique=True,
    )
    progress_percentage: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    milestones: Mapped[List[dict]] = mapped_column(JSONType, default=list)
    notes: Mapped[str] = mapped_column(Text, default="", nullable=False)

    def __repr__(self) -> str:
        return f"<SkillProgress exchange={self.skill_exchange_id} {self.progress_percentage}%>"
