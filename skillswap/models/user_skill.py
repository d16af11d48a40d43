"""
UserSkill model - a skill a user can teach or wants to learn.
"""
import uuid
from typing import List

from sqlalchemy import ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from skillswap.models.base import BaseModel, JSONType

SKILL_KIND_TEACHING = "teaching"
SKILL_KIND_LEARNING = "learning"


class UserSkill(BaseModel):
    """
    User skill entity.

    ``kind`` separates the two collections of a profile: skills the user
    owns (teaching) and skills the user desires (learning).
    """

    __tablename__ = "user_skills"

    __table_args__ = (
        Index("ix_user_skills_user_kind", "user_id", "kind"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
    )
    kind: Mapped[str] = mapped_column(String(10), nullable=False)  # 'teaching', 'learning'

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    category: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="other",
    )  # 'technical', 'soft', 'language', 'artistic', 'business', 'other'
    level: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="Beginner",
    )  # 'Beginner', 'Intermediate', 'Expert'
    tags: Mapped[List[str]] = mapped_column(JSONType, default=list)

    def __repr__(self) -> str:
        return f"<UserSkill {self.name} ({self.kind}) for user_id={self.user_id}>"
