"""
Skill progress schemas.
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import Field
from skillswap.schemas.base import BaseSchema, IDSchema


class Milestone(BaseSchema):
    """One milestone of a learning plan."""

    id: str
    title: str
    completed: bool = False
    completed_at: Optional[datetime] = None


class SkillProgressCreate(BaseSchema):
    """Body for creating a milestone plan for an exchange."""

    milestones: List[str] = Field(..., min_length=1, max_length=50)


class MilestoneUpdate(BaseSchema):
    completed: bool


class ProgressNotesUpdate(BaseSchema):
    notes: str = Field(..., max_length=5000)


class SkillProgressResponse(IDSchema):
    skill_exchange_id: UUID
    progress_percentage: int
    milestones: List[Milestone]
    notes: str = ""
    updated_at: datetime
