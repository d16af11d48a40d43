"""
User schemas.
"""
from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import EmailStr, Field
from skillswap.schemas.base import BaseSchema, IDSchema
from skillswap.schemas.connection import ConnectionRequestResponse
from skillswap.schemas.skill import SkillResponse


class UserSummary(IDSchema):
    """Public view of a user, as seen by other members and in discovery."""

    display_name: str
    bio: Optional[str] = None
    photo_url: Optional[str] = None
    skills: List[SkillResponse] = []
    desired_skills: List[SkillResponse] = []
    rating: float = Field(0.0, ge=0, le=5)
    last_active_at: Optional[datetime] = None


class UserProfile(UserSummary):
    """Full profile of the authenticated user."""

    email: EmailStr
    connections: List[UUID] = []
    connection_requests: List[ConnectionRequestResponse] = []
    created_at: Optional[datetime] = None


class UserUpdate(BaseSchema):
    """Profile update body. Omitted fields stay unchanged."""

    display_name: Optional[str] = Field(None, min_length=1, max_length=100)
    bio: Optional[str] = Field(None, max_length=2000)
    photo_url: Optional[str] = None
