"""
Learning session schemas.
"""
from datetime import datetime
from typing import Literal, Optional
from uuid import UUID
from pydantic import Field
from skillswap.schemas.base import BaseSchema, IDSchema

SessionStatus = Literal["pending", "accepted", "rejected", "completed"]


class SessionCreate(BaseSchema):
    """Body for inviting a connection to a session."""

    recipient_id: UUID
    skill_id: UUID
    scheduled_time: Optional[datetime] = None
    notes: str = Field("", max_length=2000)


class SessionRespond(BaseSchema):
    accept: bool


class SessionResponse(IDSchema):
    initiator_id: UUID
    recipient_id: UUID
    skill_id: UUID
    status: SessionStatus
    scheduled_time: Optional[datetime] = None
    completed_time: Optional[datetime] = None
    notes: str = ""
    created_at: datetime


class UpcomingSession(BaseSchema):
    """Upcoming session from the point of view of one participant."""

    id: UUID
    date: datetime
    skill_id: UUID
    partner_id: UUID
    role: Literal["teacher", "student"]
    status: SessionStatus
