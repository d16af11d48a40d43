"""
Skill exchange schemas.

An exchange is returned as one of four variants discriminated on ``status``;
each variant only carries the fields that are meaningful in that state.
"""
from datetime import datetime
from typing import Annotated, Literal, Optional, Union
from uuid import UUID
from pydantic import Field
from skillswap.schemas.base import BaseSchema, IDSchema

ExchangeStatus = Literal["pending", "in_progress", "completed", "cancelled"]
ExchangeRole = Literal["teacher", "student", "both"]


class SkillExchangeCreate(BaseSchema):
    """Body for starting a skill exchange."""

    teacher_id: UUID
    student_id: UUID
    skill_id: UUID


class ExchangeStatusUpdate(BaseSchema):
    """Body for moving an exchange to a new status."""

    status: ExchangeStatus


class ExchangeRatingRequest(BaseSchema):
    """Body for the student's rating of a completed exchange."""

    rating: float = Field(..., ge=0, le=5)
    feedback: str = Field("", max_length=2000)


class _ExchangeBase(IDSchema):
    teacher_id: UUID
    student_id: UUID
    skill_id: UUID
    start_date: datetime
    created_at: datetime


class PendingExchange(_ExchangeBase):
    status: Literal["pending"]


class InProgressExchange(_ExchangeBase):
    status: Literal["in_progress"]


class CompletedExchange(_ExchangeBase):
    status: Literal["completed"]
    end_date: datetime
    rating: Optional[float] = None
    feedback: Optional[str] = None
    rated_at: Optional[datetime] = None


class CancelledExchange(_ExchangeBase):
    status: Literal["cancelled"]


SkillExchangeResponse = Annotated[
    Union[PendingExchange, InProgressExchange, CompletedExchange, CancelledExchange],
    Field(discriminator="status"),
]

_VARIANTS = {
    "pending": PendingExchange,
    "in_progress": InProgressExchange,
    "completed": CompletedExchange,
    "cancelled": CancelledExchange,
}


def exchange_to_response(exchange) -> SkillExchangeResponse:
    """Build the variant matching the exchange's current status."""
    return _VARIANTS[exchange.status].model_validate(exchange)
