"""
Connection request schemas.
"""
from datetime import datetime
from typing import Literal, Optional
from uuid import UUID
from pydantic import Field
from skillswap.schemas.base import BaseSchema, IDSchema

ConnectionStatus = Literal["pending", "accepted", "rejected"]


class ExchangeDetails(BaseSchema):
    """What each side of a request intends to learn."""

    requester_will_learn: str = ""
    recipient_will_learn: str = ""


class ConnectionRequestCreate(BaseSchema):
    """Body for sending a connection request."""

    to_user_id: UUID
    message: Optional[str] = Field(None, max_length=1000)
    i_will_learn: Optional[str] = Field(None, max_length=255)
    they_will_learn: Optional[str] = Field(None, max_length=255)


class ConnectionRequestRespond(BaseSchema):
    """Body for answering a connection request."""

    accept: bool


class ConnectionRequestResponse(IDSchema):
    """Connection request as returned by the API."""

    from_user_id: UUID
    to_user_id: UUID
    status: ConnectionStatus
    created_at: datetime
    message: str = ""
    exchange_details: ExchangeDetails
    responded_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, request) -> "ConnectionRequestResponse":
        return cls(
            id=request.id,
            from_user_id=request.from_user_id,
            to_user_id=request.to_user_id,
            status=request.status,
            created_at=request.created_at,
            message=request.message or "",
            exchange_details=ExchangeDetails(
                requester_will_learn=request.requester_will_learn or "",
                recipient_will_learn=request.recipient_will_learn or "",
            ),
            responded_at=request.responded_at,
        )
