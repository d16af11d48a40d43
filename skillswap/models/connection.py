"""
Connection models - accepted connections and the requests that lead to them.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from skillswap.models.base import BaseModel, UTCDateTime

REQUEST_PENDING = "pending"
REQUEST_ACCEPTED = "accepted"
REQUEST_REJECTED = "rejected"


class UserConnection(BaseModel):
    """
    One direction of an accepted connection.

    An accepted request writes two rows (A->B and B->A). The unique
    constraint makes the per-user connection list a set.
    """

    __tablename__ = "user_connections"

    __table_args__ = (
        UniqueConstraint("user_id", "connected_user_id", name="uq_user_connection"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    connected_user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<UserConnection {self.user_id} -> {self.connected_user_id}>"


class ConnectionRequest(BaseModel):
    """
    Connection request entity.

    Status machine: pending -> accepted | rejected. Both outcomes are terminal.
    """

    __tablename__ = "connection_requests"

    from_user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    to_user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        default=REQUEST_PENDING,
        nullable=False,
        index=True,
    )
    message: Mapped[str] = mapped_column(Text, default="", nullable=False)

    # What each side intends to learn from the other
    requester_will_learn: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    recipient_will_learn: Mapped[str] = mapped_column(String(255), default="", nullable=False)

    responded_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)

    def __repr__(self) -> str:
        return f"<ConnectionRequest {self.from_user_id} -> {self.to_user_id} ({self.status})>"
