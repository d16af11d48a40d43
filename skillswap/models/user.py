"""
User model - a member of the skill exchange.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from skillswap.models.base import BaseModel, UTCDateTime


class User(BaseModel):
    """
    User entity.

    Owned and desired skills live in ``user_skills``; accepted connections in
    ``user_connections``; incoming requests in ``connection_requests``.
    """

    __tablename__ = "users"

    # Authentication
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Profile
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    photo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Mean rating received as a teacher, 0.0 until first rating
    rating: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

    # Status
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)

    # Activity tracking
    last_active_at: Mapped[Optional[datetime]] = mapped_column(
        UTCDateTime(),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<User {self.email}>"
