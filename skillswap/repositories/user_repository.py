"""
User repository - data access for User and UserConnection entities.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.models.connection import UserConnection
from skillswap.models.user import User
from skillswap.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self):
        super().__init__(User)

    async def get_active_by_email(
        self,
        db: AsyncSession,
        email: str,
    ) -> Optional[User]:
        """Find an active user by email."""
        result = await db.execute(
            select(User).where(
                User.email == email,
                User.is_active == True,
            )
        )
        return result.scalar_one_or_none()

    async def get_active_by_id(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> Optional[User]:
        """Find an active user by ID."""
        result = await db.execute(
            select(User).where(
                User.id == user_id,
                User.is_active == True,
            )
        )
        return result.scalar_one_or_none()

    async def get_active_by_ids(
        self,
        db: AsyncSession,
        user_ids: List[UUID],
    ) -> List[User]:
        """Fetch several active users, in registration order."""
        if not user_ids:
            return []
        result = await db.execute(
            select(User)
            .where(User.id.in_(user_ids), User.is_active == True)
            .order_by(User.created_at)
        )
        return list(result.scalars().all())

    async def list_active_except(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> List[User]:
        """Every active user other than ``user_id``, in registration order."""
        result = await db.execute(
            select(User)
            .where(User.id != user_id, User.is_active == True)
            .order_by(User.created_at)
        )
        return list(result.scalars().all())

    async def email_exists(
        self,
        db: AsyncSession,
        email: str,
    ) -> bool:
        """Check if an email is already registered."""
        result = await db.execute(
            select(User.id).where(User.email == email)
        )
        return result.scalar_one_or_none() is not None

    # ── Connections ──────────────────────────────────────────────────────────

    async def get_connection_ids(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> List[UUID]:
        """Ids of the users ``user_id`` is connected to, oldest connection first."""
        result = await db.execute(
            select(UserConnection.connected_user_id)
            .where(UserConnection.user_id == user_id)
            .order_by(UserConnection.created_at)
        )
        return list(result.scalars().all())

    async def is_connected(
        self,
        db: AsyncSession,
        user_id: UUID,
        other_user_id: UUID,
    ) -> bool:
        result = await db.execute(
            select(UserConnection.id).where(
                UserConnection.user_id == user_id,
                UserConnection.connected_user_id == other_user_id,
            )
        )
        return result.scalar_one_or_none() is not None

    async def add_connection(
        self,
        db: AsyncSession,
        user_id: UUID,
        other_user_id: UUID,
    ) -> bool:
        """
        Add ``other_user_id`` to the connection set of ``user_id``.

        Set union: adding an id that is already present is a no-op.
        Returns True if a row was written.
        """
        if await self.is_connected(db, user_id, other_user_id):
            return False
        db.add(UserConnection(user_id=user_id, connected_user_id=other_user_id))
        await db.flush()
        return True
