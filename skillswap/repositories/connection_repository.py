"""
Connection request repository - data access for ConnectionRequest entity.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.models.connection import ConnectionRequest, REQUEST_PENDING
from skillswap.repositories.base import BaseRepository


class ConnectionRequestRepository(BaseRepository[ConnectionRequest]):
    def __init__(self):
        super().__init__(ConnectionRequest)

    async def get_for_recipient(
        self,
        db: AsyncSession,
        request_id: UUID,
        recipient_id: UUID,
    ) -> Optional[ConnectionRequest]:
        """Fetch a request only if it is addressed to ``recipient_id``."""
        result = await db.execute(
            select(ConnectionRequest).where(
                ConnectionRequest.id == request_id,
                ConnectionRequest.to_user_id == recipient_id,
            )
        )
        return result.scalar_one_or_none()

    async def find_pending(
        self,
        db: AsyncSession,
        from_user_id: UUID,
        to_user_id: UUID,
    ) -> Optional[ConnectionRequest]:
        """The still-pending request from one user to another, if any."""
        result = await db.execute(
            select(ConnectionRequest)
            .where(
                ConnectionRequest.from_user_id == from_user_id,
                ConnectionRequest.to_user_id == to_user_id,
                ConnectionRequest.status == REQUEST_PENDING,
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_incoming(
        self,
        db: AsyncSession,
        user_id: UUID,
        *,
        status: Optional[str] = None,
    ) -> List[ConnectionRequest]:
        """Requests addressed to ``user_id``, oldest first."""
        query = select(ConnectionRequest).where(ConnectionRequest.to_user_id == user_id)
        if status is not None:
            query = query.where(ConnectionRequest.status == status)
        result = await db.execute(query.order_by(ConnectionRequest.created_at))
        return list(result.scalars().all())

    async def list_outgoing(
        self,
        db: AsyncSession,
        user_id: UUID,
        *,
        status: Optional[str] = None,
    ) -> List[ConnectionRequest]:
        """Requests sent by ``user_id``, newest first."""
        query = select(ConnectionRequest).where(ConnectionRequest.from_user_id == user_id)
        if status is not None:
            query = query.where(ConnectionRequest.status == status)
        result = await db.execute(query.order_by(ConnectionRequest.created_at.desc()))
        return list(result.scalars().all())
