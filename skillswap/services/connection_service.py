"""
Connection service - the connection request lifecycle.

    pending --accept--> accepted   (both users gain each other as connections)
    pending --reject--> rejected

Both outcomes are terminal. Answering a request is a single transaction:
the status change, both connection rows, activities and the notification
commit together or not at all.
"""
from datetime import datetime, timezone
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.core.exceptions import (
    AlreadyConnectedException,
    ConflictException,
    ConnectionRequestNotFoundException,
    SelfConnectionException,
    UserNotFoundException,
)
from skillswap.core.logging import get_logger
from skillswap.models.connection import (
    REQUEST_ACCEPTED,
    REQUEST_PENDING,
    REQUEST_REJECTED,
)
from skillswap.repositories.connection_repository import ConnectionRequestRepository
from skillswap.repositories.user_repository import UserRepository
from skillswap.schemas.connection import ConnectionRequestResponse
from skillswap.services.notification_service import ActivityService, NotificationService

logger = get_logger(__name__)


class ConnectionService:
    """Sends, answers and lists connection requests."""

    def __init__(self):
        self.user_repo = UserRepository()
        self.request_repo = ConnectionRequestRepository()
        self.notification_service = NotificationService()
        self.activity_service = ActivityService()

    async def send_connection_request(
        self,
        db: AsyncSession,
        from_user_id: UUID,
        to_user_id: UUID,
        *,
        message: Optional[str] = None,
        i_will_learn: Optional[str] = None,
        they_will_learn: Optional[str] = None,
    ) -> ConnectionRequestResponse:
        """
        Send a connection request and notify the recipient.

        Sending again while an earlier request to the same user is still
        pending returns that request unchanged.
        """
        request, _ = await self.open_connection_request(
            db,
            from_user_id,
            to_user_id,
            message=message,
            i_will_learn=i_will_learn,
            they_will_learn=they_will_learn,
        )
        return request

    async def open_connection_request(
        self,
        db: AsyncSession,
        from_user_id: UUID,
        to_user_id: UUID,
        *,
        message: Optional[str] = None,
        i_will_learn: Optional[str] = None,
        they_will_learn: Optional[str] = None,
    ) -> Tuple[ConnectionRequestResponse, bool]:
        """
        Like send_connection_request, also telling whether a new request
        was created (False when a pending one was reused).

        Raises:
            SelfConnectionException: from_user_id == to_user_id.
            UserNotFoundException: Sender or recipient does not exist.
            AlreadyConnectedException: The users are connected already.
        """
        if from_user_id == to_user_id:
            raise SelfConnectionException()

        sender = await self.user_repo.get_active_by_id(db, from_user_id)
        recipient = await self.user_repo.get_active_by_id(db, to_user_id)
        if not sender or not recipient:
            raise UserNotFoundException()

        if await self.user_repo.is_connected(db, from_user_id, to_user_id):
            raise AlreadyConnectedException()

        existing = await self.request_repo.find_pending(db, from_user_id, to_user_id)
        if existing:
            return ConnectionRequestResponse.from_model(existing), False

        request = await self.request_repo.create(
            db,
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            status=REQUEST_PENDING,
            message=message or "",
            requester_will_learn=i_will_learn or "",
            recipient_will_learn=they_will_learn or "",
        )

        await self.notification_service.notify(
            db,
            to_user_id,
            "connection_request",
            f"{sender.display_name} sent you a connection request",
            related_id=request.id,
        )
        await db.commit()

        logger.info(
            "connection_request_sent",
            request_id=str(request.id),
            from_user_id=str(from_user_id),
            to_user_id=str(to_user_id),
        )
        return ConnectionRequestResponse.from_model(request), True

    async def respond_to_connection_request(
        self,
        db: AsyncSession,
        user_id: UUID,
        request_id: UUID,
        accept: bool,
    ) -> ConnectionRequestResponse:
        """
        Accept or reject a request addressed to ``user_id``.

        Raises:
            ConnectionRequestNotFoundException: Unknown id or not addressed to the user.
            ConflictException: The request has already been answered.
        """
        request = await self.request_repo.get_for_recipient(db, request_id, user_id)
        if not request:
            raise ConnectionRequestNotFoundException()

        new_status = REQUEST_ACCEPTED if accept else REQUEST_REJECTED
        swapped = await self.request_repo.conditional_update(
            db,
            request.id,
            expected={"status": REQUEST_PENDING},
            values={"status": new_status, "responded_at": datetime.now(timezone.utc)},
        )
        if not swapped:
            await db.rollback()
            raise ConflictException(
                message="Connection request has already been answered",
                code="REQUEST_ALREADY_ANSWERED",
            )

        recipient = await self.user_repo.get_by_id(db, user_id)

        if accept:
            await self.user_repo.add_connection(db, request.from_user_id, request.to_user_id)
            await self.user_repo.add_connection(db, request.to_user_id, request.from_user_id)

            await self.activity_service.record(
                db,
                request.to_user_id,
                "connection_made",
                "You made a new connection",
                related_user_id=request.from_user_id,
            )
            await self.activity_service.record(
                db,
                request.from_user_id,
                "connection_made",
                f"You are now connected with {recipient.display_name}",
                related_user_id=request.to_user_id,
            )
            await self.notification_service.notify(
                db,
                request.from_user_id,
                "connection_accepted",
                f"{recipient.display_name} accepted your connection request",
                related_id=request.id,
            )
        else:
            await self.notification_service.notify(
                db,
                request.from_user_id,
                "connection_rejected",
                f"{recipient.display_name} declined your connection request",
                related_id=request.id,
            )

        await db.commit()
        await db.refresh(request)

        logger.info(
            "connection_request_answered",
            request_id=str(request.id),
            status=new_status,
        )
        return ConnectionRequestResponse.from_model(request)

    async def list_incoming_requests(
        self,
        db: AsyncSession,
        user_id: UUID,
        status: Optional[str] = None,
    ) -> List[ConnectionRequestResponse]:
        requests = await self.request_repo.list_incoming(db, user_id, status=status)
        return [ConnectionRequestResponse.from_model(r) for r in requests]

    async def list_outgoing_requests(
        self,
        db: AsyncSession,
        user_id: UUID,
        status: Optional[str] = None,
    ) -> List[ConnectionRequestResponse]:
        requests = await self.request_repo.list_outgoing(db, user_id, status=status)
        return [ConnectionRequestResponse.from_model(r) for r in requests]
