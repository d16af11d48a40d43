"""
Learning session service - one-off scheduled sessions between connections.

    pending --accept--> accepted --complete--> completed
    pending --reject--> rejected
"""
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.core.config import settings
from skillswap.core.exceptions import (
    BadRequestException,
    InvalidTransitionException,
    NotConnectedException,
    SessionNotFoundException,
    UserNotFoundException,
)
from skillswap.core.logging import get_logger
from skillswap.models.learning_session import (
    LearningSession,
    SESSION_ACCEPTED,
    SESSION_COMPLETED,
    SESSION_PENDING,
    SESSION_REJECTED,
)
from skillswap.repositories.session_repository import LearningSessionRepository
from skillswap.repositories.skill_repository import SkillRepository
from skillswap.repositories.user_repository import UserRepository
from skillswap.schemas.session import SessionResponse, UpcomingSession
from skillswap.services.notification_service import ActivityService, NotificationService

logger = get_logger(__name__)


def _format_schedule(when: datetime) -> str:
    return when.strftime("%Y-%m-%d at %H:%M UTC")


class LearningSessionService:
    """Schedules, answers and completes learning sessions."""

    def __init__(self):
        self.session_repo = LearningSessionRepository()
        self.user_repo = UserRepository()
        self.skill_repo = SkillRepository()
        self.notification_service = NotificationService()
        self.activity_service = ActivityService()

    async def initiate_session(
        self,
        db: AsyncSession,
        initiator_id: UUID,
        recipient_id: UUID,
        skill_id: UUID,
        *,
        scheduled_time: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> SessionResponse:
        """
        Invite a connection to a session.

        Raises:
            BadRequestException: Inviting yourself.
            UserNotFoundException: Either user does not exist.
            NotConnectedException: The users are not connected.
        """
        if initiator_id == recipient_id:
            raise BadRequestException("You cannot start a session with yourself", code="SELF_SESSION")

        initiator = await self.user_repo.get_active_by_id(db, initiator_id)
        recipient = await self.user_repo.get_active_by_id(db, recipient_id)
        if not initiator or not recipient:
            raise UserNotFoundException()

        if not await self.user_repo.is_connected(db, initiator_id, recipient_id):
            raise NotConnectedException()

        if scheduled_time is not None and scheduled_time.tzinfo is None:
            scheduled_time = scheduled_time.replace(tzinfo=timezone.utc)

        session = await self.session_repo.create(
            db,
            initiator_id=initiator_id,
            recipient_id=recipient_id,
            skill_id=skill_id,
            status=SESSION_PENDING,
            scheduled_time=scheduled_time,
            notes=notes or "",
        )

        skill_name = await self.skill_repo.get_name(db, skill_id) or "a skill"
        invitation = f"{initiator.display_name} has invited you to a {skill_name} session"
        if scheduled_time is not None:
            invitation += f" on {_format_schedule(scheduled_time)}"

        await self.notification_service.notify(
            db, recipient_id, "session_request", invitation, related_id=session.id
        )
        await self.activity_service.record(
            db,
            initiator_id,
            "session_initiated",
            f"You initiated a {skill_name} session with {recipient.display_name}",
            related_user_id=recipient_id,
            related_skill_id=skill_id,
        )
        await db.commit()

        logger.info(
            "session_initiated",
            session_id=str(session.id),
            initiator_id=str(initiator_id),
            recipient_id=str(recipient_id),
        )
        return SessionResponse.model_validate(session)

    async def respond_to_session(
        self,
        db: AsyncSession,
        user_id: UUID,
        session_id: UUID,
        accept: bool,
    ) -> SessionResponse:
        """
        Accept or reject an invitation addressed to ``user_id``.

        Raises:
            SessionNotFoundException: Unknown id or the user is not the recipient.
            InvalidTransitionException: The session is no longer pending.
        """
        session = await self.session_repo.get_by_id(db, session_id)
        if not session or session.recipient_id != user_id:
            raise SessionNotFoundException()

        new_status = SESSION_ACCEPTED if accept else SESSION_REJECTED
        await self._swap_status(db, session, SESSION_PENDING, new_status)

        recipient = await self.user_repo.get_by_id(db, user_id)
        verb = "accepted" if accept else "declined"
        await self.notification_service.notify(
            db,
            session.initiator_id,
            "session_accepted" if accept else "session_rejected",
            f"{recipient.display_name} {verb} your session invitation",
            related_id=session.id,
        )
        await db.commit()

        logger.info("session_answered", session_id=str(session.id), status=new_status)
        return SessionResponse.model_validate(session)

    async def complete_session(
        self,
        db: AsyncSession,
        user_id: UUID,
        session_id: UUID,
    ) -> SessionResponse:
        """
        Mark an accepted session as held.

        Raises:
            SessionNotFoundException: Unknown id or not a participant.
            InvalidTransitionException: The session is not accepted.
        """
        session = await self.session_repo.get_for_participant(db, session_id, user_id)
        if not session:
            raise SessionNotFoundException()

        await self._swap_status(
            db,
            session,
            SESSION_ACCEPTED,
            SESSION_COMPLETED,
            completed_time=datetime.now(timezone.utc),
        )

        for participant_id, partner_id in (
            (session.initiator_id, session.recipient_id),
            (session.recipient_id, session.initiator_id),
        ):
            await self.activity_service.record(
                db,
                participant_id,
                "session_completed",
                "You completed a learning session",
                related_user_id=partner_id,
                related_skill_id=session.skill_id,
            )
        await db.commit()

        logger.info("session_completed", session_id=str(session.id))
        return SessionResponse.model_validate(session)

    async def get_upcoming_sessions(
        self,
        db: AsyncSession,
        user_id: UUID,
        limit: Optional[int] = None,
    ) -> List[UpcomingSession]:
        """
        The user's pending or accepted sessions that have not started yet.

        role is ``teacher`` for sessions the user initiated, ``student`` otherwise.
        """
        sessions = await self.session_repo.find_upcoming(
            db,
            user_id,
            now=datetime.now(timezone.utc),
            limit=limit or settings.upcoming_sessions_limit,
        )
        return [
            UpcomingSession(
                id=session.id,
                date=session.scheduled_time,
                skill_id=session.skill_id,
                partner_id=session.recipient_id if session.initiator_id == user_id else session.initiator_id,
                role="teacher" if session.initiator_id == user_id else "student",
                status=session.status,
            )
            for session in sessions
        ]

    async def _swap_status(
        self,
        db: AsyncSession,
        session: LearningSession,
        expected: str,
        target: str,
        **extra,
    ) -> None:
        if session.status != expected:
            raise InvalidTransitionException(session.status, target)

        swapped = await self.session_repo.conditional_update(
            db,
            session.id,
            expected={"status": expected},
            values={"status": target, **extra},
        )
        if not swapped:
            await db.rollback()
            await db.refresh(session)
            raise InvalidTransitionException(session.status, target)

        await db.refresh(session)
