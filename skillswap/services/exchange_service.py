"""
Skill exchange service - teacher/student arrangements and their lifecycle.

    pending ──> in_progress ──> completed
       │             │
       └─────────────┴──────> cancelled

Every status change is a compare-and-swap on the status the caller saw, so
two participants racing on the same exchange cannot both win.
"""
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.core.exceptions import (
    BadRequestException,
    ConflictException,
    ForbiddenException,
    InvalidTransitionException,
    NotConnectedException,
    SkillExchangeNotFoundException,
    SkillNotFoundException,
    UserNotFoundException,
    ValidationException,
)
from skillswap.core.logging import get_logger
from skillswap.models.skill_exchange import (
    EXCHANGE_CANCELLED,
    EXCHANGE_COMPLETED,
    EXCHANGE_IN_PROGRESS,
    EXCHANGE_PENDING,
    EXCHANGE_TRANSITIONS,
    SkillExchange,
)
from skillswap.models.user_skill import SKILL_KIND_TEACHING
from skillswap.repositories.exchange_repository import SkillExchangeRepository
from skillswap.repositories.skill_repository import SkillRepository
from skillswap.repositories.user_repository import UserRepository
from skillswap.schemas.exchange import SkillExchangeResponse, exchange_to_response
from skillswap.services.chat_service import ChatService
from skillswap.services.notification_service import ActivityService, NotificationService

logger = get_logger(__name__)

# status -> (teacher message, student message); {teacher}/{student} are display names
_STATUS_MESSAGES = {
    EXCHANGE_IN_PROGRESS: (
        "You've started teaching {student}.",
        "Your learning session with {teacher} has started.",
    ),
    EXCHANGE_COMPLETED: (
        "Your teaching session with {student} is complete.",
        "Your learning session with {teacher} is complete. Please rate your experience.",
    ),
    EXCHANGE_CANCELLED: (
        "Teaching session with {student} was cancelled.",
        "Learning session with {teacher} was cancelled.",
    ),
}


class SkillExchangeService:
    """Creates, advances, rates and lists skill exchanges."""

    def __init__(self):
        self.exchange_repo = SkillExchangeRepository()
        self.user_repo = UserRepository()
        self.skill_repo = SkillRepository()
        self.notification_service = NotificationService()
        self.activity_service = ActivityService()
        self.chat_service = ChatService()

    async def create_skill_exchange(
        self,
        db: AsyncSession,
        acting_user_id: UUID,
        *,
        teacher_id: UUID,
        student_id: UUID,
        skill_id: UUID,
    ) -> SkillExchangeResponse:
        """
        Start a pending exchange between two connected users.

        Raises:
            ForbiddenException: The acting user is neither teacher nor student.
            BadRequestException: Teacher and student are the same user.
            UserNotFoundException: Either user does not exist.
            NotConnectedException: The users are not connected.
            SkillNotFoundException: The skill is not one the teacher offers.
        """
        if acting_user_id not in (teacher_id, student_id):
            raise ForbiddenException("You can only create exchanges you take part in")
        if teacher_id == student_id:
            raise BadRequestException("Teacher and student must be different users", code="SELF_EXCHANGE")

        teacher = await self.user_repo.get_active_by_id(db, teacher_id)
        student = await self.user_repo.get_active_by_id(db, student_id)
        if not teacher or not student:
            raise UserNotFoundException()

        if not await self.user_repo.is_connected(db, teacher_id, student_id):
            raise NotConnectedException()

        skill = await self.skill_repo.get_for_user(db, teacher_id, skill_id, kind=SKILL_KIND_TEACHING)
        if not skill:
            raise SkillNotFoundException()

        exchange = await self.exchange_repo.create(
            db,
            teacher_id=teacher_id,
            student_id=student_id,
            skill_id=skill_id,
            status=EXCHANGE_PENDING,
            start_date=datetime.now(timezone.utc),
        )

        await self.notification_service.notify(
            db,
            teacher_id,
            "skill_exchange",
            f"{student.display_name} wants to learn {skill.name} from you.",
            related_id=exchange.id,
        )
        await self.notification_service.notify(
            db,
            student_id,
            "skill_exchange",
            f"You requested to learn {skill.name} from {teacher.display_name}.",
            related_id=exchange.id,
        )
        await db.commit()

        logger.info(
            "exchange_created",
            exchange_id=str(exchange.id),
            teacher_id=str(teacher_id),
            student_id=str(student_id),
        )
        return exchange_to_response(exchange)

    async def get_skill_exchange(
        self,
        db: AsyncSession,
        acting_user_id: UUID,
        exchange_id: UUID,
    ) -> SkillExchangeResponse:
        exchange = await self.get_for_participant(db, acting_user_id, exchange_id)
        return exchange_to_response(exchange)

    async def get_for_participant(
        self,
        db: AsyncSession,
        acting_user_id: UUID,
        exchange_id: UUID,
    ) -> SkillExchange:
        """
        Raises:
            SkillExchangeNotFoundException: Unknown id or the user is not a participant.
        """
        exchange = await self.exchange_repo.get_for_participant(db, exchange_id, acting_user_id)
        if not exchange:
            raise SkillExchangeNotFoundException()
        return exchange

    async def update_skill_exchange_status(
        self,
        db: AsyncSession,
        acting_user_id: UUID,
        exchange_id: UUID,
        status: str,
    ) -> SkillExchangeResponse:
        """
        Move an exchange along its lifecycle and notify both participants.

        in_progress refreshes start_date, completed stamps end_date.

        Raises:
            SkillExchangeNotFoundException: Unknown id or not a participant.
            InvalidTransitionException: The move is not allowed from the
                current status, or another writer changed it first.
        """
        exchange = await self.get_for_participant(db, acting_user_id, exchange_id)
        current = exchange.status

        if status not in EXCHANGE_TRANSITIONS.get(current, set()):
            raise InvalidTransitionException(current, status)

        now = datetime.now(timezone.utc)
        values = {"status": status}
        if status == EXCHANGE_IN_PROGRESS:
            values["start_date"] = now
        elif status == EXCHANGE_COMPLETED:
            values["end_date"] = max(now, exchange.start_date)

        swapped = await self.exchange_repo.conditional_update(
            db,
            exchange.id,
            expected={"status": current},
            values=values,
        )
        if not swapped:
            await db.rollback()
            await db.refresh(exchange)
            raise InvalidTransitionException(exchange.status, status)

        await db.refresh(exchange)

        teacher = await self.user_repo.get_by_id(db, exchange.teacher_id)
        student = await self.user_repo.get_by_id(db, exchange.student_id)
        teacher_message, student_message = _STATUS_MESSAGES[status]
        names = {"teacher": teacher.display_name, "student": student.display_name}

        await self.notification_service.notify(
            db, exchange.teacher_id, "skill_exchange", teacher_message.format(**names), related_id=exchange.id
        )
        await self.notification_service.notify(
            db, exchange.student_id, "skill_exchange", student_message.format(**names), related_id=exchange.id
        )

        if status == EXCHANGE_COMPLETED:
            await self.chat_service.post_to_exchange_chat(
                db,
                exchange.id,
                acting_user_id,
                "🎓 This skill exchange has been marked as completed!",
            )

        await db.commit()

        logger.info(
            "exchange_status_changed",
            exchange_id=str(exchange.id),
            from_status=current,
            to_status=status,
        )
        return exchange_to_response(exchange)

    async def rate_skill_exchange(
        self,
        db: AsyncSession,
        acting_user_id: UUID,
        exchange_id: UUID,
        rating: float,
        feedback: Optional[str] = None,
    ) -> SkillExchangeResponse:
        """
        Record the student's rating and recompute the teacher's average.

        The average runs over every completed exchange of the teacher that
        carries a rating; a rating of 0 counts.

        Raises:
            ValidationException: rating outside [0, 5].
            SkillExchangeNotFoundException: Unknown id or not a participant.
            ForbiddenException: The acting user is not the student.
            ConflictException: Not completed yet, or already rated.
        """
        if not 0 <= rating <= 5:
            raise ValidationException("Rating must be between 0 and 5", details={"rating": rating})

        exchange = await self.get_for_participant(db, acting_user_id, exchange_id)
        if exchange.student_id != acting_user_id:
            raise ForbiddenException("Only the student can rate an exchange")
        if exchange.status != EXCHANGE_COMPLETED:
            raise ConflictException("Only completed exchanges can be rated", code="EXCHANGE_NOT_COMPLETED")
        if exchange.rating is not None:
            raise ConflictException("This exchange has already been rated", code="ALREADY_RATED")

        swapped = await self.exchange_repo.conditional_update(
            db,
            exchange.id,
            expected={"status": EXCHANGE_COMPLETED, "rating": None},
            values={
                "rating": float(rating),
                "feedback": feedback or "",
                "rated_at": datetime.now(timezone.utc),
            },
        )
        if not swapped:
            await db.rollback()
            raise ConflictException("This exchange has already been rated", code="ALREADY_RATED")

        await db.refresh(exchange)

        average = await self.exchange_repo.average_teacher_rating(db, exchange.teacher_id)
        teacher = await self.user_repo.get_by_id(db, exchange.teacher_id)
        await self.user_repo.update(db, teacher, rating=average if average is not None else 0.0)

        await self.notification_service.notify(
            db,
            exchange.teacher_id,
            "rating",
            f"You received a new rating: {rating:g}/5",
            related_id=exchange.id,
        )
        await self.activity_service.record(
            db,
            exchange.teacher_id,
            "rating_received",
            f"You received a {rating:g}/5 rating",
            related_user_id=exchange.student_id,
            related_skill_id=exchange.skill_id,
        )
        await db.commit()

        logger.info(
            "exchange_rated",
            exchange_id=str(exchange.id),
            teacher_id=str(exchange.teacher_id),
            teacher_rating=teacher.rating,
        )
        return exchange_to_response(exchange)

    async def get_user_skill_exchanges(
        self,
        db: AsyncSession,
        user_id: UUID,
        *,
        role: str = "both",
        status: Optional[str] = None,
    ) -> List[SkillExchangeResponse]:
        """Exchanges the user takes part in, newest start_date first."""
        exchanges = await self.exchange_repo.list_for_user(db, user_id, role=role, status=status)
        return [exchange_to_response(e) for e in exchanges]
