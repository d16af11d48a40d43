"""
Tests for skill exchanges, ratings and milestone progress.
"""
from uuid import uuid4

import pytest
from sqlalchemy import select, update

from skillswap.core.exceptions import (
    BadRequestException,
    ConflictException,
    ForbiddenException,
    InvalidTransitionException,
    NotConnectedException,
    NotFoundException,
    SkillExchangeNotFoundException,
    SkillNotFoundException,
    ValidationException,
)
from skillswap.models.skill_exchange import SkillExchange
from skillswap.repositories.notification_repository import NotificationRepository
from skillswap.repositories.user_repository import UserRepository
from skillswap.schemas.exchange import CompletedExchange, PendingExchange
from skillswap.services.chat_service import ChatService
from skillswap.services.exchange_service import SkillExchangeService
from skillswap.services.progress_service import SkillProgressService, completion_percentage

service = SkillExchangeService()
progress_service = SkillProgressService()


@pytest.fixture
async def pair(make_user, connect, skill_id_of):
    """A connected teacher/student pair and the teacher's Python skill."""
    teacher = await make_user("Teacher", teaches=["Python"])
    student = await make_user("Student", learns=["Python"])
    await connect(teacher, student)
    skill_id = await skill_id_of(teacher, "Python")
    return teacher.id, student.id, skill_id


async def _start(db, pair):
    teacher_id, student_id, skill_id = pair
    return await service.create_skill_exchange(
        db, student_id, teacher_id=teacher_id, student_id=student_id, skill_id=skill_id
    )


async def _complete(db, pair):
    teacher_id, _, _ = pair
    exchange = await _start(db, pair)
    await service.update_skill_exchange_status(db, teacher_id, exchange.id, "in_progress")
    return await service.update_skill_exchange_status(db, teacher_id, exchange.id, "completed")


class TestCreate:
    async def test_creates_pending_exchange_and_notifies_both(self, db, pair):
        teacher_id, student_id, _ = pair

        exchange = await _start(db, pair)

        assert isinstance(exchange, PendingExchange)
        assert exchange.teacher_id == teacher_id
        assert exchange.start_date is not None

        repo = NotificationRepository()
        for user_id in (teacher_id, student_id):
            notifications, _ = await repo.find_for_user(db, user_id)
            assert [n.type for n in notifications] == ["skill_exchange"]

    async def test_requires_connection(self, db, make_user, skill_id_of):
        teacher = await make_user("Teacher", teaches=["Python"])
        student = await make_user("Student")
        skill_id = await skill_id_of(teacher, "Python")

        with pytest.raises(NotConnectedException):
            await service.create_skill_exchange(
                db, student.id, teacher_id=teacher.id, student_id=student.id, skill_id=skill_id
            )

    async def test_skill_must_belong_to_teacher(self, db, pair):
        teacher_id, student_id, _ = pair
        with pytest.raises(SkillNotFoundException):
            await service.create_skill_exchange(
                db, student_id, teacher_id=teacher_id, student_id=student_id, skill_id=uuid4()
            )

    async def test_outsider_cannot_create(self, db, pair, make_user):
        teacher_id, student_id, skill_id = pair
        outsider = await make_user("Outsider")
        with pytest.raises(ForbiddenException):
            await service.create_skill_exchange(
                db, outsider.id, teacher_id=teacher_id, student_id=student_id, skill_id=skill_id
            )

    async def test_teacher_and_student_must_differ(self, db, pair):
        teacher_id, _, skill_id = pair
        with pytest.raises(BadRequestException):
            await service.create_skill_exchange(
                db, teacher_id, teacher_id=teacher_id, student_id=teacher_id, skill_id=skill_id
            )


class TestLifecycle:
    async def test_pending_to_in_progress_to_completed(self, db, pair):
        teacher_id, _, _ = pair
        exchange = await _start(db, pair)

        started = await service.update_skill_exchange_status(db, teacher_id, exchange.id, "in_progress")
        assert started.status == "in_progress"
        assert started.start_date >= exchange.start_date

        completed = await service.update_skill_exchange_status(db, teacher_id, exchange.id, "completed")
        assert isinstance(completed, CompletedExchange)
        assert completed.end_date >= completed.start_date
        assert completed.rating is None

    async def test_pending_cannot_jump_to_completed(self, db, pair):
        teacher_id, _, _ = pair
        exchange = await _start(db, pair)

        with pytest.raises(InvalidTransitionException) as exc_info:
            await service.update_skill_exchange_status(db, teacher_id, exchange.id, "completed")

        assert exc_info.value.code == "INVALID_TRANSITION"
        current = await service.get_skill_exchange(db, teacher_id, exchange.id)
        assert current.status == "pending"

    async def test_terminal_states_stay_terminal(self, db, pair):
        teacher_id, _, _ = pair
        exchange = await _start(db, pair)
        await service.update_skill_exchange_status(db, teacher_id, exchange.id, "cancelled")

        with pytest.raises(InvalidTransitionException):
            await service.update_skill_exchange_status(db, teacher_id, exchange.id, "in_progress")

    async def test_lost_race_leaves_the_other_writer_in_place(self, db, pair):
        teacher_id, _, _ = pair
        exchange = await _start(db, pair)
        exchange_id = exchange.id
        # Cancelled by another writer while this session still holds it as pending
        await db.execute(
            update(SkillExchange)
            .where(SkillExchange.id == exchange_id)
            .values(status="cancelled")
            .execution_options(synchronize_session=False)
        )
        await db.commit()

        with pytest.raises(InvalidTransitionException) as exc_info:
            await service.update_skill_exchange_status(db, teacher_id, exchange_id, "in_progress")

        assert exc_info.value.message == "Cannot move from 'cancelled' to 'in_progress'"
        stored = await db.scalar(select(SkillExchange.status).where(SkillExchange.id == exchange_id))
        assert stored == "cancelled"
        notifications, _ = await NotificationRepository().find_for_user(db, teacher_id)
        assert len(notifications) == 1

    async def test_non_participant_sees_not_found(self, db, pair, make_user):
        exchange = await _start(db, pair)
        outsider = await make_user("Outsider")

        with pytest.raises(SkillExchangeNotFoundException):
            await service.update_skill_exchange_status(db, outsider.id, exchange.id, "in_progress")

    async def test_completion_is_posted_to_linked_chat(self, db, pair):
        teacher_id, student_id, _ = pair
        exchange = await _start(db, pair)
        chats = ChatService()
        chat = await chats.create_chat(db, student_id, [teacher_id], skill_exchange_id=exchange.id)

        await service.update_skill_exchange_status(db, teacher_id, exchange.id, "in_progress")
        await service.update_skill_exchange_status(db, teacher_id, exchange.id, "completed")

        messages = await chats.get_chat_messages(db, chat.id, student_id)
        assert messages[-1].content == "🎓 This skill exchange has been marked as completed!"

    async def test_list_filters_by_role_and_status(self, db, pair):
        teacher_id, student_id, _ = pair
        first = await _start(db, pair)
        await _complete(db, pair)

        as_teacher = await service.get_user_skill_exchanges(db, teacher_id, role="teacher")
        as_student = await service.get_user_skill_exchanges(db, teacher_id, role="student")
        pending = await service.get_user_skill_exchanges(db, student_id, status="pending")

        assert len(as_teacher) == 2
        assert as_student == []
        assert [e.id for e in pending] == [first.id]


class TestRating:
    async def test_teacher_rating_is_average_of_rated_exchanges(self, db, pair):
        teacher_id, student_id, _ = pair

        for rating in (3, 4, 5):
            exchange = await _complete(db, pair)
            await service.rate_skill_exchange(db, student_id, exchange.id, rating)
        # An unrated completed exchange does not count
        await _complete(db, pair)

        exchange = await _complete(db, pair)
        rated = await service.rate_skill_exchange(db, student_id, exchange.id, 5, feedback="Great")

        assert rated.rating == 5
        assert rated.feedback == "Great"
        assert rated.rated_at is not None
        teacher = await UserRepository().get_by_id(db, teacher_id)
        assert teacher.rating == pytest.approx(4.25)

    async def test_zero_rating_counts(self, db, pair):
        teacher_id, student_id, _ = pair
        for rating in (0, 4):
            exchange = await _complete(db, pair)
            await service.rate_skill_exchange(db, student_id, exchange.id, rating)

        teacher = await UserRepository().get_by_id(db, teacher_id)
        assert teacher.rating == pytest.approx(2.0)

    async def test_only_student_can_rate(self, db, pair):
        teacher_id, _, _ = pair
        exchange = await _complete(db, pair)
        with pytest.raises(ForbiddenException):
            await service.rate_skill_exchange(db, teacher_id, exchange.id, 5)

    async def test_cannot_rate_unfinished_exchange(self, db, pair):
        _, student_id, _ = pair
        exchange = await _start(db, pair)
        with pytest.raises(ConflictException) as exc_info:
            await service.rate_skill_exchange(db, student_id, exchange.id, 5)
        assert exc_info.value.code == "EXCHANGE_NOT_COMPLETED"

    async def test_cannot_rate_twice(self, db, pair):
        _, student_id, _ = pair
        exchange = await _complete(db, pair)
        await service.rate_skill_exchange(db, student_id, exchange.id, 4)

        with pytest.raises(ConflictException) as exc_info:
            await service.rate_skill_exchange(db, student_id, exchange.id, 1)
        assert exc_info.value.code == "ALREADY_RATED"

    @pytest.mark.parametrize("rating", [-1, 5.5])
    async def test_rating_out_of_range(self, db, pair, rating):
        _, student_id, _ = pair
        exchange = await _complete(db, pair)
        with pytest.raises(ValidationException):
            await service.rate_skill_exchange(db, student_id, exchange.id, rating)


@pytest.mark.parametrize(
    "done, total, expected",
    [(0, 0, 0), (0, 3, 0), (1, 3, 33), (2, 3, 67), (3, 3, 100), (1, 8, 13)],
)
def test_completion_percentage(done, total, expected):
    milestones = [{"completed": i < done} for i in range(total)]
    assert completion_percentage(milestones) == expected


class TestProgress:
    async def test_milestones_drive_percentage_and_chat(self, db, pair):
        teacher_id, student_id, _ = pair
        exchange = await _start(db, pair)
        chats = ChatService()
        chat = await chats.create_chat(db, teacher_id, [student_id], skill_exchange_id=exchange.id)

        progress = await progress_service.create_skill_progress(
            db, teacher_id, exchange.id, ["Syntax", "Functions", "Classes"]
        )
        assert progress.progress_percentage == 0
        assert [m.id for m in progress.milestones] == ["milestone-0", "milestone-1", "milestone-2"]
        assert not any(m.completed for m in progress.milestones)

        progress = await progress_service.set_milestone(db, student_id, exchange.id, "milestone-0", True)
        assert progress.progress_percentage == 33
        assert progress.milestones[0].completed_at is not None

        progress = await progress_service.set_milestone(db, student_id, exchange.id, "milestone-1", True)
        assert progress.progress_percentage == 67

        progress = await progress_service.set_milestone(db, student_id, exchange.id, "milestone-1", False)
        assert progress.progress_percentage == 33
        assert progress.milestones[1].completed_at is None

        for milestone_id in ("milestone-1", "milestone-2"):
            progress = await progress_service.set_milestone(db, student_id, exchange.id, milestone_id, True)
        assert progress.progress_percentage == 100

        contents = [m.content for m in await chats.get_chat_messages(db, chat.id, teacher_id)]
        assert contents[0] == "✅ Milestone completed: Syntax"
        assert contents[2] == "↩️ Milestone marked as not completed: Functions"
        assert contents[-1].startswith("🎉 All milestones completed!")

        notifications, _ = await NotificationRepository().find_for_user(db, teacher_id)
        assert notifications[0].message == "Skill progress has been updated to 100%"

    async def test_progress_is_created_once(self, db, pair):
        teacher_id, _, _ = pair
        exchange = await _start(db, pair)
        await progress_service.create_skill_progress(db, teacher_id, exchange.id, ["One"])

        with pytest.raises(ConflictException):
            await progress_service.create_skill_progress(db, teacher_id, exchange.id, ["Two"])

    async def test_unknown_milestone(self, db, pair):
        teacher_id, _, _ = pair
        exchange = await _start(db, pair)
        await progress_service.create_skill_progress(db, teacher_id, exchange.id, ["One"])

        with pytest.raises(NotFoundException) as exc_info:
            await progress_service.set_milestone(db, teacher_id, exchange.id, "milestone-9", True)
        assert exc_info.value.code == "MILESTONE_NOT_FOUND"

    async def test_notes(self, db, pair):
        teacher_id, student_id, _ = pair
        exchange = await _start(db, pair)
        await progress_service.create_skill_progress(db, teacher_id, exchange.id, ["One"])

        await progress_service.update_progress_notes(db, student_id, exchange.id, "Practice daily")

        progress = await progress_service.get_skill_progress(db, teacher_id, exchange.id)
        assert progress.notes == "Practice daily"
