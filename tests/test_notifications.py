"""
Tests for notifications and the activity feed.
"""
import pytest
from sqlalchemy.exc import OperationalError

from skillswap.core.exceptions import NotificationNotFoundException
from skillswap.repositories.user_repository import UserRepository
from skillswap.services.connection_service import ConnectionService
from skillswap.services.notification_service import ActivityService, NotificationService

service = NotificationService()


async def _seed(db, user_id, count):
    for i in range(count):
        await service.notify(db, user_id, "message", f"note {i}")
    await db.commit()


async def test_list_is_paginated_newest_first(db, make_user):
    user = await make_user("Reader")
    await _seed(db, user.id, 5)

    page = await service.list_notifications(db, user.id, page=1, limit=2)

    assert page.total == 5
    assert page.pages == 3
    assert [n.message for n in page.items] == ["note 4", "note 3"]

    last = await service.list_notifications(db, user.id, page=3, limit=2)
    assert [n.message for n in last.items] == ["note 0"]


async def test_mark_read_and_unread_count(db, make_user):
    user = await make_user("Reader")
    await _seed(db, user.id, 3)
    page = await service.list_notifications(db, user.id)

    marked = await service.mark_read(db, user.id, page.items[0].id)

    assert marked.is_read is True
    assert await service.unread_count(db, user.id) == 2
    unread = await service.list_notifications(db, user.id, is_read=False)
    assert unread.total == 2

    assert await service.mark_all_read(db, user.id) == 2
    assert await service.unread_count(db, user.id) == 0


async def test_cannot_mark_someone_elses_notification(db, make_user):
    owner = await make_user("Owner")
    other = await make_user("Other")
    await _seed(db, owner.id, 1)
    page = await service.list_notifications(db, owner.id)

    with pytest.raises(NotificationNotFoundException):
        await service.mark_read(db, other.id, page.items[0].id)


async def test_failed_notification_does_not_abort_the_operation(db, make_user, monkeypatch):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    connections = ConnectionService()

    async def broken_create(*args, **kwargs):
        raise OperationalError("INSERT INTO notifications", {}, Exception("disk full"))

    monkeypatch.setattr(connections.notification_service.notification_repo, "create", broken_create)

    request = await connections.send_connection_request(db, alice.id, bob.id)
    answered = await connections.respond_to_connection_request(db, bob.id, request.id, accept=True)

    assert answered.status == "accepted"
    assert await UserRepository().is_connected(db, alice.id, bob.id)
    assert await service.unread_count(db, bob.id) == 0
    assert await service.unread_count(db, alice.id) == 0


async def test_activity_feed_is_newest_first_and_limited(db, make_user):
    user = await make_user("Active")
    activities = ActivityService()
    for i in range(7):
        await activities.record(db, user.id, "skill_added", f"added {i}")
    await db.commit()

    recent = await activities.recent(db, user.id)

    assert [a.description for a in recent] == ["added 6", "added 5", "added 4", "added 3", "added 2"]
