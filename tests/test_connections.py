"""
Tests for the connection request lifecycle.
"""
from uuid import uuid4

import pytest

from skillswap.core.exceptions import (
    AlreadyConnectedException,
    ConflictException,
    ConnectionRequestNotFoundException,
    SelfConnectionException,
    UserNotFoundException,
)
from skillswap.repositories.connection_repository import ConnectionRequestRepository
from skillswap.repositories.notification_repository import NotificationRepository
from skillswap.repositories.user_repository import UserRepository
from skillswap.services.connection_service import ConnectionService
from skillswap.services.user_service import UserService

service = ConnectionService()
users = UserRepository()


async def test_send_creates_pending_request_and_notifies_recipient(db, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")

    request = await service.send_connection_request(
        db, alice.id, bob.id, message="Hi!", i_will_learn="Spanish", they_will_learn=None
    )

    assert request.status == "pending"
    assert request.message == "Hi!"
    assert request.exchange_details.requester_will_learn == "Spanish"
    assert request.exchange_details.recipient_will_learn == ""

    notifications, total = await NotificationRepository().find_for_user(db, bob.id)
    assert total == 1
    assert notifications[0].type == "connection_request"
    assert notifications[0].related_id == request.id


async def test_duplicate_pending_request_returns_existing(db, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")

    first = await service.send_connection_request(db, alice.id, bob.id)
    second = await service.send_connection_request(db, alice.id, bob.id, message="again")

    assert second.id == first.id
    assert len(await ConnectionRequestRepository().list_incoming(db, bob.id)) == 1


async def test_open_request_reports_whether_it_was_created(db, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")

    first, created = await service.open_connection_request(db, alice.id, bob.id)
    again, created_again = await service.open_connection_request(db, alice.id, bob.id)

    assert created is True
    assert created_again is False
    assert again.id == first.id


async def test_self_request_rejected(db, make_user):
    alice = await make_user("Alice")
    with pytest.raises(SelfConnectionException):
        await service.send_connection_request(db, alice.id, alice.id)


async def test_unknown_recipient_rejected(db, make_user):
    alice = await make_user("Alice")
    with pytest.raises(UserNotFoundException):
        await service.send_connection_request(db, alice.id, uuid4())


async def test_request_to_connected_user_rejected(db, make_user, connect):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    await connect(alice, bob)

    with pytest.raises(AlreadyConnectedException):
        await service.send_connection_request(db, alice.id, bob.id)


async def test_accept_connects_both_users(db, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    request = await service.send_connection_request(db, alice.id, bob.id)

    answered = await service.respond_to_connection_request(db, bob.id, request.id, accept=True)

    assert answered.status == "accepted"
    assert answered.responded_at is not None
    assert await users.get_connection_ids(db, alice.id) == [bob.id]
    assert await users.get_connection_ids(db, bob.id) == [alice.id]

    stored = await ConnectionRequestRepository().get_by_id(db, request.id)
    assert stored.status == "accepted"

    notifications, _ = await NotificationRepository().find_for_user(db, alice.id)
    assert [n.type for n in notifications] == ["connection_accepted"]


async def test_reject_leaves_connections_untouched(db, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    request = await service.send_connection_request(db, alice.id, bob.id)

    answered = await service.respond_to_connection_request(db, bob.id, request.id, accept=False)

    assert answered.status == "rejected"
    assert await users.get_connection_ids(db, alice.id) == []
    assert await users.get_connection_ids(db, bob.id) == []

    notifications, _ = await NotificationRepository().find_for_user(db, alice.id)
    assert [n.type for n in notifications] == ["connection_rejected"]


async def test_answering_twice_conflicts(db, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    request = await service.send_connection_request(db, alice.id, bob.id)
    await service.respond_to_connection_request(db, bob.id, request.id, accept=True)

    with pytest.raises(ConflictException) as exc_info:
        await service.respond_to_connection_request(db, bob.id, request.id, accept=False)

    assert exc_info.value.code == "REQUEST_ALREADY_ANSWERED"
    stored = await ConnectionRequestRepository().get_by_id(db, request.id)
    assert stored.status == "accepted"


async def test_only_recipient_can_answer(db, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    request = await service.send_connection_request(db, alice.id, bob.id)

    with pytest.raises(ConnectionRequestNotFoundException):
        await service.respond_to_connection_request(db, alice.id, request.id, accept=True)


async def test_accepting_when_already_connected_keeps_sets_unchanged(db, make_user, connect):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    request = await service.send_connection_request(db, alice.id, bob.id)
    # Connection made through another path while the request was pending
    await connect(alice, bob)

    await service.respond_to_connection_request(db, bob.id, request.id, accept=True)

    assert await users.get_connection_ids(db, alice.id) == [bob.id]
    assert await users.get_connection_ids(db, bob.id) == [alice.id]


async def test_profile_lists_incoming_requests_and_connections(db, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    carol = await make_user("Carol")
    r1 = await service.send_connection_request(db, alice.id, bob.id)
    await service.send_connection_request(db, carol.id, bob.id)
    await service.respond_to_connection_request(db, bob.id, r1.id, accept=True)

    profile = await UserService().get_profile(db, bob.id)

    assert profile.connections == [alice.id]
    assert [(r.from_user_id, r.status) for r in profile.connection_requests] == [
        (alice.id, "accepted"),
        (carol.id, "pending"),
    ]

    pending = await service.list_incoming_requests(db, bob.id, "pending")
    assert [r.from_user_id for r in pending] == [carol.id]
    outgoing = await service.list_outgoing_requests(db, carol.id)
    assert [r.to_user_id for r in outgoing] == [bob.id]
