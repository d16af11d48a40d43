"""
Tests for chats and messages.
"""
from uuid import uuid4

import pytest

from skillswap.core.exceptions import BadRequestException, ChatNotFoundException, UserNotFoundException
from skillswap.repositories.notification_repository import NotificationRepository
from skillswap.services.chat_service import ChatService

service = ChatService()


async def test_direct_chat_is_reused(db, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")

    first = await service.get_or_create_direct_chat(db, alice.id, bob.id)
    second = await service.get_or_create_direct_chat(db, bob.id, alice.id)

    assert second.id == first.id
    assert set(first.participants) == {alice.id, bob.id}


async def test_group_chat_is_not_a_direct_chat(db, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    carol = await make_user("Carol")
    group = await service.create_chat(db, alice.id, [bob.id, carol.id], title="Study group")

    direct = await service.get_or_create_direct_chat(db, alice.id, bob.id)

    assert direct.id != group.id
    assert group.participants[0] == alice.id


async def test_cannot_chat_with_self(db, make_user):
    alice = await make_user("Alice")
    with pytest.raises(BadRequestException):
        await service.get_or_create_direct_chat(db, alice.id, alice.id)


async def test_unknown_participant(db, make_user):
    alice = await make_user("Alice")
    with pytest.raises(UserNotFoundException):
        await service.create_chat(db, alice.id, [uuid4()])


async def test_send_list_and_mark_read(db, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    chat = await service.get_or_create_direct_chat(db, alice.id, bob.id)

    await service.send_message(db, chat.id, alice.id, "Hi Bob")
    await service.send_message(db, chat.id, bob.id, "Hi Alice")
    await service.send_message(db, chat.id, alice.id, "How about Tuesday?")

    messages = await service.get_chat_messages(db, chat.id, bob.id)
    assert [m.content for m in messages] == ["Hi Bob", "Hi Alice", "How about Tuesday?"]

    loaded = await service.get_chat(db, chat.id, bob.id)
    assert loaded.last_message.content == "How about Tuesday?"
    assert loaded.last_message.sender_id == alice.id

    assert await service.mark_messages_read(db, chat.id, bob.id) == 2
    messages = await service.get_chat_messages(db, chat.id, bob.id)
    assert [m.is_read for m in messages] == [True, False, True]

    notifications, _ = await NotificationRepository().find_for_user(db, bob.id)
    assert notifications[0].message == "Alice: How about Tuesday?"


async def test_latest_messages_limit(db, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    chat = await service.get_or_create_direct_chat(db, alice.id, bob.id)
    for i in range(5):
        await service.send_message(db, chat.id, alice.id, f"message {i}")

    messages = await service.get_chat_messages(db, chat.id, alice.id, limit=2)

    assert [m.content for m in messages] == ["message 3", "message 4"]


async def test_notification_preview_is_truncated(db, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    chat = await service.get_or_create_direct_chat(db, alice.id, bob.id)

    await service.send_message(db, chat.id, alice.id, "x" * 200)

    notifications, _ = await NotificationRepository().find_for_user(db, bob.id)
    assert notifications[0].message == "Alice: " + "x" * 80


async def test_outsider_cannot_read_or_post(db, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    eve = await make_user("Eve")
    chat = await service.get_or_create_direct_chat(db, alice.id, bob.id)

    with pytest.raises(ChatNotFoundException):
        await service.get_chat_messages(db, chat.id, eve.id)
    with pytest.raises(ChatNotFoundException):
        await service.send_message(db, chat.id, eve.id, "hello")


async def test_chats_listed_by_recent_activity(db, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    carol = await make_user("Carol")
    with_bob = await service.get_or_create_direct_chat(db, alice.id, bob.id)
    with_carol = await service.get_or_create_direct_chat(db, alice.id, carol.id)

    await service.send_message(db, with_bob.id, bob.id, "ping")

    chats = await service.list_user_chats(db, alice.id)
    assert [c.id for c in chats] == [with_bob.id, with_carol.id]
