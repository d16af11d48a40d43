"""
Tests for DiscoveryService against the database.
"""
from uuid import uuid4

import pytest

from skillswap.core.exceptions import UserNotFoundException
from skillswap.schemas.discovery import DiscoveryFilters
from skillswap.services.connection_service import ConnectionService
from skillswap.services.discovery_service import DiscoveryService

service = DiscoveryService()


async def test_never_returns_self_connections_or_pending_senders(db, make_user, connect):
    me = await make_user("Me")
    friend = await make_user("Friend")
    sender = await make_user("Sender")
    stranger = await make_user("Stranger")
    await connect(me, friend)
    await ConnectionService().send_connection_request(db, sender.id, me.id)

    result = await service.discover_users(db, me.id, DiscoveryFilters())

    assert [u.id for u in result] == [stranger.id]


async def test_learning_filter_finds_users_who_want_my_skill(db, make_user):
    a = await make_user("A", teaches=["Guitar"])
    b = await make_user("B", learns=["guitar"])
    await make_user("C", learns=["Piano"])

    result = await service.discover_users(db, a.id, DiscoveryFilters(included_skill_types="learning"))

    assert [u.id for u in result] == [b.id]


async def test_teaching_filter_finds_users_who_can_teach_me(db, make_user):
    me = await make_user("Me", learns=["Spanish"])
    teacher = await make_user("Teacher", teaches=["SPANISH"])
    await make_user("Learner", learns=["Spanish"])

    result = await service.discover_users(db, me.id, DiscoveryFilters(included_skill_types="teaching"))

    assert [u.id for u in result] == [teacher.id]
    assert result[0].skills[0].name == "SPANISH"


async def test_unknown_skill_id_returns_empty_list(db, make_user):
    me = await make_user("Me")
    await make_user("Other", teaches=["Guitar"])

    result = await service.discover_users(db, me.id, DiscoveryFilters(skill_ids=[uuid4()]))

    assert result == []


async def test_name_sort(db, make_user):
    me = await make_user("Me")
    await make_user("charlie")
    await make_user("Alice")
    await make_user("bob")

    result = await service.discover_users(db, me.id, DiscoveryFilters(), sort_by="name")

    assert [u.display_name for u in result] == ["Alice", "bob", "charlie"]


async def test_summaries_do_not_expose_private_fields(db, make_user):
    me = await make_user("Me")
    await make_user("Other")

    result = await service.discover_users(db, me.id, DiscoveryFilters())

    dumped = result[0].model_dump()
    assert "email" not in dumped
    assert "connections" not in dumped


async def test_unknown_requester(db):
    with pytest.raises(UserNotFoundException):
        await service.discover_users(db, uuid4(), DiscoveryFilters())
