"""
Tests for the candidate matching filter and sort orders (no database).
"""
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from skillswap.schemas.connection import ConnectionRequestResponse, ExchangeDetails
from skillswap.schemas.discovery import DiscoveryFilters
from skillswap.schemas.skill import SkillResponse
from skillswap.schemas.user import UserProfile, UserSummary
from skillswap.services.matching import filter_candidates, sort_candidates


def skill(owner_id, name, skill_id=None):
    return SkillResponse(
        id=skill_id or uuid4(),
        user_id=owner_id,
        name=name,
        category="other",
        level="Beginner",
    )


def summary(name, teaches=(), learns=(), bio=None, last_active_at=None):
    user_id = uuid4()
    return UserSummary(
        id=user_id,
        display_name=name,
        bio=bio,
        skills=[skill(user_id, s) for s in teaches],
        desired_skills=[skill(user_id, s) for s in learns],
        last_active_at=last_active_at,
    )


def profile(name, teaches=(), learns=(), connections=(), requests=()):
    user_id = uuid4()
    return UserProfile(
        id=user_id,
        email="me@example.com",
        display_name=name,
        skills=[skill(user_id, s) for s in teaches],
        desired_skills=[skill(user_id, s) for s in learns],
        connections=list(connections),
        connection_requests=list(requests),
    )


def incoming_request(from_id, to_id, status):
    return ConnectionRequestResponse(
        id=uuid4(),
        from_user_id=from_id,
        to_user_id=to_id,
        status=status,
        created_at=datetime.now(timezone.utc),
        exchange_details=ExchangeDetails(),
    )


def ids(users):
    return [u.id for u in users]


class TestExclusion:
    def test_excludes_self_connections_and_pending_senders(self):
        connected = summary("Connected")
        pending_sender = summary("Pending")
        rejected_sender = summary("Rejected")
        stranger = summary("Stranger")

        me = profile("Me", connections=[connected.id])
        me.connection_requests = [
            incoming_request(pending_sender.id, me.id, "pending"),
            incoming_request(rejected_sender.id, me.id, "rejected"),
        ]
        me_as_candidate = UserSummary(id=me.id, display_name="Me")

        pool = [me_as_candidate, connected, pending_sender, rejected_sender, stranger]
        result = filter_candidates(me, pool, DiscoveryFilters())

        assert ids(result) == [rejected_sender.id, stranger.id]

    def test_empty_filters_keep_pool_order(self):
        pool = [summary("C"), summary("A"), summary("B")]
        result = filter_candidates(profile("Me"), pool, DiscoveryFilters())
        assert ids(result) == ids(pool)


class TestSkillIds:
    def test_keeps_owners_of_listed_skills(self):
        guitar_id = uuid4()
        owner = summary("Owner")
        owner.skills = [skill(owner.id, "Guitar", skill_id=guitar_id)]
        other = summary("Other", teaches=["Guitar"])

        result = filter_candidates(profile("Me"), [owner, other], DiscoveryFilters(skill_ids=[guitar_id]))

        assert ids(result) == [owner.id]

    def test_unknown_skill_id_yields_empty_list(self):
        pool = [summary("A", teaches=["Guitar"]), summary("B", teaches=["Piano"])]
        result = filter_candidates(profile("Me"), pool, DiscoveryFilters(skill_ids=[uuid4()]))
        assert result == []


class TestQuery:
    def test_matches_name_bio_and_skill_names_case_insensitively(self):
        by_name = summary("Guitar Gary")
        by_bio = summary("Bea", bio="I love the GUITAR")
        by_skill = summary("Sam", teaches=["Classical guitar"])
        by_desire = summary("Dee", learns=["Guitar"])
        unrelated = summary("Uma", teaches=["Piano"])

        pool = [by_name, by_bio, by_skill, by_desire, unrelated]
        result = filter_candidates(profile("Me"), pool, DiscoveryFilters(query="  guitar "))

        assert ids(result) == [by_name.id, by_bio.id, by_skill.id, by_desire.id]

    def test_blank_query_is_ignored(self):
        pool = [summary("A"), summary("B")]
        result = filter_candidates(profile("Me"), pool, DiscoveryFilters(query="   "))
        assert len(result) == 2


class TestComplementarySkills:
    def test_teaching_keeps_candidates_who_own_what_i_desire(self):
        me = profile("Me", learns=["Spanish"])
        teacher = summary("Teacher", teaches=["spanish"])
        learner = summary("Learner", learns=["Spanish"])

        result = filter_candidates(me, [teacher, learner], DiscoveryFilters(included_skill_types="teaching"))

        assert ids(result) == [teacher.id]
        desired = {s.name.lower() for s in me.desired_skills}
        for candidate in result:
            assert desired & {s.name.lower() for s in candidate.skills}

    def test_learning_keeps_candidates_who_desire_what_i_own(self):
        a = profile("A", teaches=["Guitar"])
        b = summary("B", learns=["guitar"])
        c = summary("C", teaches=["guitar"])

        result = filter_candidates(a, [b, c], DiscoveryFilters(included_skill_types="learning"))

        assert ids(result) == [b.id]

    def test_both_is_the_union(self):
        me = profile("Me", teaches=["Python"], learns=["French"])
        teaches_me = summary("T", teaches=["French"])
        learns_from_me = summary("L", learns=["python"])
        neither = summary("N", teaches=["Cooking"], learns=["Chess"])

        result = filter_candidates(
            me, [teaches_me, neither, learns_from_me], DiscoveryFilters(included_skill_types="both")
        )

        assert ids(result) == [teaches_me.id, learns_from_me.id]

    def test_name_match_is_exact_not_fuzzy(self):
        me = profile("Me", learns=["Guitar"])
        close = summary("Close", teaches=["Guitars"])

        result = filter_candidates(me, [close], DiscoveryFilters(included_skill_types="teaching"))

        assert result == []


def test_limit_truncates_after_filtering():
    pool = [summary(f"User {i}", teaches=["Guitar"]) for i in range(5)]
    pool.insert(0, summary("No skills"))

    result = filter_candidates(profile("Me"), pool, DiscoveryFilters(query="guitar", limit=2))

    assert ids(result) == ids(pool[1:3])


class TestSorting:
    def test_name_sort_is_case_insensitive(self):
        pool = [summary("bob"), summary("Alice"), summary("carol")]
        assert [c.display_name for c in sort_candidates(pool, "name")] == ["Alice", "bob", "carol"]

    def test_activity_sort_newest_first_missing_last(self):
        now = datetime.now(timezone.utc)
        never = summary("Never")
        old = summary("Old", last_active_at=now - timedelta(days=3))
        recent = summary("Recent", last_active_at=now)

        result = sort_candidates([never, old, recent], "activity")

        assert ids(result) == [recent.id, old.id, never.id]

    def test_relevance_keeps_order(self):
        pool = [summary("Z"), summary("A")]
        assert ids(sort_candidates(pool, "relevance")) == ids(pool)
