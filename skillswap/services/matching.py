"""
Candidate matching for discovery.

Pure functions over profile snapshots: no database access, so the rules can be
exercised directly in tests. DiscoveryService loads the snapshots and calls in.
"""
from typing import List, Set

from skillswap.schemas.discovery import DiscoveryFilters, DiscoverySort
from skillswap.schemas.user import UserProfile, UserSummary


def _lowered_names(skills) -> Set[str]:
    return {skill.name.lower() for skill in skills}


def _excluded_ids(requester: UserProfile) -> Set:
    """The requester, their connections, and senders of requests still awaiting an answer."""
    excluded = {requester.id}
    excluded.update(requester.connections)
    excluded.update(
        request.from_user_id
        for request in requester.connection_requests
        if request.status == "pending"
    )
    return excluded


def _matches_query(candidate: UserSummary, needle: str) -> bool:
    haystacks = [candidate.display_name, candidate.bio or ""]
    haystacks.extend(skill.name for skill in candidate.skills)
    haystacks.extend(skill.name for skill in candidate.desired_skills)
    return any(needle in text.lower() for text in haystacks)


def filter_candidates(
    requester: UserProfile,
    pool: List[UserSummary],
    filters: DiscoveryFilters,
) -> List[UserSummary]:
    """
    Apply the discovery filters to ``pool``, keeping pool order.

    Steps, in order: exclusion (self, connections, pending senders), owned
    skill ids, free-text query, complementary skill type, limit.
    """
    excluded = _excluded_ids(requester)
    candidates = [c for c in pool if c.id not in excluded]

    if filters.skill_ids:
        wanted_ids = set(filters.skill_ids)
        candidates = [
            c for c in candidates
            if any(skill.id in wanted_ids for skill in c.skills)
        ]

    needle = (filters.query or "").strip().lower()
    if needle:
        candidates = [c for c in candidates if _matches_query(c, needle)]

    match_type = filters.included_skill_types
    if match_type:
        i_want = _lowered_names(requester.desired_skills)
        i_teach = _lowered_names(requester.skills)

        def can_teach_me(candidate: UserSummary) -> bool:
            return bool(_lowered_names(candidate.skills) & i_want)

        def wants_my_skills(candidate: UserSummary) -> bool:
            return bool(_lowered_names(candidate.desired_skills) & i_teach)

        if match_type == "teaching":
            candidates = [c for c in candidates if can_teach_me(c)]
        elif match_type == "learning":
            candidates = [c for c in candidates if wants_my_skills(c)]
        else:
            candidates = [c for c in candidates if can_teach_me(c) or wants_my_skills(c)]

    if filters.limit and filters.limit > 0:
        candidates = candidates[:filters.limit]

    return candidates


def sort_candidates(
    candidates: List[UserSummary],
    sort_by: DiscoverySort = "relevance",
) -> List[UserSummary]:
    """Order filtered candidates. ``relevance`` keeps the filter order."""
    if sort_by == "name":
        return sorted(candidates, key=lambda c: c.display_name.casefold())

    if sort_by == "activity":
        # Two stable passes: newest first, then users never seen go last
        by_recency = sorted(
            [c for c in candidates if c.last_active_at is not None],
            key=lambda c: c.last_active_at,
            reverse=True,
        )
        never_seen = [c for c in candidates if c.last_active_at is None]
        return by_recency + never_seen

    return list(candidates)
