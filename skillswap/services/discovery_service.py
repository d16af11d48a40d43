"""
Discovery service - find peers worth connecting with.
"""
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.core.logging import get_logger
from skillswap.repositories.user_repository import UserRepository
from skillswap.schemas.discovery import DiscoveryFilters, DiscoverySort
from skillswap.schemas.user import UserSummary
from skillswap.services.matching import filter_candidates, sort_candidates
from skillswap.services.user_service import UserService

logger = get_logger(__name__)


class DiscoveryService:
    """Loads the candidate pool and runs it through the matching filter."""

    def __init__(self):
        self.user_repo = UserRepository()
        self.user_service = UserService()

    async def discover_users(
        self,
        db: AsyncSession,
        user_id: UUID,
        filters: DiscoveryFilters,
        sort_by: DiscoverySort = "relevance",
    ) -> List[UserSummary]:
        """
        Candidates for ``user_id``, filtered then sorted.

        Raises:
            UserNotFoundException: The requester does not exist.
        """
        requester = await self.user_service.get_profile(db, user_id)

        pool_users = await self.user_repo.list_active_except(db, user_id)
        pool = await self.user_service.build_summaries(db, pool_users)

        candidates = filter_candidates(requester, pool, filters)
        candidates = sort_candidates(candidates, sort_by)

        logger.debug(
            "discovery_completed",
            user_id=str(user_id),
            pool=len(pool),
            matched=len(candidates),
            match_type=filters.included_skill_types,
        )
        return candidates
