"""
Discovery routes.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.api.deps import get_current_user
from skillswap.core.database import get_db
from skillswap.models.user import User
from skillswap.schemas.discovery import DiscoveryFilters, DiscoverySort, SkillMatchType
from skillswap.schemas.user import UserSummary
from skillswap.services.discovery_service import DiscoveryService

router = APIRouter(prefix="/discover", tags=["discover"])

discovery_service = DiscoveryService()


@router.get("", response_model=List[UserSummary])
async def discover_users(
    skill_ids: List[UUID] = Query([]),
    q: Optional[str] = Query(None, max_length=100, description="Search name, bio and skills"),
    type: Optional[SkillMatchType] = Query(None, description="teaching, learning or both"),
    limit: Optional[int] = Query(None, ge=1, le=200),
    sort: DiscoverySort = Query("relevance"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Find members to connect with.

    Never returns the caller, their connections, or users whose connection
    request to the caller is still pending.
    """
    filters = DiscoveryFilters(
        skill_ids=skill_ids,
        query=q,
        included_skill_types=type,
        limit=limit,
    )
    return await discovery_service.discover_users(db, current_user.id, filters, sort)
