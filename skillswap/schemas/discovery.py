"""
Discovery schemas.
"""
from typing import List, Literal, Optional
from uuid import UUID
from pydantic import Field
from skillswap.schemas.base import BaseSchema

SkillMatchType = Literal["teaching", "learning", "both"]
DiscoverySort = Literal["relevance", "name", "activity"]


class DiscoveryFilters(BaseSchema):
    """
    Filters applied to the candidate pool.

    - skill_ids: candidate must own at least one of these skills
    - query: case-insensitive substring over name, bio and skill names
    - included_skill_types: teaching = can teach what I want to learn,
      learning = wants to learn what I can teach, both = either
    - limit: truncate the filtered list
    """

    skill_ids: List[UUID] = Field(default_factory=list)
    query: Optional[str] = None
    included_skill_types: Optional[SkillMatchType] = None
    limit: Optional[int] = Field(None, ge=1, le=200)
