"""
Skill schemas.
"""
from typing import List, Literal, Optional
from uuid import UUID
from pydantic import Field, field_validator
from skillswap.schemas.base import BaseSchema, IDSchema

SkillCategory = Literal["technical", "soft", "language", "artistic", "business", "other"]
SkillLevel = Literal["Beginner", "Intermediate", "Expert"]
SkillKind = Literal["teaching", "learning"]


def _clean_name(name: Optional[str]) -> Optional[str]:
    """Strip a skill name; a name that is only whitespace is rejected."""
    if name is None:
        return None
    name = name.strip()
    if not name:
        raise ValueError("Skill name is required")
    return name


def _clean_tags(tags: Optional[List[str]]) -> Optional[List[str]]:
    """Strip tags, drop blanks and duplicates, keep first-seen order."""
    if tags is None:
        return None
    seen = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


class SkillCreate(BaseSchema):
    """Skill creation body."""

    name: str = Field(..., min_length=1, max_length=100)
    category: SkillCategory = "other"
    level: SkillLevel = "Beginner"
    tags: List[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        return _clean_name(value)

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, value: List[str]) -> List[str]:
        return _clean_tags(value)


class SkillUpdate(BaseSchema):
    """Skill update body. Omitted fields stay unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[SkillCategory] = None
    level: Optional[SkillLevel] = None
    tags: Optional[List[str]] = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: Optional[str]) -> Optional[str]:
        return _clean_name(value)

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return _clean_tags(value)


class SkillResponse(IDSchema):
    """Skill as stored on a profile."""

    user_id: UUID
    name: str
    category: SkillCategory
    level: SkillLevel
    tags: List[str] = []
