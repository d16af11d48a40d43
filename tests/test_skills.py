"""
Tests for profile skills and profile updates.
"""
import pytest
from pydantic import ValidationError

from skillswap.core.exceptions import SkillNotFoundException
from skillswap.models.user_skill import SKILL_KIND_LEARNING, SKILL_KIND_TEACHING
from skillswap.schemas.skill import SkillCreate, SkillUpdate
from skillswap.services.notification_service import ActivityService
from skillswap.services.skill_service import SkillService
from skillswap.services.user_service import UserService

service = SkillService()


async def test_add_teaching_skill_records_activity(db, make_user):
    user = await make_user("Teacher")

    skill = await service.add_skill(
        db,
        user.id,
        SKILL_KIND_TEACHING,
        SkillCreate(name="Pottery", category="artistic", tags=["clay", " clay ", "", "wheel"]),
    )

    assert skill.tags == ["clay", "wheel"]
    activities = await ActivityService().recent(db, user.id)
    assert [(a.type, a.related_skill_id) for a in activities] == [("skill_added", skill.id)]


async def test_desired_skill_records_no_activity(db, make_user):
    user = await make_user("Learner")

    await service.add_skill(db, user.id, SKILL_KIND_LEARNING, SkillCreate(name="Welsh", category="language"))

    assert await ActivityService().recent(db, user.id) == []
    profile = await UserService().get_profile(db, user.id)
    assert [s.name for s in profile.desired_skills] == ["Welsh"]
    assert profile.skills == []


async def test_update_only_touches_given_fields(db, make_user):
    user = await make_user("Teacher")
    skill = await service.add_skill(db, user.id, SKILL_KIND_TEACHING, SkillCreate(name="Go", level="Intermediate"))

    updated = await service.update_skill(
        db, user.id, SKILL_KIND_TEACHING, skill.id, SkillUpdate(level="Expert")
    )

    assert updated.name == "Go"
    assert updated.level == "Expert"


async def test_other_users_skills_are_not_found(db, make_user):
    owner = await make_user("Owner")
    other = await make_user("Other")
    skill = await service.add_skill(db, owner.id, SKILL_KIND_TEACHING, SkillCreate(name="Knitting"))

    with pytest.raises(SkillNotFoundException):
        await service.update_skill(db, other.id, SKILL_KIND_TEACHING, skill.id, SkillUpdate(name="Mine"))
    with pytest.raises(SkillNotFoundException):
        await service.remove_skill(db, other.id, SKILL_KIND_TEACHING, skill.id)
    # Same owner, wrong list
    with pytest.raises(SkillNotFoundException):
        await service.remove_skill(db, owner.id, SKILL_KIND_LEARNING, skill.id)


async def test_remove_skill(db, make_user):
    user = await make_user("Teacher", teaches=["Chess"])
    skills = await service.list_skills(db, user.id, SKILL_KIND_TEACHING)

    await service.remove_skill(db, user.id, SKILL_KIND_TEACHING, skills[0].id)

    assert await service.list_skills(db, user.id, SKILL_KIND_TEACHING) == []


async def test_update_profile_leaves_missing_fields_alone(db, make_user):
    user = await make_user("Before", bio="Original bio")

    profile = await UserService().update_profile(db, user.id, display_name="After")

    assert profile.display_name == "After"
    assert profile.bio == "Original bio"


@pytest.mark.parametrize("schema", [SkillCreate, SkillUpdate])
def test_blank_skill_name_is_rejected(schema):
    with pytest.raises(ValidationError):
        schema(name="   ")


def test_rename_is_stripped():
    assert SkillUpdate(name="  Go ").name == "Go"
