"""
Shared test fixtures.

Every test gets a fresh in-memory SQLite database. Service tests use the
``db`` session directly; API tests go through ``client``, which drives the
FastAPI app over ASGI with ``get_db`` bound to the same database.
"""
import os

# Must be set before anything from skillswap is imported
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("RATE_LIMIT_STORAGE_URI", "memory://")

from typing import Iterable, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import skillswap.models  # noqa: F401  (registers every table)
from skillswap.core.database import Base, enable_sqlite_savepoints, get_db
from skillswap.core.security import create_access_token, hash_password
from skillswap.main import app
from skillswap.models.user import User
from skillswap.models.user_skill import SKILL_KIND_LEARNING, SKILL_KIND_TEACHING, UserSkill
from skillswap.repositories.user_repository import UserRepository

TEST_PASSWORD = "password123"


@pytest.fixture
async def engine():
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(test_engine)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker):
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """
    Factory for members with skills.

        alice = await make_user("Alice", teaches=["Guitar"], learns=["Spanish"])
    """
    counter = {"n": 0}

    async def _make_user(
        display_name: str,
        *,
        teaches: Iterable[str] = (),
        learns: Iterable[str] = (),
        bio: Optional[str] = None,
        email: Optional[str] = None,
    ) -> User:
        counter["n"] += 1
        user = User(
            email=email or f"user{counter['n']}@example.com",
            password_hash=hash_password(TEST_PASSWORD),
            display_name=display_name,
            bio=bio,
        )
        db.add(user)
        await db.flush()

        for kind, names in ((SKILL_KIND_TEACHING, teaches), (SKILL_KIND_LEARNING, learns)):
            for name in names:
                db.add(UserSkill(user_id=user.id, kind=kind, name=name, category="other", level="Beginner", tags=[]))

        await db.commit()
        return user

    return _make_user


@pytest.fixture
def connect(db):
    """Connect two users directly, bypassing the request flow."""
    repo = UserRepository()

    async def _connect(a: User, b: User) -> None:
        await repo.add_connection(db, a.id, b.id)
        await repo.add_connection(db, b.id, a.id)
        await db.commit()

    return _connect


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _auth_headers


@pytest.fixture
def skill_id_of(db):
    """Id of one of a user's teaching skills, by name."""

    async def _skill_id_of(user: User, name: str):
        result = await db.execute(
            select(UserSkill.id).where(
                UserSkill.user_id == user.id,
                UserSkill.kind == SKILL_KIND_TEACHING,
                UserSkill.name == name,
            )
        )
        return result.scalar_one()

    return _skill_id_of
