"""
Seed script - populates the database with demo members for development.

Usage:
    python -m scripts.seed

The members are picked so discovery has something to show: each one teaches
something another one wants to learn. Alice and Bob start out connected
with a pending exchange; Carol has a pending request waiting for Alice.

This script is IDEMPOTENT - running it twice won't create duplicates.
It checks for existing data before inserting.
"""
import asyncio
import sys
import os

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from skillswap.core.database import async_session_maker, init_db
from skillswap.core.security import hash_password
from skillswap.models.connection import ConnectionRequest, UserConnection
from skillswap.models.skill_exchange import SkillExchange
from skillswap.models.user import User
from skillswap.models.user_skill import SKILL_KIND_LEARNING, SKILL_KIND_TEACHING, UserSkill
from sqlalchemy import select


DEMO_PASSWORD = "password123"

# ─── Members ───────────────────────────────────────────────────
# teaches / learns: (name, category, level)

MEMBERS = [
    {
        "email": "alice@skillswap.dev",
        "display_name": "Alice Mwangi",
        "bio": "Backend developer who plays guitar on weekends.",
        "teaches": [("Python", "technical", "Expert"), ("Guitar", "artistic", "Intermediate")],
        "learns": [("Spanish", "language", "Beginner"), ("Public Speaking", "soft", "Beginner")],
    },
    {
        "email": "bob@skillswap.dev",
        "display_name": "Bob Otieno",
        "bio": "Language teacher, curious about programming.",
        "teaches": [("Spanish", "language", "Expert"), ("French", "language", "Intermediate")],
        "learns": [("python", "technical", "Beginner")],
    },
    {
        "email": "carol@skillswap.dev",
        "display_name": "Carol Wanjiku",
        "bio": "Toastmasters regular and aspiring musician.",
        "teaches": [("Public Speaking", "soft", "Expert")],
        "learns": [("guitar", "artistic", "Beginner")],
    },
    {
        "email": "dan@skillswap.dev",
        "display_name": "Dan Kamau",
        "bio": "Small business owner.",
        "teaches": [("Bookkeeping", "business", "Intermediate")],
        "learns": [("French", "language", "Beginner")],
    },
]


async def seed():
    """Run the seed process."""
    print("Seeding database...")

    # Initialize tables
    await init_db()
    print("  Tables created")

    async with async_session_maker() as db:

        # ── Members and skills ─────────────────────────────
        users = {}
        for member in MEMBERS:
            existing = await db.execute(select(User).where(User.email == member["email"]))
            user = existing.scalar_one_or_none()
            if user:
                print(f"  {member['email']} already exists, skipping...")
                users[member["email"]] = user
                continue

            user = User(
                email=member["email"],
                password_hash=hash_password(DEMO_PASSWORD),
                display_name=member["display_name"],
                bio=member["bio"],
            )
            db.add(user)
            await db.flush()

            for kind, skills in ((SKILL_KIND_TEACHING, member["teaches"]), (SKILL_KIND_LEARNING, member["learns"])):
                for name, category, level in skills:
                    db.add(UserSkill(user_id=user.id, kind=kind, name=name, category=category, level=level, tags=[]))

            users[member["email"]] = user
            print(f"  Created {member['email']}")

        await db.flush()

        alice = users["alice@skillswap.dev"]
        bob = users["bob@skillswap.dev"]
        carol = users["carol@skillswap.dev"]

        # ── Alice <-> Bob connection ───────────────────────
        existing = await db.execute(
            select(UserConnection).where(
                UserConnection.user_id == alice.id,
                UserConnection.connected_user_id == bob.id,
            )
        )
        if existing.scalar_one_or_none():
            print("  Connections already exist, skipping...")
        else:
            db.add_all([
                UserConnection(user_id=alice.id, connected_user_id=bob.id),
                UserConnection(user_id=bob.id, connected_user_id=alice.id),
                ConnectionRequest(
                    from_user_id=bob.id,
                    to_user_id=alice.id,
                    status="accepted",
                    message="Python for Spanish?",
                    requester_will_learn="Python",
                    recipient_will_learn="Spanish",
                ),
            ])
            await db.flush()

            python_skill = (await db.execute(
                select(UserSkill).where(
                    UserSkill.user_id == alice.id,
                    UserSkill.kind == SKILL_KIND_TEACHING,
                    UserSkill.name == "Python",
                )
            )).scalar_one()
            db.add(SkillExchange(teacher_id=alice.id, student_id=bob.id, skill_id=python_skill.id))
            print("  Connected Alice and Bob, created a pending exchange")

        # ── Carol -> Alice pending request ─────────────────
        existing = await db.execute(
            select(ConnectionRequest).where(
                ConnectionRequest.from_user_id == carol.id,
                ConnectionRequest.to_user_id == alice.id,
            )
        )
        if existing.scalar_one_or_none():
            print("  Pending request already exists, skipping...")
        else:
            db.add(ConnectionRequest(
                from_user_id=carol.id,
                to_user_id=alice.id,
                message="I'd love to learn guitar from you!",
                requester_will_learn="Guitar",
                recipient_will_learn="Public Speaking",
            ))
            print("  Created pending request Carol -> Alice")

        # Commit everything
        await db.commit()
        print()
        print("Seed complete!")
        print(f"  Login as any member with password {DEMO_PASSWORD}, e.g. {MEMBERS[0]['email']}")


if __name__ == "__main__":
    asyncio.run(seed())
