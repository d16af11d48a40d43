"""
Chat repository - data access for Chat, ChatParticipant and Message entities.
"""
from collections import defaultdict
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.models.chat import Chat, ChatParticipant, Message
from skillswap.repositories.base import BaseRepository


class ChatRepository(BaseRepository[Chat]):
    def __init__(self):
        super().__init__(Chat)

    async def add_participants(
        self,
        db: AsyncSession,
        chat_id: UUID,
        user_ids: List[UUID],
    ) -> None:
        for user_id in user_ids:
            db.add(ChatParticipant(chat_id=chat_id, user_id=user_id))
        await db.flush()

    async def get_for_participant(
        self,
        db: AsyncSession,
        chat_id: UUID,
        user_id: UUID,
    ) -> Optional[Chat]:
        """Fetch a chat only if ``user_id`` takes part in it."""
        result = await db.execute(
            select(Chat)
            .join(ChatParticipant, ChatParticipant.chat_id == Chat.id)
            .where(Chat.id == chat_id, ChatParticipant.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_participant_ids(
        self,
        db: AsyncSession,
        chat_id: UUID,
    ) -> List[UUID]:
        result = await db.execute(
            select(ChatParticipant.user_id)
            .where(ChatParticipant.chat_id == chat_id)
            .order_by(ChatParticipant.created_at)
        )
        return list(result.scalars().all())

    async def get_participants_for_chats(
        self,
        db: AsyncSession,
        chat_ids: List[UUID],
    ) -> Dict[UUID, List[UUID]]:
        grouped: Dict[UUID, List[UUID]] = defaultdict(list)
        if not chat_ids:
            return grouped
        result = await db.execute(
            select(ChatParticipant.chat_id, ChatParticipant.user_id)
            .where(ChatParticipant.chat_id.in_(chat_ids))
            .order_by(ChatParticipant.created_at)
        )
        for chat_id, user_id in result.all():
            grouped[chat_id].append(user_id)
        return grouped

    async def list_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> List[Chat]:
        """Chats the user takes part in, most recently active first."""
        result = await db.execute(
            select(Chat)
            .join(ChatParticipant, ChatParticipant.chat_id == Chat.id)
            .where(ChatParticipant.user_id == user_id)
            .order_by(Chat.updated_at.desc())
        )
        return list(result.scalars().all())

    async def find_direct_chat(
        self,
        db: AsyncSession,
        user_id: UUID,
        other_user_id: UUID,
    ) -> Optional[Chat]:
        """The two-person chat between exactly these users, if one exists."""
        two_person_chats = (
            select(ChatParticipant.chat_id)
            .group_by(ChatParticipant.chat_id)
            .having(func.count(ChatParticipant.user_id) == 2)
        )
        mine = select(ChatParticipant.chat_id).where(ChatParticipant.user_id == user_id)
        theirs = select(ChatParticipant.chat_id).where(ChatParticipant.user_id == other_user_id)

        result = await db.execute(
            select(Chat)
            .where(
                Chat.id.in_(two_person_chats),
                Chat.id.in_(mine),
                Chat.id.in_(theirs),
            )
            .order_by(Chat.created_at)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def find_by_exchange(
        self,
        db: AsyncSession,
        exchange_id: UUID,
    ) -> Optional[Chat]:
        result = await db.execute(
            select(Chat)
            .where(Chat.skill_exchange_id == exchange_id)
            .order_by(Chat.created_at)
            .limit(1)
        )
        return result.scalar_one_or_none()


class MessageRepository(BaseRepository[Message]):
    def __init__(self):
        super().__init__(Message)

    async def latest_for_chat(
        self,
        db: AsyncSession,
        chat_id: UUID,
        limit: int = 50,
    ) -> List[Message]:
        """The ``limit`` most recent messages, returned oldest first."""
        result = await db.execute(
            select(Message)
            .where(Message.chat_id == chat_id)
            .order_by(Message.created_at.desc())
            .limit(limit)
        )
        messages = list(result.scalars().all())
        messages.reverse()
        return messages

    async def mark_read_for_reader(
        self,
        db: AsyncSession,
        chat_id: UUID,
        reader_id: UUID,
    ) -> int:
        """Mark every unread message not sent by ``reader_id`` as read."""
        result = await db.execute(
            update(Message)
            .where(
                Message.chat_id == chat_id,
                Message.is_read == False,
                Message.sender_id != reader_id,
            )
            .values(is_read=True)
            .execution_options(synchronize_session="evaluate")
        )
        await db.flush()
        return result.rowcount
