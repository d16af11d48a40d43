"""
Chat service - conversations between connected users.

Messages are read on demand; there is no push channel.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.core.config import settings
from skillswap.core.exceptions import (
    BadRequestException,
    ChatNotFoundException,
    SkillExchangeNotFoundException,
    UserNotFoundException,
)
from skillswap.core.logging import get_logger
from skillswap.models.chat import Chat, Message
from skillswap.repositories.chat_repository import ChatRepository, MessageRepository
from skillswap.repositories.exchange_repository import SkillExchangeRepository
from skillswap.repositories.user_repository import UserRepository
from skillswap.schemas.chat import ChatMessageResponse, ChatResponse, LastMessage
from skillswap.services.notification_service import NotificationService

logger = get_logger(__name__)

_PREVIEW_LENGTH = 80


def _to_chat_response(chat: Chat, participants: List[UUID]) -> ChatResponse:
    last_message = None
    if chat.last_message_id is not None:
        last_message = LastMessage(
            id=chat.last_message_id,
            sender_id=chat.last_message_sender_id,
            content=chat.last_message_content or "",
            timestamp=chat.last_message_at,
        )
    return ChatResponse(
        id=chat.id,
        participants=participants,
        title=chat.title,
        skill_exchange_id=chat.skill_exchange_id,
        last_message=last_message,
        created_at=chat.created_at,
        updated_at=chat.updated_at,
    )


class ChatService:
    """Creates chats, stores messages and tracks read state."""

    def __init__(self):
        self.chat_repo = ChatRepository()
        self.message_repo = MessageRepository()
        self.user_repo = UserRepository()
        self.exchange_repo = SkillExchangeRepository()
        self.notification_service = NotificationService()

    async def create_chat(
        self,
        db: AsyncSession,
        creator_id: UUID,
        participants: List[UUID],
        *,
        title: Optional[str] = None,
        skill_exchange_id: Optional[UUID] = None,
    ) -> ChatResponse:
        """
        Create a chat. The creator is always a participant; everyone else is notified.

        Raises:
            UserNotFoundException: A participant does not exist.
            SkillExchangeNotFoundException: The linked exchange is unknown or
                the creator is not part of it.
        """
        member_ids = [creator_id]
        for user_id in participants:
            if user_id not in member_ids:
                member_ids.append(user_id)

        users = await self.user_repo.get_active_by_ids(db, member_ids)
        if len(users) != len(member_ids):
            raise UserNotFoundException()

        if skill_exchange_id is not None:
            exchange = await self.exchange_repo.get_for_participant(db, skill_exchange_id, creator_id)
            if not exchange:
                raise SkillExchangeNotFoundException()

        chat = await self.chat_repo.create(db, title=title, skill_exchange_id=skill_exchange_id)
        await self.chat_repo.add_participants(db, chat.id, member_ids)

        creator = next(u for u in users if u.id == creator_id)
        await self.notification_service.notify_many(
            db,
            [user_id for user_id in member_ids if user_id != creator_id],
            "message",
            f"{creator.display_name} started a conversation with you",
            related_id=chat.id,
        )
        await db.commit()

        logger.info("chat_created", chat_id=str(chat.id), participants=len(member_ids))
        return _to_chat_response(chat, member_ids)

    async def get_or_create_direct_chat(
        self,
        db: AsyncSession,
        user_id: UUID,
        other_user_id: UUID,
    ) -> ChatResponse:
        """Reuse the two-person chat between the users, or start one."""
        if user_id == other_user_id:
            raise BadRequestException("You cannot start a chat with yourself", code="SELF_CHAT")

        chat = await self.chat_repo.find_direct_chat(db, user_id, other_user_id)
        if chat:
            participants = await self.chat_repo.get_participant_ids(db, chat.id)
            return _to_chat_response(chat, participants)

        return await self.create_chat(db, user_id, [other_user_id])

    async def get_chat(
        self,
        db: AsyncSession,
        chat_id: UUID,
        user_id: UUID,
    ) -> ChatResponse:
        chat = await self._get_chat_for_participant(db, chat_id, user_id)
        participants = await self.chat_repo.get_participant_ids(db, chat.id)
        return _to_chat_response(chat, participants)

    async def list_user_chats(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> List[ChatResponse]:
        """The user's chats, most recently active first."""
        chats = await self.chat_repo.list_for_user(db, user_id)
        participants = await self.chat_repo.get_participants_for_chats(db, [c.id for c in chats])
        return [_to_chat_response(chat, participants[chat.id]) for chat in chats]

    async def send_message(
        self,
        db: AsyncSession,
        chat_id: UUID,
        sender_id: UUID,
        content: str,
        attachments: Optional[List[str]] = None,
    ) -> ChatMessageResponse:
        """
        Post a message and notify the other participants.

        Raises:
            ChatNotFoundException: Unknown chat or sender is not a participant.
        """
        chat = await self._get_chat_for_participant(db, chat_id, sender_id)
        message = await self.append_message(db, chat, sender_id, content, attachments)

        sender = await self.user_repo.get_by_id(db, sender_id)
        participants = await self.chat_repo.get_participant_ids(db, chat.id)
        await self.notification_service.notify_many(
            db,
            [user_id for user_id in participants if user_id != sender_id],
            "message",
            f"{sender.display_name}: {content[:_PREVIEW_LENGTH]}",
            related_id=chat.id,
        )
        await db.commit()

        logger.debug("message_sent", chat_id=str(chat.id), message_id=str(message.id))
        return ChatMessageResponse.model_validate(message)

    async def append_message(
        self,
        db: AsyncSession,
        chat: Chat,
        sender_id: UUID,
        content: str,
        attachments: Optional[List[str]] = None,
    ) -> Message:
        """Store a message and make it the chat's last message. The caller commits."""
        message = await self.message_repo.create(
            db,
            chat_id=chat.id,
            sender_id=sender_id,
            content=content,
            attachments=list(attachments or []),
        )
        await self.chat_repo.update(
            db,
            chat,
            last_message_id=message.id,
            last_message_sender_id=sender_id,
            last_message_content=content,
            last_message_at=message.created_at,
        )
        return message

    async def post_to_exchange_chat(
        self,
        db: AsyncSession,
        exchange_id: UUID,
        sender_id: UUID,
        content: str,
    ) -> Optional[Message]:
        """Post into the chat linked to an exchange, if there is one. The caller commits."""
        chat = await self.chat_repo.find_by_exchange(db, exchange_id)
        if not chat:
            return None
        return await self.append_message(db, chat, sender_id, content)

    async def get_chat_messages(
        self,
        db: AsyncSession,
        chat_id: UUID,
        user_id: UUID,
        limit: Optional[int] = None,
    ) -> List[ChatMessageResponse]:
        """The latest messages of a chat, oldest first."""
        chat = await self._get_chat_for_participant(db, chat_id, user_id)
        messages = await self.message_repo.latest_for_chat(
            db, chat.id, limit or settings.chat_messages_limit
        )
        return [ChatMessageResponse.model_validate(m) for m in messages]

    async def mark_messages_read(
        self,
        db: AsyncSession,
        chat_id: UUID,
        user_id: UUID,
    ) -> int:
        """Mark other participants' unread messages as read. Returns count updated."""
        chat = await self._get_chat_for_participant(db, chat_id, user_id)
        updated = await self.message_repo.mark_read_for_reader(db, chat.id, user_id)
        await db.commit()
        return updated

    async def _get_chat_for_participant(
        self,
        db: AsyncSession,
        chat_id: UUID,
        user_id: UUID,
    ) -> Chat:
        chat = await self.chat_repo.get_for_participant(db, chat_id, user_id)
        if not chat:
            raise ChatNotFoundException()
        return chat
