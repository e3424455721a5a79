"""Chat creation, listing, access-validated retrieval and deletion."""

from __future__ import annotations

import logging
from typing import List, Optional

from redis import Redis

from app.core.ids import generate_chat_id
from app.repositories.chat_repository import ChatRepository
from app.repositories.message_repository import MessageRepository
from app.repositories.user_chat_index import UserChatIndex
from app.schemas.chat import Chat, ChatListItem, LastMessagePreview, Message
from app.services.access import AccessResult
from app.services.avatar_service import AvatarService
from app.services.retention_service import RetentionSweeper

logger = logging.getLogger(__name__)


class ChatService:
    def __init__(
        self,
        redis_client: Redis,
        avatar_service: Optional[AvatarService] = None,
        sweeper: Optional[RetentionSweeper] = None,
    ) -> None:
        self._chats = ChatRepository(redis_client)
        self._messages = MessageRepository(redis_client)
        self._index = UserChatIndex(redis_client)
        self._avatars = avatar_service or AvatarService(redis_client)
        self._sweeper = sweeper or RetentionSweeper(
            redis_client,
            chat_repository=self._chats,
            message_repository=self._messages,
            user_chat_index=self._index,
        )

    def create_new_chat(self, user_id: str) -> Chat:
        chat = self._chats.create(generate_chat_id(), user_id)
        self._index.add(user_id, chat.id)
        logger.info("Chat %s created by user %s", chat.id, user_id)
        return chat

    def get_user_chats(self, user_id: str) -> List[ChatListItem]:
        """
        Sweep inactive chats, then build list items for the surviving chats,
        most recently active first.
        """
        self._sweeper.clean_inactive_chats(user_id)

        items: List[ChatListItem] = []
        for chat_id in self._index.list(user_id):
            chat = self._chats.get(chat_id)
            if chat is None:
                continue
            last_message = self._messages.get_last_message(chat_id)
            items.append(
                ChatListItem(
                    **chat.model_dump(),
                    last_message=self._preview(chat_id, last_message),
                )
            )

        items.sort(key=lambda item: item.last_message_at, reverse=True)
        return items

    def _preview(
        self, chat_id: str, message: Optional[Message]
    ) -> Optional[LastMessagePreview]:
        if message is None:
            return None
        try:
            avatar_url = self._avatars.resolve(message.username)
        except Exception as e:
            logger.warning(
                "Avatar resolution failed for %s in chat %s, using fallback: %s",
                message.username,
                chat_id,
                e,
            )
            avatar_url = self._avatars.chat_fallback(message.user_id, chat_id)
        return LastMessagePreview(
            text=message.content,
            username=message.username,
            timestamp=message.timestamp,
            avatar_url=avatar_url,
        )

    # -- access-validated operations -------------------------------------------------

    def resolve_chat(self, chat_id: str, user_id: str) -> AccessResult[Chat]:
        chat = self._chats.get(chat_id)
        if chat is None:
            return AccessResult.not_found()
        if user_id not in chat.participants:
            return AccessResult.forbidden()
        return AccessResult.success(chat)

    def get_chat_with_validation(self, chat_id: str, user_id: str) -> Optional[Chat]:
        """The chat if ``user_id`` participates in it, else None."""
        return self.resolve_chat(chat_id, user_id).value

    def resolve_chat_deletion(self, chat_id: str, user_id: str) -> AccessResult[Chat]:
        chat = self._chats.get(chat_id)
        if chat is None:
            return AccessResult.not_found()
        if chat.created_by != user_id:
            return AccessResult.forbidden()
        self._sweeper.purge_chat(chat)
        logger.info("Chat %s deleted by user %s", chat_id, user_id)
        return AccessResult.success(chat)

    def delete_chat_with_validation(self, chat_id: str, user_id: str) -> bool:
        """Only the creator may delete; deletion cascades to messages and every index."""
        return self.resolve_chat_deletion(chat_id, user_id).ok

    def add_participant_with_validation(
        self, chat_id: str, requester_id: str, user_id: str
    ) -> bool:
        access = self.resolve_chat(chat_id, requester_id)
        if not access.ok:
            return False
        if not self._chats.add_participant(chat_id, user_id):
            return False
        self._index.add(user_id, chat_id)
        return True

    def leave_chat(self, chat_id: str, user_id: str) -> bool:
        """Remove a non-creator participant from the chat and from their own index."""
        access = self.resolve_chat(chat_id, user_id)
        if not access.ok or access.value.created_by == user_id:
            return False
        if not self._chats.remove_participant(chat_id, user_id):
            return False
        self._index.remove(user_id, chat_id)
        return True
