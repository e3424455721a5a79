"""Message send, paginated retrieval, edit and delete with authorization."""

from __future__ import annotations

from typing import Optional

from redis import Redis

from app.config import get_settings
from app.core.ids import generate_message_id, now_ms
from app.exceptions import NotParticipantError
from app.repositories.chat_repository import ChatRepository
from app.repositories.message_repository import MessageRepository
from app.schemas.chat import Message, MessagePage
from app.services.access import AccessResult
from app.services.retention_service import RetentionSweeper


class MessageService:
    def __init__(
        self,
        redis_client: Redis,
        sweeper: Optional[RetentionSweeper] = None,
    ) -> None:
        self._chats = ChatRepository(redis_client)
        self._messages = MessageRepository(redis_client)
        self._sweeper = sweeper or RetentionSweeper(
            redis_client,
            chat_repository=self._chats,
            message_repository=self._messages,
        )

    def _require_participant(self, chat_id: str, user_id: str) -> None:
        if not self._chats.is_participant(chat_id, user_id):
            raise NotParticipantError(chat_id, user_id)

    def send_message(
        self, chat_id: str, user_id: str, username: str, content: str
    ) -> Message:
        """
        Store a new message and bump the chat's last_message_at.
        Raises NotParticipantError; sending never adds the sender as a participant.
        A chat purged while the message is being stored gets the message
        removed again and is reported as NotParticipantError.
        """
        self._require_participant(chat_id, user_id)
        message = Message(
            id=generate_message_id(),
            user_id=user_id,
            username=username,
            content=content,
            timestamp=now_ms(),
        )
        self._messages.store(chat_id, message)
        if not self._chats.update_last_message_at(chat_id, message.timestamp):
            self._messages.delete_message(chat_id, message.id)
            raise NotParticipantError(chat_id, user_id)
        return message

    def get_messages(
        self,
        chat_id: str,
        user_id: str,
        limit: Optional[int] = None,
        before: Optional[int] = None,
        before_id: Optional[str] = None,
    ) -> MessagePage:
        """
        Newest-first page of messages older than the ``before``/``before_id``
        cursor. Expired messages are swept first. Raises NotParticipantError.
        """
        self._require_participant(chat_id, user_id)
        self._sweeper.clean_old_messages(chat_id)
        if limit is None:
            limit = get_settings().messages_default_limit
        return self._messages.get_messages(
            chat_id, limit=limit, before=before, before_id=before_id
        )

    def _resolve_own_message(
        self, chat_id: str, message_id: str, user_id: str
    ) -> AccessResult[Message]:
        if not self._chats.is_participant(chat_id, user_id):
            return AccessResult.forbidden()
        message = self._messages.get_message(chat_id, message_id)
        if message is None:
            return AccessResult.not_found()
        if message.user_id != user_id:
            return AccessResult.forbidden()
        return AccessResult.success(message)

    def resolve_edit(
        self, chat_id: str, message_id: str, user_id: str, new_content: str
    ) -> AccessResult[Message]:
        access = self._resolve_own_message(chat_id, message_id, user_id)
        if not access.ok:
            return access
        updated = self._messages.edit_message(chat_id, message_id, new_content)
        if updated is None:
            # Deleted between the lookup and the edit.
            return AccessResult.not_found()
        return AccessResult.success(updated)

    def edit_message(
        self, chat_id: str, message_id: str, user_id: str, new_content: str
    ) -> Optional[Message]:
        """None when the caller is not a participant, the message is missing, or not theirs."""
        return self.resolve_edit(chat_id, message_id, user_id, new_content).value

    def resolve_delete(
        self, chat_id: str, message_id: str, user_id: str
    ) -> AccessResult[Message]:
        access = self._resolve_own_message(chat_id, message_id, user_id)
        if not access.ok:
            return access
        if not self._messages.delete_message(chat_id, message_id):
            return AccessResult.not_found()
        return access

    def delete_message(self, chat_id: str, message_id: str, user_id: str) -> bool:
        return self.resolve_delete(chat_id, message_id, user_id).ok
