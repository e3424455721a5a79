"""
Retention policy and lazy sweeps.

There is no background scheduler: sweeps run at the start of the two read
paths (chat list, message list). The policy functions are pure; the sweeper
performs the deletes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from redis import Redis

from app.config import get_settings
from app.core.ids import now_ms
from app.repositories.chat_repository import ChatRepository
from app.repositories.message_repository import MessageRepository
from app.repositories.user_chat_index import UserChatIndex
from app.schemas.chat import Chat

logger = logging.getLogger(__name__)

DAY_MS = 24 * 60 * 60 * 1000
MESSAGE_RETENTION_DAYS = 90
CHAT_INACTIVITY_DAYS = 180


@dataclass(frozen=True)
class RetentionPolicy:
    message_retention_days: int = MESSAGE_RETENTION_DAYS
    chat_inactivity_days: int = CHAT_INACTIVITY_DAYS

    @classmethod
    def from_settings(cls) -> "RetentionPolicy":
        settings = get_settings()
        return cls(
            message_retention_days=settings.message_retention_days,
            chat_inactivity_days=settings.chat_inactivity_days,
        )

    @property
    def message_retention_ms(self) -> int:
        return self.message_retention_days * DAY_MS

    @property
    def chat_inactivity_ms(self) -> int:
        return self.chat_inactivity_days * DAY_MS

    def should_delete_message(self, timestamp: int, now: Optional[int] = None) -> bool:
        """True once the message is older than the retention window."""
        now = now_ms() if now is None else now
        return now - timestamp > self.message_retention_ms

    def should_delete_chat(self, last_message_at: int, now: Optional[int] = None) -> bool:
        """True once the chat has been inactive longer than the inactivity window."""
        now = now_ms() if now is None else now
        return now - last_message_at > self.chat_inactivity_ms

    def message_cutoff(self, now: Optional[int] = None) -> int:
        now = now_ms() if now is None else now
        return now - self.message_retention_ms


DEFAULT_POLICY = RetentionPolicy()


def should_delete_message(timestamp: int, now: Optional[int] = None) -> bool:
    return DEFAULT_POLICY.should_delete_message(timestamp, now)


def should_delete_chat(last_message_at: int, now: Optional[int] = None) -> bool:
    return DEFAULT_POLICY.should_delete_chat(last_message_at, now)


class RetentionSweeper:
    """
    Applies a RetentionPolicy against the store.

    The chat cascade is not transactional. Each step is idempotent, so a
    cascade interrupted part-way is finished by the next sweep or delete:
    a chat id left in an index whose record is gone is dropped on the next
    ``clean_inactive_chats`` for that user.
    """

    def __init__(
        self,
        redis_client: Redis,
        policy: Optional[RetentionPolicy] = None,
        chat_repository: Optional[ChatRepository] = None,
        message_repository: Optional[MessageRepository] = None,
        user_chat_index: Optional[UserChatIndex] = None,
    ) -> None:
        self.policy = policy or RetentionPolicy.from_settings()
        self._chats = chat_repository or ChatRepository(redis_client)
        self._messages = message_repository or MessageRepository(redis_client)
        self._index = user_chat_index or UserChatIndex(redis_client)

    def clean_old_messages(self, chat_id: str) -> int:
        deleted = self._messages.delete_old_messages(
            chat_id, self.policy.message_cutoff()
        )
        if deleted:
            logger.info("Retention removed %d expired messages from chat %s", deleted, chat_id)
        return deleted

    def clean_inactive_chats(self, user_id: str) -> int:
        """
        Walk the user's chat index. Stale entries are dropped; inactive chats
        are purged for every participant, not only for ``user_id``.
        """
        deleted_count = 0
        for chat_id in self._index.list(user_id):
            chat = self._chats.get(chat_id)
            if chat is None:
                self._index.remove(user_id, chat_id)
                continue
            if self.policy.should_delete_chat(chat.last_message_at):
                self.purge_chat(chat)
                deleted_count += 1
        if deleted_count:
            logger.info(
                "Retention removed %d inactive chats while listing for user %s",
                deleted_count,
                user_id,
            )
        return deleted_count

    def purge_chat(self, chat: Chat) -> None:
        """Delete messages, the chat record and every participant's index entry."""
        self._messages.delete_all_messages(chat.id)
        self._chats.delete(chat.id)
        for participant_id in chat.participants:
            self._index.remove(participant_id, chat.id)
