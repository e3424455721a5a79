"""Per-user sorted set of chat ids, scored by the time the chat was added."""

from __future__ import annotations

from typing import List, Optional

from redis import Redis

from app.core.ids import now_ms
from app.core.keys import user_chats_key


class UserChatIndex:
    def __init__(self, redis_client: Redis) -> None:
        self._redis = redis_client

    def add(self, user_id: str, chat_id: str, score: Optional[int] = None) -> None:
        self._redis.zadd(
            user_chats_key(user_id), {chat_id: now_ms() if score is None else score}
        )

    def remove(self, user_id: str, chat_id: str) -> None:
        self._redis.zrem(user_chats_key(user_id), chat_id)

    def list(self, user_id: str) -> List[str]:
        """
        Chat ids, most recently added first. This is index order, not
        message activity; ChatService re-sorts by last_message_at.
        """
        return self._redis.zrange(user_chats_key(user_id), 0, -1, desc=True)

    def has(self, user_id: str, chat_id: str) -> bool:
        return self._redis.zscore(user_chats_key(user_id), chat_id) is not None

    def count(self, user_id: str) -> int:
        return self._redis.zcard(user_chats_key(user_id))
