"""Chat metadata records stored as one Redis hash per chat."""

from __future__ import annotations

import json
from typing import Optional

from redis import Redis
from redis.client import Pipeline

from app.core.ids import now_ms
from app.core.keys import chat_fallback_avatars_key, chat_key
from app.schemas.chat import Chat


def _parse_chat(data: dict[str, str]) -> Optional[Chat]:
    # HGETALL on a missing key returns {}; the id field is the existence marker.
    if not data.get("id"):
        return None
    return Chat(
        id=data["id"],
        created_at=int(data["created_at"]),
        created_by=data["created_by"],
        participants=json.loads(data.get("participants") or "[]"),
        last_message_at=int(data["last_message_at"]),
        title=data.get("title") or None,
    )


class ChatRepository:
    """
    CRUD for chat records. Performs no authorization; callers go through
    ChatService / MessageService.

    Participant updates run as optimistic transactions (WATCH on the chat
    hash), so concurrent adds/removes on the same chat are retried instead
    of overwriting each other.
    """

    def __init__(self, redis_client: Redis) -> None:
        self._redis = redis_client

    def create(self, chat_id: str, creator_user_id: str) -> Chat:
        now = now_ms()
        chat = Chat(
            id=chat_id,
            created_at=now,
            created_by=creator_user_id,
            participants=[creator_user_id],
            last_message_at=now,
        )
        self._redis.hset(
            chat_key(chat_id),
            mapping={
                "id": chat.id,
                "created_at": str(chat.created_at),
                "created_by": chat.created_by,
                "participants": json.dumps(chat.participants),
                "last_message_at": str(chat.last_message_at),
                "title": "",
            },
        )
        return chat

    def get(self, chat_id: str) -> Optional[Chat]:
        return _parse_chat(self._redis.hgetall(chat_key(chat_id)))

    def update_last_message_at(self, chat_id: str, timestamp: int) -> bool:
        """Set last_message_at. Missing chats are left alone and False is returned."""
        key = chat_key(chat_id)

        def _touch(pipe: Pipeline) -> bool:
            if not pipe.hexists(key, "id"):
                return False
            pipe.multi()
            pipe.hset(key, "last_message_at", str(timestamp))
            return True

        return self._redis.transaction(_touch, key, value_from_callable=True)

    def delete(self, chat_id: str) -> None:
        """Remove the chat record and its per-chat avatar assignments. Idempotent."""
        self._redis.delete(chat_key(chat_id), chat_fallback_avatars_key(chat_id))

    def add_participant(self, chat_id: str, user_id: str) -> bool:
        key = chat_key(chat_id)

        def _add(pipe: Pipeline) -> bool:
            chat = _parse_chat(pipe.hgetall(key))
            if chat is None:
                return False
            if user_id in chat.participants:
                return True
            pipe.multi()
            pipe.hset(key, "participants", json.dumps([*chat.participants, user_id]))
            return True

        return self._redis.transaction(_add, key, value_from_callable=True)

    def remove_participant(self, chat_id: str, user_id: str) -> bool:
        key = chat_key(chat_id)

        def _remove(pipe: Pipeline) -> bool:
            chat = _parse_chat(pipe.hgetall(key))
            if chat is None:
                return False
            remaining = [p for p in chat.participants if p != user_id]
            pipe.multi()
            pipe.hset(key, "participants", json.dumps(remaining))
            return True

        return self._redis.transaction(_remove, key, value_from_callable=True)

    def is_participant(self, chat_id: str, user_id: str) -> bool:
        chat = self.get(chat_id)
        if chat is None:
            return False
        return user_id in chat.participants
