"""Per-chat message storage on a Redis sorted set scored by send time."""

from __future__ import annotations

from typing import Optional

from redis import Redis
from redis.client import Pipeline

from app.core.ids import now_ms
from app.core.keys import chat_message_index_key, chat_messages_key
from app.schemas.chat import Message, MessagePage


class MessageRepository:
    """
    Messages live in two structures per chat:

    - ``chat:{id}:messages``: sorted set, member = serialized message,
      score = ``message.timestamp``. Equal scores fall back to member order,
      which is message-id order because the id is serialized first.
    - ``chat:{id}:message_index``: hash of message id -> member, used for
      point lookups, edits and deletes.

    Every write keeps both in step.
    """

    def __init__(self, redis_client: Redis) -> None:
        self._redis = redis_client

    def store(self, chat_id: str, message: Message) -> None:
        member = message.to_member()
        pipe = self._redis.pipeline(transaction=True)
        pipe.zadd(chat_messages_key(chat_id), {member: message.timestamp})
        pipe.hset(chat_message_index_key(chat_id), message.id, member)
        pipe.execute()

    def get_messages(
        self,
        chat_id: str,
        limit: int = 50,
        before: Optional[int] = None,
        before_id: Optional[str] = None,
    ) -> MessagePage:
        """
        Return up to ``limit`` messages newest first, strictly older than the
        cursor when given. Fetches ``limit + 1`` to compute ``has_more``
        without a second count query.

        The cursor is the oldest message already seen: ``before`` alone skips
        everything at or after that timestamp, ``before`` with ``before_id``
        also returns the remaining messages sharing that timestamp whose id
        sorts below ``before_id``.
        """
        if limit < 1:
            raise ValueError("limit must be a positive integer")
        key = chat_messages_key(chat_id)
        offset = 0
        if before is None:
            max_score = "+inf"
        elif before_id is None:
            max_score = f"({before}"
        else:
            max_score = before
            # At equal scores descending member order is descending id order,
            # so the already-seen members at the cursor score come first.
            offset = sum(
                1
                for m in self._redis.zrangebyscore(key, before, before)
                if Message.from_member(m).id >= before_id
            )
        members = self._redis.zrevrangebyscore(
            key,
            max_score,
            "-inf",
            start=offset,
            num=limit + 1,
        )
        messages = [Message.from_member(m) for m in members[:limit]]
        return MessagePage(messages=messages, has_more=len(members) > limit)

    def get_message(self, chat_id: str, message_id: str) -> Optional[Message]:
        member = self._redis.hget(chat_message_index_key(chat_id), message_id)
        if member is None:
            return None
        return Message.from_member(member)

    def edit_message(
        self, chat_id: str, message_id: str, new_content: str
    ) -> Optional[Message]:
        """Replace the content in place; the message keeps its original score."""
        messages_key = chat_messages_key(chat_id)
        index_key = chat_message_index_key(chat_id)

        def _edit(pipe: Pipeline) -> Optional[Message]:
            member = pipe.hget(index_key, message_id)
            if member is None:
                return None
            message = Message.from_member(member)
            updated = message.model_copy(
                update={
                    "content": new_content,
                    "edited": True,
                    "edited_at": now_ms(),
                }
            )
            updated_member = updated.to_member()
            pipe.multi()
            pipe.zrem(messages_key, member)
            pipe.zadd(messages_key, {updated_member: message.timestamp})
            pipe.hset(index_key, message_id, updated_member)
            return updated

        return self._redis.transaction(_edit, index_key, value_from_callable=True)

    def delete_message(self, chat_id: str, message_id: str) -> bool:
        messages_key = chat_messages_key(chat_id)
        index_key = chat_message_index_key(chat_id)

        def _delete(pipe: Pipeline) -> bool:
            member = pipe.hget(index_key, message_id)
            if member is None:
                return False
            pipe.multi()
            pipe.zrem(messages_key, member)
            pipe.hdel(index_key, message_id)
            return True

        return self._redis.transaction(_delete, index_key, value_from_callable=True)

    def get_last_message(self, chat_id: str) -> Optional[Message]:
        members = self._redis.zrange(chat_messages_key(chat_id), -1, -1)
        if not members:
            return None
        return Message.from_member(members[0])

    def count_messages(self, chat_id: str) -> int:
        return self._redis.zcard(chat_messages_key(chat_id))

    def delete_all_messages(self, chat_id: str) -> None:
        self._redis.delete(chat_messages_key(chat_id), chat_message_index_key(chat_id))

    def delete_old_messages(self, chat_id: str, before_timestamp: int) -> int:
        """Remove every message with timestamp in [0, before_timestamp]; return the count."""
        messages_key = chat_messages_key(chat_id)
        expired = self._redis.zrangebyscore(messages_key, 0, before_timestamp)
        if not expired:
            return 0
        expired_ids = [Message.from_member(m).id for m in expired]
        pipe = self._redis.pipeline(transaction=True)
        pipe.zremrangebyscore(messages_key, 0, before_timestamp)
        pipe.hdel(chat_message_index_key(chat_id), *expired_ids)
        removed, _ = pipe.execute()
        return removed
