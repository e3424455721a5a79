"""Redis key layout for chats, messages and per-user indexes."""

from __future__ import annotations


def chat_key(chat_id: str) -> str:
    return f"chat:{chat_id}"


def chat_messages_key(chat_id: str) -> str:
    """Sorted set of serialized messages scored by send timestamp."""
    return f"chat:{chat_id}:messages"


def chat_message_index_key(chat_id: str) -> str:
    """Hash of message id -> serialized message (point lookups)."""
    return f"chat:{chat_id}:message_index"


def chat_fallback_avatars_key(chat_id: str) -> str:
    return f"chat:{chat_id}:fallback_avatars"


def user_chats_key(user_id: str) -> str:
    return f"user:{user_id}:chats"


def user_consent_key(user_id: str) -> str:
    return f"user:{user_id}:consent"


def avatar_cache_key(username: str) -> str:
    return f"avatar:{username}"


def icon_cache_key(username: str) -> str:
    return f"icon:{username}"


def message_rate_limit_key(user_id: str) -> str:
    return f"ratelimit:messages:{user_id}"
