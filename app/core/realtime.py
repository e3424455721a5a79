"""Publish sent messages on Redis pub/sub for connected clients."""

from __future__ import annotations

import json
import logging

from redis import Redis, RedisError

from app.config import get_settings
from app.schemas.chat import Message

logger = logging.getLogger(__name__)


def publish_message(redis_client: Redis, chat_id: str, message: Message) -> int:
    """
    Broadcast the message (plus chat_id, for client-side filtering).
    Returns the number of subscribers reached; 0 when disabled or on failure.
    """
    settings = get_settings()
    if not settings.realtime_enabled:
        return 0
    payload = {**message.model_dump(), "chat_id": chat_id}
    try:
        return redis_client.publish(settings.realtime_channel, json.dumps(payload))
    except RedisError as e:
        logger.warning("Realtime publish failed for chat %s: %s", chat_id, e)
        return 0
