"""Fixed one-minute window counter on the sender, keyed per user in Redis."""

from __future__ import annotations

import logging
from typing import Optional

from redis import Redis, RedisError

from app.core.keys import message_rate_limit_key

logger = logging.getLogger(__name__)


def check_message_rate_limit(
    user_id: str,
    redis_client: Optional[Redis],
    limit_per_minute: Optional[int],
) -> bool:
    """
    Count one send against the user's current window; False once the count
    passes ``limit_per_minute``. No client or no positive limit means no
    limiting, and a Redis failure lets the send through.
    """
    if redis_client is None or limit_per_minute is None or limit_per_minute <= 0:
        return True
    key = message_rate_limit_key(user_id)
    try:
        pipe = redis_client.pipeline()
        pipe.incr(key)
        pipe.expire(key, 60)
        results = pipe.execute()
        count = results[0] if results else 0
        return count <= limit_per_minute
    except RedisError as e:
        logger.warning("Rate limit check failed, allowing request: %s", e)
        return True
