"""Avatar URL resolution with a Redis cache in front of the profile service."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import requests
from redis import Redis

from app.adapters.avatar_fetcher import AvatarFetcher
from app.config import get_settings
from app.core.keys import avatar_cache_key, chat_fallback_avatars_key, icon_cache_key

logger = logging.getLogger(__name__)

DEFAULT_AVATAR_URL = (
    "https://www.redditstatic.com/avatars/defaults/v2/avatar_default_{number}.png"
)
DEFAULT_AVATAR_COUNT = 8


def default_avatar_url(seed: str) -> str:
    """Deterministic default avatar: character-code sum modulo the avatar count."""
    number = sum(ord(char) for char in seed) % DEFAULT_AVATAR_COUNT
    return DEFAULT_AVATAR_URL.format(number=number)


class AvatarService:
    """
    Resolution order: event-provided icon, cached avatar, profile service,
    default avatar. Whatever the profile service path yields (including the
    default on a miss or an error) is cached for the configured TTL.
    """

    def __init__(
        self,
        redis_client: Redis,
        fetcher: Optional[AvatarFetcher] = None,
        cache_ttl_seconds: Optional[int] = None,
    ) -> None:
        self._redis = redis_client
        self._fetcher = fetcher or AvatarFetcher()
        self._ttl = cache_ttl_seconds or get_settings().avatar_cache_ttl_seconds

    def resolve(self, username: str) -> str:
        icon = self._redis.get(icon_cache_key(username))
        if icon:
            return icon

        cache_key = avatar_cache_key(username)
        cached = self._redis.get(cache_key)
        if cached:
            return cached

        try:
            url = self._fetcher.fetch_avatar_url(username)
        except requests.RequestException as e:
            logger.warning("Avatar fetch failed for %s, using default: %s", username, e)
            url = None
        url = url or default_avatar_url(username)
        self._redis.set(cache_key, url, ex=self._ttl)
        return url

    def resolve_many(self, usernames: Iterable[str]) -> dict[str, str]:
        return {username: self.resolve(username) for username in dict.fromkeys(usernames)}

    def chat_fallback(self, user_id: str, chat_id: str) -> str:
        """Stable fallback avatar for a user within one chat; lives as long as the chat."""
        key = chat_fallback_avatars_key(chat_id)
        cached = self._redis.hget(key, user_id)
        if cached:
            return cached
        url = default_avatar_url(user_id)
        self._redis.hset(key, user_id, url)
        return url
