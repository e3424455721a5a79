"""
Process-wide Redis client.

The client is created lazily from settings and shared by every request;
repositories receive it by injection so tests can pass a fake instead.
"""

from __future__ import annotations

from typing import Optional

from redis import Redis

from app.config import get_settings

_client: Optional[Redis] = None


def get_redis_client() -> Redis:
    """Return the shared client, creating it on first use."""
    global _client

    if _client is not None:
        return _client

    settings = get_settings()
    _client = Redis.from_url(
        settings.redis_url_resolved,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=2,
        socket_timeout=2,
        health_check_interval=30,
        retry_on_timeout=True,
    )
    return _client


def close_redis_client() -> None:
    """Close the shared client on shutdown (safe to call when never created)."""
    global _client
    try:
        if _client is not None:
            _client.close()
    finally:
        _client = None
