"""Fetcher for user avatars from the profile service."""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

import requests

from app.config import get_settings
from app.infra.logging_config import get_logger

logger = get_logger("avatar_fetcher")

AVATAR_PATH = "/users/{username}/avatar"


class AvatarFetcher:
    """
    Looks up a user's custom avatar URL.

    Returns None when the user is unknown, has no custom avatar, or no
    profile service is configured. Transport errors propagate as
    ``requests.RequestException``.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[int] = None,
    ) -> None:
        settings = get_settings()
        self._base_url = base_url if base_url is not None else settings.avatar_api_url
        self._timeout = timeout_seconds or settings.avatar_request_timeout_seconds

    @property
    def enabled(self) -> bool:
        return bool(self._base_url)

    def fetch_avatar_url(self, username: str) -> Optional[str]:
        if not self.enabled:
            return None
        url = self._base_url.rstrip("/") + AVATAR_PATH.format(username=quote(username))
        logger.debug("Fetching avatar for %s from %s", username, url)
        resp = requests.get(
            url, headers={"Accept": "application/json"}, timeout=self._timeout
        )
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.json().get("avatar_url") or None
