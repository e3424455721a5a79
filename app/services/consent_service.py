"""Terms-of-use consent records, one hash per user."""

from __future__ import annotations

from typing import Optional

from redis import Redis

from app.config import get_settings
from app.core.ids import now_ms
from app.core.keys import user_consent_key
from app.schemas.consent import ConsentStatus


class ConsentService:
    def __init__(self, redis_client: Redis) -> None:
        self._redis = redis_client

    @staticmethod
    def current_terms_version() -> str:
        return get_settings().terms_version

    def check_consent(self, user_id: str) -> Optional[ConsentStatus]:
        data = self._redis.hgetall(user_consent_key(user_id))
        if not data:
            return None
        return ConsentStatus(
            accepted=data.get("accepted") == "true",
            timestamp=int(data["timestamp"]),
            terms_version=data["terms_version"],
        )

    def record_consent(
        self, user_id: str, terms_version: Optional[str] = None
    ) -> ConsentStatus:
        consent = ConsentStatus(
            accepted=True,
            timestamp=now_ms(),
            terms_version=terms_version or self.current_terms_version(),
        )
        self._redis.hset(
            user_consent_key(user_id),
            mapping={
                "accepted": "true" if consent.accepted else "false",
                "timestamp": str(consent.timestamp),
                "terms_version": consent.terms_version,
            },
        )
        return consent

    def has_consent(self, user_id: str) -> bool:
        return bool(self._redis.exists(user_consent_key(user_id)))
