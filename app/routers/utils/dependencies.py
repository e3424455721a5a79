from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, HTTPException
from redis import Redis

from app.infra.redis_client import get_redis_client
from app.services.chat_service import ChatService
from app.services.consent_service import ConsentService
from app.services.message_service import MessageService


@dataclass(frozen=True)
class CurrentUser:
    """Identity supplied by the hosting platform's gateway."""

    user_id: str
    username: Optional[str] = None


def get_redis() -> Redis:
    """FastAPI dependency for the shared Redis client (overridden in tests)."""
    return get_redis_client()


def get_current_user(
    x_user_id: Optional[str] = Header(None),
    x_username: Optional[str] = Header(None),
) -> CurrentUser:
    """FastAPI dependency resolving the authenticated user from gateway headers."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="User authentication required")
    return CurrentUser(user_id=x_user_id, username=x_username or None)


def get_chat_service(redis_client: Redis = Depends(get_redis)) -> ChatService:
    return ChatService(redis_client)


def get_message_service(redis_client: Redis = Depends(get_redis)) -> MessageService:
    return MessageService(redis_client)


def get_consent_service(redis_client: Redis = Depends(get_redis)) -> ConsentService:
    return ConsentService(redis_client)
