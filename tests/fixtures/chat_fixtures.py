"""Fixtures for chats, messages and the services that own them."""

from typing import Optional

import pytest

from app.core.ids import generate_message_id, now_ms
from app.repositories.chat_repository import ChatRepository
from app.repositories.message_repository import MessageRepository
from app.repositories.user_chat_index import UserChatIndex
from app.schemas.chat import Message
from app.services.chat_service import ChatService
from app.services.message_service import MessageService
from app.services.retention_service import DAY_MS, RetentionPolicy, RetentionSweeper


def make_message(
    user_id: str,
    timestamp: Optional[int] = None,
    content: str = "hello",
    username: str = "someone",
    message_id: Optional[str] = None,
) -> Message:
    """Build a Message with an explicit timestamp (defaults to now)."""
    return Message(
        id=message_id or generate_message_id(),
        user_id=user_id,
        username=username,
        content=content,
        timestamp=now_ms() if timestamp is None else timestamp,
    )


def days_ago(days: int) -> int:
    return now_ms() - days * DAY_MS


@pytest.fixture
def chat_repository(redis_client):
    return ChatRepository(redis_client)


@pytest.fixture
def message_repository(redis_client):
    return MessageRepository(redis_client)


@pytest.fixture
def user_chat_index(redis_client):
    return UserChatIndex(redis_client)


@pytest.fixture
def sweeper(redis_client):
    return RetentionSweeper(redis_client, policy=RetentionPolicy())


@pytest.fixture
def chat_service(redis_client):
    return ChatService(redis_client)


@pytest.fixture
def message_service(redis_client):
    return MessageService(redis_client)


@pytest.fixture
def user_id(faker):
    return f"t2_{faker.uuid4()[:8]}"


@pytest.fixture
def other_user_id(faker):
    return f"t2_{faker.uuid4()[:8]}"


@pytest.fixture(scope="function")
def setup_chat(chat_service, user_id):
    """A chat created by ``user_id`` (sole participant)."""
    return chat_service.create_new_chat(user_id)


@pytest.fixture(scope="function")
def setup_shared_chat(chat_service, user_id, other_user_id):
    """
    A chat created by ``user_id`` with ``other_user_id`` added as participant.
    Returns the refreshed Chat.
    """
    chat = chat_service.create_new_chat(user_id)
    assert chat_service.add_participant_with_validation(chat.id, user_id, other_user_id)
    return chat_service.get_chat_with_validation(chat.id, user_id)
