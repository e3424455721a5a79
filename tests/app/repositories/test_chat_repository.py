"""Tests for ChatRepository."""

from unittest.mock import patch

from redis.client import Pipeline

from app.core.keys import chat_fallback_avatars_key, chat_key
from app.repositories.chat_repository import ChatRepository


def test_create_persists_chat(chat_repository: ChatRepository, user_id):
    """create stores all fields and get reads them back."""
    chat = chat_repository.create("chat_1", user_id)
    assert chat.participants == [user_id]
    assert chat.created_by == user_id
    assert chat.last_message_at == chat.created_at
    assert chat.title is None
    assert chat_repository.get("chat_1") == chat


def test_get_missing_returns_none(chat_repository: ChatRepository):
    assert chat_repository.get("nope") is None


def test_get_hash_without_id_is_missing(chat_repository: ChatRepository, redis_client):
    """A hash lacking the id field counts as nonexistent."""
    redis_client.hset(chat_key("partial"), "last_message_at", "1")
    assert chat_repository.get("partial") is None


def test_update_last_message_at_only_touches_that_field(
    chat_repository: ChatRepository, user_id
):
    chat = chat_repository.create("chat_1", user_id)
    assert chat_repository.update_last_message_at("chat_1", chat.created_at + 500)
    updated = chat_repository.get("chat_1")
    assert updated.last_message_at == chat.created_at + 500
    assert updated.created_at == chat.created_at
    assert updated.participants == chat.participants


def test_update_last_message_at_missing_chat_is_noop(
    chat_repository: ChatRepository, redis_client
):
    assert chat_repository.update_last_message_at("missing", 123) is False
    assert redis_client.exists(chat_key("missing")) == 0


def test_update_last_message_at_racing_delete_leaves_no_record(
    chat_repository: ChatRepository, redis_client, user_id
):
    chat_repository.create("chat_1", user_id)
    original_hexists = Pipeline.hexists

    def hexists_then_delete(self, name, key):
        found = original_hexists(self, name, key)
        redis_client.delete(chat_key("chat_1"))
        return found

    with patch.object(Pipeline, "hexists", hexists_then_delete):
        assert chat_repository.update_last_message_at("chat_1", 123) is False
    assert redis_client.exists(chat_key("chat_1")) == 0


def test_delete_is_idempotent(chat_repository: ChatRepository, redis_client, user_id):
    chat_repository.create("chat_1", user_id)
    redis_client.hset(chat_fallback_avatars_key("chat_1"), user_id, "url")
    chat_repository.delete("chat_1")
    chat_repository.delete("chat_1")
    assert chat_repository.get("chat_1") is None
    assert redis_client.exists(chat_fallback_avatars_key("chat_1")) == 0


def test_add_participant_appends(chat_repository: ChatRepository, user_id, other_user_id):
    chat_repository.create("chat_1", user_id)
    assert chat_repository.add_participant("chat_1", other_user_id) is True
    assert chat_repository.get("chat_1").participants == [user_id, other_user_id]


def test_add_existing_participant_is_noop(chat_repository: ChatRepository, user_id):
    chat_repository.create("chat_1", user_id)
    assert chat_repository.add_participant("chat_1", user_id) is True
    assert chat_repository.get("chat_1").participants == [user_id]


def test_add_participant_missing_chat(chat_repository: ChatRepository, user_id):
    assert chat_repository.add_participant("missing", user_id) is False
    assert chat_repository.get("missing") is None


def test_remove_participant(chat_repository: ChatRepository, user_id, other_user_id):
    chat_repository.create("chat_1", user_id)
    chat_repository.add_participant("chat_1", other_user_id)
    assert chat_repository.remove_participant("chat_1", other_user_id) is True
    assert chat_repository.get("chat_1").participants == [user_id]
    # Removing someone who is not there still succeeds on an existing chat.
    assert chat_repository.remove_participant("chat_1", other_user_id) is True


def test_remove_participant_missing_chat(chat_repository: ChatRepository, user_id):
    assert chat_repository.remove_participant("missing", user_id) is False


def test_is_participant(chat_repository: ChatRepository, user_id, other_user_id):
    chat_repository.create("chat_1", user_id)
    assert chat_repository.is_participant("chat_1", user_id) is True
    assert chat_repository.is_participant("chat_1", other_user_id) is False
    assert chat_repository.is_participant("missing", user_id) is False
