"""Tests for RetentionPolicy and RetentionSweeper."""

from app.core.ids import now_ms
from app.services.retention_service import (
    DAY_MS,
    RetentionPolicy,
    RetentionSweeper,
    should_delete_chat,
    should_delete_message,
)
from tests.fixtures.chat_fixtures import days_ago, make_message


def test_should_delete_message_boundary():
    now = now_ms()
    assert should_delete_message(now - 91 * DAY_MS, now) is True
    assert should_delete_message(now - 90 * DAY_MS, now) is False
    assert should_delete_message(now, now) is False


def test_should_delete_chat_boundary():
    now = now_ms()
    assert should_delete_chat(now - 181 * DAY_MS, now) is True
    assert should_delete_chat(now - 180 * DAY_MS, now) is False


def test_policy_thresholds_are_configurable():
    policy = RetentionPolicy(message_retention_days=1, chat_inactivity_days=2)
    now = now_ms()
    assert policy.should_delete_message(now - 2 * DAY_MS, now) is True
    assert policy.should_delete_chat(now - DAY_MS, now) is False
    assert policy.message_cutoff(now) == now - DAY_MS


def test_clean_old_messages_removes_expired_only(
    sweeper: RetentionSweeper, message_repository, user_id
):
    old = make_message(user_id, timestamp=days_ago(91), content="old")
    recent = make_message(user_id, timestamp=days_ago(1), content="recent")
    message_repository.store("chat_1", old)
    message_repository.store("chat_1", recent)

    assert sweeper.clean_old_messages("chat_1") == 1
    remaining = message_repository.get_messages("chat_1").messages
    assert [m.content for m in remaining] == ["recent"]
    assert message_repository.get_message("chat_1", old.id) is None


def test_clean_inactive_chats_drops_stale_index_entries(
    sweeper: RetentionSweeper, user_chat_index, user_id
):
    user_chat_index.add(user_id, "chat_gone")
    assert sweeper.clean_inactive_chats(user_id) == 0
    assert user_chat_index.has(user_id, "chat_gone") is False


def test_clean_inactive_chats_cascades_to_all_participants(
    sweeper: RetentionSweeper,
    setup_shared_chat,
    chat_repository,
    message_repository,
    user_chat_index,
    user_id,
    other_user_id,
):
    chat = setup_shared_chat
    message_repository.store(chat.id, make_message(user_id, timestamp=days_ago(181)))
    chat_repository.update_last_message_at(chat.id, days_ago(181))

    assert sweeper.clean_inactive_chats(user_id) == 1
    assert chat_repository.get(chat.id) is None
    assert message_repository.count_messages(chat.id) == 0
    assert user_chat_index.has(user_id, chat.id) is False
    assert user_chat_index.has(other_user_id, chat.id) is False


def test_clean_inactive_chats_keeps_active_chats(
    sweeper: RetentionSweeper, setup_chat, chat_repository, user_id
):
    chat_repository.update_last_message_at(setup_chat.id, days_ago(179))
    assert sweeper.clean_inactive_chats(user_id) == 0
    assert chat_repository.get(setup_chat.id) is not None


def test_purge_chat_is_idempotent(
    sweeper: RetentionSweeper, setup_shared_chat, chat_repository, user_chat_index, user_id
):
    sweeper.purge_chat(setup_shared_chat)
    sweeper.purge_chat(setup_shared_chat)
    assert chat_repository.get(setup_shared_chat.id) is None
    assert user_chat_index.count(user_id) == 0
