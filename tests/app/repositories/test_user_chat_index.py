"""Tests for UserChatIndex."""

from app.repositories.user_chat_index import UserChatIndex


def test_list_most_recently_added_first(user_chat_index: UserChatIndex, user_id):
    user_chat_index.add(user_id, "chat_a", score=1)
    user_chat_index.add(user_id, "chat_b", score=3)
    user_chat_index.add(user_id, "chat_c", score=2)
    assert user_chat_index.list(user_id) == ["chat_b", "chat_c", "chat_a"]


def test_re_adding_moves_chat_to_front(user_chat_index: UserChatIndex, user_id):
    user_chat_index.add(user_id, "chat_a", score=1)
    user_chat_index.add(user_id, "chat_b", score=2)
    user_chat_index.add(user_id, "chat_a", score=5)
    assert user_chat_index.list(user_id) == ["chat_a", "chat_b"]
    assert user_chat_index.count(user_id) == 2


def test_has_remove_and_count(user_chat_index: UserChatIndex, user_id, other_user_id):
    user_chat_index.add(user_id, "chat_a")
    assert user_chat_index.has(user_id, "chat_a") is True
    assert user_chat_index.has(other_user_id, "chat_a") is False
    assert user_chat_index.count(user_id) == 1

    user_chat_index.remove(user_id, "chat_a")
    user_chat_index.remove(user_id, "chat_a")
    assert user_chat_index.has(user_id, "chat_a") is False
    assert user_chat_index.count(user_id) == 0
    assert user_chat_index.list(user_id) == []
