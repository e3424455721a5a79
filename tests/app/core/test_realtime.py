"""Tests for realtime message publishing."""

import json
from unittest.mock import MagicMock, patch

from redis import RedisError

from app.core.realtime import publish_message
from tests.fixtures.chat_fixtures import make_message


def test_publish_message_reaches_subscribers(redis_client, user_id):
    pubsub = redis_client.pubsub()
    pubsub.subscribe("chat_messages")
    pubsub.get_message(timeout=1)  # subscribe confirmation

    message = make_message(user_id, content="ping")
    assert publish_message(redis_client, "chat_1", message) == 1

    received = pubsub.get_message(timeout=1)
    payload = json.loads(received["data"])
    assert payload["chat_id"] == "chat_1"
    assert payload["id"] == message.id
    assert payload["content"] == "ping"
    pubsub.close()


def test_publish_failure_is_not_raised(user_id):
    broken = MagicMock()
    broken.publish.side_effect = RedisError("down")
    assert publish_message(broken, "chat_1", make_message(user_id)) == 0


@patch("app.core.realtime.get_settings")
def test_publish_disabled(mock_settings, redis_client, user_id):
    mock_settings.return_value.realtime_enabled = False
    assert publish_message(redis_client, "chat_1", make_message(user_id)) == 0
