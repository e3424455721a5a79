import fakeredis
import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.routers.utils.dependencies import get_redis

pytest_plugins = [
    "tests.fixtures.chat_fixtures",
]


@pytest.fixture(scope="function")
def redis_client():
    """Fresh in-memory Redis per test."""
    client = fakeredis.FakeStrictRedis(decode_responses=True)
    yield client
    client.flushall()


@pytest.fixture
def client(redis_client):
    """API client with the Redis dependency pointed at the fake store."""
    app = create_app(testing=True)
    app.dependency_overrides[get_redis] = lambda: redis_client
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
