"""
Pytest configuration and fixtures for Rashed tests.

The relational store is an in-memory SQLite database created per test, and
the Redis session store is replaced by ``FakeRedis``. No external services
are needed.
"""

import os

os.environ.setdefault("ENVIRONMENT", "testing")

from unittest.mock import AsyncMock, MagicMock, patch  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from rashed.ai.client import AIClient, get_ai_client  # noqa: E402
from rashed.api.app import create_app  # noqa: E402
from rashed.core.config import (  # noqa: E402
    Environment,
    RashedConfig,
    UploadConfig,
    get_config,
    set_config,
)
from rashed.core.database import close_tortoise, init_tortoise  # noqa: E402
from tests.shared import TEST_PASSWORD, TEST_USERNAME, FakeRedis  # noqa: E402

TEST_DB_URL = "sqlite://:memory:"


@pytest.fixture
def test_config(tmp_path):
    """Testing configuration with uploads going to a temporary directory."""
    previous = get_config()
    config = RashedConfig(
        environment=Environment.TESTING,
        uploads=UploadConfig(directory=tmp_path / "uploads"),
    )
    set_config(config)
    yield config
    set_config(previous)


@pytest.fixture
def fake_redis():
    """Session store backed by a dict instead of a Redis server."""
    redis = FakeRedis()
    with patch(
        "rashed.api.auth.sessions.get_redis", AsyncMock(return_value=redis)
    ):
        yield redis


@pytest.fixture
async def db():
    """Fresh in-memory database with every table created."""
    await init_tortoise(db_url=TEST_DB_URL, generate_schemas=True)
    yield
    await close_tortoise()


@pytest.fixture
def mock_ai_client():
    """AI client whose operations are all AsyncMocks."""
    client = MagicMock(spec=AIClient)
    client.model = "gpt-4o"
    client.is_configured.return_value = True
    client.create_chat_completion = AsyncMock()
    client.generate_code = AsyncMock()
    client.analyze_code = AsyncMock()
    client.generate_documentation = AsyncMock()
    client.natural_language_to_requirements = AsyncMock()
    return client


@pytest.fixture
def app(test_config, fake_redis, mock_ai_client):
    """Application without lifespan; connections are managed by fixtures."""
    application = create_app(config=test_config, use_lifespan=False)
    application.dependency_overrides[get_ai_client] = lambda: mock_ai_client
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app, db):
    """HTTP client talking to the application in-process."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as http_client:
        yield http_client


@pytest.fixture
async def auth_client(client):
    """Client holding the session cookie of a freshly registered user."""
    response = await client.post(
        "/api/register",
        json={"username": TEST_USERNAME, "password": TEST_PASSWORD, "name": "Alice"},
    )
    assert response.status_code == 201
    return client


# Test markers
def pytest_collection_modifyitems(config, items):
    """Add markers to tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "api" in str(item.fspath):
            item.add_marker(pytest.mark.api)
