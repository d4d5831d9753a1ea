"""
Tests for the settings endpoints.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from rashed.ai.client import AIClient
from rashed.api.routes.settings import mask_api_key
from tests.shared import make_completion

NOTIFICATIONS = {
    "emailNotifications": False,
    "deploymentAlerts": True,
    "securityAlerts": True,
    "weeklyReports": True,
}


@pytest.mark.api
class TestSettings:
    """Test reading and saving session settings."""

    @pytest.mark.asyncio
    async def test_requires_session(self, client):
        assert (await client.get("/api/settings")).status_code == 401
        response = await client.post(
            "/api/settings/apikeys", json={"openaiApiKey": "sk-test"}
        )
        assert response.status_code == 401
        response = await client.post("/api/settings/notifications", json=NOTIFICATIONS)
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_defaults(self, auth_client):
        response = await auth_client.get("/api/settings")

        assert response.status_code == 200
        assert response.json() == {
            "notifications": {
                "emailNotifications": True,
                "deploymentAlerts": True,
                "securityAlerts": True,
                "weeklyReports": False,
            },
            "openaiApiKey": None,
        }

    @pytest.mark.asyncio
    async def test_update_notifications(self, auth_client):
        response = await auth_client.post(
            "/api/settings/notifications", json=NOTIFICATIONS
        )

        assert response.status_code == 200
        assert response.json()["notifications"] == NOTIFICATIONS
        stored = (await auth_client.get("/api/settings")).json()
        assert stored["notifications"] == NOTIFICATIONS

    @pytest.mark.asyncio
    async def test_update_notifications_requires_every_flag(self, auth_client):
        response = await auth_client.post(
            "/api/settings/notifications", json={"emailNotifications": True}
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_api_key_is_masked(self, auth_client):
        response = await auth_client.post(
            "/api/settings/apikeys", json={"openaiApiKey": "sk-proj-abcdef1234"}
        )

        assert response.status_code == 200
        assert response.json()["openaiApiKey"] == "********1234"
        assert "sk-proj" not in response.text
        stored = (await auth_client.get("/api/settings")).json()
        assert stored["openaiApiKey"] == "********1234"

    @pytest.mark.asyncio
    async def test_empty_api_key_rejected(self, auth_client):
        response = await auth_client.post(
            "/api/settings/apikeys", json={"openaiApiKey": ""}
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_saved_api_key_used_for_ai_requests(
        self, auth_client, mock_ai_client
    ):
        keyed_client = MagicMock(spec=AIClient)
        keyed_client.generate_code = AsyncMock(return_value="print('hi')")
        mock_ai_client.with_api_key.return_value = keyed_client

        await auth_client.post(
            "/api/settings/apikeys", json={"openaiApiKey": "sk-user-key-9999"}
        )
        response = await auth_client.post(
            "/api/ai/code", json={"prompt": "say hi", "language": "python"}
        )

        assert response.status_code == 200
        assert response.json() == "print('hi')"
        mock_ai_client.with_api_key.assert_called_once_with("sk-user-key-9999")
        mock_ai_client.generate_code.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_saved_api_key_used_for_chat(self, auth_client, mock_ai_client):
        keyed_client = MagicMock(spec=AIClient)
        keyed_client.create_chat_completion = AsyncMock(
            return_value=make_completion("Hello from your key")
        )
        mock_ai_client.with_api_key.return_value = keyed_client

        await auth_client.post(
            "/api/settings/apikeys", json={"openaiApiKey": "sk-user-key-9999"}
        )
        response = await auth_client.post("/api/messages", json={"content": "hi"})

        assert response.status_code == 201
        assert response.json()["content"] == "Hello from your key"
        mock_ai_client.create_chat_completion.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_server_key_used_without_saved_key(self, auth_client, mock_ai_client):
        mock_ai_client.generate_code.return_value = "x = 1"

        response = await auth_client.post(
            "/api/ai/code", json={"prompt": "assign", "language": "python"}
        )

        assert response.status_code == 200
        mock_ai_client.with_api_key.assert_not_called()


@pytest.mark.unit
class TestMaskApiKey:
    """Test masking of stored API keys."""

    def test_mask(self):
        assert mask_api_key("sk-abcdefgh1234") == "********1234"

    def test_short_key_fully_masked(self):
        assert mask_api_key("sk-1") == "********"

    def test_missing_key(self):
        assert mask_api_key(None) is None
