"""
Tests for the integration and usage statistics endpoints.
"""

import pytest

from rashed.core.models import Integration


@pytest.mark.api
class TestIntegrationEndpoints:
    """Test integration listing, creation and request totals."""

    @pytest.mark.asyncio
    async def test_requires_session(self, client):
        assert (await client.get("/api/integrations")).status_code == 401
        assert (await client.get("/api/stats/apiUsage")).status_code == 401

    @pytest.mark.asyncio
    async def test_create_integration(self, auth_client):
        response = await auth_client.post(
            "/api/integrations",
            json={
                "name": "GitHub",
                "type": "vcs",
                "status": "active",
                "config": {"org": "acme"},
            },
        )

        assert response.status_code == 201
        integration = response.json()
        assert integration["requestCount"] == 0
        assert integration["lastUsed"] is None
        assert integration["config"] == {"org": "acme"}

        activities = (await auth_client.get("/api/activities")).json()
        assert activities[0]["type"] == "integration_created"
        assert activities[0]["metadata"] == {"integrationType": "vcs"}

    @pytest.mark.asyncio
    async def test_list_integrations(self, auth_client):
        await Integration.create(name="GitHub", type="vcs", status="active")
        await Integration.create(name="Slack", type="chat", status="inactive")

        integrations = (await auth_client.get("/api/integrations")).json()
        assert [i["name"] for i in integrations] == ["GitHub", "Slack"]

    @pytest.mark.asyncio
    async def test_api_usage(self, auth_client):
        github = await Integration.create(
            name="GitHub", type="vcs", status="active", request_count=40
        )
        await Integration.create(
            name="Slack", type="chat", status="active", request_count=2
        )

        usage = (await auth_client.get("/api/stats/apiUsage")).json()

        assert usage["total"] == 42
        assert usage["integrations"][0] == {
            "id": github.id,
            "name": "GitHub",
            "requestCount": 40,
        }

    @pytest.mark.asyncio
    async def test_api_usage_empty(self, auth_client):
        usage = (await auth_client.get("/api/stats/apiUsage")).json()
        assert usage == {"total": 0, "integrations": []}
