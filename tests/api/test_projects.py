"""
Tests for the project endpoints.
"""

import pytest


async def _create_project(client, name, **extra):
    response = await client.post(
        "/api/projects", json={"name": name, "type": "web", **extra}
    )
    assert response.status_code == 201
    return response.json()


@pytest.mark.api
class TestProjectEndpoints:
    """Test project listing, lookup and creation."""

    @pytest.mark.asyncio
    async def test_requires_session(self, client):
        assert (await client.get("/api/projects")).status_code == 401
        assert (await client.post("/api/projects", json={})).status_code == 401

    @pytest.mark.asyncio
    async def test_create_project(self, auth_client):
        project = await _create_project(
            auth_client,
            "Portal",
            description="Customer portal",
            techStack=["react", "fastapi"],
        )

        assert project["name"] == "Portal"
        assert project["techStack"] == ["react", "fastapi"]
        assert project["description"] == "Customer portal"
        assert project["userId"] is not None
        assert "createdAt" in project

    @pytest.mark.asyncio
    async def test_create_project_records_activity(self, auth_client):
        project = await _create_project(auth_client, "Portal")

        activities = (await auth_client.get("/api/activities")).json()
        assert activities[0]["type"] == "project_created"
        assert activities[0]["projectId"] == project["id"]
        assert activities[0]["description"] == 'Project "Portal" was created'
        assert activities[0]["metadata"] == {"projectType": "web"}

    @pytest.mark.asyncio
    async def test_create_project_validation(self, auth_client):
        response = await auth_client.post("/api/projects", json={"type": "web"})

        assert response.status_code == 422
        assert response.json()["errors"][0]["loc"] == ["body", "name"]

    @pytest.mark.asyncio
    async def test_list_only_own_projects(self, auth_client):
        await _create_project(auth_client, "Mine")
        await auth_client.post("/api/logout")
        await auth_client.post(
            "/api/register", json={"username": "bobby", "password": "pw"}
        )
        await _create_project(auth_client, "Bob's")

        projects = (await auth_client.get("/api/projects")).json()
        assert [p["name"] for p in projects] == ["Bob's"]

    @pytest.mark.asyncio
    async def test_recent_projects(self, auth_client):
        for i in range(7):
            await _create_project(auth_client, f"p{i}")

        recent = (await auth_client.get("/api/projects/recent")).json()
        assert [p["name"] for p in recent] == ["p6", "p5", "p4", "p3", "p2"]

    @pytest.mark.asyncio
    async def test_get_project(self, auth_client):
        project = await _create_project(auth_client, "Portal")

        response = await auth_client.get(f"/api/projects/{project['id']}")
        assert response.status_code == 200
        assert response.json()["id"] == project["id"]
        assert response.json()["name"] == "Portal"

    @pytest.mark.asyncio
    async def test_get_missing_project(self, auth_client):
        response = await auth_client.get("/api/projects/999")

        assert response.status_code == 404
        assert response.json()["detail"] == "Project not found"

    @pytest.mark.asyncio
    async def test_get_project_bad_id(self, auth_client):
        response = await auth_client.get("/api/projects/abc")
        assert response.status_code == 422
