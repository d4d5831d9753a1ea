"""
Tests for the service layer.

User, activity and statistics services run against an in-memory database;
the activity log line is checked with a patched ``log_activity_event``.
"""

from unittest.mock import patch

import pytest

from rashed.core.auth.password import hash_password, verify_password
from rashed.core.errors import AuthenticationError, BadRequestError, ConflictError
from rashed.core.repositories import (
    ActivityRepository,
    IntegrationRepository,
    RepositoryFactory,
    UserRepository,
)
from rashed.core.services import (
    ActivityService,
    ServiceFactory,
    StatsService,
    UserService,
    get_service_factory,
)


@pytest.fixture
def user_service(db):
    return UserService(UserRepository())


@pytest.fixture
def activity_service(db):
    return ActivityService(ActivityRepository())


@pytest.mark.unit
class TestUserService:
    """Test account operations."""

    def test_init(self):
        repository = UserRepository()
        service = UserService(repository)
        assert service.repository is repository
        assert service.user_repository is repository

    @pytest.mark.asyncio
    async def test_register_hashes_password(self, user_service):
        user = await user_service.register("carol", "pa55word", name="Carol")

        assert user.id is not None
        assert user.name == "Carol"
        assert user.password != "pa55word"
        assert verify_password("pa55word", user.password)

    @pytest.mark.asyncio
    async def test_register_duplicate_username(self, user_service):
        await user_service.register("carol", "pa55word")
        with pytest.raises(ConflictError) as exc_info:
            await user_service.register("carol", "other")
        assert exc_info.value.message == "Username already exists"

    @pytest.mark.asyncio
    async def test_authenticate(self, user_service):
        created = await user_service.register("dave", "pa55word")
        user = await user_service.authenticate("dave", "pa55word")
        assert user.id == created.id

    @pytest.mark.asyncio
    async def test_authenticate_wrong_password(self, user_service):
        await user_service.register("dave", "pa55word")
        with pytest.raises(AuthenticationError) as exc_info:
            await user_service.authenticate("dave", "nope")
        assert exc_info.value.error == "Invalid username or password"

    @pytest.mark.asyncio
    async def test_authenticate_unknown_user(self, user_service):
        with pytest.raises(AuthenticationError):
            await user_service.authenticate("ghost", "pa55word")

    @pytest.mark.asyncio
    async def test_authenticate_replaces_outdated_hash(self, user_service):
        user = await user_service.register("erin", "pa55word")
        fresh_hash = hash_password("pa55word")

        with patch(
            "rashed.core.services.user_service.verify_and_update",
            return_value=(True, fresh_hash),
        ):
            await user_service.authenticate("erin", "pa55word")

        stored = await UserRepository().get_by_id(user.id)
        assert stored.password == fresh_hash

    @pytest.mark.asyncio
    async def test_update_profile(self, user_service):
        user = await user_service.register("frank", "pa55word")
        updated = await user_service.update_profile(user, username="franky", name="F")
        assert updated.username == "franky"
        assert updated.name == "F"

    @pytest.mark.asyncio
    async def test_update_profile_taken_username(self, user_service):
        await user_service.register("grace", "pa55word")
        user = await user_service.register("heidi", "pa55word")
        with pytest.raises(ConflictError):
            await user_service.update_profile(user, username="grace")

    @pytest.mark.asyncio
    async def test_update_profile_without_changes(self, user_service):
        user = await user_service.register("ivan", "pa55word")
        assert await user_service.update_profile(user) is user

    @pytest.mark.asyncio
    async def test_change_password(self, user_service):
        user = await user_service.register("judy", "old-password")
        updated = await user_service.change_password(
            user, "old-password", "new-password"
        )
        assert verify_password("new-password", updated.password)
        assert not verify_password("old-password", updated.password)

    @pytest.mark.asyncio
    async def test_change_password_wrong_current(self, user_service):
        user = await user_service.register("judy", "old-password")
        with pytest.raises(BadRequestError) as exc_info:
            await user_service.change_password(user, "guess", "new-password")
        assert exc_info.value.message == "Current password is incorrect"


@pytest.mark.unit
class TestActivityService:
    """Test activity recording."""

    @pytest.mark.asyncio
    async def test_record_creates_row_and_logs(self, activity_service):
        with patch(
            "rashed.core.services.activity_service.log_activity_event"
        ) as log_event:
            activity = await activity_service.record(
                "integration_created",
                'New integration "Slack" was added',
                metadata={"integrationType": "chat"},
            )

        assert activity.id is not None
        assert activity.type == "integration_created"
        assert activity.metadata == {"integrationType": "chat"}
        assert activity.timestamp is not None
        log_event.assert_called_once_with(
            "integration_created",
            'New integration "Slack" was added',
            project_id=None,
            details={"integrationType": "chat"},
        )

    @pytest.mark.asyncio
    async def test_latest(self, activity_service):
        for i in range(3):
            await activity_service.record("t", f"event {i}")
        latest = await activity_service.latest(limit=2)
        assert len(latest) == 2


@pytest.mark.unit
class TestStatsService:
    """Test dashboard statistics."""

    @pytest.mark.asyncio
    async def test_api_usage(self, db):
        repo = IntegrationRepository()
        github = await repo.create(
            name="GitHub", type="vcs", status="active", request_count=7
        )
        slack = await repo.create(
            name="Slack", type="chat", status="active", request_count=3
        )

        usage = await StatsService(repo).api_usage()
        assert usage == {
            "total": 10,
            "integrations": [
                {"id": github.id, "name": "GitHub", "requestCount": 7},
                {"id": slack.id, "name": "Slack", "requestCount": 3},
            ],
        }


@pytest.mark.unit
class TestServiceFactory:
    """Test service factory wiring."""

    def test_services_share_repositories(self):
        factory = ServiceFactory(RepositoryFactory())
        user_service = factory.get_user_service()
        assert user_service is factory.get_user_service()
        assert isinstance(factory.get_activity_service(), ActivityService)
        assert isinstance(factory.get_stats_service(), StatsService)

    def test_module_factory_is_shared(self):
        assert get_service_factory() is get_service_factory()
