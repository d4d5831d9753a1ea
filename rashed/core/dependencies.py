"""
Dependency injection for Rashed.

This module provides the FastAPI dependencies shared by the routes:
session and user resolution, repositories, services and the AI client.
"""

from fastapi import Depends, Request

from ..ai.client import AIClient, get_ai_client
from ..api.auth.sessions import SessionData, SessionManager, get_session_manager
from .auth.tortoise_models import User
from .chat import ConversationRelay
from .errors import AuthenticationError
from .repositories import (
    ApprovalRepository,
    DeploymentRepository,
    EnvironmentRepository,
    IntegrationRepository,
    LogRepository,
    ProjectRepository,
    RepositoryFactory,
    UserRepository,
    get_repository_factory,
)
from .services import (
    ActivityService,
    ServiceFactory,
    StatsService,
    UserService,
    get_service_factory,
)
from .uploads import UploadStore

OPENAI_API_KEY_SETTING = "openaiApiKey"
NOTIFICATIONS_SETTING = "notifications"


async def get_current_session(
    request: Request,
    session_manager: SessionManager = Depends(get_session_manager),
) -> SessionData:
    """
    Resolve the session named by the session cookie.

    Raises:
        AuthenticationError: If the cookie is missing or the session expired
    """
    session_id = request.cookies.get(session_manager.cookie_name)
    if not session_id:
        raise AuthenticationError("Authentication required")

    session = await session_manager.get_session(session_id)
    if session is None:
        raise AuthenticationError("Session expired or invalid")

    request.state.user_id = session.user_id
    return session


async def get_current_user(
    session: SessionData = Depends(get_current_session),
    repositories: RepositoryFactory = Depends(get_repository_factory),
) -> User:
    """
    Get current authenticated user.

    Raises:
        AuthenticationError: If the session's user no longer exists
    """
    user = await repositories.get_user_repository().get_by_id(session.user_id)
    if user is None:
        raise AuthenticationError("User no longer exists")
    return user


# Repository dependencies


def get_user_repository(
    repositories: RepositoryFactory = Depends(get_repository_factory),
) -> UserRepository:
    return repositories.get_user_repository()


def get_project_repository(
    repositories: RepositoryFactory = Depends(get_repository_factory),
) -> ProjectRepository:
    return repositories.get_project_repository()


def get_deployment_repository(
    repositories: RepositoryFactory = Depends(get_repository_factory),
) -> DeploymentRepository:
    return repositories.get_deployment_repository()


def get_environment_repository(
    repositories: RepositoryFactory = Depends(get_repository_factory),
) -> EnvironmentRepository:
    return repositories.get_environment_repository()


def get_integration_repository(
    repositories: RepositoryFactory = Depends(get_repository_factory),
) -> IntegrationRepository:
    return repositories.get_integration_repository()


def get_approval_repository(
    repositories: RepositoryFactory = Depends(get_repository_factory),
) -> ApprovalRepository:
    return repositories.get_approval_repository()


def get_log_repository(
    repositories: RepositoryFactory = Depends(get_repository_factory),
) -> LogRepository:
    return repositories.get_log_repository()


# Service dependencies


def get_user_service(
    services: ServiceFactory = Depends(get_service_factory),
) -> UserService:
    return services.get_user_service()


def get_activity_service(
    services: ServiceFactory = Depends(get_service_factory),
) -> ActivityService:
    return services.get_activity_service()


def get_stats_service(
    services: ServiceFactory = Depends(get_service_factory),
) -> StatsService:
    return services.get_stats_service()


def get_session_ai_client(
    session: SessionData = Depends(get_current_session),
    ai_client: AIClient = Depends(get_ai_client),
) -> AIClient:
    """The AI client, authenticated with the API key saved in the session if any."""
    api_key = session.settings.get(OPENAI_API_KEY_SETTING)
    if api_key:
        return ai_client.with_api_key(api_key)
    return ai_client


def get_upload_store() -> UploadStore:
    """Upload store bound to the current upload configuration."""
    return UploadStore()


def get_conversation_relay(
    session_manager: SessionManager = Depends(get_session_manager),
    ai_client: AIClient = Depends(get_session_ai_client),
    activity_service: ActivityService = Depends(get_activity_service),
) -> ConversationRelay:
    return ConversationRelay(session_manager, ai_client, activity_service)
