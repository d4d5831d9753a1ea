"""
Repository factory for Rashed.

This module provides a factory for creating repository instances
and managing their lifecycle for dependency injection.
"""

from typing import Any, Dict, Type, TypeVar

from .activity_repository import ActivityRepository, ApprovalRepository, LogRepository
from .base import BaseRepository
from .deployment_repository import DeploymentRepository, EnvironmentRepository
from .integration_repository import IntegrationRepository
from .project_repository import ProjectRepository
from .user_repository import UserRepository

# Generic type for repositories
R = TypeVar("R", bound=BaseRepository)  # type: ignore[type-arg]


class RepositoryFactory:
    """
    Factory for creating repository instances.

    Repositories hold no connection state (Tortoise resolves the connection
    per query), so one instance per class is cached and reused.
    """

    def __init__(self) -> None:
        self._repositories: Dict[Type[Any], Any] = {}

    def get_repository(self, repository_class: Type[R]) -> R:
        """
        Get repository instance by class.

        Args:
            repository_class: Repository class to instantiate

        Returns:
            Repository instance
        """
        if repository_class not in self._repositories:
            self._repositories[repository_class] = repository_class()
        return self._repositories[repository_class]  # type: ignore[no-any-return]

    def get_user_repository(self) -> UserRepository:
        return self.get_repository(UserRepository)

    def get_project_repository(self) -> ProjectRepository:
        return self.get_repository(ProjectRepository)

    def get_deployment_repository(self) -> DeploymentRepository:
        return self.get_repository(DeploymentRepository)

    def get_environment_repository(self) -> EnvironmentRepository:
        return self.get_repository(EnvironmentRepository)

    def get_integration_repository(self) -> IntegrationRepository:
        return self.get_repository(IntegrationRepository)

    def get_activity_repository(self) -> ActivityRepository:
        return self.get_repository(ActivityRepository)

    def get_approval_repository(self) -> ApprovalRepository:
        return self.get_repository(ApprovalRepository)

    def get_log_repository(self) -> LogRepository:
        return self.get_repository(LogRepository)


_repository_factory = RepositoryFactory()


# Dependency function for FastAPI
def get_repository_factory() -> RepositoryFactory:
    """
    Get repository factory instance for dependency injection.

    Returns:
        RepositoryFactory instance
    """
    return _repository_factory
