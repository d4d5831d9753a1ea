"""
Service factory for Rashed.

This module provides a factory for creating service instances
with proper dependency injection and configuration.
"""

from typing import Any, Dict, Type

from ..repositories.factory import RepositoryFactory, get_repository_factory
from .activity_service import ActivityService
from .stats_service import StatsService
from .user_service import UserService


class ServiceFactory:
    """
    Factory for creating service instances.

    This factory manages the creation of services with proper
    dependency injection and repository configuration.
    """

    def __init__(self, repository_factory: RepositoryFactory):
        """
        Initialize service factory.

        Args:
            repository_factory: Repository factory instance
        """
        self.repository_factory = repository_factory
        self._services: Dict[Type[Any], Any] = {}

    def get_user_service(self) -> UserService:
        """
        Get user service instance.

        Returns:
            UserService instance
        """
        if UserService not in self._services:
            user_repository = self.repository_factory.get_user_repository()
            self._services[UserService] = UserService(user_repository)

        return self._services[UserService]  # type: ignore[no-any-return]

    def get_activity_service(self) -> ActivityService:
        """
        Get activity service instance.

        Returns:
            ActivityService instance
        """
        if ActivityService not in self._services:
            activity_repository = self.repository_factory.get_activity_repository()
            self._services[ActivityService] = ActivityService(activity_repository)

        return self._services[ActivityService]  # type: ignore[no-any-return]

    def get_stats_service(self) -> StatsService:
        if StatsService not in self._services:
            integration_repository = (
                self.repository_factory.get_integration_repository()
            )
            self._services[StatsService] = StatsService(integration_repository)

        return self._services[StatsService]  # type: ignore[no-any-return]


_service_factory = ServiceFactory(get_repository_factory())


def get_service_factory() -> ServiceFactory:
    """Get service factory instance for dependency injection."""
    return _service_factory
