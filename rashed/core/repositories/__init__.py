"""
Repository layer for Rashed.

This module provides data access abstractions using the repository pattern
on top of Tortoise ORM. Each repository issues single-table queries only.
"""

from .activity_repository import ActivityRepository, ApprovalRepository, LogRepository
from .base import BaseRepository
from .deployment_repository import DeploymentRepository, EnvironmentRepository
from .factory import RepositoryFactory, get_repository_factory
from .integration_repository import IntegrationRepository
from .project_repository import ProjectRepository
from .user_repository import UserRepository

__all__ = [
    "ActivityRepository",
    "ApprovalRepository",
    "BaseRepository",
    "DeploymentRepository",
    "EnvironmentRepository",
    "IntegrationRepository",
    "LogRepository",
    "ProjectRepository",
    "RepositoryFactory",
    "UserRepository",
    "get_repository_factory",
]
