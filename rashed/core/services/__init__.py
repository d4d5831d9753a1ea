"""
Service layer for Rashed.

This package contains business logic services that coordinate between
repositories, activity recording and logging.
"""

from .activity_service import ActivityService
from .base import BaseService
from .factory import ServiceFactory, get_service_factory
from .stats_service import StatsService
from .user_service import UserService

__all__ = [
    "ActivityService",
    "BaseService",
    "ServiceFactory",
    "StatsService",
    "UserService",
    "get_service_factory",
]
