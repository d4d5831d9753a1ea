"""
Base service interface for Rashed.

This module defines the base class shared by the business logic services.
"""

from typing import Any, Generic, TypeVar

from ..repositories.base import BaseRepository

T = TypeVar("T")


class BaseService(Generic[T]):
    """
    Base service class holding the repository a service works on.

    Services wrap one repository and add the rules and side effects
    (activity records, logging) that the routes rely on.
    """

    def __init__(self, repository: BaseRepository[Any]):
        """
        Initialize service with repository.

        Args:
            repository: Repository instance for data access
        """
        self.repository = repository

