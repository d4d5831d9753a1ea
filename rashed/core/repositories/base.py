"""
Base repository interface for Rashed.

This module provides the base repository pattern implementation that all
data access repositories extend. Every method is a single query against
one table, issued through Tortoise ORM.
"""

from abc import ABC
from typing import Any, Generic, List, Optional, Type, TypeVar

from tortoise.models import Model

from ..errors import NotFoundError

M = TypeVar("M", bound=Model)


class BaseRepository(ABC, Generic[M]):
    """
    Base repository providing common CRUD operations.

    Subclasses set ``model`` and ``resource_name`` and add the queries
    specific to their table.
    """

    model: Type[M]
    resource_name: str = "Resource"
    default_ordering: tuple[str, ...] = ("id",)

    async def create(self, **kwargs: Any) -> M:
        """
        Create a new row.

        Args:
            **kwargs: Column values

        Returns:
            Created model instance
        """
        return await self.model.create(**kwargs)

    async def get_by_id(self, entity_id: int) -> Optional[M]:
        """
        Get row by ID.

        Args:
            entity_id: Row identifier

        Returns:
            Model instance or None if not found
        """
        return await self.model.get_or_none(id=entity_id)

    async def get_or_raise(self, entity_id: int) -> M:
        """Get row by ID or raise ``NotFoundError``."""
        entity = await self.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self.resource_name, entity_id)
        return entity

    async def get_all(
        self, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[M]:
        """
        Get all rows with optional pagination.

        Args:
            limit: Maximum number of rows to return
            offset: Number of rows to skip

        Returns:
            List of model instances
        """
        query = self.model.all().order_by(*self.default_ordering)
        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)
        return await query

    async def update(self, entity_id: int, **kwargs: Any) -> M:
        """
        Update row by ID.

        Args:
            entity_id: Row identifier
            **kwargs: Columns to update

        Returns:
            Updated model instance

        Raises:
            NotFoundError: If the row does not exist
        """
        entity = await self.get_or_raise(entity_id)
        if kwargs:
            entity.update_from_dict(kwargs)
            await entity.save(update_fields=list(kwargs))
        return entity

    async def count(self, **filters: Any) -> int:
        """Count rows matching the given filters."""
        return await self.model.filter(**filters).count()

    async def find_by(self, **filters: Any) -> List[M]:
        """
        Find rows by filters.

        Args:
            **filters: Field-value pairs to filter by

        Returns:
            List of matching rows
        """
        return await self.model.filter(**filters).order_by(*self.default_ordering)

    async def find_one_by(self, **filters: Any) -> Optional[M]:
        """Find a single row by filters."""
        return await self.model.filter(**filters).first()
