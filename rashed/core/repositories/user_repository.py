"""
User repository for Rashed.

This module provides user-specific data access operations
extending the base repository pattern.
"""

from typing import Optional

from ..auth.tortoise_models import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """User lookups by id and by username."""

    model = User
    resource_name = "User"

    async def get_by_username(self, username: str) -> Optional[User]:
        """
        Get user by username.

        Args:
            username: Login name

        Returns:
            User instance or None if not found
        """
        return await self.find_one_by(username=username)

    async def create_user(
        self, username: str, password_hash: str, name: Optional[str] = None
    ) -> User:
        """Insert a user with an already hashed password."""
        return await self.create(username=username, password=password_hash, name=name)
