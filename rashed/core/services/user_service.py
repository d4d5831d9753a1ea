"""
User service for Rashed.

This module contains business logic for account operations: registration,
credential checks, profile edits and password changes.
"""

from typing import Optional

from ..auth.password import (
    burn_password_check,
    hash_password,
    verify_and_update,
    verify_password,
)
from ..auth.tortoise_models import User
from ..errors import AuthenticationError, BadRequestError, ConflictError
from ..logging import get_logger
from ..repositories.user_repository import UserRepository
from .base import BaseService

logger = get_logger("core.services.user")


class UserService(BaseService[User]):
    """
    Service for user management operations.

    Passwords are hashed here and never leave this layer in plain text.
    """

    def __init__(self, user_repository: UserRepository):
        """
        Initialize user service.

        Args:
            user_repository: User repository instance
        """
        super().__init__(user_repository)
        self.user_repository = user_repository

    async def register(
        self, username: str, password: str, name: Optional[str] = None
    ) -> User:
        """
        Create a new account.

        Args:
            username: Unique login name
            password: Plain text password
            name: Optional display name

        Returns:
            Created user instance

        Raises:
            ConflictError: If the username is taken
        """
        if await self.user_repository.get_by_username(username):
            raise ConflictError(
                "Username already exists", message="Username already exists"
            )

        user = await self.user_repository.create_user(
            username=username, password_hash=hash_password(password), name=name
        )
        logger.info("User registered", user_id=user.id, username=username)
        return user

    async def authenticate(self, username: str, password: str) -> User:
        """
        Check credentials and return the matching user.

        A stored hash with outdated parameters is replaced on success.

        Raises:
            AuthenticationError: If the username or password is wrong
        """
        user = await self.user_repository.get_by_username(username)
        if user is None:
            burn_password_check(password)
            logger.warning("Login failed", username=username, reason="unknown_user")
            raise AuthenticationError("Invalid username or password")

        verified, new_hash = verify_and_update(password, user.password)
        if not verified:
            logger.warning("Login failed", username=username, reason="bad_password")
            raise AuthenticationError("Invalid username or password")

        if new_hash:
            user = await self.user_repository.update(user.id, password=new_hash)

        return user

    async def update_profile(
        self, user: User, username: Optional[str] = None, name: Optional[str] = None
    ) -> User:
        """Change the username and/or display name of ``user``."""
        changes = {}
        if username is not None and username != user.username:
            if await self.user_repository.get_by_username(username):
                raise ConflictError(
                    "Username already exists", message="Username already exists"
                )
            changes["username"] = username
        if name is not None:
            changes["name"] = name

        if not changes:
            return user
        return await self.user_repository.update(user.id, **changes)

    async def change_password(
        self, user: User, current_password: str, new_password: str
    ) -> User:
        """
        Replace the password of ``user`` after checking the current one.

        Raises:
            BadRequestError: If ``current_password`` does not match
        """
        if not verify_password(current_password, user.password):
            raise BadRequestError(
                "Current password is incorrect",
                message="Current password is incorrect",
            )

        updated = await self.user_repository.update(
            user.id, password=hash_password(new_password)
        )
        logger.info("Password changed", user_id=user.id)
        return updated
