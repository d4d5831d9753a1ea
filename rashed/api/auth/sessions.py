"""
Session management for the Rashed API.

Sessions are stored in Redis under ``session:{id}`` with a TTL and are
identified by an HTTP-only cookie. Besides the identity of the logged-in
user, a session carries the chat conversation of that browser session
and the settings saved from it.
"""

import json
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from fastapi import HTTPException, status
from pydantic import BaseModel, Field, ValidationError
from redis.exceptions import RedisError

from ...core.config import get_config
from ...core.logging import get_logger
from ...core.redis import get_redis


class SessionData(BaseModel):
    """Session data model."""

    session_id: str = Field(..., description="Unique session identifier")
    user_id: int = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    created_at: datetime = Field(..., description="Session creation time")
    expires_at: datetime = Field(..., description="Session expiration time")
    last_activity: datetime = Field(..., description="Last activity time")
    ip_address: Optional[str] = Field(None, description="IP address of session")
    user_agent: Optional[str] = Field(None, description="User agent string")
    messages: List[Dict[str, Any]] = Field(
        default_factory=list, description="Chat conversation of this session"
    )
    settings: Dict[str, Any] = Field(
        default_factory=dict,
        description="User settings (notification preferences, API key)",
    )


class SessionManager:
    """Session manager for Redis-based session storage."""

    def __init__(self) -> None:
        """Initialize session manager."""
        self.config = get_config().security
        self.logger = get_logger("api.auth.sessions")

        # Cookie settings
        self.cookie_name = self.config.session_cookie_name
        self.max_age = self.config.session_max_age
        self.secure = self.config.session_secure
        self.httponly = self.config.session_httponly
        self.samesite = self.config.session_samesite

    async def create_session(
        self,
        user_id: int,
        username: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> SessionData:
        """
        Create a new session for a user.

        Args:
            user_id: Logged-in user
            username: Login name, kept for attribution of created rows
            ip_address: IP address of the session
            user_agent: User agent string

        Returns:
            SessionData object with session information
        """
        now = datetime.now(timezone.utc)
        session_data = SessionData(
            session_id=self._generate_session_id(),
            user_id=user_id,
            username=username,
            created_at=now,
            expires_at=now + timedelta(seconds=self.max_age),
            last_activity=now,
            ip_address=ip_address,
            user_agent=user_agent,
        )

        try:
            await self.save_session(session_data)
            await self._track_user_session(user_id, session_data.session_id)
        except RedisError as e:
            self.logger.error("Failed to create session", error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to create session",
            ) from e

        self.logger.info(
            "Created session", session_id=session_data.session_id, username=username
        )
        return session_data

    async def get_session(self, session_id: str) -> Optional[SessionData]:
        """
        Retrieve session data by session ID.

        Args:
            session_id: Session identifier

        Returns:
            SessionData object if valid, None otherwise
        """
        try:
            redis_client = await get_redis()
            session_json = await redis_client.get(f"session:{session_id}")
            if not session_json:
                return None

            session_data = SessionData(**json.loads(session_json))
            if session_data.expires_at < datetime.now(timezone.utc):
                return None

            session_data.last_activity = datetime.now(timezone.utc)
            await self.save_session(session_data)
            return session_data

        except (RedisError, ValueError, ValidationError) as e:
            self.logger.error(
                "Failed to get session", session_id=session_id, error=str(e)
            )
            return None

    async def save_session(self, session_data: SessionData) -> None:
        """Store session data in Redis for the rest of its lifetime."""
        redis_client = await get_redis()

        remaining = session_data.expires_at - datetime.now(timezone.utc)
        ttl = max(1, int(remaining.total_seconds()))

        session_json = json.dumps(session_data.model_dump(mode="json"))
        await redis_client.setex(f"session:{session_data.session_id}", ttl, session_json)

    async def delete_session(self, session_id: str) -> bool:
        """
        Delete a session.

        Args:
            session_id: Session identifier

        Returns:
            True if session was deleted, False otherwise
        """
        try:
            redis_client = await get_redis()

            session_data = await self.get_session(session_id)
            if session_data:
                await self._untrack_user_session(session_data.user_id, session_id)

            deleted = await redis_client.delete(f"session:{session_id}")
            self.logger.info("Deleted session", session_id=session_id)
            return deleted > 0

        except RedisError as e:
            self.logger.error(
                "Failed to delete session", session_id=session_id, error=str(e)
            )
            return False

    async def delete_user_sessions(
        self, user_id: int, exclude_session_id: Optional[str] = None
    ) -> int:
        """
        Delete all sessions for a user (logout all devices).

        Args:
            user_id: User identifier
            exclude_session_id: Session ID to exclude from deletion

        Returns:
            Number of sessions deleted
        """
        redis_client = await get_redis()
        session_ids = await redis_client.smembers(f"user:{user_id}:sessions")

        deleted_count = 0
        for session_id in session_ids:
            if session_id != exclude_session_id:
                if await self.delete_session(session_id):
                    deleted_count += 1

        self.logger.info("Deleted user sessions", user_id=user_id, count=deleted_count)
        return deleted_count

    def _generate_session_id(self) -> str:
        """Generate a cryptographically secure session ID."""
        return secrets.token_urlsafe(32)

    async def _track_user_session(self, user_id: int, session_id: str) -> None:
        """Track session ID in user's session set."""
        redis_client = await get_redis()

        user_sessions_key = f"user:{user_id}:sessions"
        await redis_client.sadd(user_sessions_key, session_id)
        await redis_client.expire(user_sessions_key, self.max_age * 2)

    async def _untrack_user_session(self, user_id: int, session_id: str) -> None:
        """Remove session ID from user's session set."""
        redis_client = await get_redis()
        await redis_client.srem(f"user:{user_id}:sessions", session_id)


# Global session manager instance
session_manager = SessionManager()


async def get_session_manager() -> SessionManager:
    """Get session manager instance."""
    return session_manager
