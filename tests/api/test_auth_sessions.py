"""
Tests for Redis-backed session management.
"""

import json
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import HTTPException
from redis.exceptions import RedisError

from rashed.api.auth.sessions import SessionData, SessionManager, get_session_manager


@pytest.fixture
def session_manager(test_config, fake_redis):
    return SessionManager()


@pytest.mark.api
class TestSessionManager:
    """Test session manager functionality."""

    def test_cookie_settings_come_from_config(self, session_manager):
        assert session_manager.cookie_name == "rashed_session"
        assert session_manager.httponly is True
        assert session_manager.samesite == "lax"

    @pytest.mark.asyncio
    async def test_create_session(self, session_manager, fake_redis):
        session = await session_manager.create_session(
            user_id=3, username="alice", ip_address="10.0.0.1", user_agent="pytest"
        )

        assert isinstance(session, SessionData)
        assert session.user_id == 3
        assert session.messages == []
        assert f"session:{session.session_id}" in fake_redis.values
        assert session.session_id in fake_redis.sets["user:3:sessions"]
        assert fake_redis.ttls[f"session:{session.session_id}"] > 0

    @pytest.mark.asyncio
    async def test_session_ids_are_unique(self, session_manager):
        first = await session_manager.create_session(user_id=1, username="a")
        second = await session_manager.create_session(user_id=1, username="a")
        assert first.session_id != second.session_id

    @pytest.mark.asyncio
    async def test_get_session_round_trip(self, session_manager):
        created = await session_manager.create_session(user_id=1, username="alice")
        created.messages.append({"id": "m1", "role": "user", "content": "hi"})
        await session_manager.save_session(created)

        loaded = await session_manager.get_session(created.session_id)

        assert loaded is not None
        assert loaded.username == "alice"
        assert loaded.messages[0]["content"] == "hi"
        assert loaded.last_activity >= created.last_activity

    @pytest.mark.asyncio
    async def test_get_unknown_session(self, session_manager):
        assert await session_manager.get_session("missing") is None

    @pytest.mark.asyncio
    async def test_get_expired_session(self, session_manager, fake_redis):
        now = datetime.now(timezone.utc)
        expired = SessionData(
            session_id="old",
            user_id=1,
            username="alice",
            created_at=now - timedelta(days=8),
            expires_at=now - timedelta(days=1),
            last_activity=now - timedelta(days=1),
        )
        fake_redis.values["session:old"] = json.dumps(expired.model_dump(mode="json"))

        assert await session_manager.get_session("old") is None

    @pytest.mark.asyncio
    async def test_get_corrupt_session(self, session_manager, fake_redis):
        fake_redis.values["session:bad"] = "{not json"
        assert await session_manager.get_session("bad") is None

    @pytest.mark.asyncio
    async def test_delete_session(self, session_manager, fake_redis):
        session = await session_manager.create_session(user_id=5, username="bob")

        assert await session_manager.delete_session(session.session_id) is True
        assert await session_manager.get_session(session.session_id) is None
        assert session.session_id not in fake_redis.sets["user:5:sessions"]

    @pytest.mark.asyncio
    async def test_delete_user_sessions(self, session_manager):
        keep = await session_manager.create_session(user_id=7, username="carol")
        await session_manager.create_session(user_id=7, username="carol")
        await session_manager.create_session(user_id=7, username="carol")

        deleted = await session_manager.delete_user_sessions(
            7, exclude_session_id=keep.session_id
        )

        assert deleted == 2
        assert await session_manager.get_session(keep.session_id) is not None

    @pytest.mark.asyncio
    async def test_create_session_redis_failure(self, test_config):
        manager = SessionManager()
        broken = AsyncMock()
        broken.setex.side_effect = RedisError("connection refused")
        with patch(
            "rashed.api.auth.sessions.get_redis", AsyncMock(return_value=broken)
        ):
            with pytest.raises(HTTPException) as exc_info:
                await manager.create_session(user_id=1, username="alice")
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_get_session_manager(self):
        assert await get_session_manager() is await get_session_manager()
