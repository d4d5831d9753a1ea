"""
Tests for the session-held chat relay.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from rashed.ai.prompts import ASSISTANT_SYSTEM_PROMPT
from rashed.api.auth.sessions import SessionManager
from rashed.core.chat import ConversationRelay, completion_messages, new_message
from rashed.core.errors import AIServiceError
from tests.shared import make_completion


@pytest.fixture
def session_manager(test_config, fake_redis):
    return SessionManager()


@pytest.fixture
async def session(session_manager):
    return await session_manager.create_session(user_id=1, username="alice")


@pytest.fixture
def activity_service():
    service = MagicMock()
    service.record = AsyncMock()
    return service


@pytest.fixture
def relay(session_manager, mock_ai_client, activity_service):
    return ConversationRelay(session_manager, mock_ai_client, activity_service)


@pytest.mark.unit
class TestMessageHelpers:
    """Test message construction."""

    def test_new_message(self):
        message = new_message("user", "Hello")
        assert message["role"] == "user"
        assert message["content"] == "Hello"
        assert message["id"]
        assert "T" in message["timestamp"]
        assert new_message("user", "Hello")["id"] != message["id"]

    def test_completion_messages_prepends_system_prompt(self):
        history = [new_message("user", "Hi"), new_message("assistant", "Hello!")]
        messages = completion_messages(history)
        assert messages == [
            {"role": "system", "content": ASSISTANT_SYSTEM_PROMPT},
            {"role": "user", "content": "Hi"},
            {"role": "assistant", "content": "Hello!"},
        ]


@pytest.mark.unit
class TestConversationRelay:
    """Test conversation turns."""

    @pytest.mark.asyncio
    async def test_post_appends_both_messages(
        self, relay, session, session_manager, mock_ai_client, activity_service
    ):
        mock_ai_client.create_chat_completion.return_value = make_completion(
            "Use a queue."
        )

        reply = await relay.post(session, "How do I decouple services?")

        assert reply["role"] == "assistant"
        assert reply["content"] == "Use a queue."

        stored = await session_manager.get_session(session.session_id)
        assert [m["role"] for m in stored.messages] == ["user", "assistant"]
        assert stored.messages[0]["content"] == "How do I decouple services?"

        kwargs = mock_ai_client.create_chat_completion.await_args.kwargs
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_tokens"] == 1000
        assert kwargs["messages"][0]["role"] == "system"
        assert kwargs["messages"][-1] == {
            "role": "user",
            "content": "How do I decouple services?",
        }

        activity_service.record.assert_awaited_once()
        args, kwargs = activity_service.record.await_args
        assert args[0] == "chat_interaction"
        assert kwargs["metadata"] == {"messageCount": 2}

    @pytest.mark.asyncio
    async def test_history_is_replayed(self, relay, session, mock_ai_client):
        mock_ai_client.create_chat_completion.return_value = make_completion("ok")

        await relay.post(session, "first")
        await relay.post(session, "second")

        messages = mock_ai_client.create_chat_completion.await_args.kwargs["messages"]
        assert [m["content"] for m in messages[1:]] == ["first", "ok", "second"]
        assert len(relay.history(session)) == 4

    @pytest.mark.asyncio
    async def test_failed_turn_keeps_user_message(
        self, relay, session, session_manager, mock_ai_client, activity_service
    ):
        mock_ai_client.create_chat_completion.side_effect = AIServiceError("down")

        with pytest.raises(AIServiceError):
            await relay.post(session, "hello?")

        stored = await session_manager.get_session(session.session_id)
        assert [m["content"] for m in stored.messages] == ["hello?"]
        activity_service.record.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_reset(self, relay, session, session_manager, mock_ai_client):
        mock_ai_client.create_chat_completion.return_value = make_completion("ok")
        await relay.post(session, "hello")

        await relay.reset(session)

        stored = await session_manager.get_session(session.session_id)
        assert stored.messages == []
