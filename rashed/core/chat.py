"""
Session-held chat relay.

The conversation lives only in the session payload. Each turn appends the
user's message, replays the whole history to the completion API behind the
assistant system prompt and appends the reply.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

from ..ai.client import AIClient, completion_text
from ..ai.prompts import ASSISTANT_SYSTEM_PROMPT
from ..api.auth.sessions import SessionData, SessionManager
from .config import get_config
from .logging import get_logger
from .services.activity_service import ActivityService

logger = get_logger("core.chat")


def new_message(role: str, content: str) -> Dict[str, Any]:
    """Build a chat message in the shape the client renders."""
    return {
        "id": str(uuid.uuid4()),
        "role": role,
        "content": content,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def completion_messages(history: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """System prompt followed by the history as role/content pairs."""
    messages = [{"role": "system", "content": ASSISTANT_SYSTEM_PROMPT}]
    for message in history:
        role = "user" if message.get("role") == "user" else "assistant"
        messages.append({"role": role, "content": message.get("content", "")})
    return messages


class ConversationRelay:
    """Appends to a session's conversation and forwards it to the AI client."""

    def __init__(
        self,
        session_manager: SessionManager,
        ai_client: AIClient,
        activity_service: ActivityService,
    ):
        self.session_manager = session_manager
        self.ai_client = ai_client
        self.activity_service = activity_service
        self.config = get_config().ai

    def history(self, session: SessionData) -> List[Dict[str, Any]]:
        return list(session.messages)

    async def post(self, session: SessionData, content: str) -> Dict[str, Any]:
        """
        Run one conversation turn.

        The user message is saved before the completion request, so it stays
        in the history when the request fails.

        Returns:
            The assistant message

        Raises:
            AIConfigurationError: If the AI client has no API key
            AIServiceError: If the completion request fails
        """
        session.messages.append(new_message("user", content))
        await self.session_manager.save_session(session)

        response = await self.ai_client.create_chat_completion(
            messages=completion_messages(session.messages),
            temperature=self.config.chat_temperature,
            max_tokens=self.config.chat_max_tokens,
        )

        assistant_message = new_message("assistant", completion_text(response))
        session.messages.append(assistant_message)
        await self.session_manager.save_session(session)

        await self.activity_service.record(
            "chat_interaction",
            "Chat interaction with AI assistant",
            metadata={"messageCount": len(session.messages)},
        )
        return assistant_message

    async def reset(self, session: SessionData) -> None:
        """Clear the conversation of ``session``."""
        session.messages = []
        await self.session_manager.save_session(session)
        logger.info("Conversation reset", session_user=session.username)
