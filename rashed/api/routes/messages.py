"""
Chat endpoints for the Rashed API.

The conversation is held in the caller's session; see ``core.chat``.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from ...core.chat import ConversationRelay
from ...core.dependencies import get_conversation_relay, get_current_session
from ...core.errors import AIConfigurationError, AIServiceError, RashedError
from ...core.logging import get_logger
from ..auth.sessions import SessionData
from ..models import MessageResponse
from ..schemas import ChatMessage, MessageCreate

router = APIRouter(prefix="/messages", tags=["messages"])
logger = get_logger("api.messages")


@router.get("", response_model=List[ChatMessage])
async def list_messages(
    session: SessionData = Depends(get_current_session),
) -> List[Dict[str, Any]]:
    """The conversation of the current session."""
    return session.messages


@router.post("", response_model=ChatMessage, status_code=status.HTTP_201_CREATED)
async def post_message(
    body: MessageCreate,
    session: SessionData = Depends(get_current_session),
    relay: ConversationRelay = Depends(get_conversation_relay),
) -> Dict[str, Any]:
    """Send a message to the assistant and return its reply."""
    try:
        return await relay.post(session, body.content)
    except (AIConfigurationError, AIServiceError) as e:
        logger.error("Chat processing error", error=e.error)
        raise RashedError(e.error, message="Error processing message") from e


@router.post("/reset", response_model=MessageResponse)
async def reset_messages(
    session: SessionData = Depends(get_current_session),
    relay: ConversationRelay = Depends(get_conversation_relay),
) -> MessageResponse:
    await relay.reset(session)
    return MessageResponse(message="Conversation reset successfully")
