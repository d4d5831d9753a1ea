"""
Settings endpoints for the Rashed API.

Settings live in the caller's session next to the chat conversation. A
saved OpenAI API key is used for that session's AI requests in place of the
server's key.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from ...core.dependencies import (
    NOTIFICATIONS_SETTING,
    OPENAI_API_KEY_SETTING,
    get_current_session,
)
from ...core.logging import get_logger
from ..auth.sessions import SessionData, SessionManager, get_session_manager
from ..schemas import (
    DEFAULT_NOTIFICATIONS,
    ApiKeysUpdate,
    NotificationSettings,
    SettingsResponse,
)

router = APIRouter(prefix="/settings", tags=["settings"])
logger = get_logger("api.settings")


def mask_api_key(api_key: Optional[str]) -> Optional[str]:
    """Show only the last four characters of a key."""
    if not api_key:
        return None
    return "*" * 8 + api_key[-4:] if len(api_key) > 8 else "*" * 8


def _settings_response(session: SessionData) -> SettingsResponse:
    notifications = session.settings.get(NOTIFICATIONS_SETTING)
    return SettingsResponse(
        notifications=(
            NotificationSettings.model_validate(notifications)
            if notifications
            else DEFAULT_NOTIFICATIONS
        ),
        openai_api_key=mask_api_key(session.settings.get(OPENAI_API_KEY_SETTING)),
    )


@router.get("", response_model=SettingsResponse)
async def get_settings(
    session: SessionData = Depends(get_current_session),
) -> SettingsResponse:
    return _settings_response(session)


@router.post("/apikeys", response_model=SettingsResponse)
async def update_api_keys(
    body: ApiKeysUpdate,
    session: SessionData = Depends(get_current_session),
    session_manager: SessionManager = Depends(get_session_manager),
) -> SettingsResponse:
    """Save the OpenAI API key used for this session's AI requests."""
    session.settings[OPENAI_API_KEY_SETTING] = body.openai_api_key
    await session_manager.save_session(session)
    logger.info(
        "API key updated", user_id=session.user_id, event_type="settings_updated"
    )
    return _settings_response(session)


@router.post("/notifications", response_model=SettingsResponse)
async def update_notifications(
    body: NotificationSettings,
    session: SessionData = Depends(get_current_session),
    session_manager: SessionManager = Depends(get_session_manager),
) -> SettingsResponse:
    """Replace the notification preferences of this session."""
    session.settings[NOTIFICATIONS_SETTING] = body.model_dump(by_alias=True)
    await session_manager.save_session(session)
    logger.info(
        "Notification settings updated",
        user_id=session.user_id,
        event_type="settings_updated",
    )
    return _settings_response(session)
