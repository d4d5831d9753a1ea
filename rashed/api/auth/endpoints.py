"""
Authentication endpoints for the Rashed API.

Login and registration open a Redis-backed session and hand its id to the
browser in an HTTP-only cookie; logout deletes the session and the cookie.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from ...core.auth.tortoise_models import User
from ...core.dependencies import get_current_session, get_current_user, get_user_service
from ...core.logging import get_logger
from ...core.services import UserService
from ..models import MessageResponse
from ..schemas import (
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    UserResponse,
)
from .sessions import SessionData, SessionManager, get_session_manager

router = APIRouter(tags=["authentication"])
logger = get_logger("api.auth.endpoints")


async def _open_session(
    request: Request, response: Response, user: User, session_manager: SessionManager
) -> SessionData:
    """Create a session for ``user`` and set the session cookie."""
    session = await session_manager.create_session(
        user_id=user.id,
        username=user.username,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    response.set_cookie(
        key=session_manager.cookie_name,
        value=session.session_id,
        max_age=session_manager.max_age,
        httponly=session_manager.httponly,
        secure=session_manager.secure,
        samesite=session_manager.samesite,  # type: ignore[arg-type]
    )
    return session


@router.post(
    "/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    body: RegisterRequest,
    request: Request,
    response: Response,
    user_service: UserService = Depends(get_user_service),
    session_manager: SessionManager = Depends(get_session_manager),
) -> UserResponse:
    """Create an account and log it in."""
    user = await user_service.register(body.username, body.password, name=body.name)
    await _open_session(request, response, user, session_manager)
    logger.info("User registered and logged in", user_id=user.id, event_type="user_register")
    return UserResponse.model_validate(user)


@router.post("/login", response_model=UserResponse)
async def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    user_service: UserService = Depends(get_user_service),
    session_manager: SessionManager = Depends(get_session_manager),
) -> UserResponse:
    """Check credentials and open a session."""
    user = await user_service.authenticate(body.username, body.password)
    await _open_session(request, response, user, session_manager)
    logger.info("User logged in", user_id=user.id, event_type="user_login")
    return UserResponse.model_validate(user)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    session_manager: SessionManager = Depends(get_session_manager),
) -> MessageResponse:
    """Delete the current session, if any, and clear the cookie."""
    session_id = request.cookies.get(session_manager.cookie_name)
    if session_id:
        await session_manager.delete_session(session_id)
    response.delete_cookie(
        key=session_manager.cookie_name,
        httponly=session_manager.httponly,
        secure=session_manager.secure,
        samesite=session_manager.samesite,  # type: ignore[arg-type]
    )
    logger.info("User logged out", event_type="user_logout")
    return MessageResponse(message="Logged out successfully")


@router.get("/user", response_model=UserResponse)
async def get_current_user_info(user: User = Depends(get_current_user)) -> UserResponse:
    """
    Get current user information.

    Args:
        user: Current authenticated user

    Returns:
        The logged-in user
    """
    return UserResponse.model_validate(user)


@router.patch("/user/profile", response_model=UserResponse)
async def update_profile(
    body: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    session: SessionData = Depends(get_current_session),
    user_service: UserService = Depends(get_user_service),
    session_manager: SessionManager = Depends(get_session_manager),
) -> UserResponse:
    """Change the username and/or display name of the current user."""
    updated = await user_service.update_profile(
        user, username=body.username, name=body.name
    )
    if updated.username != session.username:
        session.username = updated.username
        await session_manager.save_session(session)
    return UserResponse.model_validate(updated)


@router.post("/user/change-password", response_model=MessageResponse)
async def change_password(
    body: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    session: SessionData = Depends(get_current_session),
    user_service: UserService = Depends(get_user_service),
    session_manager: SessionManager = Depends(get_session_manager),
) -> MessageResponse:
    """
    Replace the current user's password after checking the old one.

    Every other session of the user is logged out; the caller's session
    stays open.
    """
    await user_service.change_password(user, body.current_password, body.new_password)
    await session_manager.delete_user_sessions(
        user.id, exclude_session_id=session.session_id
    )
    return MessageResponse(message="Password updated successfully")
