"""
Authentication module for the Rashed API.

This module provides the Redis session store behind the session-cookie
authentication endpoints in ``endpoints``.
"""

from .sessions import SessionData, SessionManager, get_session_manager, session_manager

__all__ = [
    "SessionData",
    "SessionManager",
    "get_session_manager",
    "session_manager",
]
