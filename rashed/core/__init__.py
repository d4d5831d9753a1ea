"""
Core module for Rashed.

This module contains the fundamental components of Rashed including
configuration management, logging setup, error types and persistence.
"""

from .config import RashedConfig
from .errors import (
    AIConfigurationError,
    AIServiceError,
    AuthenticationError,
    BadRequestError,
    ConflictError,
    ErrorType,
    NotFoundError,
    RashedError,
    UploadRejectedError,
    create_error_response,
)
from .logging import get_logger, setup_logging

__all__ = [
    "RashedConfig",
    "setup_logging",
    "get_logger",
    "ErrorType",
    "RashedError",
    "NotFoundError",
    "AuthenticationError",
    "BadRequestError",
    "ConflictError",
    "AIConfigurationError",
    "AIServiceError",
    "UploadRejectedError",
    "create_error_response",
]
