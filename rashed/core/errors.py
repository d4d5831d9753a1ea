"""
Error types and error response helpers for Rashed.

Every failure that crosses the route boundary is a ``RashedError`` (or an
``HTTPException``). The API layer turns them into JSON bodies carrying a
generic message plus the underlying error text.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from fastapi import status


class ErrorType(Enum):
    """Types of errors that can occur in the system."""

    VALIDATION_ERROR = "validation_error"  # Invalid input/data format
    NOT_FOUND_ERROR = "not_found_error"  # Missing row
    AUTHENTICATION_ERROR = "authentication_error"  # Authentication failure
    CONFIGURATION_ERROR = "configuration_error"  # Configuration issue
    EXTERNAL_SERVICE_ERROR = "external_service_error"  # Completion API failure
    STORAGE_ERROR = "storage_error"  # Database or disk failure
    UNKNOWN_ERROR = "unknown_error"  # Unexpected errors


class RashedError(Exception):
    """Base class for errors surfaced through the API."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type: ErrorType = ErrorType.UNKNOWN_ERROR
    default_message: str = "Internal server error"

    def __init__(
        self,
        error: Optional[str] = None,
        *,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message or self.default_message
        self.error = error or self.message
        if status_code is not None:
            self.status_code = status_code
        self.context = context or {}
        super().__init__(self.error)

    def to_response(self, path: Optional[str] = None) -> Dict[str, Any]:
        """Render the JSON body returned to clients."""
        body: Dict[str, Any] = {"detail": self.message, "error": self.error}
        if path is not None:
            body["path"] = path
        return body


class NotFoundError(RashedError):
    """A requested row does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    error_type = ErrorType.NOT_FOUND_ERROR
    default_message = "Resource not found"

    def __init__(self, resource: str, resource_id: Any = None) -> None:
        message = f"{resource} not found"
        super().__init__(
            message,
            message=message,
            context={"resource": resource, "resource_id": resource_id},
        )


class AuthenticationError(RashedError):
    """Credentials or session are missing or invalid."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_type = ErrorType.AUTHENTICATION_ERROR
    default_message = "Unauthorized"


class BadRequestError(RashedError):
    """The request is well formed but cannot be honoured."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_type = ErrorType.VALIDATION_ERROR
    default_message = "Invalid request"


class ConflictError(RashedError):
    """A unique constraint would be violated."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_type = ErrorType.VALIDATION_ERROR
    default_message = "Request conflicts with existing data"


class AIConfigurationError(RashedError):
    """The completion API cannot be called because it is not configured."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type = ErrorType.CONFIGURATION_ERROR
    default_message = "Error from OpenAI API"


class AIServiceError(RashedError):
    """The completion API call failed or returned unusable output."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type = ErrorType.EXTERNAL_SERVICE_ERROR
    default_message = "Error from OpenAI API"


class UploadRejectedError(RashedError):
    """An uploaded file failed validation."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_type = ErrorType.VALIDATION_ERROR
    default_message = "File upload rejected"


def create_error_response(
    error_type: ErrorType,
    error_message: str,
    error_context: Optional[Dict[str, Any]] = None,
    source: Optional[str] = None,
) -> Dict[str, Any]:
    """Create a structured error record for logging."""
    return {
        "error_type": error_type.value,
        "error_message": error_message,
        "error_context": error_context or {},
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "source": source,
    }
