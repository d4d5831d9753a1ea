"""
Common API response models.

This module provides the response models shared by the health and error
paths of the API.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standardized error response.

    ``detail`` is a generic message; ``error`` carries the underlying error
    text when there is one.
    """

    detail: str = Field(..., description="Human-readable error message")
    error: Optional[str] = Field(None, description="Underlying error text")
    errors: Optional[List[Dict[str, Any]]] = Field(
        None, description="Field errors of a rejected request body"
    )
    path: Optional[str] = Field(None, description="Request path that caused the error")


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class HealthResponse(BaseModel):
    """
    Standardized health check response.

    This provides a consistent format for health check endpoints.
    """

    status: str = Field(
        ...,
        description="Overall health status",
        examples=["healthy", "degraded", "unhealthy"],
    )
    service: str = Field(..., description="Service name", examples=["Rashed API"])
    version: str = Field(..., description="Service version", examples=["0.1.0"])
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Check timestamp",
    )
    components: Optional[Dict[str, str]] = Field(
        None,
        description="Component health status",
        examples=[{"api": "healthy", "database": "healthy", "redis": "healthy"}],
    )
    metrics: Optional[Dict[str, Any]] = Field(
        None,
        description="Health metrics",
        examples=[{"response_time_ms": 15.2}],
    )
