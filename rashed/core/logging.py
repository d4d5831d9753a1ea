"""
Logging configuration for Rashed using structlog.

This module provides structured logging configuration for development
consoles and JSON log pipelines alike.
"""

import logging
import socket
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import structlog

from .config import get_config


def _add_service_metadata(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """Add service metadata for log filtering."""
    config = get_config()

    event_dict.update(
        {
            "service_name": "rashed",
            "environment": config.environment.value,
            "hostname": _get_hostname(),
        }
    )

    return event_dict


def _get_hostname() -> str:
    """Get hostname for logging."""
    try:
        return socket.gethostname()
    except OSError:
        return "unknown"


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    json_output: Optional[bool] = None,
) -> None:
    """
    Set up structured logging for Rashed.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        json_output: Whether to output JSON logs (defaults to configuration)
    """
    config = get_config()

    log_level = level or config.logging.level
    if json_output is None:
        json_output = config.logging.json_output
    if log_file is None and config.logging.log_file:
        log_file = Path(config.logging.log_file)

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_service_metadata,
    ]

    if json_output or config.is_production():
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Human-readable format for development
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, log_level.upper()))
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        logging.getLogger().addHandler(file_handler)

    logger = structlog.get_logger(__name__)
    logger.info(
        "Logging initialized",
        level=log_level,
        json_output=json_output,
        log_file=str(log_file) if log_file else None,
    )


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)


def log_activity_event(
    activity_type: str,
    description: str,
    project_id: Optional[int] = None,
    details: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Log a dashboard activity with structured data.

    Args:
        activity_type: Activity type, e.g. ``project_created``
        description: Human readable description
        project_id: Related project, if any
        details: Additional details about the activity
    """
    logger = structlog.get_logger("activity")

    log_data: Dict[str, Any] = {
        "activity_type": activity_type,
        "project_id": project_id,
        "event_type": "activity",
    }

    if details:
        log_data.update(details)

    logger.info(description, **log_data)


def log_ai_request(
    operation: str,
    model: str,
    status: str = "started",
    details: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Log an outbound completion request with structured data.

    Args:
        operation: AI operation name (chat, code, analyze, ...)
        model: Model the request was sent to
        status: Status of the request (started, completed, failed)
        details: Additional details about the request
    """
    logger = structlog.get_logger("ai_request")

    log_data: Dict[str, Any] = {
        "operation": operation,
        "model": model,
        "status": status,
        "event_type": "ai_request",
    }

    if details:
        log_data.update(details)

    if status == "failed":
        logger.error("AI request failed", **log_data)
    elif status == "completed":
        logger.info("AI request completed", **log_data)
    else:
        logger.info("AI request started", **log_data)
