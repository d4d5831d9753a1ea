"""
Health check endpoints for the Rashed API.

This module provides health monitoring and status endpoints. They are the
only endpoints under ``/api`` that do not require a session.
"""

import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter
from tortoise import connections
from tortoise.exceptions import BaseORMException

from ... import __version__
from ...core.logging import get_logger
from ...core.redis import get_redis
from ..models import HealthResponse

router = APIRouter(tags=["Health"])

SERVICE_NAME = "Rashed API"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Basic Health Check",
    description="Returns the basic health status of the Rashed API service",
)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Lightweight liveness probe suitable for load balancer checks.

    Returns:
        HealthResponse: Basic health status information
    """
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        version=__version__,
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed Health Check",
    description="Returns health status of the database and session store",
)
async def detailed_health_check() -> HealthResponse:
    """
    Detailed health check endpoint.

    **Components Checked:**
    - Relational database (a trivial query on the default connection)
    - Redis session store (PING)

    **Response Status:**
    - `healthy`: All components are functioning normally
    - `degraded`: Some components have issues
    """
    logger = get_logger("api.health")
    start_time = time.time()

    components = {"api": "healthy"}

    try:
        await connections.get("default").execute_query("SELECT 1")
        components["database"] = "healthy"
    except (BaseORMException, KeyError, OSError) as e:
        logger.error("Database health check failed", error=str(e))
        components["database"] = "unhealthy"

    redis = await get_redis()
    components["redis"] = "healthy" if await redis.ping() else "unhealthy"

    response_time = time.time() - start_time
    overall_status = "healthy"
    if any(value == "unhealthy" for value in components.values()):
        overall_status = "degraded"

    logger.info(
        "Health check completed",
        status=overall_status,
        response_time_ms=round(response_time * 1000, 2),
    )
    return HealthResponse(
        status=overall_status,
        service=SERVICE_NAME,
        version=__version__,
        components=components,
        metrics={"response_time_ms": round(response_time * 1000, 2)},
    )


@router.get("/health/live", response_model=Dict[str, Any])
async def liveness_check() -> Dict[str, Any]:
    """
    Liveness check endpoint.

    Returns:
        Liveness status
    """
    return {
        "status": "alive",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": SERVICE_NAME,
    }
