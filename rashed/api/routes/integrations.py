"""
Integration endpoints for the Rashed API.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from ...core.dependencies import (
    get_activity_service,
    get_current_session,
    get_integration_repository,
    get_stats_service,
)
from ...core.repositories import IntegrationRepository
from ...core.services import ActivityService, StatsService
from ..auth.sessions import SessionData
from ..schemas import IntegrationCreate, IntegrationResponse

router = APIRouter(tags=["integrations"])


@router.get("/integrations", response_model=List[IntegrationResponse])
async def list_integrations(
    session: SessionData = Depends(get_current_session),
    integrations: IntegrationRepository = Depends(get_integration_repository),
) -> List[IntegrationResponse]:
    rows = await integrations.list_integrations()
    return [IntegrationResponse.model_validate(row) for row in rows]


@router.post(
    "/integrations",
    response_model=IntegrationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_integration(
    body: IntegrationCreate,
    session: SessionData = Depends(get_current_session),
    integrations: IntegrationRepository = Depends(get_integration_repository),
    activities: ActivityService = Depends(get_activity_service),
) -> IntegrationResponse:
    integration = await integrations.create(**body.model_dump())
    await activities.record(
        "integration_created",
        f'New integration "{integration.name}" was added',
        metadata={"integrationType": integration.type},
    )
    return IntegrationResponse.model_validate(integration)


@router.get("/stats/apiUsage")
async def api_usage(
    session: SessionData = Depends(get_current_session),
    stats: StatsService = Depends(get_stats_service),
) -> Dict[str, Any]:
    """Total requests across integrations, with a per-integration breakdown."""
    return await stats.api_usage()
