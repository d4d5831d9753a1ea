"""
Deployment and environment endpoints for the Rashed API.
"""

from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from ...core.dependencies import (
    get_activity_service,
    get_current_session,
    get_deployment_repository,
    get_environment_repository,
)
from ...core.repositories import DeploymentRepository, EnvironmentRepository
from ...core.services import ActivityService
from ..auth.sessions import SessionData
from ..schemas import (
    DeployRequest,
    DeploymentCreate,
    DeploymentResponse,
    EnvironmentResponse,
    EnvironmentUpdate,
)

router = APIRouter(tags=["deployments"])

IN_PROGRESS = "in_progress"


@router.get("/deployments", response_model=List[DeploymentResponse])
async def list_deployments(
    session: SessionData = Depends(get_current_session),
    deployments: DeploymentRepository = Depends(get_deployment_repository),
) -> List[DeploymentResponse]:
    """All deployments, newest first."""
    rows = await deployments.list_deployments()
    return [DeploymentResponse.model_validate(row) for row in rows]


@router.post(
    "/deployments",
    response_model=DeploymentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_deployment(
    body: DeploymentCreate,
    session: SessionData = Depends(get_current_session),
    deployments: DeploymentRepository = Depends(get_deployment_repository),
    activities: ActivityService = Depends(get_activity_service),
) -> DeploymentResponse:
    """Record a deployment made by the current user."""
    deployment = await deployments.create(
        **body.model_dump(), deployed_by=session.username
    )
    await activities.record(
        "deployment_created",
        f"New deployment to {deployment.environment} environment",
        project_id=deployment.project_id,
        metadata={"status": deployment.status},
    )
    return DeploymentResponse.model_validate(deployment)


@router.get("/environments", response_model=List[EnvironmentResponse])
async def list_environments(
    session: SessionData = Depends(get_current_session),
    environments: EnvironmentRepository = Depends(get_environment_repository),
) -> List[EnvironmentResponse]:
    rows = await environments.list_environments()
    return [EnvironmentResponse.model_validate(row) for row in rows]


@router.get("/environments/{environment_id}", response_model=EnvironmentResponse)
async def get_environment(
    environment_id: int,
    session: SessionData = Depends(get_current_session),
    environments: EnvironmentRepository = Depends(get_environment_repository),
) -> EnvironmentResponse:
    environment = await environments.get_or_raise(environment_id)
    return EnvironmentResponse.model_validate(environment)


@router.patch("/environments/{environment_id}", response_model=EnvironmentResponse)
async def update_environment(
    environment_id: int,
    body: EnvironmentUpdate,
    session: SessionData = Depends(get_current_session),
    environments: EnvironmentRepository = Depends(get_environment_repository),
) -> EnvironmentResponse:
    """Change only the fields present in the request body."""
    environment = await environments.update(
        environment_id, **body.model_dump(exclude_unset=True)
    )
    return EnvironmentResponse.model_validate(environment)


@router.post(
    "/environments/{environment_id}/deploy",
    response_model=DeploymentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def deploy_to_environment(
    environment_id: int,
    body: Optional[DeployRequest] = None,
    session: SessionData = Depends(get_current_session),
    environments: EnvironmentRepository = Depends(get_environment_repository),
    deployments: DeploymentRepository = Depends(get_deployment_repository),
    activities: ActivityService = Depends(get_activity_service),
) -> DeploymentResponse:
    """
    Start a deployment to an environment.

    The deployment is recorded as ``in_progress`` and the environment's
    ``lastDeployed`` is stamped with the current time.
    """
    body = body or DeployRequest()
    environment = await environments.get_or_raise(environment_id)
    deployment = await deployments.create(
        project_id=body.project_id,
        environment=environment.name,
        status=IN_PROGRESS,
        logs=body.logs,
        deployed_by=session.username,
    )
    await environments.update(environment_id, last_deployed=datetime.now(timezone.utc))
    await activities.record(
        "deployment_created",
        f"New deployment to {environment.name} environment",
        project_id=deployment.project_id,
        metadata={"status": deployment.status, "environmentId": environment_id},
    )
    return DeploymentResponse.model_validate(deployment)
