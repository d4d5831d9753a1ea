"""
Project endpoints for the Rashed API.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from ...core.auth.tortoise_models import User
from ...core.dependencies import (
    get_activity_service,
    get_current_user,
    get_project_repository,
)
from ...core.errors import NotFoundError
from ...core.repositories import ProjectRepository
from ...core.services import ActivityService
from ..schemas import ProjectCreate, ProjectResponse

router = APIRouter(prefix="/projects", tags=["projects"])

RECENT_PROJECTS_LIMIT = 5


@router.get("", response_model=List[ProjectResponse])
async def list_projects(
    user: User = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repository),
) -> List[ProjectResponse]:
    """Projects owned by the current user."""
    rows = await projects.list_projects(user_id=user.id)
    return [ProjectResponse.model_validate(row) for row in rows]


@router.get("/recent", response_model=List[ProjectResponse])
async def recent_projects(
    user: User = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repository),
) -> List[ProjectResponse]:
    """The current user's most recently created projects."""
    rows = await projects.get_recent(user.id, RECENT_PROJECTS_LIMIT)
    return [ProjectResponse.model_validate(row) for row in rows]


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: int,
    user: User = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repository),
) -> ProjectResponse:
    project = await projects.get_by_id(project_id)
    if project is None:
        raise NotFoundError("Project", project_id)
    return ProjectResponse.model_validate(project)


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    body: ProjectCreate,
    user: User = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repository),
    activities: ActivityService = Depends(get_activity_service),
) -> ProjectResponse:
    """Create a project owned by the current user and record it in the feed."""
    project = await projects.create(**body.model_dump(), user_id=user.id)
    await activities.record(
        "project_created",
        f'Project "{project.name}" was created',
        project_id=project.id,
        metadata={"projectType": project.type},
    )
    return ProjectResponse.model_validate(project)
