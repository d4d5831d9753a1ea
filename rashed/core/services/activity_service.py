"""
Activity recording for Rashed.

Every mutating dashboard action leaves a row in the activity feed and a
matching structured log line.
"""

from typing import Any, Dict, List, Optional

from ..logging import log_activity_event
from ..models.tortoise_models import Activity
from ..repositories.activity_repository import (
    DEFAULT_ACTIVITY_LIMIT,
    ActivityRepository,
)
from .base import BaseService


class ActivityService(BaseService[Activity]):
    """Writes and reads the activity feed."""

    def __init__(self, activity_repository: ActivityRepository):
        super().__init__(activity_repository)
        self.activity_repository = activity_repository

    async def record(
        self,
        activity_type: str,
        description: str,
        project_id: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Activity:
        """
        Insert an activity row and emit the matching log event.

        Args:
            activity_type: Activity type, e.g. ``project_created``
            description: Human readable description shown in the feed
            project_id: Related project, if any
            metadata: Free-form details stored with the row

        Returns:
            Created activity
        """
        activity = await self.activity_repository.create(
            type=activity_type,
            description=description,
            project_id=project_id,
            metadata=metadata,
        )
        log_activity_event(
            activity_type, description, project_id=project_id, details=metadata
        )
        return activity

    async def latest(self, limit: int = DEFAULT_ACTIVITY_LIMIT) -> List[Activity]:
        return await self.activity_repository.list_activities(limit=limit)
