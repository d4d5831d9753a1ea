"""
Activity, approval and log repositories for Rashed.

These three tables make up the dashboard feeds; all of them are read
newest first.
"""

from typing import List, Optional

from ..models.tortoise_models import Activity, Approval, Log
from .base import BaseRepository

DEFAULT_ACTIVITY_LIMIT = 20


class ActivityRepository(BaseRepository[Activity]):
    """Data access for the activity feed."""

    model = Activity
    resource_name = "Activity"
    default_ordering = ("-timestamp", "-id")

    async def list_activities(
        self, limit: int = DEFAULT_ACTIVITY_LIMIT
    ) -> List[Activity]:
        """Latest activities, newest first."""
        return await self.get_all(limit=limit)


class ApprovalRepository(BaseRepository[Approval]):
    """Data access for approval requests."""

    model = Approval
    resource_name = "Approval"

    async def list_approvals(self, status: Optional[str] = None) -> List[Approval]:
        """All approvals, or only those with the given status."""
        if status:
            return await self.find_by(status=status)
        return await self.get_all()

    async def count_by_status(self, status: str) -> int:
        """Number of approvals with the given status."""
        return await self.count(status=status)

    async def update_status(self, approval_id: int, status: str) -> Approval:
        """Set the status of an approval, raising when it does not exist."""
        return await self.update(approval_id, status=status)


class LogRepository(BaseRepository[Log]):
    """Data access for system logs."""

    model = Log
    resource_name = "Log"
    default_ordering = ("-timestamp", "-id")

    async def list_logs(self) -> List[Log]:
        """All logs, newest first."""
        return await self.get_all()
