"""
Project repository for Rashed.
"""

from typing import List, Optional

from ..models.tortoise_models import Project
from .base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Data access for projects."""

    model = Project
    resource_name = "Project"

    async def list_projects(self, user_id: Optional[int] = None) -> List[Project]:
        """List projects, restricted to one owner when ``user_id`` is given."""
        if user_id:
            return await self.find_by(user_id=user_id)
        return await self.get_all()

    async def get_recent(self, user_id: int, limit: int) -> List[Project]:
        """Most recently created projects of a user, newest first."""
        return (
            await self.model.filter(user_id=user_id)
            .order_by("-created_at", "-id")
            .limit(limit)
        )
