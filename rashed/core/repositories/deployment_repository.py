"""
Deployment and environment repositories for Rashed.
"""

from typing import List

from ..models.tortoise_models import Deployment, Environment
from .base import BaseRepository


class DeploymentRepository(BaseRepository[Deployment]):
    """Data access for deployments."""

    model = Deployment
    resource_name = "Deployment"
    default_ordering = ("-deployed_at", "-id")

    async def list_deployments(self) -> List[Deployment]:
        """All deployments, newest first."""
        return await self.get_all()


class EnvironmentRepository(BaseRepository[Environment]):
    """Data access for environments."""

    model = Environment
    resource_name = "Environment"

    async def list_environments(self) -> List[Environment]:
        """All environments in creation order."""
        return await self.get_all()
