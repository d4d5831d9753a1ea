"""
Integration repository for Rashed.
"""

from typing import List

from ..models.tortoise_models import Integration
from .base import BaseRepository


class IntegrationRepository(BaseRepository[Integration]):
    """Data access for integrations."""

    model = Integration
    resource_name = "Integration"

    async def list_integrations(self) -> List[Integration]:
        """All integrations in creation order."""
        return await self.get_all()

    async def total_requests(self) -> int:
        """Sum of ``request_count`` over every integration."""
        counts = await self.model.all().values_list("request_count", flat=True)
        return sum(count or 0 for count in counts)
