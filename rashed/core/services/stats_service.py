"""
Dashboard statistics for Rashed.
"""

from typing import Any, Dict

from ..repositories.integration_repository import IntegrationRepository


class StatsService:
    """Aggregates shown on the dashboard cards."""

    def __init__(self, integration_repository: IntegrationRepository):
        self.integration_repository = integration_repository

    async def api_usage(self) -> Dict[str, Any]:
        """
        Request totals across integrations.

        Returns:
            ``{"total": int, "integrations": [{"id", "name", "requestCount"}]}``
        """
        integrations = await self.integration_repository.list_integrations()
        return {
            "total": await self.integration_repository.total_requests(),
            "integrations": [
                {
                    "id": integration.id,
                    "name": integration.name,
                    "requestCount": integration.request_count,
                }
                for integration in integrations
            ],
        }
