"""Port: integration service — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from repo_star_advisor.domain.entities import ConnectionRequest, IntegrationStatus


class IntegrationService(Protocol):
    """Abstract contract for checking and establishing integration connections."""

    async def get_integration(self, integration_id: str) -> IntegrationStatus:
        """Return the integration with its connected accounts."""
        ...

    async def get_required_params(self, integration_id: str) -> list[dict[str, object]]:
        """Return the input fields needed to authenticate a new connection."""
        ...

    async def initiate_connection(
        self, integration_id: str, entity_id: str
    ) -> ConnectionRequest:
        """Start a new connection and return where the operator must go."""
        ...
