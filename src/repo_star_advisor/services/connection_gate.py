"""Connection gate — make sure the integration has a connected account."""

from __future__ import annotations

import logging

from repo_star_advisor.domain.entities import IntegrationStatus
from repo_star_advisor.domain.exceptions import (
    ConnectionPendingError,
    ConnectionUnverifiedError,
)
from repo_star_advisor.domain.ports.integration_service import IntegrationService

logger = logging.getLogger(__name__)


async def ensure_connection(
    service: IntegrationService,
    integration_id: str,
    entity_id: str = "default",
    *,
    strict: bool = False,
) -> IntegrationStatus | None:
    """Return the integration when at least one account is connected.

    With no connected account a new connection is initiated and
    :class:`ConnectionPendingError` is raised carrying the redirect URL.

    Any other failure is logged and ``None`` returned so the run continues,
    unless *strict* is set, in which case it raises
    :class:`ConnectionUnverifiedError`.
    """
    logger.info("Checking connection status for integration %s", integration_id)
    try:
        return await _check(service, integration_id, entity_id)
    except ConnectionPendingError:
        raise
    except Exception as exc:
        if strict:
            raise ConnectionUnverifiedError(
                f"Could not verify integration {integration_id}: {exc}"
            ) from exc
        logger.error("Error checking integration %s: %s", integration_id, exc)
        return None


async def _check(
    service: IntegrationService, integration_id: str, entity_id: str
) -> IntegrationStatus:
    integration = await service.get_integration(integration_id)
    logger.info("Integration found: %s", integration.name)
    logger.info("Connections: %d", len(integration.connections))

    if integration.connected:
        logger.info("Connection exists")
        return integration

    logger.info("No connection found for %s, initiating one", integration.name)
    required = await service.get_required_params(integration.id)
    logger.info("Required auth fields: %s", required)

    request = await service.initiate_connection(integration.id, entity_id)
    logger.info("Visit this URL to connect your account: %s", request.redirect_url)
    logger.info("After connecting, restart the application.")
    raise ConnectionPendingError(request.redirect_url)
