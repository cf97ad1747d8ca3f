"""Tool catalog fetcher."""

from __future__ import annotations

import logging

from repo_star_advisor.domain.entities import ToolCatalog
from repo_star_advisor.domain.exceptions import ToolCatalogError
from repo_star_advisor.domain.ports.tools import ToolCatalogService

logger = logging.getLogger(__name__)

GET_REPOSITORY = "GITHUB_GET_A_REPOSITORY"
GET_REPOSITORY_CONTENT = "GITHUB_GET_REPOSITORY_CONTENT"
STAR_REPOSITORY = "GITHUB_STAR_A_REPOSITORY_FOR_THE_AUTHENTICATED_USER"


async def fetch_tool_catalog(service: ToolCatalogService, app: str) -> ToolCatalog:
    """Fetch the tools for *app*.  Any failure is fatal."""
    logger.info("Fetching %s tools", app)
    try:
        catalog = await service.get_tools([app])
    except Exception as exc:
        logger.error("Error fetching tools: %s", exc)
        raise ToolCatalogError(f"Could not fetch {app} tools: {exc}") from exc

    logger.info("Retrieved %d %s tools", len(catalog), app)
    return catalog
