"""Command-line run — checks the connection, loads tools and runs the use case."""

from __future__ import annotations

import logging

from repo_star_advisor.domain.entities import AdvisorOutcome
from repo_star_advisor.infrastructure.config import Settings
from repo_star_advisor.interface.dependencies import Container, open_container
from repo_star_advisor.interface.exit_codes import EXIT_OK, exit_code_for
from repo_star_advisor.services.connection_gate import ensure_connection
from repo_star_advisor.services.tool_catalog import fetch_tool_catalog

logger = logging.getLogger(__name__)


def log_settings(settings: Settings) -> None:
    logger.info("LLM model: %s", settings.groq_model)
    if settings.composio_github_id:
        logger.info("Using custom GitHub integration ID")
    else:
        logger.info("Using default GitHub integration ID")
    logger.info("Environment variables found")


async def run_pipeline(container: Container, settings: Settings) -> AdvisorOutcome:
    """Connection gate → tool catalog → advise-star use case."""
    await ensure_connection(
        container.composio,
        settings.integration_id,
        settings.composio_entity_id,
        strict=settings.strict_connection_check,
    )
    catalog = await fetch_tool_catalog(container.composio, settings.tool_app)
    return await container.use_case.execute(catalog)


async def run(settings: Settings) -> int:
    """Execute one advisor run and return the process exit status."""
    log_settings(settings)
    try:
        async with open_container(settings) as container:
            outcome = await run_pipeline(container, settings)
    except Exception as exc:
        return exit_code_for(exc)

    logger.info(
        "Done: %s -> %s%s",
        outcome.repository.name,
        outcome.verdict.action.value,
        " (starred)" if outcome.starred else "",
    )
    return EXIT_OK
