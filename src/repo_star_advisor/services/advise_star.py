"""Advise-star use case — the main orchestration pipeline.

Fetch metadata → resolve README → prompt → parse → (optionally) star.

This is the single entry point for the business logic.  It depends only on
the tool catalog and the :class:`CompletionService` port; the interface layer
injects concrete adapters at runtime.  Steps run strictly in sequence and no
state is kept between runs.
"""

from __future__ import annotations

import logging

from repo_star_advisor.domain.entities import (
    AdvisorOutcome,
    ReadmeContent,
    RepositoryMetadata,
    ToolCatalog,
    Verdict,
    VerdictAction,
)
from repo_star_advisor.domain.ports.completion_service import CompletionService
from repo_star_advisor.domain.value_objects import RepoRef
from repo_star_advisor.services.prompt_builder import build_analysis_prompt
from repo_star_advisor.services.repository_content import (
    fetch_metadata,
    list_root_files,
    require_tool,
    resolve_readme,
)
from repo_star_advisor.services.tool_catalog import (
    GET_REPOSITORY_CONTENT,
    STAR_REPOSITORY,
)
from repo_star_advisor.services.verdict_parser import parse_verdict

logger = logging.getLogger(__name__)

_RULER = "=" * 60


class AdviseStarUseCase:
    """Decides whether to star one repository and acts on the decision.

    Parameters
    ----------
    completion:
        Adapter that sends the analysis prompt to a language model.
    target:
        The repository to evaluate.  The same ``owner``/``repo`` pair is used
        for every tool call, including the star call.
    """

    def __init__(self, completion: CompletionService, target: RepoRef) -> None:
        self._llm = completion
        self._target = target

    # ── Public entry point ──────────────────────────────────────────────

    async def execute(self, catalog: ToolCatalog) -> AdvisorOutcome:
        """Run the full pipeline against *catalog* and report what happened."""
        logger.info("Evaluating %s", self._target.full_name)

        # 1. Metadata
        metadata = await fetch_metadata(catalog, self._target)

        # 2. README (root listing is informational only)
        content_tool = require_tool(catalog, GET_REPOSITORY_CONTENT, hint="content")
        root_entries = await list_root_files(content_tool, self._target)
        readme = await resolve_readme(content_tool, self._target, metadata)

        # 3. Ask the model
        verdict = await self.decide(metadata, readme)

        # 4. Act
        starred, star_result = False, None
        if verdict.should_star:
            starred, star_result = await self._star(catalog)
        else:
            logger.info("Repository will not be starred.")

        return AdvisorOutcome(
            repository=metadata,
            readme=readme,
            verdict=verdict,
            starred=starred,
            star_result=star_result,
            root_entries=root_entries,
        )

    async def decide(self, metadata: RepositoryMetadata, readme: ReadmeContent) -> Verdict:
        """Prompt the model once and parse its answer.

        A failed completion is logged and yields an UNKNOWN verdict, which
        means no star action.
        """
        prompt = build_analysis_prompt(metadata, readme)
        logger.info("Asking LLM to analyze the repository")
        try:
            response = await self._llm.complete(prompt)
        except Exception as exc:
            logger.error("LLM analysis failed: %s", exc)
            logger.warning("Skipping star action due to analysis failure")
            return Verdict(action=VerdictAction.UNKNOWN)

        logger.info("LLM full response:\n%s\n%s\n%s", _RULER, response.strip(), _RULER)
        verdict = parse_verdict(response)
        _log_verdict(verdict)
        return verdict

    # ── Star action ─────────────────────────────────────────────────────

    async def _star(self, catalog: ToolCatalog) -> tuple[bool, str | None]:
        tool = catalog.get(STAR_REPOSITORY)
        if tool is None:
            logger.error("Star tool not found")
            return False, None

        try:
            result = await tool.invoke(self._target.as_tool_input())
        except Exception as exc:
            logger.error("Failed to star repository: %s", exc)
            return False, None

        logger.info("Repository %s starred successfully", self._target.full_name)
        logger.info("Star result: %s", result)
        return True, result


def _log_verdict(verdict: Verdict) -> None:
    if verdict.analysis:
        logger.info("LLM analysis:\n%s", verdict.analysis)

    if not verdict.used_fallback:
        logger.info("LLM decision: %s", verdict.action.value)
        logger.info("Reason: %s", verdict.reason)
        if verdict.action is VerdictAction.STAR:
            logger.info("LLM recommends starring, proceeding to star")
        else:
            logger.info("LLM recommends NOT starring this repository.")
        return

    logger.warning("Could not parse LLM decision, looking for a plain STAR marker")
    if verdict.should_star:
        logger.info("Found STAR in response, proceeding to star")
    else:
        logger.info("No clear STAR decision found, skipping star action.")
