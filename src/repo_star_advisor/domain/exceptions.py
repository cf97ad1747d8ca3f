"""Domain exception hierarchy.

Each exception maps to a specific process exit code at the interface layer.
Inner layers raise these; ``interface.exit_codes`` translates them.
"""

from __future__ import annotations


class RepoStarAdvisorError(Exception):
    """Base exception for the entire application."""


# ── Configuration / input ───────────────────────────────────────────────────


class ConfigurationError(RepoStarAdvisorError):
    """A required setting is missing or invalid."""


class InvalidRepositoryError(RepoStarAdvisorError):
    """The configured target is not a valid ``owner/repo`` pair."""


# ── Integration backend ─────────────────────────────────────────────────────


class IntegrationLookupError(RepoStarAdvisorError):
    """The integration or its connected accounts could not be retrieved."""


class ConnectionUnverifiedError(RepoStarAdvisorError):
    """The integration check failed and the run was configured to halt."""


class ConnectionPendingError(RepoStarAdvisorError):
    """No connected account exists; the operator must finish authentication."""

    def __init__(self, redirect_url: str | None) -> None:
        super().__init__(
            f"Connection initiated, complete it at: {redirect_url or '<no url returned>'}"
        )
        self.redirect_url = redirect_url


# ── Tools ───────────────────────────────────────────────────────────────────


class ToolCatalogError(RepoStarAdvisorError):
    """The tool catalog could not be fetched."""


class ToolNotFoundError(RepoStarAdvisorError):
    """A required tool is absent from the catalog."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        super().__init__(f"{name} tool not found")
        self.name = name
        self.available = available or []


class ToolExecutionError(RepoStarAdvisorError):
    """A tool call failed or the backend reported it unsuccessful."""


# ── LLM errors ──────────────────────────────────────────────────────────────


class LlmError(RepoStarAdvisorError):
    """Any error originating from the completion provider."""
