"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from repo_star_advisor.domain.ports.tools import Tool


class VerdictAction(str, Enum):
    """What the model asked us to do with the repository."""

    STAR = "STAR"
    SKIP = "SKIP"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True, slots=True)
class RepositoryMetadata:
    """High-level metadata about a GitHub repository."""

    name: str
    owner_login: str
    stargazers_count: int
    forks_count: int
    created_at: str
    html_url: str
    description: str | None = None
    language: str | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> RepositoryMetadata:
        """Build from the ``data`` object of a repository-get tool result."""
        owner = data.get("owner") or {}
        return cls(
            name=data.get("name", ""),
            owner_login=owner.get("login", "") if isinstance(owner, dict) else str(owner),
            stargazers_count=int(data.get("stargazers_count") or 0),
            forks_count=int(data.get("forks_count") or 0),
            created_at=str(data.get("created_at") or ""),
            html_url=data.get("html_url", ""),
            description=data.get("description") or None,
            language=data.get("language") or None,
        )


@dataclass(frozen=True, slots=True)
class RootEntry:
    """One entry of the repository root listing."""

    name: str
    type: str  # "file" or "dir"


@dataclass(frozen=True, slots=True)
class ReadmeContent:
    """README text, or a summary synthesized from metadata when none exists."""

    text: str
    filename: str | None = None

    @property
    def synthesized(self) -> bool:
        return self.filename is None


@dataclass(frozen=True, slots=True)
class Verdict:
    """Parsed outcome of the model response.

    ``action`` tags the result: STAR carries an optional reason (absent when
    it came from the substring fallback), SKIP carries a reason, UNKNOWN means
    the response could not be parsed and no action is taken.
    """

    action: VerdictAction
    reason: str | None = None
    analysis: str | None = None
    used_fallback: bool = False

    @property
    def should_star(self) -> bool:
        return self.action is VerdictAction.STAR


@dataclass(frozen=True, slots=True)
class IntegrationStatus:
    """Current state of an integration on the tool backend."""

    id: str
    name: str
    connections: tuple[dict[str, Any], ...] = ()

    @property
    def connected(self) -> bool:
        return bool(self.connections)


@dataclass(frozen=True, slots=True)
class ConnectionRequest:
    """A newly initiated connection awaiting operator authentication."""

    redirect_url: str | None
    status: str | None = None


@dataclass(frozen=True, slots=True)
class ToolCatalog:
    """Ordered collection of callable tools, looked up by exact name.

    Duplicate names are not rejected; the first match wins.
    """

    tools: tuple[Tool, ...] = ()

    def __len__(self) -> int:
        return len(self.tools)

    def get(self, name: str) -> Tool | None:
        return next((tool for tool in self.tools if tool.name == name), None)

    def names(self) -> list[str]:
        return [tool.name for tool in self.tools]

    def search(self, fragment: str) -> list[str]:
        """Names containing *fragment*, case-insensitively."""
        needle = fragment.lower()
        return [name for name in self.names() if needle in name.lower()]


@dataclass(frozen=True, slots=True)
class AdvisorOutcome:
    """The final result of one advisor run."""

    repository: RepositoryMetadata
    readme: ReadmeContent
    verdict: Verdict
    starred: bool = False
    star_result: str | None = None
    root_entries: list[RootEntry] = field(default_factory=list)
