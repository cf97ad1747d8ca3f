"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from repo_star_advisor.domain.exceptions import InvalidRepositoryError

_REPO_REF_RE = re.compile(
    r"^(?P<owner>[A-Za-z0-9](?:[A-Za-z0-9\-]*[A-Za-z0-9])?)/(?P<repo>[A-Za-z0-9\-_.]+)$"
)


@dataclass(frozen=True, slots=True)
class RepoRef:
    """Validated ``owner/repo`` pair identifying the target repository.

    The same pair is sent to every GitHub tool, so metadata retrieval, README
    lookup and the star call always address one repository.
    """

    owner: str
    repo: str

    @classmethod
    def from_string(cls, value: str) -> RepoRef:
        """Parse and validate a string like ``psf/requests``."""
        value = value.strip().removesuffix(".git").strip("/")
        match = _REPO_REF_RE.match(value)
        if not match or match["repo"] in {".", ".."}:
            raise InvalidRepositoryError(
                f"Invalid repository: '{value}'. Expected format: <owner>/<repo>"
            )
        return cls(owner=match["owner"], repo=match["repo"])

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def as_tool_input(self, **extra: Any) -> dict[str, Any]:
        """Tool arguments addressing this repository, plus any extras."""
        return {"owner": self.owner, "repo": self.repo, **extra}
