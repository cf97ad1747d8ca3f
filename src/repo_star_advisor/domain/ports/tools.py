"""Port: tool catalog — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Any, Protocol

from repo_star_advisor.domain.entities import ToolCatalog


class Tool(Protocol):
    """A named, remotely invocable action."""

    name: str

    async def invoke(self, tool_input: dict[str, Any]) -> str:
        """Run the action and return the JSON result text (payload under ``data``)."""
        ...


class ToolCatalogService(Protocol):
    """Abstract contract for listing the tools of one application."""

    async def get_tools(self, apps: list[str]) -> ToolCatalog:
        """Return the tools scoped to the given application names."""
        ...
