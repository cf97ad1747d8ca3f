"""Repository content retriever — metadata, root listing and README lookup.

Every call goes through a catalog tool and is issued one at a time.  Tool
results are JSON text whose ``data`` field holds the GitHub payload; file
bodies arrive base64-encoded.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any

from repo_star_advisor.domain.entities import (
    ReadmeContent,
    RepositoryMetadata,
    RootEntry,
    ToolCatalog,
)
from repo_star_advisor.domain.exceptions import ToolExecutionError, ToolNotFoundError
from repo_star_advisor.domain.ports.tools import Tool
from repo_star_advisor.domain.value_objects import RepoRef
from repo_star_advisor.services.tool_catalog import GET_REPOSITORY

logger = logging.getLogger(__name__)

README_CANDIDATES: tuple[str, ...] = (
    "README.md",
    "readme.md",
    "Readme.md",
    "README.MD",
    "README",
    "readme",
)

_PREVIEW_CHARS = 300


def tool_data(raw: str) -> Any:
    """Return the ``data`` field of a tool result, or ``None`` if absent."""
    try:
        result = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        raise ToolExecutionError(f"Tool returned invalid JSON: {exc}") from exc
    if not isinstance(result, dict):
        return None
    return result.get("data")


def require_tool(catalog: ToolCatalog, name: str, *, hint: str | None = None) -> Tool:
    """Look *name* up in the catalog or raise :class:`ToolNotFoundError`.

    *hint* narrows the list of alternatives reported with the error.
    """
    tool = catalog.get(name)
    if tool is not None:
        logger.info("Found %s tool", name)
        return tool
    available = catalog.search(hint) if hint else catalog.names()
    logger.error("%s tool not found", name)
    logger.info("Available tools: %s", available)
    raise ToolNotFoundError(name, available)


# ── Metadata ────────────────────────────────────────────────────────────────


async def fetch_metadata(catalog: ToolCatalog, ref: RepoRef) -> RepositoryMetadata:
    """Retrieve repository metadata through the repository-get tool."""
    tool = require_tool(catalog, GET_REPOSITORY)
    logger.info("Calling GitHub API with: %s", ref.as_tool_input())
    data = tool_data(await tool.invoke(ref.as_tool_input()))
    if not isinstance(data, dict) or not data:
        raise ToolExecutionError(f"No repository data returned for {ref.full_name}")

    try:
        metadata = RepositoryMetadata.from_payload(data)
    except (TypeError, ValueError, AttributeError) as exc:
        raise ToolExecutionError(
            f"Malformed repository data for {ref.full_name}: {exc}"
        ) from exc
    log_repository_details(metadata)
    return metadata


def log_repository_details(metadata: RepositoryMetadata) -> None:
    logger.info("Repository details:")
    logger.info("  Name: %s", metadata.name)
    logger.info("  Owner: %s", metadata.owner_login)
    logger.info("  Description: %s", metadata.description or "No description")
    logger.info("  Stars: %d", metadata.stargazers_count)
    logger.info("  Forks: %d", metadata.forks_count)
    logger.info("  Created: %s", metadata.created_at)
    logger.info("  URL: %s", metadata.html_url)


# ── Root listing ────────────────────────────────────────────────────────────


async def list_root_files(content_tool: Tool, ref: RepoRef) -> list[RootEntry]:
    """List the repository root.  Failures only produce a warning."""
    try:
        data = tool_data(await content_tool.invoke(ref.as_tool_input(path="")))
    except Exception:
        logger.warning("Could not list root directory files", exc_info=True)
        return []

    if not isinstance(data, list):
        return []

    entries = [
        RootEntry(name=str(item.get("name", "")), type=str(item.get("type", "file")))
        for item in data
        if isinstance(item, dict)
    ]
    logger.info("Files in repository root:")
    for entry in entries:
        logger.info("  %s %s", "[dir] " if entry.type == "dir" else "[file]", entry.name)
    return entries


# ── README ──────────────────────────────────────────────────────────────────


def decode_content(content: str) -> str:
    """Decode a base64 file body; invalid UTF-8 is replaced, not rejected."""
    try:
        raw = base64.b64decode(content)
    except (binascii.Error, ValueError) as exc:
        raise ToolExecutionError(f"Invalid base64 content: {exc}") from exc
    return raw.decode("utf-8", errors="replace")


def synthesize_readme(metadata: RepositoryMetadata) -> ReadmeContent:
    """Minimal stand-in built from metadata when no README exists."""
    text = (
        f"Repository: {metadata.name}\n"
        f"Description: {metadata.description or 'No description provided'}\n"
        f"Language: {metadata.language or 'Not specified'}\n"
        "Note: No README file found in the repository."
    )
    return ReadmeContent(text=text)


async def resolve_readme(
    content_tool: Tool,
    ref: RepoRef,
    metadata: RepositoryMetadata,
    candidates: tuple[str, ...] = README_CANDIDATES,
) -> ReadmeContent:
    """Return the first README variant found, trying *candidates* in order.

    A candidate counts only if its call succeeds and carries a non-empty
    ``content`` field.  When none does, a summary synthesized from *metadata*
    is returned instead; this never raises.
    """
    for filename in candidates:
        logger.info("Trying to fetch %s", filename)
        try:
            data = tool_data(await content_tool.invoke(ref.as_tool_input(path=filename)))
            content = data.get("content") if isinstance(data, dict) else None
            if not content:
                continue
            text = decode_content(content)
        except Exception:
            logger.info("  %s not found", filename)
            continue

        logger.info("Found %s", filename)
        logger.info("README preview (first %d chars): %s...", _PREVIEW_CHARS, text[:_PREVIEW_CHARS])
        return ReadmeContent(text=text, filename=filename)

    logger.warning("No README file found in any common format")
    return synthesize_readme(metadata)
