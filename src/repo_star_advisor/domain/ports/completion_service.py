"""Port: completion service — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol


class CompletionService(Protocol):
    """Abstract contract for interacting with a large-language model."""

    async def complete(self, prompt: str) -> str:
        """Send a single prompt and return the raw completion text."""
        ...
