"""Dependency wiring — builds adapters from settings and releases them."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

import httpx

from repo_star_advisor.infrastructure.composio_adapter import ComposioAdapter
from repo_star_advisor.infrastructure.config import Settings
from repo_star_advisor.infrastructure.groq_adapter import GroqAdapter
from repo_star_advisor.services.advise_star import AdviseStarUseCase


@dataclass(frozen=True, slots=True)
class Container:
    """Shared adapters for one run."""

    composio: ComposioAdapter
    llm: GroqAdapter
    use_case: AdviseStarUseCase


@asynccontextmanager
async def open_container(settings: Settings) -> AsyncIterator[Container]:
    """Create the HTTP client and adapters; close them on exit."""
    http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout_seconds))
    llm = GroqAdapter(
        api_key=settings.groq_api_key.get_secret_value(),
        model=settings.groq_model,
        base_url=settings.groq_base_url,
        temperature=settings.llm_temperature,
        timeout=settings.http_timeout_seconds,
    )
    try:
        composio = ComposioAdapter(
            client=http_client,
            api_key=settings.composio_api_key.get_secret_value(),
            base_url=settings.composio_base_url,
            entity_id=settings.composio_entity_id,
        )
        yield Container(
            composio=composio,
            llm=llm,
            use_case=AdviseStarUseCase(completion=llm, target=settings.target),
        )
    finally:
        await http_client.aclose()
        await llm.close()
