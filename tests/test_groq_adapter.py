from __future__ import annotations

import asyncio
from types import SimpleNamespace

import httpx
import pytest
from openai import APIConnectionError

from repo_star_advisor.domain.exceptions import LlmError
from repo_star_advisor.infrastructure.groq_adapter import GroqAdapter


def _with_create(create):
    adapter = GroqAdapter(api_key="test-key")
    adapter._client = SimpleNamespace(
        chat=SimpleNamespace(completions=SimpleNamespace(create=create))
    )
    return adapter


def _response(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def test_complete_sends_single_user_message():
    calls = []

    async def create(**kwargs):
        calls.append(kwargs)
        return _response("DECISION: STAR: ok")

    adapter = _with_create(create)
    assert asyncio.run(adapter.complete("prompt text")) == "DECISION: STAR: ok"
    assert calls[0]["model"] == "llama-3.1-8b-instant"
    assert calls[0]["messages"] == [{"role": "user", "content": "prompt text"}]
    assert calls[0]["temperature"] == 0.0


def test_empty_completion_is_an_error():
    async def create(**kwargs):
        return _response("")

    with pytest.raises(LlmError, match="empty"):
        asyncio.run(_with_create(create).complete("p"))


def test_provider_errors_are_wrapped():
    async def create(**kwargs):
        raise ConnectionError("reset")

    with pytest.raises(LlmError, match="LLM call failed"):
        asyncio.run(_with_create(create).complete("p"))


def test_client_points_at_groq_without_retries():
    adapter = GroqAdapter(api_key="test-key")
    assert str(adapter._client.base_url).startswith("https://api.groq.com/openai/v1")
    assert adapter._client.max_retries == 0


def test_missing_choices_is_an_empty_response():
    async def create(**kwargs):
        return SimpleNamespace(choices=[])

    with pytest.raises(LlmError, match="empty"):
        asyncio.run(_with_create(create).complete("p"))


def test_sdk_errors_are_wrapped():
    async def create(**kwargs):
        raise APIConnectionError(request=httpx.Request("POST", "https://api.groq.com/x"))

    with pytest.raises(LlmError, match="LLM call failed"):
        asyncio.run(_with_create(create).complete("p"))
