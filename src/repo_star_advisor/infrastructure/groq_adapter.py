"""Groq adapter — implements the CompletionService port.

Groq serves an OpenAI-compatible chat-completions API, so the ``openai`` SDK
is used with Groq's base URL.
"""

from __future__ import annotations

from openai import AsyncOpenAI, AuthenticationError, OpenAIError

from repo_star_advisor.domain.exceptions import LlmError


class GroqAdapter:
    """Concrete ``CompletionService`` backed by Groq chat completions."""

    def __init__(
        self,
        api_key: str,
        model: str = "llama-3.1-8b-instant",
        base_url: str = "https://api.groq.com/openai/v1",
        temperature: float = 0.0,
        timeout: float | None = None,
    ) -> None:
        # One call per run, no retries.
        self._client = AsyncOpenAI(
            api_key=api_key, base_url=base_url, max_retries=0, timeout=timeout
        )
        self._model = model
        self._temperature = temperature

    @property
    def model(self) -> str:
        return self._model

    async def complete(self, prompt: str) -> str:
        """Send *prompt* as a single user message and return the completion text."""
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self._temperature,
            )
        except AuthenticationError as exc:
            raise LlmError(
                "Invalid Groq API key. "
                "Set a valid key in the GROQ_API_KEY environment variable."
            ) from exc
        except (OpenAIError, OSError) as exc:
            raise LlmError(f"LLM call failed: {exc}") from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise LlmError("LLM returned an empty response.")
        return content

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.close()
