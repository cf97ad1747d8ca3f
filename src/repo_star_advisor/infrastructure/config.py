"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from repo_star_advisor.domain.exceptions import ConfigurationError, InvalidRepositoryError
from repo_star_advisor.domain.value_objects import RepoRef

DEFAULT_GITHUB_INTEGRATION_ID = "2a22d508-3566-44ab-a526-6b83b0619034"
_LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    composio_api_key: SecretStr
    groq_api_key: SecretStr
    composio_github_id: str | None = None
    composio_base_url: str = "https://backend.composio.dev"
    composio_entity_id: str = "default"
    tool_app: str = "github"
    target_repository: str = "janzheng/groq-jigsawstack-template"
    groq_model: str = "llama-3.1-8b-instant"
    groq_base_url: str = "https://api.groq.com/openai/v1"
    llm_temperature: float = 0.0
    http_timeout_seconds: float | None = None
    strict_connection_check: bool = False
    log_level: str = "INFO"

    @field_validator("composio_api_key", "groq_api_key")
    @classmethod
    def _secret_not_blank(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            msg = "must not be empty"
            raise ValueError(msg)
        return v

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            msg = f"unknown log level '{v}', expected one of {sorted(_LOG_LEVELS)}"
            raise ValueError(msg)
        return level

    @field_validator("target_repository")
    @classmethod
    def _valid_target(cls, v: str) -> str:
        try:
            return RepoRef.from_string(v).full_name
        except InvalidRepositoryError as exc:
            raise ValueError(str(exc)) from exc

    @property
    def integration_id(self) -> str:
        return self.composio_github_id or DEFAULT_GITHUB_INTEGRATION_ID

    @property
    def target(self) -> RepoRef:
        return RepoRef.from_string(self.target_repository)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()  # type: ignore[call-arg]


def load_settings() -> Settings:
    """Like :func:`get_settings`, with validation errors as :class:`ConfigurationError`."""
    try:
        return get_settings()
    except ValidationError as exc:
        fields = ", ".join(
            str(err["loc"][0]).upper() for err in exc.errors() if err.get("loc")
        )
        raise ConfigurationError(
            f"Missing or invalid environment variables: {fields}"
        ) from exc
