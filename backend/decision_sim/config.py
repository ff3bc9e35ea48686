"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - anthropic_api_key has no default: a missing key is a ConfigurationError
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - ValidationError wrapped into ConfigurationError: callers handle one error type
      and the launcher can report it before any screen renders
    - Transport retries/timeouts are handed to the SDK; the advisory client itself is single-shot
"""

from functools import lru_cache

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from decision_sim.core.errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Anthropic
    anthropic_api_key: str
    anthropic_max_retries: int = 2
    anthropic_timeout_seconds: int = 120

    @field_validator("anthropic_api_key")
    @classmethod
    def reject_blank_key(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("ANTHROPIC_API_KEY cannot be empty")
        return v

    # Advisor
    advisor_model: str = "claude-sonnet-4-5"
    advisor_max_tokens: int = 2048
    analysis_max_tokens: int = 1024

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as e:
        missing = ", ".join(
            ".".join(str(loc) for loc in err["loc"]) for err in e.errors()
        )
        raise ConfigurationError(
            f"Invalid configuration ({missing}). "
            "Set ANTHROPIC_API_KEY in the environment or .env file.",
            setting=missing,
        ) from e
