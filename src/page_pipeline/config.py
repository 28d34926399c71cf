"""Application settings loaded from the environment."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class Settings(BaseSettings):
    """Settings for the demo application.

    Every field can be overridden with a ``PAGE_PIPELINE_``-prefixed
    environment variable or a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="PAGE_PIPELINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_title: str = Field(default="page-pipeline")

    # Cookie holding the opaque session id
    session_cookie: str = Field(default="session", min_length=1)

    # SQLite file for the demo store; unset keeps data in memory
    database_path: str | None = Field(default=None)

    # Launch user seeding on the first request that reaches routing
    seed_on_first_request: bool = Field(default=True)

    # Record a PipelineTrace per request and expose it as X-Pipeline-Trace
    debug: bool = Field(default=False)

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in _LOG_LEVELS:
            msg = f"Invalid log_level {v!r}. Must be one of: {sorted(_LOG_LEVELS)}"
            raise ValueError(msg)
        return upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
