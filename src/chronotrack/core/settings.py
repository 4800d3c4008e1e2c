"""Settings for chronotrack.

All values can be overridden via environment variables prefixed with
``CHRONO_`` (e.g. ``CHRONO_LOCK_TIMEOUT_S=2.5``) or a ``.env`` file.

Order of precedence (highest → lowest):
    1. Explicit keyword arguments
    2. Environment variables
    3. ``.env`` file
    4. Defaults below
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChronoSettings(BaseSettings):
    """Process-wide configuration for the engine, API and CLI."""

    model_config = SettingsConfigDict(
        env_prefix="CHRONO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Server ───────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=3000, description="Bind port")
    debug: bool = Field(default=False, description="Expose exception detail in 500 responses")

    # ── Observability ────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool | None = Field(
        default=None,
        description="JSON log output; None auto-detects (JSON when stdout is not a TTY)",
    )

    # ── API ──────────────────────────────────────────────────────────────
    api_prefix: str = Field(default="/api/v1", description="URL prefix for all endpoints")
    api_title: str = Field(default="chronotrack API", description="OpenAPI title")
    api_version: str = Field(default="0.1.0", description="OpenAPI version string")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")

    # ── Engine ───────────────────────────────────────────────────────────
    lock_timeout_s: float = Field(
        default=5.0,
        description="Seconds to wait for an entity lock before raising ContentionError",
    )

    @field_validator("lock_timeout_s")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("lock_timeout_s must be > 0")
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


@lru_cache(maxsize=1)
def get_settings() -> ChronoSettings:
    """Cached settings — loaded once per process."""
    return ChronoSettings()
