"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache), one instance per process
    - APP_VERSION is NOT a cached setting: current_app_version() re-reads it on every call

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for everything: the server starts with no environment at all
"""

import os
from collections.abc import Mapping
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_APP_VERSION = "local-dev"
DEFAULT_PORT = 8080


class LoggingSettings(BaseSettings):
    """Logging settings. All the function-URL variant reads at cold start."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    log_level: str = "INFO"
    log_format: str = "json"


class Settings(LoggingSettings):
    """Server settings from environment variables."""

    # Listener
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT

    @field_validator("port", mode="before")
    @classmethod
    def default_empty_port(cls, v):
        """PORT="" means unset."""
        if isinstance(v, str) and not v.strip():
            return DEFAULT_PORT
        return v

    @field_validator("port")
    @classmethod
    def check_port_range(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            raise ValueError(f"port must be in 1-65535, got {v}")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()


def current_app_version(environ: Mapping[str, str] | None = None) -> str:
    """Version reported by /feature-probe; unset or empty falls back to local-dev."""
    env = os.environ if environ is None else environ
    return env.get("APP_VERSION") or DEFAULT_APP_VERSION
