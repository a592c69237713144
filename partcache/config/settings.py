"""Configuration management using pydantic-settings.

Provides validated configuration with support for:
- JSON config file (config.json)
- Environment fallback (PARTCACHE_ prefix)
- Type coercion and validation
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TOP_LEVEL_REPOSITORIES = ("players", "parties", "guilds", "private_channels")


class AppSettings(BaseSettings):
    """Application settings with validation.

    Settings are loaded from a JSON config file (config.json); fields absent
    from the file fall back to PARTCACHE_* environment variables.
    """

    api_base_url: str = "https://lorhondel.valzargaming.com/api/v1"
    token: str = ""
    user_agent: str = "partcache (https://github.com/partcache, 1.0)"
    timeout: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=5, ge=0)
    max_rate_limit_retries: int = Field(default=30, ge=0)
    load_application: bool = False
    freshen_on_start: list[str] = []

    model_config = SettingsConfigDict(
        env_prefix="PARTCACHE_",
        extra="ignore",
    )

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Endpoint templates start with '/', so the base must not end with one."""
        return v.rstrip("/")

    @field_validator("freshen_on_start", mode="before")
    @classmethod
    def ensure_known_repositories(cls, v: Any) -> list[str]:
        """Reject repository names the cache root does not own."""
        if isinstance(v, str):
            v = [v]
        unknown = [name for name in v if name not in TOP_LEVEL_REPOSITORIES]
        if unknown:
            raise ValueError(f"Unknown repositories: {', '.join(unknown)}")
        return list(v)

    @classmethod
    def from_json(cls, path: str | Path = "config.json") -> "AppSettings":
        """Load settings from a JSON config file.

        Args:
            path: Path to the JSON config file

        Returns:
            AppSettings instance with validated configuration
        """
        config_path = Path(path)
        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return cls(**data)
        return cls()


@lru_cache
def get_settings(config_path: str = "config.json") -> AppSettings:
    """Get cached application settings."""
    return AppSettings.from_json(config_path)


def load_config(path: str | Path = "config.json") -> AppSettings:
    """Load configuration from file, bypassing the settings cache."""
    get_settings.cache_clear()
    return AppSettings.from_json(path)
