"""Configuration management.

Settings come from environment variables prefixed with ``ORDERDESK_``
(e.g. ``ORDERDESK_STORAGE=memory``) and are validated by pydantic-settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Top-level application settings."""

    storage: Literal["memory", "json"] = "json"
    data_file: Path = Path("data") / "orderdesk.json"

    log_level: str = "WARNING"
    log_format: Literal["console", "json"] = "console"

    # Default deadline (seconds) for submit and cancel; None waits forever.
    operation_timeout: float | None = Field(default=5.0, gt=0)

    metrics_enabled: bool = True
    currency: str = "USD"

    model_config = SettingsConfigDict(env_prefix="ORDERDESK_")


def load_settings(overrides: dict[str, Any] | None = None) -> Settings:
    """Load settings from the environment, with optional overrides on top."""
    return Settings(**(overrides or {}))
