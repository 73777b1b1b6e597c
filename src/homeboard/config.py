# Settings — environment-driven configuration for server and client.
# Created: 2026-10-02
#
# All values can be overridden with HOMEBOARD_* environment variables or a
# .env file in the working directory.

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Runtime settings for homeboard."""

    model_config = SettingsConfigDict(
        env_prefix="HOMEBOARD_",
        env_file=".env",
        extra="ignore",
    )

    data_dir: Path = Field(
        default=Path.home() / ".homeboard",
        description="Directory holding the JSON data files",
    )
    host: str = "127.0.0.1"
    port: int = 8787

    # PIN lockout
    pin_max_attempts: int = Field(default=5, ge=1)
    pin_lockout_minutes: int = Field(default=15, ge=1)

    api_cors_allowed_origins: list[str] = Field(default_factory=list)

    # Client side
    api_base_url: str = "http://127.0.0.1:8787/api/v1"
    http_timeout: float = 15.0

    @classmethod
    def load(cls) -> Settings:
        """Load settings from the environment (and .env)."""
        return cls()

    @property
    def pin_lockout_seconds(self) -> int:
        return self.pin_lockout_minutes * 60


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once."""
    return Settings.load()


def get_config_dir(settings: Settings | None = None) -> Path:
    """Return the data directory, creating it if needed."""
    settings = settings or get_settings()
    path = Path(settings.data_dir).expanduser()
    path.mkdir(parents=True, exist_ok=True)
    return path
