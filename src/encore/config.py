"""
Encore - Configuration and settings.

Settings load from the environment (ENCORE_ prefix) and an optional .env file.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from encore import __version__


DEFAULT_STORE_PATH = Path.home() / ".encore" / "tracking.json"


class EncoreSettings(BaseSettings):
    """
    Application settings.

    The tracker and the CLI read these; the onboarding core takes its
    collaborators by injection and never reads settings directly.
    """

    model_config = SettingsConfigDict(
        env_prefix="ENCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Tracking
    store_path: Path = DEFAULT_STORE_PATH
    max_stored_events: int = Field(default=100, ge=1)
    platform: str = "CLI"
    app_version: str = __version__

    @property
    def is_development(self) -> bool:
        return self.env == "development"


@lru_cache
def get_settings() -> EncoreSettings:
    """Get cached settings instance."""
    return EncoreSettings()
