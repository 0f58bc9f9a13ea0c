"""Configuration management for tracmark."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tracmark.formatting.context import TRAC_URL
from tracmark.formatting.loader import DEFAULT_MAX_DEPTH
from tracmark.render.html_renderer import DEFAULT_PROFILE_URL


class Settings(BaseSettings):
    """Application configuration via environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Link targets
    trac_url: str = Field(
        default=TRAC_URL,
        alias="TRACMARK_TRAC_URL",
    )
    profile_url: str = Field(
        default=DEFAULT_PROFILE_URL,
        alias="TRACMARK_PROFILE_URL",
    )

    # Output settings
    output_format: str = Field(
        default="html",
        alias="TRACMARK_FORMAT",
    )

    # Input limits
    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        alias="TRACMARK_MAX_DEPTH",
    )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if needed."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Load settings from an optional specific .env file."""
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file)
    else:
        _settings = Settings()
    return _settings
