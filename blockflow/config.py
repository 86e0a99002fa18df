"""
Application Configuration

Uses pydantic-settings for environment variable loading with validation.
All configuration is centralized here for easy management.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Engine settings loaded from environment variables.

    Environment variables can be set directly or via .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="BLOCKFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Logging
    # ==========================================================================
    debug: bool = Field(
        default=False,
        description="Enable debug mode (forces DEBUG log level)"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level when debug mode is off"
    )

    # ==========================================================================
    # Block Registry
    # ==========================================================================
    blocks_dir: str | None = Field(
        default=None,
        description="Directory scanned for *.block.yaml / *.block.json definitions"
    )

    strict_registration: bool = Field(
        default=True,
        description="Fail on the first invalid block file instead of skipping it"
    )

    @computed_field
    @property
    def blocks_path(self) -> Path | None:
        """Blocks directory as a Path, if configured."""
        return Path(self.blocks_dir) if self.blocks_dir else None


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
