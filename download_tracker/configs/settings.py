"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from download_tracker.configs.auth import AuthSettings
from download_tracker.configs.base import BaseSettings
from download_tracker.configs.database import DatabaseSettings
from download_tracker.configs.downloads import DownloadSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    downloads: DownloadSettings = Field(default_factory=DownloadSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from download_tracker.configs import get_settings
        settings = get_settings()
    """
    return Settings()
