"""
Download job configuration settings.

Source URL policy and the cadence of the simulated download progression.

Dependencies: pydantic, pydantic_settings
System role: Download lifecycle configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from download_tracker.configs.base import BaseSettings


class DownloadSettings(BaseSettings):
    """Settings for download submission and progression."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DOWNLOADS_",
        case_sensitive=False,
        extra="ignore",
    )

    allowed_domains: list[str] = Field(
        default=["freepik.com"],
        description="Hosts (and their subdomains) that downloads may be requested from",
    )
    fallback_name: str = Field(
        default="freepik-image",
        description="Display name used when the URL does not carry one",
    )
    result_dir: str = Field(
        default="uploads",
        description="Directory prefix of completed download result locations",
    )
    progress_step: int = Field(
        default=10,
        gt=0,
        le=100,
        description="Percentage points added on every progress tick",
    )
    tick_interval_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Wall-clock delay between progress ticks",
    )
