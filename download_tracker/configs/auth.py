"""
Authentication configuration settings.

Token signing secret, token lifetime and password hashing cost.

Dependencies: pydantic, pydantic_settings
System role: Credential and token configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from download_tracker.configs.base import BaseSettings


class AuthSettings(BaseSettings):
    """Bearer token and password hashing configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTH_",
        case_sensitive=False,
        extra="ignore",
    )

    secret_key: str = Field(
        default="change-me-in-production",
        description="HMAC secret used to sign access tokens",
    )
    token_ttl_seconds: int = Field(
        default=7 * 24 * 3600,
        description="Access token lifetime in seconds (default 7 days)",
    )
    password_iterations: int = Field(
        default=390_000,
        description="PBKDF2-SHA256 iteration count for new password hashes",
    )
