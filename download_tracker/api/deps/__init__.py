"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_auth_service,
    get_current_user,
    get_download_engine,
    get_download_service,
    get_query_service,
    get_settings_dependency,
)

__all__ = [
    "get_auth_service",
    "get_current_user",
    "get_download_engine",
    "get_download_service",
    "get_query_service",
    "get_settings_dependency",
]
