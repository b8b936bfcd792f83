"""Service orchestrators."""

from .auth_service import AuthService
from .download_query_service import DownloadQueryService
from .download_service import DownloadService

__all__ = [
    "AuthService",
    "DownloadQueryService",
    "DownloadService",
]
