"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: download_tracker.configs, download_tracker.application, download_tracker.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from download_tracker.application.services import (
    AuthService,
    DownloadQueryService,
    DownloadService,
)
from download_tracker.boundary.db import get_async_db
from download_tracker.boundary.db.models.user_model import UserModel
from download_tracker.configs import Settings, get_settings
from download_tracker.core.download_lifecycle import DownloadLifecycleEngine
from download_tracker.core.exceptions import AuthenticationError, InvalidTokenError

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_download_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> DownloadService:
    """
    Get download service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        DownloadService: Download service instance
    """
    return DownloadService(db=db, settings=settings.downloads)


def get_query_service(db: AsyncSession = Depends(get_async_db)) -> DownloadQueryService:
    """
    Get download query service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        DownloadQueryService: Query service instance
    """
    return DownloadQueryService(db=db)


def get_auth_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> AuthService:
    """
    Get authentication service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        AuthService: Authentication service instance
    """
    return AuthService(db=db, settings=settings.auth)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserModel:
    """
    Resolve the bearer token of the request to a user.

    Raises:
        HTTPException(401): No token supplied, or its user no longer exists
        HTTPException(403): Token malformed, tampered with or expired
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return await auth_service.resolve_token(credentials.credentials)
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token",
        )
    except AuthenticationError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_download_engine(request: Request) -> DownloadLifecycleEngine:
    """
    Get the lifecycle engine started by the application lifespan.

    Returns:
        DownloadLifecycleEngine: Shared background executor
    """
    return request.app.state.download_engine
