"""
Download tracker error handling utilities.

Provides a decorator that maps domain exceptions raised by the services to
HTTPExceptions with consistent status codes and error bodies.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from download_tracker.core.exceptions import (
    AuthenticationError,
    DuplicateJobError,
    InvalidTokenError,
    InvalidTransitionError,
    NotFoundError,
    UserAlreadyExistsError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_download_errors(func: F) -> F:
    """
    Decorator to handle domain errors and transform them into HTTPExceptions.

    This centralizes:
    - Logging of errors with their details
    - Mapping specific exceptions to HTTP status codes
    - Ensuring uniform error response formats
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except NotFoundError as e:
            logger.warning("Resource not found", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=e.message,
            )

        except (
            ValidationError,
            DuplicateJobError,
            UserAlreadyExistsError,
            InvalidTransitionError,
        ) as e:
            logger.warning("Invalid request", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=e.message,
            )

        except InvalidTokenError as e:
            logger.warning("Rejected access token", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=e.message,
            )

        except AuthenticationError as e:
            logger.warning("Authentication failed", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=e.message,
                headers={"WWW-Authenticate": "Bearer"},
            )

        except Exception as e:
            logger.exception(
                "Unexpected failure in download tracker operation",
                extra={"error": str(e)},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Server error",
            )

    return wrapper  # type: ignore
