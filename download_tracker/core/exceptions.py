"""
Exception hierarchy for the download tracker.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DownloadTrackerError(Exception):
    """Base exception for all download tracker errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(DownloadTrackerError):
    """Raised when a source URL or other input is malformed or disallowed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class DuplicateJobError(DownloadTrackerError):
    """Raised when the owner already has an active download for the same URL."""

    def __init__(self, source_url: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["source_url"] = source_url
        super().__init__("This URL has already been added", details)


class NotFoundError(DownloadTrackerError):
    """Raised when a download does not exist or is not owned by the caller."""

    def __init__(
        self,
        message: str,
        download_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if download_id:
            details["download_id"] = download_id
        super().__init__(message, details)


class InvalidTransitionError(DownloadTrackerError):
    """Raised when a status change breaks pending -> processing -> terminal."""

    def __init__(
        self,
        download_id: str,
        current: str | None,
        target: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize invalid transition error.

        Args:
            download_id: Download whose update was rejected
            current: Status observed in the store (None if unknown)
            target: Status the caller tried to move to
            details: Additional context
        """
        details = details or {}
        details.update({"download_id": download_id, "current": current, "target": target})
        super().__init__(
            f"Invalid transition for download {download_id}: {current} -> {target}",
            details,
        )


class ExecutionFailure(DownloadTrackerError):
    """Raised when the fetch step of a download fails."""

    pass


class AuthenticationError(DownloadTrackerError):
    """Raised when credentials or access tokens are rejected."""

    pass


class InvalidTokenError(AuthenticationError):
    """Raised when an access token is malformed, tampered with or expired."""

    pass


class UserAlreadyExistsError(DownloadTrackerError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str) -> None:
        super().__init__("User already exists with this email", {"email": email})
