"""
Structured logging helpers.

Context passed as keyword arguments ends up as attributes on the LogRecord.
Values are flattened to short strings first so a long source URL or a list
of IDs can never blow up a log line or break a formatter.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import enum
import logging
from typing import Any, Mapping

MAX_VALUE_LENGTH = 500


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Render a context value as a bounded string.

    Enums log their value, collections log their size, everything else
    its str(); results longer than max_length are truncated.
    """
    try:
        if value is None:
            rendered = "None"
        elif isinstance(value, enum.Enum):
            rendered = str(value.value)
        elif isinstance(value, Mapping):
            rendered = f"{{{len(value)} keys}}"
        elif isinstance(value, (list, tuple, set, frozenset)):
            rendered = f"[{len(value)} items]"
        else:
            rendered = str(value)
    except Exception as e:
        return f"<unloggable {type(e).__name__}>"

    if len(rendered) > max_length:
        return f"{rendered[:max_length]}... ({len(rendered)} chars)"
    return rendered


def _context(context: Mapping[str, Any]) -> dict[str, str]:
    return {key: safe_log_value(value) for key, value in context.items()}


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """
    Log message at level with context attached to the record.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Fields such as download_id or progress
    """
    logger.log(level, message, extra=_context(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """
    Log an error with its traceback, type and message alongside the context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception being reported
        **context: Additional fields
    """
    extra = _context(context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.error(message, exc_info=exc, extra=extra)
