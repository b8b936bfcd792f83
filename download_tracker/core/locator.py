"""
Source URL validation and display name extraction.

Dependencies: urllib (stdlib), re
System role: Turns a submitted URL into a validated locator and a label
"""

import re
from urllib.parse import urlparse

from download_tracker.core.exceptions import ValidationError

# ".../my-cool-image_123456.htm" -> "my-cool-image"
_DISPLAY_NAME_PATTERN = re.compile(r"/([^/]+)_(\d+)\.htm")


def validate_source_url(url: str, allowed_domains: list[str]) -> str:
    """
    Check that url is an absolute http(s) URL on an allowed host.

    Args:
        url: URL submitted by the user
        allowed_domains: Hosts accepted as download sources; subdomains match too

    Returns:
        str: The URL with surrounding whitespace removed

    Raises:
        ValidationError: If the URL is malformed or points at another site
    """
    candidate = (url or "").strip()
    if not candidate:
        raise ValidationError("URL is required", field="url")

    parsed = urlparse(candidate)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise ValidationError("Invalid URL", field="url", details={"url": candidate})

    host = parsed.hostname.lower()
    if not any(host == domain or host.endswith(f".{domain}") for domain in allowed_domains):
        raise ValidationError(
            f"URL must be from {' or '.join(allowed_domains)}",
            field="url",
            details={"host": host},
        )
    return candidate


def derive_display_name(url: str, fallback: str) -> str:
    """
    Derive a human-readable name from a source URL.

    Takes the path segment before the trailing "_<digits>.htm" and replaces
    hyphens with spaces; returns fallback when the URL has no such segment.
    """
    match = _DISPLAY_NAME_PATTERN.search(url)
    if not match:
        return fallback
    return match.group(1).replace("-", " ")


def build_result_location(result_dir: str, download_id: object, display_name: str) -> str:
    """Deterministic location of a completed download's file."""
    return f"{result_dir}/{download_id}_{display_name}.jpg"
