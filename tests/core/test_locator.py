"""
Test suite for source URL validation and display name extraction.

System role: Verification of locator helpers used when a download is created
"""

import uuid

import pytest

from download_tracker.core.exceptions import ValidationError
from download_tracker.core.locator import (
    build_result_location,
    derive_display_name,
    validate_source_url,
)

ALLOWED = ["freepik.com"]


class TestValidateSourceUrl:
    """Test suite for validate_source_url()."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://www.freepik.com/free-photo/sunset_1.htm",
            "http://freepik.com/image",
            "https://img.FREEPIK.com/a/b",
        ],
    )
    def test_should_accept_allowed_hosts(self, url: str) -> None:
        assert validate_source_url(url, ALLOWED) == url

    def test_should_strip_surrounding_whitespace(self) -> None:
        assert (
            validate_source_url("  https://www.freepik.com/x  ", ALLOWED)
            == "https://www.freepik.com/x"
        )

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "   ",
            "not a url",
            "ftp://www.freepik.com/file",
            "https://",
        ],
    )
    def test_should_reject_malformed_urls(self, url: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_source_url(url, ALLOWED)

        assert exc_info.value.details["field"] == "url"

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/image_1.htm",
            "https://notfreepik.com/image_1.htm",
            "https://freepik.com.evil.org/image_1.htm",
        ],
    )
    def test_should_reject_other_sites(self, url: str) -> None:
        with pytest.raises(ValidationError, match="freepik.com"):
            validate_source_url(url, ALLOWED)


class TestDeriveDisplayName:
    """Test suite for derive_display_name()."""

    def test_should_replace_hyphens_with_spaces(self) -> None:
        url = "https://www.freepik.com/free-photo/my-cool-image_123456.htm"

        assert derive_display_name(url, "freepik-image") == "my cool image"

    def test_should_ignore_query_and_fragment(self) -> None:
        url = "https://www.freepik.com/premium-vector/red-car_987.htm#query=car"

        assert derive_display_name(url, "freepik-image") == "red car"

    @pytest.mark.parametrize(
        "url",
        [
            "https://www.freepik.com/",
            "https://www.freepik.com/free-photo/no-id.htm",
            "https://www.freepik.com/free-photo/name_abc.htm",
        ],
    )
    def test_should_fall_back_when_pattern_is_missing(self, url: str) -> None:
        assert derive_display_name(url, "freepik-image") == "freepik-image"


def test_build_result_location_should_be_deterministic() -> None:
    download_id = uuid.UUID("12345678-1234-5678-1234-567812345678")

    location = build_result_location("uploads", download_id, "my cool image")

    assert location == "uploads/12345678-1234-5678-1234-567812345678_my cool image.jpg"
    assert location == build_result_location("uploads", download_id, "my cool image")
