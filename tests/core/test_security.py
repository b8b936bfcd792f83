"""
Test suite for password hashing and access tokens.

System role: Verification of credential primitives
"""

import pytest

from download_tracker.core.exceptions import AuthenticationError, InvalidTokenError
from download_tracker.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

SECRET = "test-secret"


class TestPasswordHashing:
    """Test suite for hash_password() / verify_password()."""

    def test_should_verify_correct_password(self) -> None:
        encoded = hash_password("hunter22", iterations=1000)

        assert encoded.startswith("pbkdf2_sha256$1000$")
        assert verify_password("hunter22", encoded)

    def test_should_reject_wrong_password(self) -> None:
        encoded = hash_password("hunter22", iterations=1000)

        assert not verify_password("hunter23", encoded)

    def test_should_salt_every_hash(self) -> None:
        assert hash_password("same", 1000) != hash_password("same", 1000)

    @pytest.mark.parametrize(
        "encoded",
        ["", "plain", "md5$1$salt$abc", "pbkdf2_sha256$many$salt$abc"],
    )
    def test_should_reject_unrecognised_hashes(self, encoded: str) -> None:
        assert not verify_password("anything", encoded)


class TestAccessTokens:
    """Test suite for create_access_token() / decode_access_token()."""

    def test_should_return_claims_for_valid_token(self) -> None:
        token = create_access_token("user-1", "a@example.com", SECRET, 60, now=1000)

        claims = decode_access_token(token, SECRET, now=1030)

        assert claims == {"sub": "user-1", "email": "a@example.com", "exp": 1060}

    def test_should_reject_expired_token(self) -> None:
        token = create_access_token("user-1", "a@example.com", SECRET, 60, now=1000)

        with pytest.raises(InvalidTokenError, match="expired"):
            decode_access_token(token, SECRET, now=1060)

    def test_should_reject_token_signed_with_other_secret(self) -> None:
        token = create_access_token("user-1", "a@example.com", "other", 60)

        with pytest.raises(InvalidTokenError, match="signature"):
            decode_access_token(token, SECRET)

    def test_should_reject_tampered_payload(self) -> None:
        token = create_access_token("user-1", "a@example.com", SECRET, 60)
        forged = create_access_token("user-2", "a@example.com", SECRET, 60)
        tampered = f"{forged.split('.')[0]}.{token.split('.')[1]}"

        with pytest.raises(InvalidTokenError):
            decode_access_token(tampered, SECRET)

    @pytest.mark.parametrize("token", ["", "abc", "a.b.c", "ünïcode.token"])
    def test_should_reject_malformed_tokens(self, token: str) -> None:
        with pytest.raises(InvalidTokenError):
            decode_access_token(token, SECRET)

    def test_invalid_token_is_an_authentication_error(self) -> None:
        assert issubclass(InvalidTokenError, AuthenticationError)
