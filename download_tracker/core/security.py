"""
Password hashing and access token signing.

Passwords are stored as "pbkdf2_sha256$<iterations>$<salt>$<hash>".
Access tokens are "<payload>.<signature>", both base64url encoded, where the
payload is JSON {sub, email, exp} and the signature is HMAC-SHA256 over it.

Dependencies: hashlib, hmac, secrets (stdlib)
System role: Credential primitives for the authentication service
"""

import base64
import hashlib
import hmac
import json
import secrets
import time
from typing import Any

from download_tracker.core.exceptions import InvalidTokenError

_HASH_ALGORITHM = "pbkdf2_sha256"


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def hash_password(password: str, iterations: int) -> str:
    """
    Hash a password with a random salt.

    Args:
        password: Raw password
        iterations: PBKDF2 iteration count

    Returns:
        str: Encoded hash suitable for storage
    """
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("ascii"), iterations)
    return f"{_HASH_ALGORITHM}${iterations}${salt}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    """Check a raw password against a stored hash in constant time."""
    try:
        algorithm, iterations, salt, expected = encoded.split("$")
        rounds = int(iterations)
    except ValueError:
        return False
    if algorithm != _HASH_ALGORITHM:
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("ascii"), rounds)
    return hmac.compare_digest(digest.hex(), expected)


def _sign(payload: str, secret_key: str) -> str:
    mac = hmac.new(secret_key.encode("utf-8"), payload.encode("ascii"), hashlib.sha256)
    return _b64encode(mac.digest())


def create_access_token(
    subject: str,
    email: str,
    secret_key: str,
    ttl_seconds: int,
    now: float | None = None,
) -> str:
    """
    Create a signed, expiring access token.

    Args:
        subject: User ID the token is issued to
        email: User email (informational)
        secret_key: HMAC signing secret
        ttl_seconds: Lifetime in seconds
        now: Issue time override (epoch seconds)

    Returns:
        str: Bearer token
    """
    issued_at = int(now if now is not None else time.time())
    claims = {"sub": subject, "email": email, "exp": issued_at + ttl_seconds}
    payload = _b64encode(json.dumps(claims, separators=(",", ":")).encode("utf-8"))
    return f"{payload}.{_sign(payload, secret_key)}"


def decode_access_token(token: str, secret_key: str, now: float | None = None) -> dict[str, Any]:
    """
    Verify a token's signature and expiry and return its claims.

    Raises:
        InvalidTokenError: If the token is malformed, tampered with or expired
    """
    if not token.isascii():
        raise InvalidTokenError("Malformed access token")
    try:
        payload, signature = token.split(".")
    except ValueError:
        raise InvalidTokenError("Malformed access token")

    if not hmac.compare_digest(signature, _sign(payload, secret_key)):
        raise InvalidTokenError("Invalid access token signature")

    try:
        claims = json.loads(_b64decode(payload))
    except (ValueError, UnicodeDecodeError):
        raise InvalidTokenError("Malformed access token")

    current = now if now is not None else time.time()
    if not isinstance(claims, dict) or "sub" not in claims or claims.get("exp", 0) <= current:
        raise InvalidTokenError("Access token expired")
    return claims
