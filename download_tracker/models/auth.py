"""
Authentication models and schemas.

Request/response schemas for registration, login and the current user.

Dependencies: pydantic
System role: Authentication API contracts
"""

import re
import uuid

from pydantic import BaseModel, Field, field_validator

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _normalize_email(value: str) -> str:
    email = value.strip().lower()
    if not _EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email address")
    return email


class RegisterRequest(BaseModel):
    """Request schema for creating an account."""

    name: str = Field(min_length=2, max_length=100)
    email: str = Field(max_length=255)
    password: str = Field(min_length=6, max_length=128)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        name = value.strip()
        if len(name) < 2:
            raise ValueError("Name must be at least 2 characters")
        return name

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return _normalize_email(value)


class LoginRequest(BaseModel):
    """Request schema for exchanging credentials for a token."""

    email: str = Field(max_length=255)
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return _normalize_email(value)


class UserResponse(BaseModel):
    """Public view of an account."""

    id: uuid.UUID
    name: str
    email: str


class RegisterResponse(BaseModel):
    """Response schema for a created account."""

    message: str = "User created successfully"
    user_id: uuid.UUID


class TokenResponse(BaseModel):
    """Bearer token plus the user it was issued to."""

    token: str
    token_type: str = "bearer"
    user: UserResponse
