"""
Authentication service orchestrator.

Registration, credential checks and bearer token issue/resolution.

Dependencies: download_tracker.boundary.db.CRUD, download_tracker.core.security
System role: Identity collaborator for every download operation
"""

import asyncio
import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from download_tracker.boundary.db.CRUD.user_crud import user_crud
from download_tracker.boundary.db.models.user_model import UserModel
from download_tracker.configs import get_settings
from download_tracker.configs.auth import AuthSettings
from download_tracker.core.exceptions import (
    AuthenticationError,
    InvalidTokenError,
    UserAlreadyExistsError,
)
from download_tracker.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)


class AuthService:
    """Authentication service orchestrator."""

    def __init__(self, db: AsyncSession, settings: AuthSettings | None = None) -> None:
        """
        Initialize authentication service.

        Args:
            db: AsyncSession for database operations
            settings: Auth settings (defaults to application settings)
        """
        self.db = db
        self.settings = settings or get_settings().auth

    async def register(self, name: str, email: str, password: str) -> UserModel:
        """
        Create a new account.

        Args:
            name: Display name
            email: Normalised (lower-case) email
            password: Raw password

        Returns:
            UserModel: Created user

        Raises:
            UserAlreadyExistsError: If the email is already registered
        """
        if await user_crud.get_by_email(self.db, email):
            raise UserAlreadyExistsError(email)

        # PBKDF2 is CPU bound; keep it off the event loop
        password_hash = await asyncio.to_thread(
            hash_password, password, self.settings.password_iterations
        )
        try:
            user = await user_crud.create(
                self.db,
                name=name,
                email=email,
                password_hash=password_hash,
            )
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise UserAlreadyExistsError(email)

        logger.info("User registered", extra={"user_id": str(user.id)})
        return user

    async def authenticate(self, email: str, password: str) -> UserModel:
        """
        Check credentials.

        Raises:
            AuthenticationError: If the email is unknown or the password is wrong
        """
        user = await user_crud.get_by_email(self.db, email)
        if user is None:
            raise AuthenticationError("Invalid credentials")
        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            raise AuthenticationError("Invalid credentials")
        return user

    def issue_token(self, user: UserModel) -> str:
        """Create a bearer token for user."""
        return create_access_token(
            subject=str(user.id),
            email=user.email,
            secret_key=self.settings.secret_key,
            ttl_seconds=self.settings.token_ttl_seconds,
        )

    async def resolve_token(self, token: str) -> UserModel:
        """
        Return the user a bearer token was issued to.

        Raises:
            InvalidTokenError: If the token is malformed, tampered with or expired
            AuthenticationError: If the user no longer exists
        """
        claims = decode_access_token(token, self.settings.secret_key)
        try:
            user_id = UUID(str(claims["sub"]))
        except ValueError:
            raise InvalidTokenError("Malformed access token")

        user = await user_crud.get_by_id(self.db, user_id)
        if user is None:
            raise AuthenticationError("Invalid token")
        return user
