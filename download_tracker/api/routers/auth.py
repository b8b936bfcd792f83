"""
Authentication API endpoints.

Routes:
- POST /auth/register - Create account
- POST /auth/login - Exchange credentials for a bearer token
- GET /auth/me - Current user

Dependencies: download_tracker.application.services, download_tracker.models
System role: Identity HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from download_tracker.api.deps.dependencies import get_auth_service, get_current_user
from download_tracker.application.services import AuthService
from download_tracker.boundary.db.models.user_model import UserModel
from download_tracker.models.auth import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserResponse,
)
from download_tracker.models.common import ERROR_RESPONSES

from .error_handling import handle_download_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"], responses=ERROR_RESPONSES)


@router.post("/register", response_model=RegisterResponse, status_code=201)
@handle_download_errors
async def register(
    request: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> RegisterResponse:
    """
    Create a new account.

    Raises:
        HTTPException(400): Email already registered
    """
    user = await auth_service.register(
        name=request.name,
        email=request.email,
        password=request.password,
    )
    return RegisterResponse(user_id=user.id)


@router.post("/login", response_model=TokenResponse)
@handle_download_errors
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """
    Exchange email and password for a bearer token.

    Raises:
        HTTPException(401): Unknown email or wrong password
    """
    user = await auth_service.authenticate(request.email, request.password)
    logger.info("User logged in", extra={"user_id": str(user.id)})
    return TokenResponse(
        token=auth_service.issue_token(user),
        user=UserResponse(id=user.id, name=user.name, email=user.email),
    )


@router.get("/me", response_model=UserResponse)
async def me(current_user: UserModel = Depends(get_current_user)) -> UserResponse:
    """Return the authenticated user."""
    return UserResponse(id=current_user.id, name=current_user.name, email=current_user.email)
