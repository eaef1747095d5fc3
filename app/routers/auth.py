"""
Authentication API endpoints for registration, login, token refresh and
current-user information.
"""

from fastapi import APIRouter, Depends, status
from app.models.user import User
from app.services.auth import AuthService
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RefreshTokenRequest,
    AccessTokenResponse,
)
from app.schemas.user import UserCreate, UserResponse
from app.utils.dependencies import get_auth_service, get_current_user
from app.schemas.error import get_error_responses
from app.config import settings


router = APIRouter(prefix="/auth", tags=["Authentication"])


def _login_response(user: User, access_token: str, refresh_token: str) -> LoginResponse:
    return LoginResponse(
        user=UserResponse.model_validate(user.to_dict()),
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="bearer",
        expires_in=settings.access_token_expire_minutes * 60,
    )


@router.post(
    "/register",
    response_model=LoginResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create a user account and return JWT tokens",
    responses=get_error_responses(409, 422)
)
async def register(
    user_data: UserCreate,
    auth_service: AuthService = Depends(get_auth_service)
) -> LoginResponse:
    user, access_token, refresh_token = await auth_service.register(user_data)
    return _login_response(user, access_token, refresh_token)


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="User login",
    description="Authenticate user with email and password, returns JWT tokens",
    responses=get_error_responses(401, 422)
)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> LoginResponse:
    """
    Authenticate user and return JWT tokens.

    Args:
        login_data: Login credentials (email and password)
        auth_service: Authentication service

    Returns:
        Login response with user info and JWT tokens

    Raises:
        InvalidCredentialsError: If email or password is incorrect
    """
    user, access_token, refresh_token = await auth_service.login(login_data.email, login_data.password)
    return _login_response(user, access_token, refresh_token)


@router.post(
    "/refresh",
    response_model=AccessTokenResponse,
    summary="Refresh access token",
    responses=get_error_responses(401, 422)
)
async def refresh_token(
    refresh_data: RefreshTokenRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> AccessTokenResponse:
    access_token = await auth_service.refresh_access_token(refresh_data.refresh_token)
    return AccessTokenResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=settings.access_token_expire_minutes * 60,
    )


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user",
    responses=get_error_responses(401)
)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
) -> UserResponse:
    return UserResponse.model_validate(current_user.to_dict())
