"""
FastAPI dependency injection utilities for authentication, services and
the shared market-data client.
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from app.config import Settings, get_settings
from app.database import get_db
from app.models.user import User, UserRole
from app.services.auth import AuthService
from app.services.analytics import AnalyticsService
from app.services.favorite import FavoriteService
from app.services.market_data import MarketDataClient
from app.services.property import PropertyService
from app.services.saved_search import SavedSearchService
from app.services.testimonial import TestimonialService
from app.services.upload import UploadService
from app.utils.exceptions import UnauthorizedError, InsufficientPermissionsError


# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


def get_market_data_client(request: Request) -> MarketDataClient:
    """The client created in the application lifespan."""
    return request.app.state.market_data


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


async def get_property_service(
    db: AsyncSession = Depends(get_db),
    market_data: MarketDataClient = Depends(get_market_data_client)
) -> PropertyService:
    return PropertyService(db, market_data)


async def get_analytics_service(
    db: AsyncSession = Depends(get_db),
    market_data: MarketDataClient = Depends(get_market_data_client)
) -> AnalyticsService:
    return AnalyticsService(db, market_data)


async def get_favorite_service(db: AsyncSession = Depends(get_db)) -> FavoriteService:
    return FavoriteService(db)


async def get_saved_search_service(db: AsyncSession = Depends(get_db)) -> SavedSearchService:
    return SavedSearchService(db)


async def get_testimonial_service(db: AsyncSession = Depends(get_db)) -> TestimonialService:
    return TestimonialService(db)


def get_upload_service(settings: Settings = Depends(get_settings)) -> UploadService:
    return UploadService(settings)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """
    Get current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer credentials
        auth_service: Authentication service

    Returns:
        Current User object

    Raises:
        UnauthorizedError: If no token provided
        InvalidTokenError: If token is invalid
        TokenExpiredError: If token is expired
    """
    if not credentials:
        raise UnauthorizedError("Authentication token required")

    return await auth_service.get_current_user(credentials.credentials)


def require_role(required_role: UserRole):
    """
    Create a dependency that requires a specific user role.
    Admins satisfy every role.

    Args:
        required_role: Required user role

    Returns:
        Dependency function
    """
    async def role_dependency(
        current_user: User = Depends(get_current_user)
    ) -> User:
        if current_user.role != required_role and current_user.role != UserRole.ADMIN:
            raise InsufficientPermissionsError(f"access {required_role.value} resources")
        return current_user

    return role_dependency


# Current user with the admin role; raises InsufficientPermissionsError otherwise
get_current_admin_user = require_role(UserRole.ADMIN)
