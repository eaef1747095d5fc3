"""
Pydantic schemas for request/response validation.
"""

# Authentication schemas
from .auth import (
    LoginRequest,
    LoginResponse,
    RefreshTokenRequest,
    AccessTokenResponse,
)

# User schemas
from .user import (
    UserBase,
    UserCreate,
    UserUpdate,
    UserResponse,
)

# Property schemas
from .property import (
    Coordinates,
    LocationSchema,
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertySearchFilters,
)

# Engagement schemas
from .favorite import FavoriteCreate, FavoriteResponse
from .saved_search import (
    SavedSearchFilters,
    SavedSearchCreate,
    SavedSearchUpdate,
    SavedSearchResponse,
)
from .testimonial import TestimonialCreate, TestimonialUpdate, TestimonialResponse

# Analytics schemas
from .analytics import (
    CityAveragePrice,
    CityListingCount,
    MonthlyPriceTrend,
    AnalyticsSummary,
    AdminStats,
    SupportedLocation,
    MarketPrices,
)

from .common import MessageResponse, ImageUploadResponse

__all__ = [
    # Authentication
    "LoginRequest",
    "LoginResponse",
    "RefreshTokenRequest",
    "AccessTokenResponse",

    # User
    "UserBase",
    "UserCreate",
    "UserUpdate",
    "UserResponse",

    # Property
    "Coordinates",
    "LocationSchema",
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyResponse",
    "PropertySearchFilters",

    # Engagement
    "FavoriteCreate",
    "FavoriteResponse",
    "SavedSearchFilters",
    "SavedSearchCreate",
    "SavedSearchUpdate",
    "SavedSearchResponse",
    "TestimonialCreate",
    "TestimonialUpdate",
    "TestimonialResponse",

    # Analytics
    "CityAveragePrice",
    "CityListingCount",
    "MonthlyPriceTrend",
    "AnalyticsSummary",
    "AdminStats",
    "SupportedLocation",
    "MarketPrices",

    "MessageResponse",
    "ImageUploadResponse",
]
