"""
Service layer for business logic implementation.
"""

from .auth import AuthService
from .property import PropertyService
from .favorite import FavoriteService
from .saved_search import SavedSearchService
from .testimonial import TestimonialService
from .analytics import AnalyticsService
from .market_data import MarketDataClient
from .search import LocationValidator, PropertyQueryBuilder
from .upload import UploadService
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "PropertyService",
    "FavoriteService",
    "SavedSearchService",
    "TestimonialService",
    "AnalyticsService",
    "MarketDataClient",
    "LocationValidator",
    "PropertyQueryBuilder",
    "UploadService",
    "ErrorHandlerService",
]
