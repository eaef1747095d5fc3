"""
API route handlers for the Real Estate Listings API, one router per resource prefix.
"""

from .auth import router as auth_router
from .properties import router as properties_router
from .analytics import router as analytics_router
from .locations import router as locations_router
from .admin import router as admin_router
from .favorites import router as favorites_router
from .saved_searches import router as saved_searches_router
from .uploads import router as uploads_router
from .testimonials import router as testimonials_router
from .user import router as user_router

__all__ = [
    "auth_router",
    "properties_router",
    "analytics_router",
    "locations_router",
    "admin_router",
    "favorites_router",
    "saved_searches_router",
    "uploads_router",
    "testimonials_router",
    "user_router",
]
