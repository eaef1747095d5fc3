"""
Database models for the Real Estate Listings API.
"""

from app.models.user import User, UserRole
from app.models.property import Property, PropertyType
from app.models.favorite import Favorite
from app.models.saved_search import SavedSearch
from app.models.testimonial import Testimonial

__all__ = [
    "User",
    "UserRole",
    "Property",
    "PropertyType",
    "Favorite",
    "SavedSearch",
    "Testimonial",
]
