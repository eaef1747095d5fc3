"""
Repository layer over the async SQLAlchemy session.
"""

from app.repositories.base import BaseRepository
from app.repositories.user import UserRepository
from app.repositories.property import PropertyRepository
from app.repositories.favorite import FavoriteRepository
from app.repositories.saved_search import SavedSearchRepository
from app.repositories.testimonial import TestimonialRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "PropertyRepository",
    "FavoriteRepository",
    "SavedSearchRepository",
    "TestimonialRepository",
]
