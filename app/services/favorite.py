"""
Favorite service: per-user bookmarked listings.
"""

from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.favorite import FavoriteRepository
from app.repositories.property import PropertyRepository
from app.models.favorite import Favorite
from app.models.user import User
from app.utils.exceptions import DuplicateFavoriteError, NotFoundError
import uuid
import logging

logger = logging.getLogger(__name__)


class FavoriteService:

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.favorite_repo = FavoriteRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def get_favorites(self, user: User) -> List[Favorite]:
        return await self.favorite_repo.get_user_favorites(user.id)

    async def add_favorite(self, user: User, property_id: uuid.UUID) -> Favorite:
        """
        Bookmark a listing for ``user``.

        Raises:
            NotFoundError: If the listing does not exist
            DuplicateFavoriteError: If the listing is already a favorite
        """
        if not await self.property_repo.exists(id=property_id):
            raise NotFoundError("Property", str(property_id))

        if await self.favorite_repo.find_favorite(user.id, property_id):
            raise DuplicateFavoriteError()

        try:
            favorite = await self.favorite_repo.create({"user_id": user.id, "property_id": property_id})
        except IntegrityError:
            # Lost a race with a concurrent insert of the same pair
            raise DuplicateFavoriteError()

        await self.db.refresh(favorite, ["listing"])
        logger.info(f"User {user.email} favorited property {property_id}")
        return favorite

    async def remove_favorite(self, user: User, favorite_id: uuid.UUID) -> None:
        """
        Remove one of ``user``'s favorites.

        Raises:
            NotFoundError: If the favorite does not exist or belongs to someone else
        """
        if not await self.favorite_repo.delete(favorite_id, user_id=user.id):
            raise NotFoundError("Favorite", str(favorite_id))
