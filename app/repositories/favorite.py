"""
Favorite repository: per-user bookmarked listings.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.base import BaseRepository
from app.models.favorite import Favorite
from typing import List, Optional
import uuid


class FavoriteRepository(BaseRepository[Favorite]):
    """Favorites are always read and deleted through their owner."""

    def __init__(self, db: AsyncSession):
        super().__init__(Favorite, db)

    async def get_user_favorites(self, user_id: uuid.UUID) -> List[Favorite]:
        return await self.get_multi(filters={"user_id": user_id})

    async def find_favorite(self, user_id: uuid.UUID, property_id: uuid.UUID) -> Optional[Favorite]:
        return await self.get_one(user_id=user_id, property_id=property_id)
