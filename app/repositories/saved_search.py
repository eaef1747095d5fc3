"""
Saved search repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.base import BaseRepository
from app.models.saved_search import SavedSearch
from typing import List, Optional
import uuid


class SavedSearchRepository(BaseRepository[SavedSearch]):

    def __init__(self, db: AsyncSession):
        super().__init__(SavedSearch, db)

    async def get_user_searches(self, user_id: uuid.UUID) -> List[SavedSearch]:
        return await self.get_multi(filters={"user_id": user_id})

    async def get_owned_search(self, search_id: uuid.UUID, user_id: uuid.UUID) -> Optional[SavedSearch]:
        return await self.get_one(id=search_id, user_id=user_id)
