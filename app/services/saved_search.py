"""
Saved search service.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.saved_search import SavedSearchRepository
from app.models.saved_search import SavedSearch
from app.models.user import User
from app.schemas.saved_search import SavedSearchCreate, SavedSearchUpdate
from app.utils.exceptions import NotFoundError
import uuid
import logging

logger = logging.getLogger(__name__)


class SavedSearchService:
    """Every operation is scoped to the requesting user."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.search_repo = SavedSearchRepository(db_session)

    async def get_saved_searches(self, user: User) -> List[SavedSearch]:
        return await self.search_repo.get_user_searches(user.id)

    async def create_saved_search(self, user: User, search_data: SavedSearchCreate) -> SavedSearch:
        saved_search = await self.search_repo.create({
            "user_id": user.id,
            "name": search_data.name,
            "filters": search_data.filters.model_dump(mode="json", exclude_none=True),
        })
        logger.info(f"Saved search created for {user.email}: {saved_search.name}")
        return saved_search

    async def update_saved_search(
        self,
        user: User,
        search_id: uuid.UUID,
        update_data: SavedSearchUpdate
    ) -> SavedSearch:
        """
        Shallow-merge an update; ``filters`` is replaced as a whole when sent.

        Raises:
            NotFoundError: If the search does not exist or belongs to someone else
        """
        saved_search = await self.search_repo.get_owned_search(search_id, user.id)
        if not saved_search:
            raise NotFoundError("Saved search", str(search_id))

        changes = {}
        if "name" in update_data.model_fields_set:
            changes["name"] = update_data.name
        if "filters" in update_data.model_fields_set:
            changes["filters"] = update_data.filters.model_dump(mode="json", exclude_none=True)

        return await self.search_repo.apply_update(saved_search, changes)

    async def delete_saved_search(self, user: User, search_id: uuid.UUID) -> None:
        if not await self.search_repo.delete(search_id, user_id=user.id):
            raise NotFoundError("Saved search", str(search_id))
