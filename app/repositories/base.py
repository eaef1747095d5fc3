"""
Base repository class with common CRUD operations using async SQLAlchemy.
Provides generic database operations that can be extended by specific repositories.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func
from app.database import Base
from typing import TypeVar, Generic, Optional, List, Dict, Any, Type
import uuid
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository class providing common CRUD operations.
    Uses async SQLAlchemy for all database operations with proper error handling.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize repository with model class and database session.

        Args:
            model: SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db

    def _apply_filters(self, query, filters: Optional[Dict[str, Any]]):
        if filters:
            for field, value in filters.items():
                if not hasattr(self.model, field):
                    raise ValueError(f"Field '{field}' does not exist on {self.model.__name__}")
                column = getattr(self.model, field)
                if isinstance(value, list):
                    query = query.where(column.in_(value))
                else:
                    query = query.where(column == value)
        return query

    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """
        Create a new record in the database.

        Args:
            obj_in: Dictionary of field values for the new record

        Returns:
            Created model instance

        Raises:
            SQLAlchemyError: If database operation fails
        """
        try:
            db_obj = self.model(**obj_in)
            self.db.add(db_obj)
            await self.db.commit()
            await self.db.refresh(db_obj)
            logger.debug(f"Created {self.model.__name__} with id: {db_obj.id}")
            return db_obj
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create {self.model.__name__}: {e}")
            raise

    async def get_by_id(self, id: uuid.UUID) -> Optional[ModelType]:
        """
        Get a record by its ID.

        Args:
            id: UUID of the record to retrieve

        Returns:
            Model instance if found, None otherwise
        """
        return await self.get_one(id=id)

    async def get_one(self, **filters: Any) -> Optional[ModelType]:
        """
        Get a single record matching every given field filter.

        Owner-scoped lookups pass the owner column next to the id, so a
        record owned by someone else is simply not found.
        """
        try:
            query = self._apply_filters(select(self.model), filters)
            result = await self.db.execute(query)
            obj = result.scalar_one_or_none()

            if obj is None:
                logger.debug(f"{self.model.__name__} matching {filters} not found")

            return obj
        except Exception as e:
            logger.error(f"Failed to get {self.model.__name__} by {filters}: {e}")
            raise

    async def get_multi(
        self,
        skip: int = 0,
        limit: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None
    ) -> List[ModelType]:
        """
        Get multiple records with optional filtering, pagination, and ordering.

        Args:
            skip: Number of records to skip (for pagination)
            limit: Maximum number of records to return (None for all)
            filters: Dictionary of field filters
            order_by: Field name to order by (prefix with '-' for descending)

        Returns:
            List of model instances
        """
        try:
            query = self._apply_filters(select(self.model), filters)

            if order_by:
                field_name = order_by.lstrip('-')
                column = getattr(self.model, field_name)
                query = query.order_by(column.desc() if order_by.startswith('-') else column)
            else:
                query = query.order_by(self.model.created_at.desc())

            if skip:
                query = query.offset(skip)
            if limit is not None:
                query = query.limit(limit)

            result = await self.db.execute(query)
            objects = result.scalars().all()

            logger.debug(f"Retrieved {len(objects)} {self.model.__name__} records")
            return list(objects)
        except Exception as e:
            logger.error(f"Failed to get multiple {self.model.__name__} records: {e}")
            raise

    async def apply_update(self, db_obj: ModelType, changes: Dict[str, Any]) -> ModelType:
        """
        Shallow-merge ``changes`` into a loaded record and persist it.

        Every key present in ``changes`` is written, including explicit
        ``False``/``None``; keys that are absent keep their stored value.

        Args:
            db_obj: Record previously loaded through this repository
            changes: Field values to overwrite

        Returns:
            The refreshed model instance
        """
        try:
            for field, value in changes.items():
                if not hasattr(self.model, field):
                    raise ValueError(f"Field '{field}' does not exist on {self.model.__name__}")
                setattr(db_obj, field, value)

            await self.db.commit()
            await self.db.refresh(db_obj)
            logger.debug(f"Updated {self.model.__name__} {db_obj.id}: {sorted(changes)}")
            return db_obj
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to update {self.model.__name__} {db_obj.id}: {e}")
            raise

    async def update(self, id: uuid.UUID, changes: Dict[str, Any]) -> Optional[ModelType]:
        """
        Update a record by its ID.

        Returns:
            Updated model instance if found, None otherwise
        """
        db_obj = await self.get_by_id(id)
        if db_obj is None:
            return None
        return await self.apply_update(db_obj, changes)

    async def delete(self, id: uuid.UUID, **scope: Any) -> bool:
        """
        Delete a record by its ID, optionally restricted by extra field filters.

        Args:
            id: UUID of the record to delete
            scope: Additional column filters (e.g. owner id)

        Returns:
            True if record was deleted, False if not found
        """
        try:
            stmt = delete(self.model).where(self.model.id == id)
            for field, value in scope.items():
                stmt = stmt.where(getattr(self.model, field) == value)
            result = await self.db.execute(stmt)
            await self.db.commit()

            deleted = result.rowcount > 0
            if deleted:
                logger.debug(f"Deleted {self.model.__name__} with id: {id}")
            else:
                logger.debug(f"{self.model.__name__} with id {id} not found for deletion")

            return deleted
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete {self.model.__name__} {id}: {e}")
            raise

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """
        Count records with optional filtering.

        Args:
            filters: Dictionary of field filters

        Returns:
            Number of matching records
        """
        try:
            query = self._apply_filters(select(func.count(self.model.id)), filters)
            result = await self.db.execute(query)
            return result.scalar() or 0
        except Exception as e:
            logger.error(f"Failed to count {self.model.__name__} records: {e}")
            raise

    async def exists(self, **filters: Any) -> bool:
        """Check whether any record matches the given field filters."""
        return await self.count(filters) > 0
