"""
Property repository for listing persistence, filtered search, and grouped statistics.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, func, desc, asc, extract
from app.repositories.base import BaseRepository
from app.models.property import Property
from typing import Optional, List, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings.
    Search conditions are produced by the query builder; this class only executes them.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def create_property(self, property_data: Dict[str, Any]) -> Property:
        """
        Insert a listing.

        Args:
            property_data: Flat column values (location already unpacked)

        Returns:
            Created property instance
        """
        created_property = await self.create(property_data)
        logger.info(f"Created property: {created_property.title} (ID: {created_property.id})")
        return created_property

    async def search_properties(self, conditions: List) -> List[Property]:
        """
        Return listings matching every condition, newest listing first.

        Args:
            conditions: SQLAlchemy boolean clauses built by PropertyQueryBuilder

        Returns:
            Matching properties
        """
        try:
            query = select(Property)
            if conditions:
                query = query.where(and_(*conditions))
            query = query.order_by(desc(Property.date_listed))

            result = await self.db.execute(query)
            properties = list(result.scalars().all())

            logger.debug(f"Property search returned {len(properties)} results")
            return properties
        except Exception as e:
            logger.error(f"Failed to search properties: {e}")
            raise

    async def get_owned_property(self, property_id: uuid.UUID, owner_id: uuid.UUID) -> Optional[Property]:
        """Get a listing only if ``owner_id`` created it."""
        return await self.get_one(id=property_id, created_by=owner_id)

    async def get_properties_by_owner(self, owner_id: uuid.UUID) -> List[Property]:
        return await self.get_multi(filters={"created_by": owner_id}, order_by="-date_listed")

    # Aggregations

    async def average_price_by_city(self) -> List[Dict[str, Any]]:
        """
        Group listings by city with mean price and count, highest mean first.

        Returns:
            List of {"city", "average_price", "listing_count"}
        """
        try:
            average_price = func.avg(Property.price).label("average_price")
            listing_count = func.count(Property.id).label("listing_count")
            query = (
                select(Property.city, average_price, listing_count)
                .group_by(Property.city)
                .order_by(desc(average_price), asc(Property.city))
            )

            result = await self.db.execute(query)
            return [
                {
                    "city": row.city,
                    "average_price": float(row.average_price),
                    "listing_count": row.listing_count,
                }
                for row in result.all()
            ]
        except Exception as e:
            logger.error(f"Failed to aggregate average price by city: {e}")
            raise

    async def listings_per_city(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Count listings per city, largest first.

        Args:
            limit: Keep only the first ``limit`` cities

        Returns:
            List of {"city", "listing_count"}
        """
        try:
            listing_count = func.count(Property.id).label("listing_count")
            query = (
                select(Property.city, listing_count)
                .group_by(Property.city)
                .order_by(desc(listing_count), asc(Property.city))
            )
            if limit is not None:
                query = query.limit(limit)

            result = await self.db.execute(query)
            return [
                {"city": row.city, "listing_count": row.listing_count}
                for row in result.all()
            ]
        except Exception as e:
            logger.error(f"Failed to aggregate listings per city: {e}")
            raise

    async def price_trends_by_month(self) -> List[Dict[str, Any]]:
        """
        Mean price and count per calendar month of ``date_listed``, oldest first.

        Returns:
            List of {"year", "month", "average_price", "listing_count"}
        """
        try:
            year = extract("year", Property.date_listed).label("year")
            month = extract("month", Property.date_listed).label("month")
            query = (
                select(
                    year,
                    month,
                    func.avg(Property.price).label("average_price"),
                    func.count(Property.id).label("listing_count"),
                )
                .group_by(year, month)
                .order_by(asc(year), asc(month))
            )

            result = await self.db.execute(query)
            return [
                {
                    "year": int(row.year),
                    "month": int(row.month),
                    "average_price": float(row.average_price),
                    "listing_count": row.listing_count,
                }
                for row in result.all()
            ]
        except Exception as e:
            logger.error(f"Failed to aggregate price trends: {e}")
            raise

    async def overall_average_price(self) -> float:
        """Mean price across all listings; 0 when there are none."""
        result = await self.db.execute(select(func.avg(Property.price)))
        average = result.scalar()
        return float(average) if average is not None else 0
