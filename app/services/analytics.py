"""
Analytics service: grouped listing statistics, optionally enriched with
market prices from EstateIntel.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.property import PropertyRepository
from app.repositories.user import UserRepository
from app.services.market_data import MarketDataClient
from app.utils.exceptions import BadRequestError, UpstreamError
import logging

logger = logging.getLogger(__name__)

TOP_CITIES_LIMIT = 5

# Cities whose provider slug is not "<city>-central"
LOCATION_SLUGS = {
    "lagos": "lagos-ikeja",
}


def location_slug(city: str) -> str:
    """Provider location slug for a city name."""
    city = city.strip().lower()
    return LOCATION_SLUGS.get(city, f"{city}-central")


class AnalyticsService:
    """
    Read-only statistics over the property table.

    The market-data client is only used by the enhancement path and the
    market-prices passthrough.
    """

    def __init__(self, db_session: AsyncSession, market_data: MarketDataClient):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)
        self.user_repo = UserRepository(db_session)
        self.market_data = market_data

    async def average_price_by_city(
        self,
        enhanced: bool = False,
        city: Optional[str] = None,
        deal_type: str = "sale",
        bedrooms: int = 3
    ) -> List[Dict[str, Any]]:
        """
        Mean listing price per city, highest first.

        When ``enhanced`` is set and ``city`` is given, the provider's average
        for that city is attached to its group together with the mean of the
        local and market figures. A city without local listings gets a
        synthetic group carrying only the market figures. A provider failure
        is logged and the plain grouping is returned.

        Args:
            enhanced: Merge market data for ``city``
            city: Target city for enhancement
            deal_type: Provider deal type (``sale``/``rent``)
            bedrooms: Provider bedroom count

        Returns:
            List of {"city", "local_average_price", "listing_count",
            "market_average_price"?, "enhanced_average_price"?}
        """
        groups = [
            {
                "city": row["city"],
                "local_average_price": row["average_price"],
                "listing_count": row["listing_count"],
            }
            for row in await self.property_repo.average_price_by_city()
        ]

        if not (enhanced and city and city.strip()):
            return groups

        city = city.strip()
        try:
            market = await self.market_data.get_residential_prices(
                location_slug(city), deal_type=deal_type, bedrooms=bedrooms
            )
        except UpstreamError as e:
            logger.warning(f"Market data unavailable for {city}: {e.detail}")
            return groups

        market_average = market.get("average_price") if isinstance(market, dict) else None
        if market_average is None:
            logger.warning(f"Market data for {city} has no average_price; returning local averages")
            return groups
        try:
            market_average = float(market_average)
        except (TypeError, ValueError):
            logger.warning(f"Market data for {city} has a non-numeric average_price: {market_average!r}")
            return groups

        match = next((g for g in groups if g["city"].lower() == city.lower()), None)
        if match is not None:
            match["market_average_price"] = market_average
            match["enhanced_average_price"] = (match["local_average_price"] + market_average) / 2
        else:
            groups.append({
                "city": city,
                "local_average_price": None,
                "listing_count": 0,
                "market_average_price": market_average,
                "enhanced_average_price": market_average,
            })

        return groups

    async def listings_per_city(self) -> List[Dict[str, Any]]:
        return await self.property_repo.listings_per_city()

    async def price_trends_by_month(self) -> List[Dict[str, Any]]:
        return await self.property_repo.price_trends_by_month()

    async def summary(self) -> Dict[str, Any]:
        """Total listings, overall mean price (0 when empty) and the five busiest cities."""
        return {
            "total_listings": await self.property_repo.count(),
            "average_price": await self.property_repo.overall_average_price(),
            "top_cities": await self.property_repo.listings_per_city(limit=TOP_CITIES_LIMIT),
        }

    async def admin_stats(self) -> Dict[str, Any]:
        stats = await self.summary()
        stats["total_users"] = await self.user_repo.count()
        return stats

    async def market_prices(
        self,
        location: Optional[str],
        deal_type: str = "sale",
        bedrooms: int = 3,
        country: str = "NG"
    ) -> Dict[str, Any]:
        """
        Provider price data for a location slug, returned as-is.

        Raises:
            BadRequestError: If no location slug is given
            UpstreamError: If the provider call fails
        """
        if not location or not location.strip():
            raise BadRequestError("Location slug is required (e.g., lagos-ikeja)")
        return await self.market_data.get_residential_prices(
            location.strip(), deal_type=deal_type, bedrooms=bedrooms, country=country
        )
