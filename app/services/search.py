"""
Location validation and property search condition building.
"""

from typing import List, Optional
from app.models.property import Property
from app.schemas.property import PropertySearchFilters
from app.services.market_data import MarketDataClient
from app.utils.exceptions import InvalidLocationError
import logging

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3


class LocationValidator:
    """
    Checks a city/neighborhood pair against the market-data provider's
    catalog of supported locations. Comparison is case-insensitive.
    """

    def __init__(self, client: MarketDataClient):
        self.client = client

    async def validate(self, city: Optional[str], neighborhood: Optional[str] = None) -> None:
        """
        Validate a location, fetching the catalog only when there is something to check.

        Args:
            city: City name; empty or None skips the city check
            neighborhood: Neighborhood name; empty or None skips the neighborhood check

        Raises:
            InvalidLocationError: If the city or neighborhood is not supported
            UpstreamError: If the catalog cannot be fetched
        """
        city = (city or "").strip()
        neighborhood = (neighborhood or "").strip()
        if not city and not neighborhood:
            return

        locations = await self.client.list_supported_locations()

        cities: List[str] = []
        for location in locations:
            name = str(location.get("city") or "").lower()
            if name and name not in cities:
                cities.append(name)

        if city and city.lower() not in cities:
            suggestions = ", ".join(cities[:MAX_SUGGESTIONS])
            raise InvalidLocationError(f"Invalid city: {city}. Supported cities include: {suggestions}")

        if neighborhood:
            neighborhoods = [
                str(location.get("neighborhood") or "").lower()
                for location in locations
                if str(location.get("city") or "").lower() == city.lower()
            ]
            if neighborhood.lower() not in neighborhoods:
                suggestions = ", ".join(neighborhoods[:MAX_SUGGESTIONS])
                raise InvalidLocationError(
                    f"Invalid neighborhood: {neighborhood} for city {city}. Supported: {suggestions}"
                )

        logger.debug(f"Location validated: city={city!r} neighborhood={neighborhood!r}")


class PropertyQueryBuilder:
    """Translates search filters into SQLAlchemy WHERE conditions."""

    @staticmethod
    def build(filters: PropertySearchFilters) -> List:
        conditions = []

        if filters.city:
            conditions.append(Property.city == filters.city)
        if filters.state:
            conditions.append(Property.state == filters.state)
        if filters.neighborhood:
            conditions.append(Property.neighborhood == filters.neighborhood)

        # Inclusive bounds; either side may be open
        if filters.min_price is not None:
            conditions.append(Property.price >= filters.min_price)
        if filters.max_price is not None:
            conditions.append(Property.price <= filters.max_price)

        if filters.bedrooms is not None:
            conditions.append(Property.bedrooms == filters.bedrooms)
        if filters.property_type is not None:
            conditions.append(Property.property_type == filters.property_type)

        return conditions
