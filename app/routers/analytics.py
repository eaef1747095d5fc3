"""
Public analytics endpoints over the listing table, plus the market-price passthrough.
"""

from fastapi import APIRouter, Depends, Query
from typing import Any, Dict, List, Optional

from app.services.analytics import AnalyticsService
from app.schemas.analytics import (
    CityAveragePrice,
    CityListingCount,
    MonthlyPriceTrend,
    AnalyticsSummary,
)
from app.utils.dependencies import get_analytics_service
from app.schemas.error import get_error_responses


router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get(
    "/avg-price-by-city",
    response_model=List[CityAveragePrice],
    response_model_exclude_none=True,
    summary="Average price by city",
    description="Mean listing price per city. With enhanced=true and a city, the "
                "city's group also carries EstateIntel market figures when available."
)
async def average_price_by_city(
    enhanced: bool = Query(False, description="Merge market data for the given city"),
    city: Optional[str] = Query(None, description="City to enhance"),
    deal_type: str = Query("sale", alias="type", description="Market deal type (sale/rent)"),
    bedrooms: int = Query(3, alias="beds", ge=0, description="Bedroom count for market prices"),
    analytics_service: AnalyticsService = Depends(get_analytics_service)
) -> List[CityAveragePrice]:
    rows = await analytics_service.average_price_by_city(
        enhanced=enhanced, city=city, deal_type=deal_type, bedrooms=bedrooms
    )
    return [CityAveragePrice(**row) for row in rows]


@router.get(
    "/listings-per-city",
    response_model=List[CityListingCount],
    summary="Listings per city"
)
async def listings_per_city(
    analytics_service: AnalyticsService = Depends(get_analytics_service)
) -> List[CityListingCount]:
    return [CityListingCount(**row) for row in await analytics_service.listings_per_city()]


@router.get(
    "/price-trends",
    response_model=List[MonthlyPriceTrend],
    summary="Monthly price trends"
)
async def price_trends(
    analytics_service: AnalyticsService = Depends(get_analytics_service)
) -> List[MonthlyPriceTrend]:
    return [MonthlyPriceTrend(**row) for row in await analytics_service.price_trends_by_month()]


@router.get(
    "/summary",
    response_model=AnalyticsSummary,
    summary="Listing summary"
)
async def summary(
    analytics_service: AnalyticsService = Depends(get_analytics_service)
) -> AnalyticsSummary:
    return AnalyticsSummary(**await analytics_service.summary())


@router.get(
    "/market-prices",
    summary="Market residential prices",
    description="EstateIntel residential prices for a location slug such as lagos-ikeja.",
    responses=get_error_responses(400, 502)
)
async def market_prices(
    location: Optional[str] = Query(None, description="Location slug, e.g. lagos-ikeja"),
    deal_type: str = Query("sale", alias="type", description="Deal type (sale/rent)"),
    bedrooms: int = Query(3, alias="beds", ge=0, description="Bedroom count"),
    country: str = Query("NG", description="ISO country code"),
    analytics_service: AnalyticsService = Depends(get_analytics_service)
) -> Dict[str, Any]:
    return await analytics_service.market_prices(
        location, deal_type=deal_type, bedrooms=bedrooms, country=country
    )
