"""
Pydantic schemas for analytics and market-data responses.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class CityAveragePrice(BaseModel):
    """
    Average listing price for one city. The market fields are only present
    when the city was enhanced with external market data.
    """

    city: str
    local_average_price: Optional[float] = Field(None, description="Mean price of local listings")
    listing_count: int
    market_average_price: Optional[float] = None
    enhanced_average_price: Optional[float] = None


class CityListingCount(BaseModel):
    city: str
    listing_count: int


class MonthlyPriceTrend(BaseModel):
    year: int
    month: int = Field(..., ge=1, le=12)
    average_price: float
    listing_count: int


class AnalyticsSummary(BaseModel):
    total_listings: int
    average_price: float
    top_cities: List[CityListingCount]


class AdminStats(AnalyticsSummary):
    total_users: int


class SupportedLocation(BaseModel):
    """A (city, neighborhood, country) tuple known to the market-data provider."""

    model_config = ConfigDict(extra="ignore")

    city: str
    neighborhood: Optional[str] = None
    country: Optional[str] = None


class MarketPrices(BaseModel):
    """Residential price point as returned by the provider; extra keys are kept."""

    model_config = ConfigDict(extra="allow")

    average_price: Optional[float] = None
