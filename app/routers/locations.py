"""
Supported-location catalog from EstateIntel.
"""

from fastapi import APIRouter, Depends
from typing import List

from app.services.market_data import MarketDataClient
from app.schemas.analytics import SupportedLocation
from app.utils.dependencies import get_market_data_client
from app.schemas.error import get_error_responses


router = APIRouter(prefix="/locations", tags=["Locations"])


@router.get(
    "",
    response_model=List[SupportedLocation],
    summary="Supported locations",
    responses=get_error_responses(502)
)
async def list_locations(
    market_data: MarketDataClient = Depends(get_market_data_client)
) -> List[SupportedLocation]:
    locations = await market_data.list_supported_locations()
    return [SupportedLocation.model_validate(location) for location in locations]
