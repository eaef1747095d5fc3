"""
EstateIntel market-data client.

A thin async wrapper over the EstateIntel REST API. One client instance is
created at application startup and shared through ``app.state``; every call
is a single request with no retry and no caching.
"""

from typing import Any, Dict, List, Optional
from app.config import Settings
from app.utils.exceptions import UpstreamError
import httpx
import logging

logger = logging.getLogger(__name__)

SERVICE_NAME = "estateintel"


class MarketDataClient:
    """Async client for the EstateIntel supported-locations and prices endpoints."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.estateintel.com/api",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"API-KEY": api_key, "Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "MarketDataClient":
        return cls(
            api_key=settings.estateintel_api_key,
            base_url=settings.estateintel_base_url,
            timeout=settings.estateintel_timeout,
        )

    async def list_supported_locations(self) -> List[Dict[str, Any]]:
        """
        Fetch the catalog of supported locations.

        Returns:
            List of {"city", "neighborhood", "country"} records

        Raises:
            UpstreamError: If the request fails or returns a non-2xx status
        """
        return await self._get("/supported-locations", failure="Failed to fetch locations")

    async def get_residential_prices(
        self,
        location: str,
        deal_type: str = "sale",
        bedrooms: int = 3,
        country: str = "NG"
    ) -> Dict[str, Any]:
        """
        Fetch residential price data for a location slug.

        Args:
            location: Provider location slug, e.g. ``lagos-ikeja``
            deal_type: ``sale`` or ``rent``
            bedrooms: Bedroom count the prices refer to
            country: ISO country code

        Returns:
            Provider payload; contains ``average_price``

        Raises:
            UpstreamError: If the request fails or returns a non-2xx status
        """
        params = {
            "location": location,
            "country": country,
            "type": deal_type,
            "beds": str(bedrooms),
        }
        return await self._get("/residential-prices", failure="Failed to fetch prices", params=params)

    async def _get(self, path: str, failure: str, params: Optional[Dict[str, str]] = None) -> Any:
        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            reason = _upstream_message(e.response) or str(e)
            logger.error(f"{failure}: {reason}")
            raise UpstreamError(f"{failure}: {reason}", service=SERVICE_NAME)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"{failure}: {e}")
            raise UpstreamError(f"{failure}: {e}", service=SERVICE_NAME)

    async def aclose(self) -> None:
        await self._client.aclose()


def _upstream_message(response: httpx.Response) -> Optional[str]:
    """The provider's ``message`` field from an error body, if it sent one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None
