"""
Per-title local price lookups from the Steam storefront.

Returns the exact storefront price of an app in a region, cached per
``(app_id, country_code)`` for 12 hours. Any failure is reported as
"unavailable" (None), never raised.
"""

from typing import Any, Dict, Optional

import aiohttp
from aiohttp import ClientTimeout

from ..interfaces import ILocalPriceSource
from ..models.currency import SteamPrice
from ..utils.error_handling import ErrorCategory, ErrorSeverity, with_error_handling
from ..utils.logging import get_logger
from .cache_store import TTLCache

logger = get_logger("steam.price")

CACHE_KEY_PREFIX = "steam:price:"
APP_DETAILS_URL = "https://store.steampowered.com/api/appdetails"

# Region setting -> Steam country code; Germany stands in for the Euro store
REGION_TO_STEAM_CC: Dict[str, str] = {
    "auto": "US",
    "US": "US",
    "GB": "GB",
    "EU": "DE",
    "CA": "CA",
    "AU": "AU",
    "JP": "JP",
    "BR": "BR",
    "IN": "IN",
}


def steam_country_for_region(region: str) -> str:
    """Steam country code for a region setting, US when unknown."""
    return REGION_TO_STEAM_CC.get(region, "US")


class SteamStoreApiSource:
    """Reads price overviews from the public Steam app details endpoint."""

    def __init__(self, url: str = APP_DETAILS_URL, timeout: int = 10):
        self.url = url
        self.timeout = timeout

    async def fetch_price_overview(
        self, app_id: str, country_code: str
    ) -> Optional[Dict[str, Any]]:
        """
        Fetch the ``price_overview`` node for one app.

        Returns:
            The price overview dict, or None when the store has no data
        """
        params = {"appids": app_id, "cc": country_code, "filters": "price_overview"}
        async with aiohttp.ClientSession(timeout=ClientTimeout(total=self.timeout)) as session:
            async with session.get(self.url, params=params) as response:
                if response.status >= 400:
                    return None
                payload = await response.json(content_type=None)

        node = payload.get(app_id) if isinstance(payload, dict) else None
        if not isinstance(node, dict) or not node.get("success"):
            return None
        data = node.get("data")
        if not isinstance(data, dict):
            return None
        return data.get("price_overview")


def parse_price_overview(overview: Optional[Dict[str, Any]]) -> Optional[SteamPrice]:
    """Convert a price overview (``final`` in minor units) to a SteamPrice."""
    if not isinstance(overview, dict):
        return None

    final = overview.get("final")
    currency = overview.get("currency")
    if isinstance(final, bool) or not isinstance(final, (int, float)):
        return None
    if not isinstance(currency, str) or not currency:
        return None

    return SteamPrice(amount=final / 100, currency=currency)


class SteamPriceService:
    """Cached exact local prices for Steam apps."""

    def __init__(
        self,
        cache: TTLCache,
        source: Optional[ILocalPriceSource] = None,
        ttl_hours: int = 12,
        network_available: bool = True,
    ):
        """
        Initialize the price service.

        Args:
            cache: TTL cache for fetched prices
            source: Storefront price source
            ttl_hours: How long a fetched price stays fresh
            network_available: Whether live lookups may be attempted
        """
        self.cache = cache
        self.source = source or SteamStoreApiSource()
        self.ttl_seconds = ttl_hours * 60 * 60
        self.network_available = network_available

    @staticmethod
    def cache_key(app_id: str, country_code: str) -> str:
        return f"{CACHE_KEY_PREFIX}{app_id}:{country_code}"

    @with_error_handling(
        component="steam.price",
        category=ErrorCategory.EXTERNAL_SERVICE,
        severity=ErrorSeverity.LOW,
        fallback_value=None,
        suppress_exceptions=True,
    )
    async def _fetch(self, app_id: str, country_code: str) -> Optional[SteamPrice]:
        overview = await self.source.fetch_price_overview(app_id, country_code)
        return parse_price_overview(overview)

    async def get_local_price(self, app_id: str, country_code: str) -> Optional[SteamPrice]:
        """
        Exact local price for an app, or None when unavailable.

        Args:
            app_id: Steam app id
            country_code: Steam country code (e.g. "IN")
        """
        key = self.cache_key(app_id, country_code)
        cached = self.cache.get(key, self.ttl_seconds)
        if cached is not None:
            try:
                return SteamPrice.from_dict(cached)
            except (KeyError, TypeError, ValueError) as e:
                logger.debug("Ignoring malformed cached price", extra={"key": key, "error": str(e)})

        if not self.network_available:
            return None

        price = await self._fetch(app_id, country_code)
        if price is None:
            return None

        self.cache.put(key, price.to_dict())
        return price
