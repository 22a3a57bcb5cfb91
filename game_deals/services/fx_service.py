"""
Currency conversion service.

Provides USD-based exchange rates with a 24h persisted cache and a static
fallback table, plus conversion and currency formatting helpers. Rate
lookups never raise; rendering always gets some number.
"""

import locale
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import aiohttp
from aiohttp import ClientTimeout
from dateutil import parser as date_parser

from ..interfaces import IRateSource
from ..models.currency import FxRates
from ..utils.error_handling import (
    ErrorCategory,
    ErrorSeverity,
    get_degradation_manager,
    with_error_handling,
)
from ..utils.logging import get_logger
from .cache_store import TTLCache

logger = get_logger("fx.service")

FX_CACHE_KEY = "fx:USD:rates"
DEFAULT_FX_URL = "https://open.er-api.com/v6/latest/USD"

REGION_TO_CURRENCY: Dict[str, str] = {
    "auto": "USD",
    "US": "USD",
    "GB": "GBP",
    "EU": "EUR",
    "CA": "CAD",
    "AU": "AUD",
    "JP": "JPY",
    "BR": "BRL",
    "IN": "INR",
}

CURRENCY_SYMBOLS: Dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "CAD": "CA$",
    "AUD": "A$",
    "JPY": "¥",
    "BRL": "R$",
    "INR": "₹",
}

# No minor unit; formatted without decimals
ZERO_DECIMAL_CURRENCIES = frozenset({"JPY", "KRW", "VND", "CLP", "ISK"})

# Rough values for when the live source is unreachable
FALLBACK_RATES = FxRates(
    date="2025-01-01",
    rates={
        "USD": 1.0,
        "EUR": 0.92,
        "GBP": 0.78,
        "CAD": 1.35,
        "AUD": 1.50,
        "JPY": 150.0,
        "BRL": 5.2,
        "INR": 83.0,
    },
)


def currency_for_region(region: str) -> str:
    """Currency code for a region setting, USD when unknown."""
    return REGION_TO_CURRENCY.get(region, "USD")


def convert_from_usd(amount_usd: float, currency: str, rates: Optional[FxRates]) -> float:
    """Convert a USD amount; no rates means USD parity, unknown codes use 1."""
    if rates is None:
        return amount_usd
    return amount_usd * rates.rates.get(currency, 1)


def _format_with_locale(amount: float, currency: str) -> str:
    conventions = locale.localeconv()
    if conventions.get("int_curr_symbol", "").strip() != currency:
        raise ValueError(f"Active locale does not format {currency}")
    return locale.currency(amount, symbol=True, grouping=True)


def format_currency(amount: float, currency: str) -> str:
    """
    Format an amount in the given currency.

    Uses the active locale's monetary conventions when they are for this
    currency, otherwise a symbol-prefixed amount (bare number for unknown
    codes) with 0 or 2 decimals depending on the currency's minor unit.
    """
    try:
        return _format_with_locale(amount, currency)
    except ValueError:
        symbol = CURRENCY_SYMBOLS.get(currency, "")
        digits = 0 if currency in ZERO_DECIMAL_CURRENCIES else 2
        return f"{symbol}{amount:.{digits}f}"


class OpenErApiRateSource:
    """Live USD rates from the open exchange-rate API (no key required)."""

    def __init__(self, url: str = DEFAULT_FX_URL, timeout: int = 10):
        self.url = url
        self.timeout = timeout

    async def fetch_usd_rates(self) -> Dict[str, Any]:
        """
        Fetch USD-based rates.

        Returns:
            ``{"date": <ISO timestamp>, "rates": {code: rate}}``

        Raises:
            aiohttp.ClientError: On transport or HTTP failure
            ValueError: If the payload has no rate table
        """
        async with aiohttp.ClientSession(timeout=ClientTimeout(total=self.timeout)) as session:
            async with session.get(self.url) as response:
                response.raise_for_status()
                payload = await response.json(content_type=None)

        rates = payload.get("rates") if isinstance(payload, dict) else None
        if not isinstance(rates, dict) or not rates:
            raise ValueError("FX response does not contain a rate table")

        updated = payload.get("time_last_update_utc")
        if updated:
            date = date_parser.parse(updated).isoformat()
        else:
            date = datetime.now(timezone.utc).isoformat()

        return {"date": date, "rates": rates}


class FxService:
    """Cached access to USD exchange rates."""

    def __init__(
        self,
        cache: TTLCache,
        source: Optional[IRateSource] = None,
        ttl_hours: int = 24,
        network_available: bool = True,
    ):
        """
        Initialize the FX service.

        Args:
            cache: TTL cache used to persist the rate table
            source: Live rate source
            ttl_hours: How long a fetched table stays fresh
            network_available: Whether live fetches may be attempted
        """
        self.cache = cache
        self.source = source or OpenErApiRateSource()
        self.ttl_seconds = ttl_hours * 60 * 60
        self.network_available = network_available
        self.degradation_manager = get_degradation_manager()

    def _cached_rates(self) -> Optional[FxRates]:
        data = self.cache.get(FX_CACHE_KEY, self.ttl_seconds)
        if data is None:
            return None
        try:
            return FxRates.from_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.debug("Ignoring malformed cached FX rates", extra={"error": str(e)})
            return None

    @with_error_handling(
        component="fx.service",
        category=ErrorCategory.EXTERNAL_SERVICE,
        severity=ErrorSeverity.LOW,
        fallback_value=None,
        suppress_exceptions=True,
    )
    async def _fetch_live_rates(self) -> Optional[FxRates]:
        payload = await self.source.fetch_usd_rates()
        rates = FxRates.from_dict(payload)
        rates.validate()
        return rates

    async def get_usd_rates(self) -> FxRates:
        """Return fresh cached rates, else live rates, else the fallback table."""
        cached = self._cached_rates()
        if cached is not None:
            return cached

        if self.network_available:
            live = await self._fetch_live_rates()
            if live is not None:
                self.cache.put(FX_CACHE_KEY, live.to_dict())
                self.degradation_manager.restore_component("fx.service")
                logger.info("Fetched live FX rates", extra={"date": live.date})
                return live

        self.degradation_manager.degrade_component(
            "fx.service",
            reason="Live exchange rates unavailable",
            fallback_behavior=f"Serving built-in rates from {FALLBACK_RATES.date}",
            severity=ErrorSeverity.LOW,
        )
        return FALLBACK_RATES

    async def convert(self, amount_usd: float, currency: str) -> float:
        """Convert with the current rate table."""
        return convert_from_usd(amount_usd, currency, await self.get_usd_rates())
