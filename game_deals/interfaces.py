"""
Protocol interfaces for the Game Deals engine.

This module defines the protocol interfaces for the external collaborators
the engine depends on: the deal catalog, the exchange-rate source, the
per-title local price source and the key/value persistence layer.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol

if TYPE_CHECKING:
    from .models.catalog import DealQuery, Store
    from .models.deal import CatalogDeal


class ICatalogClient(Protocol):
    """Protocol for the upstream deal catalog."""

    async def get_stores(self) -> List["Store"]:
        """Fetch the storefront directory."""
        ...

    async def get_deals(self, query: "DealQuery") -> List["CatalogDeal"]:
        """Fetch one page of raw deal records."""
        ...


class IRateSource(Protocol):
    """Protocol for USD-based exchange-rate lookups."""

    async def fetch_usd_rates(self) -> Dict[str, Any]:
        """Fetch ``{"date": ..., "rates": {...}}`` for USD."""
        ...


class ILocalPriceSource(Protocol):
    """Protocol for exact per-title storefront prices."""

    async def fetch_price_overview(
        self, app_id: str, country_code: str
    ) -> Optional[Dict[str, Any]]:
        """Fetch the storefront price overview for one app and region."""
        ...


class IKeyValueStore(Protocol):
    """Protocol for string key/value persistence."""

    def get(self, key: str) -> Optional[str]:
        """Read a value, None when absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Write a value."""
        ...

    def remove(self, key: str) -> None:
        """Delete a value if present."""
        ...
