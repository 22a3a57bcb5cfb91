"""
Catalog normalization components for the Game Deals engine.

This module converts raw upstream catalog records into canonical Deal
objects, resolves storefront keys, builds claim links, and keeps the
storefront directory used to name stores.
"""

import logging
import math
from typing import Any, Dict, List, Optional

from ..interfaces import ICatalogClient
from ..models.catalog import Store
from ..models.deal import CatalogDeal, Deal

logger = logging.getLogger(__name__)

# Upstream store id -> canonical storefront key
STORE_KEYS: Dict[str, str] = {
    "1": "steam",
    "25": "epic",
    "11": "humble",
}

# Checked in order against the lowercased store name
STORE_NAME_HINTS = ["steam", "epic", "humble", "gog"]

STEAM_APP_URL = "https://store.steampowered.com/app/{app_id}/"
REDIRECT_URL = "https://www.cheapshark.com/redirect?dealID={deal_id}"


def parse_number(value: Any) -> float:
    """
    Parse an untrusted numeric field.

    Upstream numbers arrive as strings; anything unparseable or non-finite
    becomes 0.0 rather than NaN or an exception.
    """
    if isinstance(value, bool) or value is None:
        return 0.0

    try:
        if isinstance(value, (int, float)):
            number = float(value)
        else:
            number = float(str(value).strip())
    except (ValueError, OverflowError):
        return 0.0

    return number if math.isfinite(number) else 0.0


def normalize_store_key(store_id: str, store_name: Optional[str] = None) -> str:
    """Resolve the canonical storefront key for an upstream store."""
    if store_id in STORE_KEYS:
        return STORE_KEYS[store_id]

    name = (store_name or "").lower()
    for hint in STORE_NAME_HINTS:
        if hint in name:
            return hint

    return name or store_id


class StoreDirectory:
    """Session cache of active storefronts, keyed by store id."""

    def __init__(self, client: ICatalogClient):
        """Initialize the directory around a catalog client."""
        self.client = client
        self._stores: Optional[List[Store]] = None

    async def get_stores(self) -> List[Store]:
        """Return active stores, fetching them on first use."""
        if self._stores is None:
            await self.refresh()
        return list(self._stores or [])

    async def refresh(self) -> List[Store]:
        """Re-fetch the directory from the catalog."""
        stores = await self.client.get_stores()
        self._stores = [store for store in stores if store.is_active]
        logger.debug(f"Store directory refreshed with {len(self._stores)} active stores")
        return list(self._stores)

    def invalidate(self) -> None:
        """Drop the cached directory so the next lookup re-fetches it."""
        self._stores = None

    @property
    def is_loaded(self) -> bool:
        return self._stores is not None

    async def names_by_id(self) -> Dict[str, str]:
        """Map of store id to display name."""
        return {store.store_id: store.store_name for store in await self.get_stores()}


class DealParser:
    """Maps raw catalog records to canonical Deal objects."""

    def map_deal(self, record: CatalogDeal, store_name: Optional[str] = None) -> Deal:
        """
        Map a raw catalog deal to a Deal.

        Args:
            record: Raw record from the catalog
            store_name: Display name of the record's store, if known

        Returns:
            Normalized Deal
        """
        platform_key = normalize_store_key(record.store_id, store_name)

        claim_links: Dict[str, str] = {}
        if record.steam_app_id:
            claim_links["steam"] = STEAM_APP_URL.format(app_id=record.steam_app_id)
        if record.deal_id:
            claim_links[platform_key] = REDIRECT_URL.format(deal_id=record.deal_id)

        return Deal(
            title=record.title,
            image=record.thumb,
            list_price=parse_number(record.normal_price),
            current_price=parse_number(record.sale_price),
            platforms=(platform_key,),
            deal_id=record.deal_id or None,
            game_id=record.game_id or None,
            steam_app_id=record.steam_app_id or None,
            claim_links=claim_links or None,
            steam_rating_percent=parse_number(record.steam_rating_percent),
            steam_rating_count=parse_number(record.steam_rating_count),
            metacritic_score=parse_number(record.metacritic_score),
            deal_rating=parse_number(record.deal_rating),
        )

    def map_deals(
        self, records: List[CatalogDeal], store_names: Dict[str, str]
    ) -> List[Deal]:
        """Map a page of records, skipping ones without a title."""
        deals = []
        for record in records:
            try:
                record.validate()
            except ValueError as e:
                logger.warning(f"Skipping catalog record {record.deal_id!r}: {e}")
                continue
            deals.append(self.map_deal(record, store_names.get(record.store_id)))
        return deals


def map_deal(record: CatalogDeal, store_name: Optional[str] = None) -> Deal:
    """Module-level convenience around DealParser.map_deal."""
    return DealParser().map_deal(record, store_name)
