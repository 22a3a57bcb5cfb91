"""
Deal service: fetches catalog pages and turns them into merged Deals.
"""

import asyncio
from typing import List, Optional

from ..components.deal_parser import DealParser, StoreDirectory
from ..components.merge_engine import merge_deals_by_game
from ..interfaces import ICatalogClient
from ..models.catalog import DealQuery
from ..models.deal import Deal
from ..utils.logging import get_logger

logger = get_logger("deal.service")

# Shown by a UI when the catalog cannot be reached
SAMPLE_DEALS: List[Deal] = [
    Deal(
        title="Sample: Hades",
        image="https://cdn.cloudflare.steamstatic.com/steam/apps/1145360/header.jpg",
        list_price=24.99,
        current_price=9.99,
        platforms=("steam", "epic"),
    ),
    Deal(
        title="Sample: Celeste",
        image="https://cdn.cloudflare.steamstatic.com/steam/apps/504230/header.jpg",
        list_price=19.99,
        current_price=0.0,
        platforms=("steam",),
    ),
    Deal(
        title="Sample: Cyberpunk 2077",
        image="https://cdn.cloudflare.steamstatic.com/steam/apps/1091500/header.jpg",
        list_price=59.99,
        current_price=29.99,
        platforms=("steam", "humble"),
    ),
]


def sample_deals() -> List[Deal]:
    """Built-in sample list, already merged."""
    return merge_deals_by_game(SAMPLE_DEALS)


class DealService:
    """Loads catalog pages as normalized, merged deals."""

    def __init__(
        self,
        client: ICatalogClient,
        parser: Optional[DealParser] = None,
        store_directory: Optional[StoreDirectory] = None,
    ):
        """
        Initialize the deal service.

        Args:
            client: Catalog client
            parser: Deal parser
            store_directory: Storefront directory cache; one is created
                around ``client`` when omitted
        """
        self.client = client
        self.parser = parser or DealParser()
        self.store_directory = store_directory or StoreDirectory(client)

    async def get_mapped_deals(self, query: DealQuery) -> List[Deal]:
        """
        Fetch one page and map it to Deals named by the store directory.

        Raises:
            CatalogError: If the catalog cannot be reached
        """
        store_names, records = await asyncio.gather(
            self.store_directory.names_by_id(), self.client.get_deals(query)
        )
        deals = self.parser.map_deals(records, store_names)
        logger.info(
            "Mapped catalog page",
            extra={"page": query.page_number, "records": len(records), "deals": len(deals)},
        )
        return deals

    async def load_page(
        self, query: DealQuery, previous: Optional[List[Deal]] = None
    ) -> List[Deal]:
        """Fetch a page and merge it into previously loaded deals."""
        page = await self.get_mapped_deals(query)
        return merge_deals_by_game(list(previous or []) + page)

    def refresh_stores(self) -> None:
        """Forget the cached storefront directory."""
        self.store_directory.invalidate()
