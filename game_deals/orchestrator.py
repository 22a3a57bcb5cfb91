"""
Deal browser orchestrator for the Game Deals engine.

This module wires configuration, services and engine components together
and produces the ranked, localized deal list a UI renders.
"""

import asyncio
from typing import List, Optional

from .components.claim_resolver import ClaimResolver
from .components.deal_filter import DealFilter, visible_platforms
from .components.pricing_engine import (
    classify_deal_with_quality,
    compute_deal_score,
    format_price,
)
from .components.quality_gate import quality_tier
from .components.ranking_engine import sort_deals
from .interfaces import ICatalogClient, IKeyValueStore
from .models.catalog import DealQuery
from .models.config import Configuration
from .models.currency import FxRates
from .models.deal import Deal
from .models.filter import DealFilterCriteria
from .models.listing import DealListing
from .models.pricing import DealType, SortMode
from .services.cache_store import JsonFileStore, TTLCache
from .services.catalog_client import CheapSharkClient
from .services.deal_service import DealService, sample_deals
from .services.fx_service import FxService, OpenErApiRateSource, currency_for_region
from .services.price_localizer import PriceLocalizer
from .services.steam_price_service import SteamPriceService
from .utils.error_handling import (
    CatalogError,
    ErrorCategory,
    ErrorSeverity,
    get_error_tracker,
)
from .utils.logging import get_logger


def criteria_from_config(config: Configuration) -> DealFilterCriteria:
    """Build filter criteria from the display section."""
    display = config.display
    return DealFilterCriteria(
        search_text=display.search,
        platforms=frozenset(display.platforms),
        deal_type=None if display.deal_type == "all" else DealType(display.deal_type),
        include_humble=config.catalog.include_humble,
        list_price_range=tuple(display.list_price_range) if display.list_price_range else None,
        sale_price_range=tuple(display.sale_price_range) if display.sale_price_range else None,
    )


class DealBrowser:
    """
    Coordinates one browsing session.

    Holds the loaded deal list across pages and turns it into display rows.
    """

    def __init__(
        self,
        config: Configuration,
        client: Optional[ICatalogClient] = None,
        store: Optional[IKeyValueStore] = None,
    ):
        """
        Initialize the browser.

        Args:
            config: Validated configuration
            client: Catalog client; a CheapSharkClient when omitted
            store: Key/value store for caches; a JsonFileStore when omitted
        """
        self.config = config
        self.logger = get_logger("orchestrator")
        self.error_tracker = get_error_tracker()

        self.client = client or CheapSharkClient(
            base_url=config.catalog.base_url, timeout=config.catalog.timeout
        )
        cache = TTLCache(store or JsonFileStore(config.cache.path))

        self.deal_service = DealService(self.client)
        self.fx_service = FxService(
            cache,
            source=OpenErApiRateSource(config.currency.fx_url),
            ttl_hours=config.currency.fx_ttl_hours,
            network_available=config.currency.network_available,
        )
        self.steam_prices = SteamPriceService(
            cache,
            ttl_hours=config.currency.local_price_ttl_hours,
            network_available=config.currency.network_available,
        )
        self.localizer = PriceLocalizer(self.fx_service, self.steam_prices)
        self.claim_resolver = ClaimResolver(config.catalog.include_humble)

        self.deals: List[Deal] = []
        self.page = 0
        self.last_error: Optional[str] = None

    def _query(self, page_number: int) -> DealQuery:
        return DealQuery.for_default_stores(
            include_humble=self.config.catalog.include_humble,
            page_size=self.config.catalog.page_size,
            page_number=page_number,
            sort_by=self.config.catalog.sort_by,
        )

    async def load(self, page_number: int = 0, replace: bool = True) -> List[Deal]:
        """
        Load a catalog page into the session list.

        On a catalog failure the error is kept in ``last_error`` and, when
        nothing is loaded yet, the sample list is shown instead.
        """
        try:
            previous = [] if replace else self.deals
            self.deals = await self.deal_service.load_page(self._query(page_number), previous)
            self.page = page_number
            self.last_error = None
        except CatalogError as e:
            self.last_error = str(e)
            self.error_tracker.record_error(
                component="orchestrator",
                category=ErrorCategory.NETWORK,
                severity=ErrorSeverity.HIGH,
                message="Failed to load deals",
                exception=e,
                context={"page": page_number},
            )
            if replace or not self.deals:
                self.deals = sample_deals()
        return self.deals

    async def load_more(self) -> List[Deal]:
        """Append the next page."""
        return await self.load(self.page + 1, replace=False)

    async def _listing(self, deal: Deal, rates: Optional[FxRates]) -> DealListing:
        metrics = compute_deal_score(deal.list_price, deal.current_price)
        local_price = await self.localizer.localize(deal, self.config.currency.region, rates)
        return DealListing(
            deal=deal,
            price_text=format_price(deal.list_price, deal.current_price),
            deal_type=classify_deal_with_quality(deal),
            quality=quality_tier(deal),
            platforms=visible_platforms(deal, self.config.catalog.include_humble),
            discount_percent=metrics.discount_percent or None,
            local_price=local_price,
        )

    async def listings(
        self,
        criteria: Optional[DealFilterCriteria] = None,
        sort_mode: Optional[SortMode] = None,
    ) -> List[DealListing]:
        """Filter, rank and localize the loaded deals."""
        criteria = criteria or criteria_from_config(self.config)
        sort_mode = sort_mode or SortMode(self.config.display.sort_mode)

        visible = DealFilter(criteria).apply(self.deals)
        ranked = sort_deals(visible, sort_mode)

        # One rate table per render, shared by every row
        rates = None
        if ranked and currency_for_region(self.config.currency.region) != "USD":
            rates = await self.fx_service.get_usd_rates()

        return list(await asyncio.gather(*(self._listing(deal, rates) for deal in ranked)))

    def claim_url(self, deal: Deal, preferred_store: Optional[str] = None) -> Optional[str]:
        """URL to open for a claim, or None when the viewer must pick a store."""
        platform = self.claim_resolver.choose_platform(deal, preferred_store)
        if platform is None:
            return None
        return self.claim_resolver.resolve_url(platform, deal)

    async def close(self) -> None:
        """Release network resources."""
        close = getattr(self.client, "close", None)
        if close is not None:
            await close()
