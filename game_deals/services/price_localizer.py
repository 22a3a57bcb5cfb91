"""
Local-currency price display for deals.

Prefers the exact storefront quote over the FX approximation and tags
which one was used.
"""

import re
from typing import Optional

from ..components.pricing_engine import FREE_PRICE_THRESHOLD
from ..models.currency import FxRates, LocalPrice, PriceKind
from ..models.deal import Deal
from .fx_service import FxService, convert_from_usd, currency_for_region, format_currency
from .steam_price_service import SteamPriceService, steam_country_for_region

WHITESPACE = re.compile(r"\s")


class PriceLocalizer:
    """Builds the local price shown next to a deal's USD price."""

    def __init__(self, fx_service: FxService, steam_prices: SteamPriceService):
        self.fx_service = fx_service
        self.steam_prices = steam_prices

    async def exact_price(self, deal: Deal, region: str) -> Optional[LocalPrice]:
        """Storefront quote for the deal's Steam app, when there is one."""
        if not deal.steam_app_id or deal.current_price <= FREE_PRICE_THRESHOLD:
            return None

        quote = await self.steam_prices.get_local_price(
            deal.steam_app_id, steam_country_for_region(region)
        )
        if quote is None or quote.amount <= 0:
            return None

        text = WHITESPACE.sub("", format_currency(quote.amount, quote.currency))
        return LocalPrice(text=text, kind=PriceKind.EXACT)

    async def approx_price(
        self, deal: Deal, region: str, rates: Optional[FxRates] = None
    ) -> Optional[LocalPrice]:
        """
        FX-converted estimate, only for non-USD regions and paid deals.

        Pass ``rates`` when localizing many deals so the table is fetched
        once by the caller; otherwise it is looked up here.
        """
        currency = currency_for_region(region)
        if currency == "USD" or deal.current_price <= FREE_PRICE_THRESHOLD:
            return None

        if rates is None:
            rates = await self.fx_service.get_usd_rates()
        amount = convert_from_usd(deal.current_price, currency, rates)
        text = WHITESPACE.sub("", format_currency(amount, currency))
        return LocalPrice(text=text, kind=PriceKind.APPROX)

    async def localize(
        self, deal: Deal, region: str, rates: Optional[FxRates] = None
    ) -> Optional[LocalPrice]:
        """Exact price if available, else the approximation, else None."""
        exact = await self.exact_price(deal, region)
        if exact is not None:
            return exact
        return await self.approx_price(deal, region, rates)
