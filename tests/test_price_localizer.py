"""Unit tests for local price display."""

from unittest.mock import AsyncMock, Mock

import pytest

from game_deals.models.currency import FxRates, PriceKind, SteamPrice
from game_deals.services.price_localizer import PriceLocalizer


@pytest.fixture
def fx_service():
    service = Mock()
    service.get_usd_rates = AsyncMock(
        return_value=FxRates(date="2025-06-01", rates={"USD": 1, "EUR": 0.9, "INR": 83})
    )
    return service


@pytest.fixture
def steam_prices():
    service = Mock()
    service.get_local_price = AsyncMock(return_value=SteamPrice(399.0, "INR"))
    return service


@pytest.fixture
def localizer(fx_service, steam_prices):
    return PriceLocalizer(fx_service, steam_prices)


class TestPriceLocalizer:
    """Test cases for PriceLocalizer."""

    @pytest.mark.asyncio
    async def test_exact_price_preferred(self, localizer, steam_prices, deal_factory):
        deal = deal_factory(steam_app_id="1145360", current_price=9.99)

        price = await localizer.localize(deal, "IN")

        assert price.kind is PriceKind.EXACT
        assert price.text == "₹399.00"
        assert str(price) == "₹399.00"
        steam_prices.get_local_price.assert_awaited_once_with("1145360", "IN")

    @pytest.mark.asyncio
    async def test_eu_region_queries_german_store(self, localizer, steam_prices, deal_factory):
        deal = deal_factory(steam_app_id="1145360", current_price=9.99)

        await localizer.localize(deal, "EU")

        steam_prices.get_local_price.assert_awaited_once_with("1145360", "DE")

    @pytest.mark.asyncio
    async def test_approx_when_no_exact(self, localizer, steam_prices, deal_factory):
        steam_prices.get_local_price.return_value = None
        deal = deal_factory(steam_app_id="1145360", current_price=10)

        price = await localizer.localize(deal, "EU")

        assert price.kind is PriceKind.APPROX
        assert price.text == "€9.00"
        assert str(price) == "≈ €9.00"

    @pytest.mark.asyncio
    async def test_approx_without_steam_app(self, localizer, steam_prices, deal_factory):
        price = await localizer.localize(deal_factory(current_price=10), "EU")

        assert price.kind is PriceKind.APPROX
        steam_prices.get_local_price.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_zero_exact_quote_ignored(self, localizer, steam_prices, deal_factory):
        steam_prices.get_local_price.return_value = SteamPrice(0.0, "EUR")
        deal = deal_factory(steam_app_id="1", current_price=10)

        price = await localizer.localize(deal, "EU")

        assert price.kind is PriceKind.APPROX

    @pytest.mark.asyncio
    async def test_usd_region_without_exact(self, localizer, fx_service, deal_factory):
        assert await localizer.localize(deal_factory(current_price=10), "US") is None
        fx_service.get_usd_rates.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_free_deal_has_no_local_price(self, localizer, steam_prices, deal_factory):
        deal = deal_factory(steam_app_id="1145360", current_price=0)

        assert await localizer.localize(deal, "IN") is None
        steam_prices.get_local_price.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_supplied_rates_skip_lookup(self, localizer, fx_service, deal_factory):
        rates = FxRates(date="2025-06-01", rates={"USD": 1, "EUR": 0.5})

        price = await localizer.localize(deal_factory(current_price=10), "EU", rates)

        assert price.text == "€5.00"
        fx_service.get_usd_rates.assert_not_awaited()
