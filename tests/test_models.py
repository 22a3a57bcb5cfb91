"""
Unit tests for data models.
"""

import pytest

from game_deals.models import (
    CatalogConfig,
    CatalogDeal,
    Configuration,
    CurrencyConfig,
    DealListing,
    DealQuery,
    DealScore,
    DisplayConfig,
    FxRates,
    LocalPrice,
    LoggingConfig,
    PriceKind,
    QualityTier,
    SteamPrice,
    Store,
)
from game_deals.models.pricing import DealType


class TestCatalogDeal:
    """Test cases for CatalogDeal model."""

    def test_from_dict(self, raw_deal_data):
        record = CatalogDeal.from_dict(raw_deal_data)

        assert record.title == "Hades"
        assert record.deal_id == "abc123"
        assert record.store_id == "1"
        assert record.sale_price == "9.99"
        assert record.steam_app_id == "1145360"
        assert record.validate() is True

    def test_numeric_store_id_becomes_string(self, raw_deal_data):
        record = CatalogDeal.from_dict(dict(raw_deal_data, storeID=25))

        assert record.store_id == "25"

    def test_numeric_ids_become_strings(self, raw_deal_data):
        record = CatalogDeal.from_dict(
            dict(raw_deal_data, dealID=42, gameID=208876, steamAppID=1145360)
        )

        assert record.deal_id == "42"
        assert record.game_id == "208876"
        assert record.steam_app_id == "1145360"

    def test_missing_steam_app_id(self, raw_deal_data):
        record = CatalogDeal.from_dict(dict(raw_deal_data, steamAppID=None))

        assert record.steam_app_id is None

    def test_missing_store_id(self, raw_deal_data):
        record = CatalogDeal.from_dict(dict(raw_deal_data, storeID=None))

        with pytest.raises(ValueError, match="store ID cannot be empty"):
            record.validate()


class TestDeal:
    """Test cases for Deal model."""

    def test_valid_deal(self, sample_deal):
        assert sample_deal.validate() is True

    def test_empty_title(self, deal_factory):
        with pytest.raises(ValueError, match="title cannot be empty"):
            deal_factory(title="").validate()

    def test_no_platforms(self, deal_factory):
        with pytest.raises(ValueError, match="at least one platform"):
            deal_factory(platforms=()).validate()

    def test_negative_price(self, deal_factory):
        with pytest.raises(ValueError, match="Current price cannot be negative"):
            deal_factory(current_price=-1).validate()

    def test_rating_out_of_range(self, deal_factory):
        with pytest.raises(ValueError, match="Steam rating percent"):
            deal_factory(steam_rating_percent=101).validate()

    def test_is_immutable(self, sample_deal):
        with pytest.raises(AttributeError):
            sample_deal.title = "Other"

    def test_claim_links_ignored_for_equality(self, deal_factory):
        assert deal_factory(claim_links={"steam": "a"}) == deal_factory(claim_links=None)


class TestDealScore:
    """Test cases for DealScore model."""

    def test_fraction_out_of_range(self):
        with pytest.raises(ValueError, match="discount_fraction"):
            DealScore(discount_fraction=1.5, score=0, discount_percent=0, savings=0).validate()


class TestQualityTier:
    """Test cases for QualityTier."""

    def test_rank_order(self):
        assert QualityTier.GREAT.rank > QualityTier.GOOD.rank > QualityTier.UNKNOWN.rank


class TestStore:
    """Test cases for Store model."""

    def test_from_dict(self):
        store = Store.from_dict(
            {"storeID": "1", "storeName": "Steam", "isActive": 1, "images": {"logo": "/a.png"}}
        )

        assert store.store_id == "1"
        assert store.is_active is True
        assert store.images == {"logo": "/a.png"}

    def test_inactive(self):
        assert Store.from_dict({"storeID": "2", "storeName": "X", "isActive": 0}).is_active is False


class TestDealQuery:
    """Test cases for DealQuery model."""

    def test_default_stores(self):
        assert DealQuery.for_default_stores().store_ids == ["1", "25", "11"]
        assert DealQuery.for_default_stores(include_humble=False).store_ids == ["1", "25"]

    def test_to_params(self):
        query = DealQuery.for_default_stores(page_number=2, upper_price=15)

        assert query.to_params() == {
            "storeID": "1,25,11",
            "onSale": "1",
            "upperPrice": "15",
            "pageSize": "50",
            "pageNumber": "2",
            "sortBy": "Deal Rating",
        }

    def test_invalid_page_size(self):
        with pytest.raises(ValueError, match="Page size"):
            DealQuery(page_size=61).validate()

    def test_invalid_sort_key(self):
        with pytest.raises(ValueError, match="Sort key"):
            DealQuery(sort_by="Popularity").validate()

    def test_inverted_price_range(self):
        with pytest.raises(ValueError, match="Upper price"):
            DealQuery(lower_price=10, upper_price=5).validate()


class TestCurrencyModels:
    """Test cases for currency models."""

    def test_fx_rates_roundtrip(self):
        rates = FxRates(date="2025-06-01", rates={"USD": 1, "EUR": 0.9})

        restored = FxRates.from_dict(rates.to_dict())

        assert restored.rates == {"USD": 1.0, "EUR": 0.9}
        assert restored.date == "2025-06-01"

    def test_fx_rates_rejects_bad_payload(self):
        with pytest.raises(ValueError):
            FxRates.from_dict({"date": "2025-06-01", "rates": [1, 2]})

    def test_fx_rates_validation(self):
        with pytest.raises(ValueError, match="Invalid rate"):
            FxRates(date="2025-06-01", rates={"EUR": -1}).validate()

    def test_steam_price_from_dict(self):
        assert SteamPrice.from_dict({"amount": "9.99", "currency": "EUR"}) == SteamPrice(9.99, "EUR")

    def test_local_price_text(self):
        assert str(LocalPrice("€9.19", PriceKind.EXACT)) == "€9.19"
        assert str(LocalPrice("€9.19", PriceKind.APPROX)) == "≈ €9.19"


class TestDealListing:
    """Test cases for DealListing."""

    def test_render(self, sample_deal):
        listing = DealListing(
            deal=sample_deal,
            price_text="$29.99 (-50%)",
            deal_type=DealType.SALE,
            quality=QualityTier.GOOD,
            platforms=("steam", "epic"),
            local_price=LocalPrice("€27.60", PriceKind.APPROX),
        )

        assert listing.render() == (
            "[SALE] Test Game $29.99 (-50%) ≈ €27.60 (steam, epic) quality=good"
        )

    def test_render_minimal(self, sample_deal):
        listing = DealListing(
            deal=sample_deal,
            price_text="Free",
            deal_type=DealType.FREE,
            quality=QualityTier.UNKNOWN,
            platforms=("steam",),
        )

        assert listing.render() == "[FREE] Test Game Free (steam)"


class TestConfiguration:
    """Test cases for Configuration models."""

    def test_defaults_are_valid(self):
        assert Configuration().validate() is True

    def test_invalid_catalog_url(self):
        with pytest.raises(ValueError, match="HTTP or HTTPS"):
            CatalogConfig(base_url="ftp://example.com/api").validate()

    def test_invalid_region(self):
        with pytest.raises(ValueError, match="Region"):
            CurrencyConfig(region="XX").validate()

    def test_invalid_ttl(self):
        with pytest.raises(ValueError, match="FX TTL"):
            CurrencyConfig(fx_ttl_hours=0).validate()

    def test_invalid_sort_mode(self):
        with pytest.raises(ValueError, match="Sort mode"):
            DisplayConfig(sort_mode="random").validate()

    def test_invalid_price_range(self):
        with pytest.raises(ValueError, match="sale_price_range"):
            DisplayConfig(sale_price_range=[20, 10]).validate()

    def test_log_level_case_insensitive(self):
        assert LoggingConfig(level="debug").validate() is True

    def test_nested_validation(self):
        config = Configuration()
        config.catalog.page_size = 0

        with pytest.raises(ValueError, match="page size"):
            config.validate()
