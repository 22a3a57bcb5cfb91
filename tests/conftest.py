"""
Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Game Deals test suite.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from game_deals.models.catalog import Store
from game_deals.models.config import Configuration
from game_deals.models.deal import CatalogDeal, Deal
from game_deals.services.cache_store import MemoryStore, TTLCache


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_deal(**overrides) -> Deal:
    """Build a Deal with sensible defaults."""
    values = dict(
        title="Test Game",
        image="https://example.com/thumb.jpg",
        list_price=59.99,
        current_price=29.99,
        platforms=("steam",),
    )
    values.update(overrides)
    return Deal(**values)


# Test data fixtures
@pytest.fixture
def raw_deal_data():
    """Upstream JSON for one deal, numbers as strings."""
    return {
        "internalName": "HADES",
        "title": "Hades",
        "metacriticLink": "/game/pc/hades",
        "dealID": "abc123",
        "storeID": "1",
        "gameID": "208876",
        "salePrice": "9.99",
        "normalPrice": "24.99",
        "isOnSale": "1",
        "savings": "60.024010",
        "metacriticScore": "93",
        "steamRatingText": "Overwhelmingly Positive",
        "steamRatingPercent": "98",
        "steamRatingCount": "250000",
        "steamAppID": "1145360",
        "releaseDate": 1600300800,
        "lastChange": 1700000000,
        "dealRating": "9.6",
        "thumb": "https://cdn.example.com/hades.jpg",
    }


@pytest.fixture
def sample_catalog_deal(raw_deal_data):
    """CatalogDeal built from the raw JSON."""
    return CatalogDeal.from_dict(raw_deal_data)


@pytest.fixture
def sample_deal():
    """A mid-priced Steam deal."""
    return make_deal()


@pytest.fixture
def sample_stores():
    """Storefront directory entries."""
    return [
        Store(store_id="1", store_name="Steam", is_active=True),
        Store(store_id="7", store_name="GOG", is_active=True),
        Store(store_id="11", store_name="Humble Store", is_active=True),
        Store(store_id="25", store_name="Epic Games Store", is_active=True),
        Store(store_id="99", store_name="Closed Shop", is_active=False),
    ]


@pytest.fixture
def clock():
    """Controllable clock."""
    return FakeClock()


@pytest.fixture
def memory_cache(clock):
    """TTL cache over an in-memory store."""
    return TTLCache(MemoryStore(), clock=clock)


@pytest.fixture
def sample_configuration():
    """Default configuration with network lookups disabled."""
    config = Configuration()
    config.currency.network_available = False
    return config


# Mock fixtures
@pytest.fixture
def mock_catalog_client(sample_stores, raw_deal_data):
    """Catalog client returning one Steam and one Epic listing of Hades."""
    epic = dict(raw_deal_data, dealID="def456", storeID="25", salePrice="14.99")
    client = Mock()
    client.get_stores = AsyncMock(return_value=sample_stores)
    client.get_deals = AsyncMock(
        return_value=[CatalogDeal.from_dict(raw_deal_data), CatalogDeal.from_dict(epic)]
    )
    client.close = AsyncMock()
    return client


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")


def pytest_collection_modifyitems(config, items):
    """Add the unit marker to every test not marked otherwise."""
    for item in items:
        if not any(
            marker.name in ["integration", "slow"] for marker in item.iter_markers()
        ):
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def deal_factory():
    """Factory for Deals with overridable fields."""
    return make_deal
