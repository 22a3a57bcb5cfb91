"""Unit tests for the ranking engine."""

import random

import pytest

from game_deals.components.ranking_engine import sort_deals
from game_deals.models.pricing import SortMode


@pytest.fixture
def ranked_deals(deal_factory):
    """A small catalog with distinct quality, discount and price."""
    return [
        deal_factory(title="Bargain Bin", list_price=5, current_price=1),
        deal_factory(
            title="Critic Darling",
            list_price=40,
            current_price=30,
            metacritic_score=92,
        ),
        deal_factory(
            title="Big Sale",
            list_price=60,
            current_price=15,
            steam_rating_percent=85,
            steam_rating_count=500,
        ),
        deal_factory(title="Full Price", list_price=20, current_price=20),
    ]


def _titles(deals):
    return [deal.title for deal in deals]


class TestSortDeals:
    """Test cases for sort_deals."""

    def test_quality_mode(self, ranked_deals):
        """Test quality tier leads, then score."""
        result = sort_deals(ranked_deals, SortMode.QUALITY)

        assert _titles(result) == ["Critic Darling", "Big Sale", "Bargain Bin", "Full Price"]

    def test_discount_mode(self, ranked_deals):
        """Test score leads regardless of quality."""
        result = sort_deals(ranked_deals, SortMode.DISCOUNT)

        assert _titles(result) == ["Big Sale", "Bargain Bin", "Critic Darling", "Full Price"]

    def test_price_low_mode(self, ranked_deals):
        result = sort_deals(ranked_deals, "price-low")

        assert [deal.current_price for deal in result] == [1, 15, 20, 30]

    def test_price_high_mode(self, ranked_deals):
        result = sort_deals(ranked_deals, "price-high")

        assert [deal.current_price for deal in result] == [30, 20, 15, 1]

    def test_returns_new_list(self, ranked_deals):
        """Test the input list is left in its original order."""
        original = list(ranked_deals)

        sort_deals(ranked_deals, SortMode.DISCOUNT)

        assert ranked_deals == original

    @pytest.mark.parametrize("mode", list(SortMode))
    def test_deterministic_for_any_input_order(self, ranked_deals, mode):
        """Test the same deals always sort the same way."""
        expected = sort_deals(ranked_deals, mode)
        shuffled = list(ranked_deals)
        random.Random(7).shuffle(shuffled)

        assert sort_deals(shuffled, mode) == expected

    def test_full_tie_breaks_on_title(self, deal_factory):
        """Test identical metrics fall back to alphabetical title."""
        deals = [
            deal_factory(title="Zeta", list_price=10, current_price=5),
            deal_factory(title="Alpha", list_price=10, current_price=5),
        ]

        for mode in SortMode:
            assert _titles(sort_deals(deals, mode)) == ["Alpha", "Zeta"]

    def test_deal_rating_breaks_quality_ties(self, deal_factory):
        deals = [
            deal_factory(title="A", list_price=10, current_price=5, deal_rating=3.0),
            deal_factory(title="B", list_price=10, current_price=5, deal_rating=8.5),
        ]

        assert _titles(sort_deals(deals, SortMode.QUALITY)) == ["B", "A"]

    def test_empty_list(self):
        assert sort_deals([], SortMode.QUALITY) == []

    def test_unknown_mode_raises(self, ranked_deals):
        with pytest.raises(ValueError):
            sort_deals(ranked_deals, "random")
