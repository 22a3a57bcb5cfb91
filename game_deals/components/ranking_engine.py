"""Ranking engine: total orderings of a deal list per sort mode."""

from typing import Callable, Dict, List, Tuple, Union

from ..models.deal import Deal
from ..models.pricing import SortMode
from .pricing_engine import compute_deal_score
from .quality_gate import quality_rank

SortKey = Tuple


def _quality_key(deal: Deal) -> SortKey:
    metrics = compute_deal_score(deal.list_price, deal.current_price)
    return (
        -quality_rank(deal),
        -metrics.score,
        -(deal.deal_rating or 0),
        deal.current_price,
        deal.title,
    )


def _discount_key(deal: Deal) -> SortKey:
    metrics = compute_deal_score(deal.list_price, deal.current_price)
    return (
        -metrics.score,
        -metrics.discount_percent,
        -metrics.savings,
        deal.current_price,
        deal.title,
    )


def _price_low_key(deal: Deal) -> SortKey:
    metrics = compute_deal_score(deal.list_price, deal.current_price)
    return (deal.current_price, -metrics.score, -quality_rank(deal), deal.title)


def _price_high_key(deal: Deal) -> SortKey:
    metrics = compute_deal_score(deal.list_price, deal.current_price)
    return (-deal.current_price, -metrics.score, -quality_rank(deal), deal.title)


SORT_KEYS: Dict[SortMode, Callable[[Deal], SortKey]] = {
    SortMode.QUALITY: _quality_key,
    SortMode.DISCOUNT: _discount_key,
    SortMode.PRICE_LOW: _price_low_key,
    SortMode.PRICE_HIGH: _price_high_key,
}


def sort_deals(deals: List[Deal], mode: Union[SortMode, str]) -> List[Deal]:
    """
    Return a new list ordered by the given mode.

    Every mode ends its tie-break chain with the title, so the order is
    deterministic for any input.

    Raises:
        ValueError: If the mode is not a known sort mode
    """
    sort_mode = SortMode(mode)
    return sorted(deals, key=SORT_KEYS[sort_mode])
