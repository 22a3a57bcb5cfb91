"""Deal filter for applying search, platform, type and price filters to deals."""

import logging
import math
from typing import List, Tuple

from ..models.deal import Deal
from ..models.filter import DealFilterCriteria, PriceRange
from .pricing_engine import classify_deal

logger = logging.getLogger(__name__)

HUMBLE = "humble"
MIN_SLIDER_BOUND = 100


def visible_platforms(deal: Deal, include_humble: bool = True) -> Tuple[str, ...]:
    """Platforms a deal is shown and matched with under the Humble setting."""
    if include_humble:
        return deal.platforms
    return tuple(p for p in deal.platforms if p.lower() != HUMBLE)


def price_bounds(deals: List[Deal]) -> Tuple[int, int]:
    """Slider maxima for list and sale price, never below 100."""
    max_list = max([MIN_SLIDER_BOUND] + [d.list_price for d in deals])
    max_sale = max([MIN_SLIDER_BOUND] + [d.current_price for d in deals])
    return math.ceil(max_list), math.ceil(max_sale)


def _within(value: float, price_range: PriceRange) -> bool:
    low, high = price_range
    return low <= value <= high


class DealFilter:
    """Applies viewer-selected criteria to a merged deal list."""

    def __init__(self, criteria: DealFilterCriteria):
        """Initialize deal filter with viewer criteria."""
        criteria.validate()
        self.criteria = criteria
        self.query = criteria.search_text.strip().lower()

    def matches(self, deal: Deal) -> bool:
        """Check whether a single deal passes every filter."""
        criteria = self.criteria

        if self.query and self.query not in deal.title.lower():
            return False

        platforms = visible_platforms(deal, criteria.include_humble)
        # A Humble-only deal disappears when Humble is disabled
        if not platforms:
            return False

        if criteria.platforms and not any(p in criteria.platforms for p in platforms):
            return False

        if criteria.deal_type is not None:
            if classify_deal(deal.list_price, deal.current_price) is not criteria.deal_type:
                return False

        if criteria.list_price_range and not _within(
            deal.list_price, criteria.list_price_range
        ):
            return False

        if criteria.sale_price_range and not _within(
            deal.current_price, criteria.sale_price_range
        ):
            return False

        return True

    def apply(self, deals: List[Deal]) -> List[Deal]:
        """Return the deals that pass, preserving order."""
        visible = [deal for deal in deals if self.matches(deal)]
        logger.debug(f"Filter kept {len(visible)} of {len(deals)} deals")
        return visible
