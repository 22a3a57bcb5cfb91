"""
Deal list filter models.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple

from .pricing import DealType

PriceRange = Tuple[float, float]


@dataclass(frozen=True)
class DealFilterCriteria:
    """What the viewer wants to see in the deal list."""

    search_text: str = ""
    platforms: FrozenSet[str] = field(default_factory=frozenset)
    deal_type: Optional[DealType] = None  # None means all types
    include_humble: bool = True
    list_price_range: Optional[PriceRange] = None
    sale_price_range: Optional[PriceRange] = None

    def validate(self) -> bool:
        """Validate filter criteria."""
        if self.deal_type is not None and not isinstance(self.deal_type, DealType):
            raise ValueError("deal_type must be a DealType enum or None")

        for name, price_range in (
            ("list_price_range", self.list_price_range),
            ("sale_price_range", self.sale_price_range),
        ):
            if price_range is None:
                continue
            low, high = price_range
            if low < 0 or high < low:
                raise ValueError(f"{name} must satisfy 0 <= low <= high")

        return True
