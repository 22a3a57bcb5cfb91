"""
Pricing, classification and ranking models.
"""

from dataclasses import dataclass
from enum import Enum


class DealType(Enum):
    """Display tier of a deal."""

    FREE = "free"
    INSANE = "insane"
    SALE = "sale"


class QualityTier(Enum):
    """Coarse reputation bucket derived from rating and critic signals."""

    GREAT = "great"
    GOOD = "good"
    UNKNOWN = "unknown"

    @property
    def rank(self) -> int:
        """Numeric rank used for sorting, higher is better."""
        return {"great": 2, "good": 1, "unknown": 0}[self.value]


class SortMode(Enum):
    """Selectable list orderings."""

    QUALITY = "quality"
    DISCOUNT = "discount"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"


@dataclass(frozen=True)
class DealScore:
    """Discount metrics used for classification and ranking."""

    discount_fraction: float
    score: float
    discount_percent: int
    savings: float

    def validate(self) -> bool:
        """Validate deal score data."""
        if not (0 <= self.discount_fraction <= 1):
            raise ValueError("discount_fraction must be between 0 and 1")

        if self.score < 0:
            raise ValueError("score cannot be negative")

        if not (0 <= self.discount_percent <= 100):
            raise ValueError("discount_percent must be between 0 and 100")

        if self.savings < 0:
            raise ValueError("savings cannot be negative")

        return True
