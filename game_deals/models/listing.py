"""
Display-ready deal rows handed to the UI collaborator.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .currency import LocalPrice
from .deal import Deal
from .pricing import DealType, QualityTier


@dataclass(frozen=True)
class DealListing:
    """One rendered line of the deal list."""

    deal: Deal
    price_text: str
    deal_type: DealType
    quality: QualityTier
    platforms: Tuple[str, ...]
    discount_percent: Optional[int] = None
    local_price: Optional[LocalPrice] = None

    def render(self) -> str:
        """Single-line text rendering."""
        parts = [f"[{self.deal_type.value.upper()}]", self.deal.title, self.price_text]
        if self.local_price is not None:
            parts.append(str(self.local_price))
        parts.append(f"({', '.join(self.platforms)})")
        if self.quality is not QualityTier.UNKNOWN:
            parts.append(f"quality={self.quality.value}")
        return " ".join(parts)
