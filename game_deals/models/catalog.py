"""
Catalog request and store directory models.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Upstream store ids
STEAM_STORE_ID = "1"
HUMBLE_STORE_ID = "11"
EPIC_STORE_ID = "25"

VALID_SORT_KEYS = [
    "Deal Rating",
    "Title",
    "Savings",
    "Price",
    "Metacritic",
    "Reviews",
    "Release",
    "Store",
    "recent",
]


@dataclass
class Store:
    """Storefront directory entry."""

    store_id: str
    store_name: str
    is_active: bool
    images: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Store":
        return cls(
            store_id=str(data.get("storeID") or ""),
            store_name=data.get("storeName") or "",
            is_active=str(data.get("isActive")) == "1",
            images=dict(data.get("images") or {}),
        )


@dataclass
class DealQuery:
    """Filters for one page of catalog deals."""

    store_ids: List[str] = field(default_factory=list)
    on_sale: bool = True
    lower_price: Optional[float] = None
    upper_price: Optional[float] = None
    page_size: int = 50
    page_number: int = 0
    sort_by: str = "Deal Rating"

    @classmethod
    def for_default_stores(cls, include_humble: bool = True, **kwargs) -> "DealQuery":
        """Steam and Epic, plus Humble when enabled."""
        store_ids = [STEAM_STORE_ID, EPIC_STORE_ID]
        if include_humble:
            store_ids.append(HUMBLE_STORE_ID)
        return cls(store_ids=store_ids, **kwargs)

    def to_params(self) -> Dict[str, str]:
        """Query-string parameters; unset optional filters are omitted."""
        params: Dict[str, str] = {}
        if self.store_ids:
            params["storeID"] = ",".join(self.store_ids)
        params["onSale"] = "1" if self.on_sale else "0"
        if self.lower_price is not None:
            params["lowerPrice"] = f"{self.lower_price:g}"
        if self.upper_price is not None:
            params["upperPrice"] = f"{self.upper_price:g}"
        params["pageSize"] = str(self.page_size)
        params["pageNumber"] = str(self.page_number)
        params["sortBy"] = self.sort_by
        return params

    def validate(self) -> bool:
        """Validate query parameters."""
        if not (1 <= self.page_size <= 60):
            raise ValueError("Page size must be between 1 and 60")

        if self.page_number < 0:
            raise ValueError("Page number cannot be negative")

        if self.lower_price is not None and self.lower_price < 0:
            raise ValueError("Lower price cannot be negative")

        if (
            self.lower_price is not None
            and self.upper_price is not None
            and self.upper_price < self.lower_price
        ):
            raise ValueError("Upper price cannot be below lower price")

        if self.sort_by not in VALID_SORT_KEYS:
            raise ValueError(f"Sort key must be one of: {VALID_SORT_KEYS}")

        return True
