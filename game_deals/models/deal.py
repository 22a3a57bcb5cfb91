"""
Deal data models for the Game Deals engine.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass
class CatalogDeal:
    """Raw deal record as returned by the upstream catalog.

    Numeric fields arrive as strings and are left untouched here; the
    deal parser is the single place where they are converted.
    """

    title: str
    deal_id: str
    store_id: str
    game_id: str
    sale_price: Any
    normal_price: Any
    thumb: str = ""
    steam_app_id: Optional[str] = None
    steam_rating_percent: Any = None
    steam_rating_count: Any = None
    metacritic_score: Any = None
    deal_rating: Any = None
    is_on_sale: Any = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogDeal":
        """Build a record from the upstream JSON object."""
        return cls(
            title=data.get("title") or "",
            deal_id=str(data.get("dealID") or ""),
            store_id=str(data.get("storeID") or ""),
            game_id=str(data.get("gameID") or ""),
            sale_price=data.get("salePrice"),
            normal_price=data.get("normalPrice"),
            thumb=data.get("thumb") or "",
            steam_app_id=str(data["steamAppID"]) if data.get("steamAppID") else None,
            steam_rating_percent=data.get("steamRatingPercent"),
            steam_rating_count=data.get("steamRatingCount"),
            metacritic_score=data.get("metacriticScore"),
            deal_rating=data.get("dealRating"),
            is_on_sale=data.get("isOnSale"),
        )

    def validate(self) -> bool:
        """Validate the raw deal data."""
        if not self.title or not self.title.strip():
            raise ValueError("Deal title cannot be empty")

        if not self.store_id or not self.store_id.strip():
            raise ValueError("Deal store ID cannot be empty")

        return True


@dataclass(frozen=True)
class Deal:
    """Normalized deal, or a merged group of deals for the same game."""

    title: str
    image: str
    list_price: float
    current_price: float
    platforms: Tuple[str, ...]
    deal_id: Optional[str] = None
    game_id: Optional[str] = None
    steam_app_id: Optional[str] = None
    claim_links: Optional[Dict[str, str]] = field(default=None, compare=False)
    steam_rating_percent: Optional[float] = None
    steam_rating_count: Optional[float] = None
    metacritic_score: Optional[float] = None
    deal_rating: Optional[float] = None

    def validate(self) -> bool:
        """Validate the deal data."""
        if not self.title or not self.title.strip():
            raise ValueError("Deal title cannot be empty")

        if not self.platforms:
            raise ValueError("Deal must be available on at least one platform")

        if self.list_price < 0:
            raise ValueError("List price cannot be negative")

        if self.current_price < 0:
            raise ValueError("Current price cannot be negative")

        if self.steam_rating_percent is not None:
            if not (0 <= self.steam_rating_percent <= 100):
                raise ValueError("Steam rating percent must be between 0 and 100")

        if self.steam_rating_count is not None and self.steam_rating_count < 0:
            raise ValueError("Steam rating count cannot be negative")

        if self.metacritic_score is not None:
            if not (0 <= self.metacritic_score <= 100):
                raise ValueError("Metacritic score must be between 0 and 100")

        if self.deal_rating is not None:
            if not (0 <= self.deal_rating <= 10):
                raise ValueError("Deal rating must be between 0 and 10")

        if self.claim_links is not None and not isinstance(self.claim_links, dict):
            raise ValueError("Claim links must be a dictionary")

        return True
