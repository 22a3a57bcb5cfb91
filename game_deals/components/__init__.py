"""
Core components for the Game Deals engine.

This module contains the pure, synchronous pieces of the engine: pricing
and classification, the quality gate, catalog normalization, merging,
ranking, filtering and claim resolution.
"""

from .claim_resolver import ClaimResolver
from .deal_filter import DealFilter, price_bounds, visible_platforms
from .deal_parser import DealParser, StoreDirectory, map_deal, parse_number
from .merge_engine import game_key, merge_deals_by_game
from .pricing_engine import (
    classify_deal,
    classify_deal_with_quality,
    compute_deal_score,
    format_price,
)
from .quality_gate import quality_rank, quality_tier
from .ranking_engine import sort_deals

__all__ = [
    "compute_deal_score",
    "classify_deal",
    "classify_deal_with_quality",
    "format_price",
    "quality_tier",
    "quality_rank",
    "DealParser",
    "StoreDirectory",
    "map_deal",
    "parse_number",
    "game_key",
    "merge_deals_by_game",
    "sort_deals",
    "DealFilter",
    "price_bounds",
    "visible_platforms",
    "ClaimResolver",
]
