"""Merge engine: collapses listings of the same game across storefronts."""

import logging
import re
from dataclasses import replace
from typing import Dict, List, Optional

from ..models.deal import Deal

logger = logging.getLogger(__name__)

TRADEMARK_GLYPHS = re.compile(r"[®™]")
WHITESPACE = re.compile(r"\s+")

# Signals where the merged record keeps the strongest value seen
QUALITY_FIELDS = (
    "steam_rating_percent",
    "steam_rating_count",
    "metacritic_score",
    "deal_rating",
)


def normalize_title(title: str) -> str:
    """Lowercase, strip trademark glyphs and collapse whitespace."""
    cleaned = TRADEMARK_GLYPHS.sub("", title.lower())
    return WHITESPACE.sub(" ", cleaned).strip()


def game_key(deal: Deal) -> str:
    """Identity key: Steam app id, then catalog game id, then normalized title."""
    if deal.steam_app_id:
        return f"steamapp:{deal.steam_app_id}"
    if deal.game_id:
        return f"cheapshark:{deal.game_id}"
    return f"title:{normalize_title(deal.title)}"


def _unique(items) -> tuple:
    return tuple(dict.fromkeys(items))


def _strongest(existing: Deal, incoming: Deal, base: Deal, name: str) -> Optional[float]:
    strongest = max(getattr(existing, name) or 0, getattr(incoming, name) or 0)
    return strongest or getattr(base, name)


def merge_pair(existing: Deal, incoming: Deal) -> Deal:
    """Combine two listings of the same game into a new Deal."""
    platforms = _unique(existing.platforms + incoming.platforms)
    links = {**(existing.claim_links or {}), **(incoming.claim_links or {})}

    # Strict comparison keeps the earlier listing on a price tie
    base = incoming if incoming.current_price < existing.current_price else existing

    quality = {name: _strongest(existing, incoming, base, name) for name in QUALITY_FIELDS}
    return replace(
        base,
        platforms=platforms,
        claim_links=links or None,
        **quality,
    )


def merge_deals_by_game(deals: List[Deal]) -> List[Deal]:
    """
    Merge deals that refer to the same game.

    Output holds one Deal per identity key, in order of first occurrence.
    Input Deals are never modified.
    """
    merged: Dict[str, Deal] = {}
    for deal in deals:
        key = game_key(deal)
        existing = merged.get(key)
        if existing is None:
            merged[key] = replace(
                deal,
                platforms=_unique(deal.platforms),
                claim_links=dict(deal.claim_links) if deal.claim_links else None,
            )
        else:
            merged[key] = merge_pair(existing, deal)

    if len(merged) < len(deals):
        logger.debug(f"Merged {len(deals)} listings into {len(merged)} games")

    return list(merged.values())
