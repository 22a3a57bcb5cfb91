"""Pricing engine: discount scoring, deal classification and price text."""

import math

from ..models.deal import Deal
from ..models.pricing import DealScore, DealType, QualityTier
from .quality_gate import quality_tier

# Sub-cent residuals count as free
FREE_PRICE_THRESHOLD = 0.01

# Both must hold for an "insane" verdict
INSANE_MIN_DISCOUNT = 0.40
INSANE_MIN_SCORE = 1.0


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def compute_deal_score(list_price: float, current_price: float) -> DealScore:
    """
    Compute discount metrics used for classification and ranking.

    The score is ``discount_fraction * log10(list_price + 1)`` so that a
    deep cut on a cheap title does not outrank a solid cut on an expensive
    one, while expensive titles only raise the bar logarithmically.

    Args:
        list_price: Reference (original) price in USD
        current_price: Discounted price in USD

    Returns:
        DealScore; all zero when there is no positive reference price
    """
    if list_price <= 0:
        return DealScore(discount_fraction=0.0, score=0.0, discount_percent=0, savings=0.0)

    savings = max(0.0, list_price - current_price)
    discount_fraction = _clamp(savings / list_price, 0.0, 1.0)
    score = discount_fraction * math.log10(list_price + 1)
    discount_percent = _round_half_up(discount_fraction * 100)
    return DealScore(
        discount_fraction=discount_fraction,
        score=score,
        discount_percent=discount_percent,
        savings=savings,
    )


def classify_deal(list_price: float, current_price: float) -> DealType:
    """Classify a deal from price math alone."""
    if current_price <= FREE_PRICE_THRESHOLD:
        return DealType.FREE
    if list_price <= 0:
        return DealType.SALE

    metrics = compute_deal_score(list_price, current_price)
    if (
        metrics.discount_fraction >= INSANE_MIN_DISCOUNT
        and metrics.score >= INSANE_MIN_SCORE
    ):
        return DealType.INSANE

    return DealType.SALE


def classify_deal_with_quality(deal: Deal) -> DealType:
    """Classify a deal, downgrading "insane" unless quality is at least good."""
    base = classify_deal(deal.list_price, deal.current_price)
    if base is not DealType.INSANE:
        return base

    if quality_tier(deal) in (QualityTier.GREAT, QualityTier.GOOD):
        return DealType.INSANE
    return DealType.SALE


def format_price(list_price: float, current_price: float) -> str:
    """Format the USD price with percent-off, e.g. ``$9.99 (-60%)`` or ``Free``."""
    if current_price <= FREE_PRICE_THRESHOLD:
        return "Free"

    discount_percent = compute_deal_score(list_price, current_price).discount_percent
    price = f"${current_price:.2f}"
    if discount_percent > 0:
        return f"{price} (-{discount_percent}%)"
    return f"{price} (no discount)"


def _round_half_up(value: float) -> int:
    # round() is banker's rounding; percentages round .5 upward
    return int(math.floor(value + 0.5))
