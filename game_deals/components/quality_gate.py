"""Quality gate: buckets a deal's reputation signals into a tier."""

from ..models.deal import Deal
from ..models.pricing import QualityTier

GREAT_RATING_PERCENT = 90
GREAT_RATING_COUNT = 1000
GREAT_METACRITIC = 85

GOOD_RATING_PERCENT = 80
GOOD_RATING_COUNT = 200
GOOD_METACRITIC = 75


def quality_tier(deal: Deal) -> QualityTier:
    """
    Bucket a deal by user rating and critic score.

    Missing signals count as zero, so absence never upgrades a tier.
    """
    rating_percent = deal.steam_rating_percent or 0
    rating_count = deal.steam_rating_count or 0
    metacritic = deal.metacritic_score or 0

    if (
        rating_percent >= GREAT_RATING_PERCENT and rating_count >= GREAT_RATING_COUNT
    ) or metacritic >= GREAT_METACRITIC:
        return QualityTier.GREAT

    if (
        rating_percent >= GOOD_RATING_PERCENT and rating_count >= GOOD_RATING_COUNT
    ) or metacritic >= GOOD_METACRITIC:
        return QualityTier.GOOD

    return QualityTier.UNKNOWN


def quality_rank(deal: Deal) -> int:
    """Sort rank of the deal's tier (great=2, good=1, unknown=0)."""
    return quality_tier(deal).rank
