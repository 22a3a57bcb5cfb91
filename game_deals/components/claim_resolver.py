"""
Claim link resolution for the Game Deals engine.

Turns a (platform, deal) pair into the URL a viewer should open, and
decides whether the viewer has to be asked which storefront to use.
"""

from typing import Dict, List, Optional
from urllib.parse import quote

from ..models.deal import Deal
from .deal_filter import visible_platforms

STORE_HOME_URLS: Dict[str, str] = {
    "steam": "https://store.steampowered.com/",
    "epic": "https://store.epicgames.com/",
    "gog": "https://www.gog.com/",
    "humble": "https://www.humblebundle.com/store",
}

STORE_SEARCH_URLS: Dict[str, str] = {
    "steam": "https://store.steampowered.com/search/?term={query}",
    "epic": "https://store.epicgames.com/en-US/browse?q={query}",
    "humble": "https://www.humblebundle.com/store/search?search={query}",
    "gog": "https://www.gog.com/en/games?query={query}",
}


class ClaimResolver:
    """Resolves where a claim for a deal should lead."""

    def __init__(self, include_humble: bool = True):
        """
        Initialize the resolver.

        Args:
            include_humble: Whether Humble is offered as a claim option
        """
        self.include_humble = include_humble

    def direct_store_url(self, platform: str, deal: Deal) -> Optional[str]:
        """
        Build a product or search URL on the storefront itself.

        Steam gets the product page when the app id is known; every
        supported store otherwise gets a title search.
        """
        key = (platform or "").lower()
        if key == "steam" and deal.steam_app_id:
            return f"https://store.steampowered.com/app/{deal.steam_app_id}/"

        title = (deal.title or "").strip()
        template = STORE_SEARCH_URLS.get(key)
        if not title or template is None:
            return None
        return template.format(query=quote(title, safe="!~*'()"))

    def resolve_url(self, platform: str, deal: Deal) -> Optional[str]:
        """Direct store URL, then per-deal claim link, then store home page."""
        return (
            self.direct_store_url(platform, deal)
            or (deal.claim_links or {}).get(platform)
            or STORE_HOME_URLS.get(platform)
        )

    def claim_options(self, deal: Deal) -> List[str]:
        """Platforms the viewer may claim the deal on."""
        return list(visible_platforms(deal, self.include_humble))

    def choose_platform(
        self, deal: Deal, preferred_store: Optional[str] = None
    ) -> Optional[str]:
        """
        Pick the platform to open without asking.

        Returns:
            The only option, or the preferred store when offered;
            None when the viewer must choose
        """
        options = self.claim_options(deal)
        if len(options) == 1:
            return options[0]
        if preferred_store and preferred_store in options:
            return preferred_store
        return None
