"""Unit tests for claim link resolution."""

from game_deals.components.claim_resolver import ClaimResolver, STORE_HOME_URLS


class TestDirectStoreUrl:
    """Test cases for ClaimResolver.direct_store_url."""

    def test_steam_product_page(self, deal_factory):
        deal = deal_factory(title="Hades", steam_app_id="1145360")

        assert (
            ClaimResolver().direct_store_url("steam", deal)
            == "https://store.steampowered.com/app/1145360/"
        )

    def test_steam_search_without_app_id(self, deal_factory):
        deal = deal_factory(title="Baldur's Gate 3")

        assert (
            ClaimResolver().direct_store_url("Steam", deal)
            == "https://store.steampowered.com/search/?term=Baldur's%20Gate%203"
        )

    def test_epic_search(self, deal_factory):
        deal = deal_factory(title="Hades & Co")

        assert (
            ClaimResolver().direct_store_url("epic", deal)
            == "https://store.epicgames.com/en-US/browse?q=Hades%20%26%20Co"
        )

    def test_unknown_store(self, deal_factory):
        assert ClaimResolver().direct_store_url("itch", deal_factory()) is None

    def test_blank_title(self, deal_factory):
        assert ClaimResolver().direct_store_url("gog", deal_factory(title="  ")) is None


class TestResolveUrl:
    """Test cases for ClaimResolver.resolve_url."""

    def test_claim_link_used_for_unsupported_store(self, deal_factory):
        deal = deal_factory(
            platforms=("itch",),
            claim_links={"itch": "https://www.cheapshark.com/redirect?dealID=x"},
        )

        assert (
            ClaimResolver().resolve_url("itch", deal)
            == "https://www.cheapshark.com/redirect?dealID=x"
        )

    def test_direct_url_preferred_over_claim_link(self, deal_factory):
        deal = deal_factory(
            title="Hades",
            claim_links={"gog": "https://www.cheapshark.com/redirect?dealID=y"},
        )

        assert ClaimResolver().resolve_url("gog", deal).startswith("https://www.gog.com/")

    def test_home_page_fallback(self, deal_factory):
        deal = deal_factory(title="")

        assert ClaimResolver().resolve_url("humble", deal) == STORE_HOME_URLS["humble"]

    def test_nothing_known(self, deal_factory):
        assert ClaimResolver().resolve_url("itch", deal_factory()) is None


class TestChoosePlatform:
    """Test cases for claim options and platform choice."""

    def test_single_option(self, deal_factory):
        deal = deal_factory(platforms=("epic",))

        assert ClaimResolver().choose_platform(deal) == "epic"

    def test_multiple_options_need_choice(self, deal_factory):
        deal = deal_factory(platforms=("steam", "epic"))

        assert ClaimResolver().choose_platform(deal) is None

    def test_preferred_store(self, deal_factory):
        deal = deal_factory(platforms=("steam", "epic"))

        assert ClaimResolver().choose_platform(deal, preferred_store="epic") == "epic"

    def test_preferred_store_not_offered(self, deal_factory):
        deal = deal_factory(platforms=("steam", "epic"))

        assert ClaimResolver().choose_platform(deal, preferred_store="gog") is None

    def test_humble_hidden_leaves_single_option(self, deal_factory):
        deal = deal_factory(platforms=("steam", "humble"))
        resolver = ClaimResolver(include_humble=False)

        assert resolver.claim_options(deal) == ["steam"]
        assert resolver.choose_platform(deal) == "steam"
