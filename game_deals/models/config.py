"""
Configuration models for the system.
"""

from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import urlparse

from .catalog import VALID_SORT_KEYS

VALID_REGIONS = ["auto", "US", "GB", "EU", "CA", "AU", "JP", "BR", "IN"]
VALID_SORT_MODES = ["quality", "discount", "price-low", "price-high"]
VALID_DEAL_TYPES = ["all", "free", "insane", "sale"]
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _validate_http_url(url: str, name: str) -> None:
    parsed_url = urlparse(url)
    if not parsed_url.scheme or not parsed_url.netloc:
        raise ValueError(f"Invalid {name} format: {url}")

    if parsed_url.scheme not in ["http", "https"]:
        raise ValueError(f"{name} must use HTTP or HTTPS: {url}")


@dataclass
class CatalogConfig:
    """Upstream catalog settings."""

    base_url: str = "https://www.cheapshark.com/api/1.0"
    include_humble: bool = True
    page_size: int = 50
    sort_by: str = "Deal Rating"
    timeout: int = 15

    def validate(self) -> bool:
        """Validate catalog configuration."""
        if not self.base_url or not self.base_url.strip():
            raise ValueError("Catalog base URL cannot be empty")

        _validate_http_url(self.base_url, "catalog base URL")

        if not isinstance(self.include_humble, bool):
            raise ValueError("include_humble must be a boolean")

        if not isinstance(self.page_size, int) or not (1 <= self.page_size <= 60):
            raise ValueError("Catalog page size must be an integer between 1 and 60")

        if self.sort_by not in VALID_SORT_KEYS:
            raise ValueError(f"Catalog sort key must be one of: {VALID_SORT_KEYS}")

        if not isinstance(self.timeout, int) or self.timeout <= 0:
            raise ValueError("Catalog timeout must be a positive integer")

        return True


@dataclass
class CurrencyConfig:
    """Local currency and exchange-rate settings."""

    region: str = "auto"
    fx_url: str = "https://open.er-api.com/v6/latest/USD"
    fx_ttl_hours: int = 24
    local_price_ttl_hours: int = 12
    network_available: bool = True

    def validate(self) -> bool:
        """Validate currency configuration."""
        if self.region not in VALID_REGIONS:
            raise ValueError(f"Region must be one of: {VALID_REGIONS}")

        _validate_http_url(self.fx_url, "FX URL")

        if not isinstance(self.fx_ttl_hours, int) or self.fx_ttl_hours <= 0:
            raise ValueError("FX TTL hours must be a positive integer")

        if (
            not isinstance(self.local_price_ttl_hours, int)
            or self.local_price_ttl_hours <= 0
        ):
            raise ValueError("Local price TTL hours must be a positive integer")

        if not isinstance(self.network_available, bool):
            raise ValueError("network_available must be a boolean")

        return True


@dataclass
class CacheConfig:
    """Key/value cache persistence settings."""

    path: str = ".cache/game_deals.json"

    def validate(self) -> bool:
        """Validate cache configuration."""
        if not self.path or not self.path.strip():
            raise ValueError("Cache path cannot be empty")

        return True


@dataclass
class DisplayConfig:
    """Default list presentation."""

    sort_mode: str = "quality"
    deal_type: str = "all"
    search: str = ""
    platforms: List[str] = field(default_factory=list)
    list_price_range: Optional[List[float]] = None
    sale_price_range: Optional[List[float]] = None

    def validate(self) -> bool:
        """Validate display configuration."""
        if self.sort_mode not in VALID_SORT_MODES:
            raise ValueError(f"Sort mode must be one of: {VALID_SORT_MODES}")

        if self.deal_type not in VALID_DEAL_TYPES:
            raise ValueError(f"Deal type must be one of: {VALID_DEAL_TYPES}")

        if not isinstance(self.search, str):
            raise ValueError("Search must be a string")

        if not isinstance(self.platforms, list):
            raise ValueError("Platforms must be a list")

        for platform in self.platforms:
            if not isinstance(platform, str) or not platform.strip():
                raise ValueError("All platforms must be non-empty strings")

        for name, price_range in (
            ("list_price_range", self.list_price_range),
            ("sale_price_range", self.sale_price_range),
        ):
            if price_range is None:
                continue
            if not isinstance(price_range, list) or len(price_range) != 2:
                raise ValueError(f"{name} must be a [low, high] pair")
            low, high = price_range
            if low < 0 or high < low:
                raise ValueError(f"{name} must satisfy 0 <= low <= high")

        return True


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    log_dir: Optional[str] = None

    def validate(self) -> bool:
        """Validate logging configuration."""
        if self.level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"Log level must be one of: {VALID_LOG_LEVELS}")

        return True


@dataclass
class Configuration:
    """System configuration."""

    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    currency: CurrencyConfig = field(default_factory=CurrencyConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> bool:
        """Validate system configuration."""
        self.catalog.validate()
        self.currency.validate()
        self.cache.validate()
        self.display.validate()
        self.logging.validate()

        return True
