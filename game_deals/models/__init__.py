"""
Data models for the Game Deals engine.

This module contains all data classes and type definitions used throughout
the application for representing deals, prices, configuration, and
display rows.
"""

from .catalog import DealQuery, Store
from .config import (
    CacheConfig,
    CatalogConfig,
    Configuration,
    CurrencyConfig,
    DisplayConfig,
    LoggingConfig,
)
from .currency import FxRates, LocalPrice, PriceKind, SteamPrice
from .deal import CatalogDeal, Deal
from .filter import DealFilterCriteria
from .listing import DealListing
from .pricing import DealScore, DealType, QualityTier, SortMode

__all__ = [
    "Deal",
    "CatalogDeal",
    "Store",
    "DealQuery",
    "DealScore",
    "DealType",
    "QualityTier",
    "SortMode",
    "FxRates",
    "SteamPrice",
    "LocalPrice",
    "PriceKind",
    "DealFilterCriteria",
    "DealListing",
    "Configuration",
    "CatalogConfig",
    "CurrencyConfig",
    "CacheConfig",
    "DisplayConfig",
    "LoggingConfig",
]
