"""
Service layer for the Game Deals engine.

This module contains the I/O-facing services: the catalog client, the
exchange-rate and local price lookups with their caches, the deal service
and configuration management.
"""

from .cache_store import JsonFileStore, MemoryStore, TTLCache
from .catalog_client import CheapSharkClient
from .config_manager import ConfigurationManager
from .deal_service import DealService, sample_deals
from .fx_service import FxService, convert_from_usd, format_currency
from .price_localizer import PriceLocalizer
from .steam_price_service import SteamPriceService

__all__ = [
    "JsonFileStore",
    "MemoryStore",
    "TTLCache",
    "CheapSharkClient",
    "ConfigurationManager",
    "DealService",
    "sample_deals",
    "FxService",
    "convert_from_usd",
    "format_currency",
    "PriceLocalizer",
    "SteamPriceService",
]
