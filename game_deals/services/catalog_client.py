"""
Deal catalog client.

This module fetches the storefront directory and paged deal lists from the
upstream catalog API over aiohttp and returns typed raw records.
"""

import asyncio
from typing import Any, Dict, List, Optional

import aiohttp
from aiohttp import ClientTimeout

from ..models.catalog import DealQuery, Store
from ..models.deal import CatalogDeal
from ..utils.error_handling import CatalogError
from ..utils.logging import get_logger

logger = get_logger("catalog.client")

DEFAULT_BASE_URL = "https://www.cheapshark.com/api/1.0"
USER_AGENT = "Game-Deals/0.1 (Deal Browser)"


class CheapSharkClient:
    """Async client for the deal catalog API."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: int = 15):
        """
        Initialize the catalog client.

        Args:
            base_url: API root, with or without trailing slash
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        """Async context manager entry."""
        if self.session is None:
            self.session = aiohttp.ClientSession(
                timeout=ClientTimeout(total=self.timeout),
                headers={"User-Agent": USER_AGENT},
            )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        if self.session:
            await self.session.close()
            self.session = None

    def _url(self, path: str) -> str:
        return self.base_url + path.lstrip("/")

    async def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        """
        GET a catalog path and decode its JSON body.

        Raises:
            CatalogError: On transport failure, non-2xx status or bad JSON
        """
        if self.session is None:
            await self.__aenter__()

        url = self._url(path)
        try:
            async with self.session.get(url, params=params) as response:
                if response.status >= 400:
                    body = await response.text()
                    raise CatalogError(
                        f"Catalog {response.status} {response.reason}: {body[:200]}",
                        status=response.status,
                        url=url,
                    )
                return await response.json(content_type=None)
        except CatalogError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error("Catalog request failed", extra={"url": url, "error": str(e)})
            raise CatalogError(
                f"Network error loading catalog data from {url}: {e}", url=url
            ) from e

    async def get_stores(self) -> List[Store]:
        """Fetch the storefront directory."""
        data = await self._get("stores")
        if not isinstance(data, list):
            raise CatalogError("Catalog stores response is not a list")
        return [Store.from_dict(item) for item in data if isinstance(item, dict)]

    async def get_deals(self, query: Optional[DealQuery] = None) -> List[CatalogDeal]:
        """Fetch one page of deals matching the query."""
        query = query or DealQuery()
        query.validate()

        data = await self._get("deals", query.to_params())
        if not isinstance(data, list):
            raise CatalogError("Catalog deals response is not a list")

        logger.debug(
            "Fetched catalog page",
            extra={"page": query.page_number, "count": len(data)},
        )
        return [CatalogDeal.from_dict(item) for item in data if isinstance(item, dict)]
