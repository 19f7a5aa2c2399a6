# services/photo_search.py
import logging
from typing import Any, Optional

import httpx

import config

logger = logging.getLogger(__name__)


def _first_photo_url(payload: Any) -> Optional[str]:
    """`results[0].urls.regular` from a search payload; None for any other shape."""
    if not isinstance(payload, dict):
        return None
    results = payload.get("results")
    if not isinstance(results, list) or not results:
        return None
    first = results[0]
    if not isinstance(first, dict):
        return None
    urls = first.get("urls")
    if not isinstance(urls, dict):
        return None
    url = urls.get("regular")
    return url if isinstance(url, str) and url else None


class PhotoSearchClient:
    """
    Stock photo lookup (Unsplash search API).
    Enrichment only: every failure resolves to the placeholder image instead of an error.
    """

    def __init__(
        self,
        access_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        placeholder_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.access_key = access_key if access_key is not None else config.UNSPLASH_ACCESS_KEY
        self.base_url = base_url or config.PHOTO_SEARCH_URL
        self.timeout = timeout if timeout is not None else config.PHOTO_SEARCH_TIMEOUT
        self.placeholder_url = placeholder_url or config.PLACEHOLDER_IMAGE_URL
        self.transport = transport

    async def _search(self, query: str) -> Optional[str]:
        headers = {"Authorization": f"Client-ID {self.access_key}"}
        params = {"query": query, "per_page": 1}
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.get(self.base_url, params=params, headers=headers)
            response.raise_for_status()
            payload = response.json()
        return _first_photo_url(payload)

    async def find_image(self, query: str) -> str:
        if not self.access_key:
            return self.placeholder_url
        try:
            url = await self._search(query)
        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers a body that is not JSON
            logger.warning("Photo search failed for %r: %s", query, e)
            return self.placeholder_url
        if not url:
            logger.info("No usable photo for %r, using placeholder", query)
            return self.placeholder_url
        return url


def get_photo_search_client() -> PhotoSearchClient:
    return PhotoSearchClient()
