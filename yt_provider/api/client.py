"""
Async client for the YouTube web search page.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, Optional

import aiohttp

from yt_provider.exceptions import SearchRequestError
from yt_provider.models.config import ProviderConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchRequest:
    """A fully described outbound search request."""

    method: str
    url: str
    params: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)


class YouTubeSearchClient:
    """
    Fetches YouTube search result pages.

    No authentication is needed; the page is requested the way a desktop
    browser would, which is what makes the results payload appear inline.
    """

    METHOD = "GET"
    QUERY_PARAM = "search_query"

    def __init__(self, config: ProviderConfig):
        self.config = config
        self._session: Optional[aiohttp.ClientSession] = None

    def build_request(self, query: str) -> SearchRequest:
        """Describes the request for ``query`` without sending it."""
        return SearchRequest(
            method=self.METHOD,
            url=self.config.search_url,
            params={self.QUERY_PARAM: query},
            headers={"User-Agent": self.config.user_agent},
        )

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.request_timeout),
            )

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def fetch_results_page(self, query: str) -> str:
        """
        Requests the search page for ``query`` and returns its body text.

        Raises:
            SearchRequestError: On a non-2xx status or a transport failure.
        """
        await self._initialize_session()
        request = self.build_request(query)

        start_time = time.monotonic()
        try:
            async with self._session.request(
                request.method,
                request.url,
                params=request.params,
                headers=request.headers,
            ) as r:
                duration_ms = (time.monotonic() - start_time) * 1000
                log.debug(f"GET {r.url} -> {r.status} in {duration_ms:.0f} ms")
                if not 200 <= r.status < 300:
                    raise SearchRequestError(
                        f"Search request failed with HTTP {r.status}.", status=r.status
                    )
                return await r.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise SearchRequestError(f"Search request failed: {e}") from e
