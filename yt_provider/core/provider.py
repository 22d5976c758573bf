"""
The host-facing provider: builds search requests, parses responses and
hands out download/stream processes. It only wires the other layers together.
"""

import asyncio
import logging
import time
from typing import Any

from yt_provider.api.client import SearchRequest, YouTubeSearchClient
from yt_provider.exceptions import YouTubeProviderError
from yt_provider.media.orchestrator import ProcessOrchestrator
from yt_provider.media.resolver import MediaResolver
from yt_provider.models.config import ProviderConfig
from yt_provider.models.track import QueryResult
from yt_provider.utils.structured_logger import ProcessLogger, SearchLogger
from yt_provider.web.response_extractor import ResponseExtractor
from yt_provider.web.result_parser import ResultParser

log = logging.getLogger(__name__)


class YouTubeProvider:
    """
    Content provider for YouTube search results.

    Usage:
        async with YouTubeProvider(config) as provider:
            results = await provider.search("daft punk")
            process = await provider.download(results[0].url, "output/track")
            await process.wait()
    """

    name = "youtube"

    def __init__(
        self,
        config: ProviderConfig | None = None,
        client: YouTubeSearchClient | None = None,
        resolver: MediaResolver | None = None,
        orchestrator: ProcessOrchestrator | None = None,
        search_events: SearchLogger | None = None,
        process_events: ProcessLogger | None = None,
    ):
        self.config = config or ProviderConfig()
        self.client = client or YouTubeSearchClient(self.config)
        self.orchestrator = orchestrator or ProcessOrchestrator.from_config(
            self.config, events=process_events, resolver=resolver
        )
        self.extractor = ResponseExtractor()
        self.parser = ResultParser(self.config.watch_url)
        self.search_events = search_events

    @property
    def method(self) -> str:
        return self.client.METHOD

    @property
    def base_url(self) -> str:
        return self.config.search_url

    def build_request(self, query: str) -> SearchRequest:
        return self.client.build_request(query)

    def parse(self, text: str) -> QueryResult:
        """Extracts and parses the results embedded in a search page body."""
        container: Any = self.extractor.extract(text)
        return self.parser.parse(container)

    async def search(self, query: str) -> QueryResult:
        """Fetches and parses the search results for ``query``."""
        start_time = time.monotonic()
        try:
            text = await self.client.fetch_results_page(query)
            results = self.parse(text)
        except YouTubeProviderError as e:
            if self.search_events:
                self.search_events.search_failed(query, e)
            raise

        log.debug(f"Search for {query!r} returned {len(results)} tracks")
        if self.search_events:
            self.search_events.search_completed(
                query, len(results), len(text), (time.monotonic() - start_time) * 1000
            )
        return results

    async def download(self, url: str, file_name: str) -> asyncio.subprocess.Process:
        return await self.orchestrator.download(url, file_name)

    async def stream(self, url: str, file_name: str) -> asyncio.subprocess.Process:
        return await self.orchestrator.stream(url, file_name)

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> "YouTubeProvider":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
