"""
Spawns the external processes that turn a track into a local audio file.

Both pipelines return the live process as soon as it has started. The caller
owns it from then on: waiting, reading its output, or terminating it.
"""

import asyncio
import logging
import time

from yt_provider.exceptions import YouTubeProviderError
from yt_provider.models.config import ProviderConfig
from yt_provider.utils.structured_logger import ProcessLogger

from .resolver import MediaResolver
from .tools import DOWNLOAD_TOOL, RESOLVE_TOOL, TRANSCODE_TOOL, ExternalTool

log = logging.getLogger(__name__)


class ProcessOrchestrator:
    """Starts download and transcode processes for a watch page URL."""

    def __init__(
        self,
        downloader: ExternalTool = DOWNLOAD_TOOL,
        transcoder: ExternalTool = TRANSCODE_TOOL,
        resolver: MediaResolver | None = None,
        audio_format: str = "mp3",
        audio_codec: str = "libmp3lame",
        events: ProcessLogger | None = None,
    ):
        self.downloader = downloader
        self.transcoder = transcoder
        self.resolver = resolver or MediaResolver()
        self.audio_format = audio_format
        self.audio_codec = audio_codec
        self.events = events

    @classmethod
    def from_config(
        cls,
        config: ProviderConfig,
        events: ProcessLogger | None = None,
        resolver: MediaResolver | None = None,
    ) -> "ProcessOrchestrator":
        """Builds an orchestrator using the executables named in the config."""
        return cls(
            downloader=DOWNLOAD_TOOL.with_executable(config.downloader_path),
            transcoder=TRANSCODE_TOOL.with_executable(config.transcoder_path),
            resolver=resolver
            or MediaResolver(RESOLVE_TOOL.with_executable(config.resolver_path)),
            audio_format=config.audio_format,
            audio_codec=config.transcode_codec,
            events=events,
        )

    async def download(self, url: str, file_name: str) -> asyncio.subprocess.Process:
        """
        Starts downloading the audio of ``url`` into ``file_name.<ext>``.

        The extension is chosen by the download tool from the audio format.

        Raises:
            SpawnFailedError: If the download tool cannot be started.
        """
        try:
            process = await self.downloader.spawn(
                url=url, output=file_name, audio_format=self.audio_format
            )
        except YouTubeProviderError as e:
            self._report_failure("download", url, e)
            raise

        log.debug(f"Download of {url} started (pid {process.pid})")
        if self.events:
            self.events.process_spawned("download", url, file_name, process.pid)
        return process

    async def stream(self, url: str, file_name: str) -> asyncio.subprocess.Process:
        """
        Resolves the direct media URL of ``url``, then starts transcoding it
        into ``file_name``, overwriting any existing file.

        Resolution is awaited before the transcoder starts.

        Raises:
            ResolutionError: If the direct URL cannot be resolved.
            SpawnFailedError: If the transcoder cannot be started.
        """
        try:
            start_time = time.monotonic()
            source = await self.resolver.resolve(url)
            if self.events:
                self.events.stream_resolved(url, (time.monotonic() - start_time) * 1000)

            process = await self.transcoder.spawn(
                source=source, destination=file_name, audio_codec=self.audio_codec
            )
        except YouTubeProviderError as e:
            self._report_failure("stream", url, e)
            raise

        log.debug(f"Transcode of {url} into '{file_name}' started (pid {process.pid})")
        if self.events:
            self.events.process_spawned("stream", url, file_name, process.pid)
        return process

    def _report_failure(self, pipeline: str, url: str, error: Exception) -> None:
        log.debug(f"{pipeline.capitalize()} pipeline for {url} failed: {error}")
        if self.events:
            self.events.process_failed(pipeline, url, error)
