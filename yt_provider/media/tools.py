"""
Adapters describing how external command-line tools are invoked.
"""

import asyncio
import logging
from dataclasses import dataclass, replace

from yt_provider.exceptions import SpawnFailedError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExternalTool:
    """
    An executable plus an argv template.

    Template arguments use ``str.format`` placeholders, filled in per call:

        ExternalTool("yt-dlp", ("-g", "{url}")).argv(url="https://...")
    """

    executable: str
    args: tuple[str, ...] = ()

    def argv(self, **values: str) -> list[str]:
        return [self.executable, *(arg.format(**values) for arg in self.args)]

    def with_executable(self, executable: str) -> "ExternalTool":
        return replace(self, executable=executable)

    async def spawn(self, **values: str) -> asyncio.subprocess.Process:
        """
        Starts the tool without waiting for it. Standard output is piped for
        the caller, standard error is discarded.

        Raises:
            SpawnFailedError: If the executable is missing or not runnable.
        """
        argv = self.argv(**values)
        log.debug(f"Spawning: {' '.join(argv)}")
        try:
            return await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            raise SpawnFailedError(self.executable, e) from e


DOWNLOAD_TOOL = ExternalTool(
    "yt-dlp",
    (
        "--extract-audio",
        "--audio-format",
        "{audio_format}",
        "-o",
        "{output}.%(ext)s",
        "{url}",
    ),
)
RESOLVE_TOOL = ExternalTool("yt-dlp", ("-g", "{url}"))
# The destination is prefixed with "file:" so names containing ':' are not
# mistaken for protocols; "-y" overwrites an existing file.
TRANSCODE_TOOL = ExternalTool(
    "ffmpeg",
    ("-i", "{source}", "-c:a", "{audio_codec}", "file:{destination}", "-y"),
)
