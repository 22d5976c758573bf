"""
Resolves a watch page URL to a short-lived direct media URL using an external tool.
"""

import asyncio
import logging
import re

from yt_provider.exceptions import (
    NoOutputProducedError,
    NoUrlInOutputError,
    ResolutionToolFailedError,
)

from .tools import RESOLVE_TOOL, ExternalTool

log = logging.getLogger(__name__)

# When the tool prints several URLs (video then audio), the audio one is last.
_TRAILING_URL_REGEX = re.compile(r"(https://.*)\s*$")


def extract_trailing_url(output: str) -> str:
    """
    Returns the ``https://`` URL on the last line of ``output``.

    Raises:
        NoOutputProducedError: If the output is blank.
        NoUrlInOutputError: If the last line holds no https URL.
    """
    if not output.strip():
        raise NoOutputProducedError("The resolution tool produced no output.")

    match = _TRAILING_URL_REGEX.search(output)
    if not match:
        raise NoUrlInOutputError("No https:// URL found in the resolution tool output.")
    return match.group(1).strip()


class MediaResolver:
    """Runs the resolution tool once per call and extracts the playable URL."""

    def __init__(self, tool: ExternalTool = RESOLVE_TOOL):
        self.tool = tool

    async def resolve(self, url: str) -> str:
        """
        Resolves ``url`` to a direct media URL, waiting for the tool to finish.

        Raises:
            ResolutionToolFailedError: If the tool cannot start or exits non-zero.
            NoOutputProducedError, NoUrlInOutputError
        """
        argv = self.tool.argv(url=url)
        log.debug(f"Resolving media URL: {' '.join(argv)}")
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await process.communicate()
        except OSError as e:
            raise ResolutionToolFailedError(
                f"Could not run '{self.tool.executable}': {e}"
            ) from e

        if process.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip().splitlines()
            message = f"'{self.tool.executable}' exited with code {process.returncode}"
            if detail:
                message += f": {detail[-1]}"
            raise ResolutionToolFailedError(message, returncode=process.returncode)

        resolved = extract_trailing_url(stdout.decode("utf-8", errors="replace"))
        log.debug(f"Resolved {url} -> {resolved[:80]}...")
        return resolved
