"""
Turns the decoded results container into typed track records.
"""

import logging
from datetime import timedelta
from typing import Any
from urllib.parse import urlencode, urlparse

from yt_provider.exceptions import InvalidDurationError, InvalidUrlError
from yt_provider.models.config import WATCH_URL
from yt_provider.models.track import QueryResult, TrackRecord
from yt_provider.utils.json_nav import JsonNode

log = logging.getLogger(__name__)

# Items without this key are shelves, ads, channel cards and the like.
ITEM_KIND_KEY = "videoRenderer"


def parse_duration(text: str) -> timedelta:
    """
    Parses a colon-delimited length such as ``3:45`` or ``1:02:03``.

    Components are read right to left as seconds, minutes, hours and so on,
    each worth ``60**i`` seconds.
    """
    parts = text.strip().split(":")
    if not all(part.isdecimal() for part in parts):
        raise InvalidDurationError(text)

    total = 0
    for i, part in enumerate(reversed(parts)):
        total += int(part) * 60**i
    return timedelta(seconds=total)


def build_watch_url(video_id: str, watch_url: str = WATCH_URL) -> str:
    return f"{watch_url}?{urlencode({'v': video_id})}"


def _read_url(node: JsonNode) -> str:
    value = node.as_str()
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidUrlError(node.path, value)
    return value


class ResultParser:
    """Maps the ``contents`` array of a results container to a QueryResult."""

    def __init__(self, watch_url: str = WATCH_URL):
        self.watch_url = watch_url

    def parse(self, container: Any) -> QueryResult:
        """
        Parses every video item in the container, preserving their order.

        Non-video items are skipped. A video item missing any expected field
        aborts the whole parse, since that means the schema itself changed.
        """
        contents = JsonNode(container).read("contents")

        tracks = []
        skipped = 0
        for element in contents.items():
            renderer = element.get(ITEM_KIND_KEY)
            if renderer is None:
                skipped += 1
                continue
            tracks.append(self.parse_item(renderer))

        log.debug(f"Parsed {len(tracks)} tracks, skipped {skipped} non-video items")
        return QueryResult(tuple(tracks))

    def parse_item(self, renderer: JsonNode) -> TrackRecord:
        """Parses a single ``videoRenderer`` object into a TrackRecord."""
        artist_thumbnail = _read_url(
            renderer.read("channelThumbnailSupportedRenderers")
            .read("channelThumbnailWithLinkRenderer")
            .read("thumbnail")
            .read("thumbnails")
            .index(0)
            .read("url")
        )
        artist_name = (
            renderer.read("longBylineText").read("runs").index(0).read("text").as_str()
        )

        duration = parse_duration(
            renderer.read("lengthText").read("simpleText").as_str()
        )

        video_id = renderer.read("videoId").as_str()
        title = renderer.read("title").read("runs").index(0).read("text").as_str()
        thumbnail = _read_url(
            renderer.read("thumbnail").read("thumbnails").index(0).read("url")
        )

        return TrackRecord(
            id=video_id,
            title=title,
            artist_name=artist_name,
            url=build_watch_url(video_id, self.watch_url),
            thumbnail_url=thumbnail,
            artist_thumbnail_url=artist_thumbnail,
            duration=duration,
        )
