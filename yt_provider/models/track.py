"""
Immutable records produced by a search.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Iterator


@dataclass(frozen=True)
class TrackRecord:
    """A single video result from a search results page."""

    id: str
    title: str
    artist_name: str
    url: str
    thumbnail_url: str
    artist_thumbnail_url: str
    duration: timedelta

    @property
    def duration_seconds(self) -> int:
        return int(self.duration.total_seconds())


@dataclass(frozen=True)
class QueryResult:
    """Ordered search results, in the order they appeared on the page."""

    tracks: tuple[TrackRecord, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.tracks)

    def __iter__(self) -> Iterator[TrackRecord]:
        return iter(self.tracks)

    def __getitem__(self, index: int) -> TrackRecord:
        return self.tracks[index]

    def __bool__(self) -> bool:
        return bool(self.tracks)
