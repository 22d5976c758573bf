"""
Helper functions for formatting data into human-readable strings.
"""

from datetime import timedelta
from pathlib import Path

from pathvalidate import sanitize_filename

from yt_provider.models.track import TrackRecord


def format_duration(duration: timedelta | float) -> str:
    """
    Formats a duration the way the search page shows it (e.g. '3:45', '1:02:03').
    """
    if isinstance(duration, timedelta):
        duration = duration.total_seconds()
    s = int(duration)
    hours, remainder = divmod(s, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02}:{secs:02}"
    return f"{minutes}:{secs:02}"


def track_file_name(track: TrackRecord) -> str:
    """Builds a filesystem-safe base name like 'Artist - Title'."""
    name = sanitize_filename(f"{track.artist_name} - {track.title}", platform="auto")
    return name or track.id


def output_path(output_dir: str, base_name: str) -> str:
    """Joins a sanitized base name onto the output directory."""
    name = sanitize_filename(base_name, platform="auto") or "track"
    return str(Path(output_dir).expanduser() / name)
