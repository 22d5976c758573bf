from datetime import timedelta
from pathlib import Path

import pytest

from yt_provider.models.track import TrackRecord
from yt_provider.utils.formatting import format_duration, output_path, track_file_name


def _track(title="Song", artist="Artist"):
    return TrackRecord(
        id="abc123",
        title=title,
        artist_name=artist,
        url="https://youtube.com/watch?v=abc123",
        thumbnail_url="https://i.ytimg.com/vi/abc123/hq720.jpg",
        artist_thumbnail_url="https://yt3.ggpht.com/a=s68",
        duration=timedelta(seconds=225),
    )


@pytest.mark.parametrize(
    "value, expected",
    [
        (timedelta(seconds=225), "3:45"),
        (timedelta(seconds=3723), "1:02:03"),
        (9, "0:09"),
        (0, "0:00"),
    ],
)
def test_format_duration(value, expected):
    assert format_duration(value) == expected


def test_track_file_name_strips_path_characters():
    name = track_file_name(_track(title="AC/DC: Back in Black?", artist="AC/DC"))

    assert "/" not in name
    assert name.startswith("ACDC - ")


def test_track_file_name_falls_back_to_id():
    assert track_file_name(_track(title="///", artist="///")) != ""


def test_output_path_joins_directory(tmp_path):
    assert output_path(str(tmp_path), "song") == str(Path(tmp_path) / "song")
