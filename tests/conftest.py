import json
import sys
from pathlib import Path

import pytest

# Ensure tests can import the project package regardless of how pytest is invoked.
ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)
if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)


def make_video(
    video_id: str,
    title: str = "Song",
    artist: str = "Artist",
    length: str = "3:45",
) -> dict:
    """A search result item shaped like the ones on the results page."""
    return {
        "videoRenderer": {
            "videoId": video_id,
            "thumbnail": {
                "thumbnails": [
                    {
                        "url": f"https://i.ytimg.com/vi/{video_id}/hq720.jpg",
                        "width": 720,
                        "height": 404,
                    }
                ]
            },
            "title": {"runs": [{"text": title}]},
            "longBylineText": {
                "runs": [
                    {
                        "text": artist,
                        "navigationEndpoint": {"browseEndpoint": {"browseId": "UC1"}},
                    }
                ]
            },
            "lengthText": {
                "accessibility": {"accessibilityData": {"label": "some minutes"}},
                "simpleText": length,
            },
            "channelThumbnailSupportedRenderers": {
                "channelThumbnailWithLinkRenderer": {
                    "thumbnail": {
                        "thumbnails": [
                            {"url": f"https://yt3.ggpht.com/{artist}=s68", "width": 68}
                        ]
                    }
                }
            },
        }
    }


def make_shelf() -> dict:
    return {"shelfRenderer": {"title": {"simpleText": "People also watched"}}}


def make_page(items: list, tracking_params: str = "CBQQuy8YACITCJ-x_z=") -> str:
    """Wraps result items in the surrounding markup of a search page."""
    section = json.dumps(
        {"contents": items, "trackingParams": tracking_params}, separators=(",", ":")
    )
    return (
        "<!DOCTYPE html><html><body><script nonce=\"x\">var ytInitialData = "
        '{"contents":{"twoColumnSearchResultsRenderer":{"primaryContents":'
        '{"sectionListRenderer":{"contents":[{"itemSectionRenderer":'
        + section
        + '},{"continuationItemRenderer":{"trigger":"CONTINUATION_TRIGGER_ON_ITEM_SHOWN"}}'
        "]}}}}};</script></body></html>"
    )


@pytest.fixture()
def results_page() -> str:
    return make_page(
        [
            make_video("dQw4w9WgXcQ", "Never Gonna Give You Up", "Rick Astley", "3:33"),
            make_shelf(),
            make_video("kJQP7kiw5Fk", "Despacito", "Luis Fonsi", "4:42"),
        ]
    )


@pytest.fixture()
def fake_tool(tmp_path):
    """Writes an executable shell script standing in for an external tool."""

    def _make(name: str, body: str) -> str:
        path = tmp_path / name
        path.write_text("#!/bin/sh\n" + body + "\n", encoding="utf-8")
        path.chmod(0o755)
        return str(path)

    return _make
