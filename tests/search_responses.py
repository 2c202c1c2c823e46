"""Builders for search API responses used across tests."""

from unittest.mock import Mock

import requests


def make_playback(name: str = "mp4Avc", url: str = "https://x/video.mp4") -> dict:
    return {"name": name, "url": url, "__typename": "Playback"}


def make_feed(feed_type: str = "CMS", playbacks: list[dict] | None = None) -> dict:
    if playbacks is None:
        playbacks = [make_playback()]
    return {"type": feed_type, "playbacks": playbacks, "__typename": "Feed"}


def make_media_playback(
    highlight_id: str = "abc123",
    description: str = "Big Homer",
    feeds: list[dict] | None = None,
) -> dict:
    if feeds is None:
        feeds = [make_feed()]
    return {
        "id": highlight_id,
        "description": description,
        "feeds": feeds,
        "__typename": "MediaPlayback",
    }


def make_search_response(*media_playbacks: dict, total: int | None = None) -> dict:
    """Wrap media playback records as one play each."""
    plays = [
        {"mediaPlayback": [media], "__typename": "Play"} for media in media_playbacks
    ]
    return {
        "data": {
            "search": {
                "plays": plays,
                "total": len(plays) if total is None else total,
                "__typename": "SearchResults",
            }
        }
    }


def make_http_response(payload=None, status_code: int = 200, text: str = "ok") -> Mock:
    """Build a stand-in for requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = text
    response.content = text.encode("utf-8")
    response.json.return_value = payload
    if response.ok:
        response.raise_for_status.return_value = None
    else:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Error", response=response
        )
    return response
