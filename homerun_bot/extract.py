"""Notification extraction for Home Run Bot."""

from .models import Feed, Highlight, NotificationPayload, Playback

DEFAULT_FEED_TYPE = "CMS"
DEFAULT_PLAYBACK_NAME = "mp4Avc"


class ExtractionError(ValueError):
    """A highlight has no video in the preferred feed and variant."""

    MISSING_FEED = "missing_feed"
    MISSING_PLAYBACK = "missing_playback"

    def __init__(self, highlight_id: str, reason: str, message: str):
        super().__init__(message)
        self.highlight_id = highlight_id
        self.reason = reason


def find_feed(highlight: Highlight, feed_type: str) -> Feed | None:
    return next((f for f in highlight.feeds if f.type == feed_type), None)


def find_playback(feed: Feed, playback_name: str) -> Playback | None:
    return next((p for p in feed.playbacks if p.name == playback_name), None)


def extract_notification(
    highlight: Highlight,
    feed_type: str = DEFAULT_FEED_TYPE,
    playback_name: str = DEFAULT_PLAYBACK_NAME,
) -> NotificationPayload:
    """Build the notification for a highlight.

    Uses the first feed of `feed_type` and, within it, the first playback
    named `playback_name`.

    Args:
        highlight: Highlight to announce
        feed_type: Delivery type tag of the feed to use
        playback_name: Variant name of the playback to link

    Returns:
        NotificationPayload with text "<description> <url>"

    Raises:
        ExtractionError: If the feed or the playback variant is missing
    """
    feed = find_feed(highlight, feed_type)
    if feed is None:
        raise ExtractionError(
            highlight.id,
            ExtractionError.MISSING_FEED,
            f"Highlight {highlight.id} has no {feed_type} feed",
        )

    playback = find_playback(feed, playback_name)
    if playback is None:
        raise ExtractionError(
            highlight.id,
            ExtractionError.MISSING_PLAYBACK,
            f"Highlight {highlight.id} has no {playback_name} playback "
            f"in its {feed_type} feed",
        )

    return NotificationPayload(text=f"{highlight.description} {playback.url}")
