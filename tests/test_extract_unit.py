"""Unit tests for notification extraction."""

import pytest

from homerun_bot.extract import ExtractionError, extract_notification
from homerun_bot.models import Feed, Highlight, NotificationPayload, Playback


def make_highlight(feeds: list[Feed]) -> Highlight:
    return Highlight(id="abc123", description="Big Homer", feeds=feeds)


class TestExtractNotificationUnit:
    """Unit tests for extract_notification."""

    def test_cms_mp4avc_is_selected(self):
        """Test the notification text for the preferred variant."""
        highlight = make_highlight(
            [
                Feed("HOME", [Playback("mp4Avc", "https://x/home.mp4")]),
                Feed(
                    "CMS",
                    [
                        Playback("hlsCloud", "https://x/master.m3u8"),
                        Playback("mp4Avc", "https://x/video.mp4"),
                    ],
                ),
            ]
        )

        payload = extract_notification(highlight)

        assert payload == NotificationPayload(text="Big Homer https://x/video.mp4")
        assert payload.to_json() == {"text": "Big Homer https://x/video.mp4"}

    def test_first_matching_feed_and_playback_win(self):
        """Test that duplicates resolve to the first in order."""
        highlight = make_highlight(
            [
                Feed(
                    "CMS",
                    [
                        Playback("mp4Avc", "https://x/first.mp4"),
                        Playback("mp4Avc", "https://x/second.mp4"),
                    ],
                ),
                Feed("CMS", [Playback("mp4Avc", "https://x/third.mp4")]),
            ]
        )

        assert extract_notification(highlight).text.endswith("https://x/first.mp4")

    def test_missing_feed_is_extraction_error(self):
        """Test a highlight without the CMS feed."""
        highlight = make_highlight(
            [Feed("HOME", [Playback("mp4Avc", "https://x/home.mp4")])]
        )

        with pytest.raises(ExtractionError) as exc_info:
            extract_notification(highlight)

        assert exc_info.value.reason == ExtractionError.MISSING_FEED
        assert exc_info.value.highlight_id == "abc123"

    def test_missing_playback_is_extraction_error(self):
        """Test a CMS feed without the mp4Avc variant."""
        highlight = make_highlight(
            [Feed("CMS", [Playback("hlsCloud", "https://x/master.m3u8")])]
        )

        with pytest.raises(ExtractionError) as exc_info:
            extract_notification(highlight)

        assert exc_info.value.reason == ExtractionError.MISSING_PLAYBACK

    def test_only_the_first_matching_feed_is_searched(self):
        """Test that the variant must be in the first feed of the target type."""
        highlight = make_highlight(
            [
                Feed("CMS", [Playback("hlsCloud", "https://x/master.m3u8")]),
                Feed("CMS", [Playback("mp4Avc", "https://x/video.mp4")]),
            ]
        )

        with pytest.raises(ExtractionError):
            extract_notification(highlight)

    def test_no_feeds_at_all(self):
        """Test a highlight with an empty feed list."""
        with pytest.raises(ExtractionError):
            extract_notification(make_highlight([]))

    def test_custom_feed_and_variant(self):
        """Test selecting a different feed and playback name."""
        highlight = make_highlight(
            [Feed("HOME", [Playback("highBit", "https://x/high.mp4")])]
        )

        payload = extract_notification(highlight, "HOME", "highBit")

        assert payload.text == "Big Homer https://x/high.mp4"

    def test_extraction_error_is_a_value_error(self):
        """Test that callers can treat extraction failures as bad data."""
        assert issubclass(ExtractionError, ValueError)
