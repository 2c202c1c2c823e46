"""Property-based tests for notification extraction."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from homerun_bot.extract import ExtractionError, extract_notification
from homerun_bot.models import Feed, Highlight, Playback

names = st.text(min_size=1, max_size=20)
urls = st.builds(
    lambda path: f"https://cdn.example.com/{path}.mp4",
    st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789", min_size=1, max_size=20),
)
playbacks = st.builds(Playback, name=names, url=urls)
feeds = st.builds(Feed, type=names, playbacks=st.lists(playbacks, max_size=4))


class TestExtractNotificationProperties:
    """Property-based tests for extract_notification."""

    @given(
        description=st.text(max_size=100),
        url=urls,
        before=st.lists(feeds.filter(lambda f: f.type != "CMS"), max_size=3),
        after=st.lists(feeds, max_size=3),
    )
    def test_text_is_description_then_url(self, description, url, before, after):
        """
        For any highlight whose first CMS feed holds an mp4Avc playback, the
        text is the description, a space and that playback's URL.
        """
        cms = Feed("CMS", [Playback("mp4Avc", url)])
        highlight = Highlight(id="h", description=description, feeds=before + [cms] + after)

        payload = extract_notification(highlight)

        assert payload.text == f"{description} {url}"

    @given(st.lists(feeds.filter(lambda f: f.type != "CMS"), max_size=5))
    def test_no_cms_feed_never_crashes(self, feed_list):
        """For any highlight without a CMS feed, extraction reports a failure."""
        highlight = Highlight(id="h", description="d", feeds=feed_list)

        with pytest.raises(ExtractionError) as exc_info:
            extract_notification(highlight)

        assert exc_info.value.reason == ExtractionError.MISSING_FEED

    @given(st.lists(playbacks.filter(lambda p: p.name != "mp4Avc"), max_size=5))
    def test_no_target_variant_never_crashes(self, playback_list):
        """For any CMS feed without mp4Avc, extraction reports a failure."""
        highlight = Highlight(
            id="h", description="d", feeds=[Feed("CMS", playback_list)]
        )

        with pytest.raises(ExtractionError) as exc_info:
            extract_notification(highlight)

        assert exc_info.value.reason == ExtractionError.MISSING_PLAYBACK
