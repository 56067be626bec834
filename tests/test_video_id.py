"""
Tests for video ID resolution in utils/video_id.py.
"""

import pytest

from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS

from utils.errors import InvalidInputError
from utils.video_id import resolve_video_id


class TestResolveRawId:
    """Raw 11-character IDs are returned unchanged."""

    @pytest.mark.parametrize(
        "video_id", ["dQw4w9WgXcQ", "abc-DEF_123", "___________", "-----------", "0123456789a"]
    )
    def test_valid_raw_ids(self, video_id):
        assert resolve_video_id(video_id) == video_id

    @pytest.mark.parametrize(
        "value", ["short", "dQw4w9WgXcQx", "dQw4w9WgXc!", "dQw4w9WgXcQ\n", "dQw4w 9WgXc"]
    )
    def test_invalid_raw_ids(self, value):
        with pytest.raises(InvalidInputError, match="Invalid video ID"):
            resolve_video_id(value)

    def test_url_without_scheme_is_treated_as_raw_id(self):
        """A scheme-less URL is not an absolute URL, so it must be a raw ID."""
        with pytest.raises(InvalidInputError, match="Invalid video ID"):
            resolve_video_id("youtube.com/watch?v=dQw4w9WgXcQ")


class TestResolveUrls:
    """IDs are extracted from youtube.com and youtu.be URLs."""

    def test_watch_url(self):
        assert resolve_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_watch_url_with_extra_params(self):
        assert (
            resolve_video_id("https://www.youtube.com/watch?list=xyz&v=dQw4w9WgXcQ&t=10")
            == "dQw4w9WgXcQ"
        )

    def test_mobile_watch_url(self):
        assert resolve_video_id("https://m.youtube.com/watch?v=dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_short_link(self):
        assert resolve_video_id("https://youtu.be/dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_short_link_with_query(self):
        assert resolve_video_id("https://youtu.be/dQw4w9WgXcQ?t=42") == "dQw4w9WgXcQ"

    def test_short_link_segment_is_not_revalidated(self):
        assert resolve_video_id("https://youtu.be/abc") == "abc"

    def test_short_link_without_segment(self):
        with pytest.raises(InvalidInputError, match="Invalid YouTube URL"):
            resolve_video_id("https://youtu.be/")

    def test_watch_url_without_v_param(self):
        with pytest.raises(InvalidInputError, match="Invalid YouTube URL"):
            resolve_video_id("https://www.youtube.com/watch")

    def test_watch_url_with_empty_v_param(self):
        with pytest.raises(InvalidInputError, match="Invalid YouTube URL"):
            resolve_video_id("https://www.youtube.com/watch?v=")

    def test_other_domain_is_rejected(self):
        with pytest.raises(InvalidInputError, match="Could not extract a video ID"):
            resolve_video_id("https://example.com/watch?v=dQw4w9WgXcQ")

    def test_error_message_includes_input(self):
        with pytest.raises(InvalidInputError) as exc_info:
            resolve_video_id("https://www.youtube.com/watch")
        assert "https://www.youtube.com/watch" in str(exc_info.value)


class TestResolveEmpty:
    """Empty input is rejected before any parsing."""

    @pytest.mark.parametrize("value", ["", None])
    def test_empty_input(self, value):
        with pytest.raises(InvalidInputError, match="required"):
            resolve_video_id(value)

    def test_errors_are_invalid_params(self):
        with pytest.raises(McpError) as exc_info:
            resolve_video_id("short")
        assert exc_info.value.error.code == INVALID_PARAMS
