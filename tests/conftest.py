"""Shared pytest fixtures for transcript tests."""

from unittest.mock import MagicMock

import pytest

from utils.video_transcript import TranscriptLine, TranscriptService


class FakeFetcher:
    """Deterministic stand-in for the Innertube fetcher."""

    def __init__(self, lines=None, error=None):
        self.lines = lines or []
        self.error = error
        self.calls = []

    def fetch(self, video_id, lang):
        self.calls.append((video_id, lang))
        if self.error is not None:
            raise self.error
        return self.lines


def make_response(text="", json_data=None, status_error=None):
    """Build a mocked ``requests.Response``."""
    response = MagicMock()
    response.text = text
    response.json = MagicMock(return_value=json_data or {})
    response.raise_for_status = MagicMock(side_effect=status_error)
    return response


@pytest.fixture
def sample_lines():
    return [
        TranscriptLine(text=" hi ", start=0.0, duration=1.5),
        TranscriptLine(text="", start=1.5, duration=0.5),
        TranscriptLine(text="there", start=2.0, duration=1.0),
    ]


@pytest.fixture
def fake_fetcher(sample_lines):
    return FakeFetcher(lines=sample_lines)


@pytest.fixture
def service(fake_fetcher):
    return TranscriptService(fake_fetcher)


@pytest.fixture
def failing_fetcher():
    return FakeFetcher(error=RuntimeError("Could not find ja captions for dQw4w9WgXcQ"))


@pytest.fixture
def watch_page():
    return '<html><script>ytcfg.set({"INNERTUBE_API_KEY":"test-key","X":1});</script></html>'


@pytest.fixture
def player_response():
    return {
        "playabilityStatus": {"status": "OK"},
        "captions": {
            "playerCaptionsTracklistRenderer": {
                "captionTracks": [
                    {
                        "baseUrl": "https://www.youtube.com/api/timedtext?v=dQw4w9WgXcQ&lang=en&kind=asr&fmt=srv3",
                        "languageCode": "en",
                        "kind": "asr",
                    },
                    {
                        "baseUrl": "https://www.youtube.com/api/timedtext?v=dQw4w9WgXcQ&lang=en&fmt=srv3",
                        "languageCode": "en",
                    },
                    {
                        "baseUrl": "https://www.youtube.com/api/timedtext?v=dQw4w9WgXcQ&lang=ja",
                        "languageCode": "ja",
                    },
                ]
            }
        },
    }


@pytest.fixture
def caption_xml():
    return (
        '<?xml version="1.0" encoding="utf-8" ?><transcript>'
        '<text start="0.5" dur="2.1">We&amp;#39;re no strangers</text>'
        '<text start="2.6" dur="1.9">  </text>'
        '<text start="4.5" dur="3.0">to &lt;i&gt;love&lt;/i&gt;</text>'
        "</transcript>"
    )


@pytest.fixture
def make_fetcher():
    """Factory for fake fetchers with custom lines or errors."""
    return FakeFetcher


@pytest.fixture
def mock_response():
    """Factory for mocked HTTP responses."""
    return make_response
