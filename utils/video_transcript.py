"""Download YouTube caption tracks and flatten them into plain text.

This module has two layers:

``InnertubeSubtitleFetcher``
    Fetches one caption track for a video ID and language code using
    the same Innertube API the YouTube apps use.  It returns the track
    as an ordered list of ``TranscriptLine`` records and raises on any
    failure (missing captions, unplayable video, HTTP errors).

``TranscriptService``
    Calls a fetcher and joins the returned lines into a single string.
    Any fetcher failure is reported as ``RetrievalError`` so the MCP
    client sees a structured error instead of an empty transcript.

Nothing here keeps state between calls: each fetch opens its own HTTP
connections and the result is handed straight back to the caller.
"""

from __future__ import annotations

import html
import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Union

import requests

from config import Settings, get_settings
from utils.errors import RetrievalError, SubtitleFetchError

logger = logging.getLogger(__name__)

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
PLAYER_URL = "https://www.youtube.com/youtubei/v1/player?key={api_key}"

_API_KEY_PATTERN = re.compile(r'"INNERTUBE_API_KEY":"([^"]+)"')
_FMT_PARAM_PATTERN = re.compile(r"&fmt=\w+")
_TAG_PATTERN = re.compile(r"<[^>]*>")


@dataclass(frozen=True)
class TranscriptLine:
    """One timed caption line.  Times are in seconds."""

    text: str
    start: Optional[float] = None
    duration: Optional[float] = None


LineLike = Union[TranscriptLine, Mapping[str, Any]]


class SubtitleFetcher(Protocol):
    """Anything that can fetch a caption track for a video."""

    def fetch(self, video_id: str, lang: str) -> Iterable[LineLike]:
        """Return the caption lines of ``video_id`` in ``lang``.

        Raises:
            Exception: Any failure; its message is reported to the client.
        """
        ...


def _clean_caption_text(raw: str) -> str:
    """Decode HTML entities and drop inline markup from caption text."""
    return _TAG_PATTERN.sub("", html.unescape(raw))


def _to_seconds(value: Optional[str], scale: float = 1.0) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value) / scale
    except ValueError:
        return None


def parse_caption_xml(xml_text: str) -> List[TranscriptLine]:
    """Parse a timedtext caption document.

    Both the classic format (``<text start="1.2" dur="3.4">``, seconds)
    and ``srv3`` (``<p t="1200" d="3400">``, milliseconds) are
    understood.
    """
    root = ET.fromstring(xml_text)
    lines: List[TranscriptLine] = []
    for item in root.iter("text"):
        lines.append(
            TranscriptLine(
                text=_clean_caption_text("".join(item.itertext())),
                start=_to_seconds(item.get("start")),
                duration=_to_seconds(item.get("dur")),
            )
        )
    if lines:
        return lines
    for item in root.iter("p"):
        lines.append(
            TranscriptLine(
                text=_clean_caption_text("".join(item.itertext())),
                start=_to_seconds(item.get("t"), scale=1000.0),
                duration=_to_seconds(item.get("d"), scale=1000.0),
            )
        )
    return lines


class InnertubeSubtitleFetcher:
    """Fetch caption tracks through YouTube's Innertube player API."""

    def __init__(
        self,
        timeout: float = 10.0,
        client_name: str = "ANDROID",
        client_version: str = "20.10.38",
    ) -> None:
        self.timeout = timeout
        self.client_name = client_name
        self.client_version = client_version

    @classmethod
    def from_settings(cls, settings: Settings) -> "InnertubeSubtitleFetcher":
        return cls(
            timeout=settings.request_timeout,
            client_name=settings.innertube_client_name,
            client_version=settings.innertube_client_version,
        )

    def _get_api_key(self, video_id: str) -> str:
        """Read the Innertube API key embedded in the watch page."""
        response = requests.get(WATCH_URL.format(video_id=video_id), timeout=self.timeout)
        response.raise_for_status()
        match = _API_KEY_PATTERN.search(response.text)
        if not match:
            raise SubtitleFetchError(f"Could not load the watch page for {video_id}")
        return match.group(1)

    def _get_player_response(self, video_id: str, api_key: str) -> Dict[str, Any]:
        body = {
            "context": {
                "client": {
                    "clientName": self.client_name,
                    "clientVersion": self.client_version,
                }
            },
            "videoId": video_id,
        }
        response = requests.post(
            PLAYER_URL.format(api_key=api_key), json=body, timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()

    @staticmethod
    def _select_track(
        tracks: List[Dict[str, Any]], video_id: str, lang: str
    ) -> Dict[str, Any]:
        """Pick the ``lang`` track, preferring manual captions over ASR."""
        if not tracks:
            raise SubtitleFetchError(f"No captions found for video {video_id}")
        matching = [t for t in tracks if t.get("languageCode") == lang]
        if not matching:
            raise SubtitleFetchError(f"Could not find {lang} captions for {video_id}")
        manual = [t for t in matching if t.get("kind") != "asr"]
        return (manual or matching)[0]

    def fetch(self, video_id: str, lang: str) -> List[TranscriptLine]:
        """Download the ``lang`` caption track of ``video_id``.

        Args:
            video_id: The 11‑character YouTube video ID.
            lang: Caption language code, e.g. ``"en"`` or ``"ja"``.

        Returns:
            The caption lines in chronological order.

        Raises:
            SubtitleFetchError: If the video cannot be played or has no
                track in ``lang``.
            requests.RequestException: On HTTP or network failures.
            xml.etree.ElementTree.ParseError: If the track is malformed.
        """
        api_key = self._get_api_key(video_id)
        data = self._get_player_response(video_id, api_key)

        playability = data.get("playabilityStatus", {})
        status = playability.get("status")
        if status and status != "OK":
            reason = playability.get("reason") or status
            raise SubtitleFetchError(f"Video unavailable: {reason}")

        tracks = (
            data
            .get("captions", {})
            .get("playerCaptionsTracklistRenderer", {})
            .get("captionTracks", [])
        )
        track = self._select_track(tracks, video_id, lang)
        base_url = track.get("baseUrl")
        if not base_url:
            raise SubtitleFetchError(f"Caption track for {video_id} has no URL")

        logger.debug("Downloading %s captions (%s) for %s", lang, track.get("kind", "manual"), video_id)
        response = requests.get(_FMT_PARAM_PATTERN.sub("", base_url), timeout=self.timeout)
        response.raise_for_status()
        if not response.text.strip():
            raise SubtitleFetchError(f"Empty caption track returned for {video_id}")
        return parse_caption_xml(response.text)


def _line_text(line: LineLike) -> str:
    if isinstance(line, Mapping):
        return line["text"]
    return line.text


def format_transcript(lines: Iterable[LineLike]) -> str:
    """Join caption lines into one string.

    Each line is stripped, blank lines are dropped and the rest are
    joined with single spaces in their original order.
    """
    texts = (_line_text(line).strip() for line in lines)
    return " ".join(text for text in texts if text)


class TranscriptService:
    """Turn a video ID and language into plain transcript text."""

    def __init__(self, fetcher: SubtitleFetcher) -> None:
        self.fetcher = fetcher

    def fetch(self, video_id: str, lang: str) -> str:
        """Fetch and format the transcript of ``video_id`` in ``lang``.

        Raises:
            RetrievalError: If the fetcher fails for any reason.  No
                partial transcript is returned.
        """
        try:
            lines = list(self.fetcher.fetch(video_id, lang))
        except Exception as exc:
            logger.error("Failed to fetch transcript for %s (%s): %s", video_id, lang, exc)
            raise RetrievalError(f"Failed to fetch transcript: {exc}") from exc
        return format_transcript(lines)


def get_transcript_service(settings: Optional[Settings] = None) -> TranscriptService:
    """Build a transcript service backed by the Innertube fetcher."""
    settings = settings or get_settings()
    return TranscriptService(InnertubeSubtitleFetcher.from_settings(settings))
