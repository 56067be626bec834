"""Resolve user input into a YouTube video ID.

The assistant may hand us a full watch URL, a ``youtu.be`` short link
or a bare video ID.  ``resolve_video_id`` turns any of those into the
11‑character ID used by the transcript fetcher, or raises
``InvalidInputError`` with a message that names the offending input.

Resolution happens in two explicit steps:

1. If the input parses as an absolute URL (scheme and host present),
   the ID comes from the URL and only from the URL.
2. Otherwise the input itself must be a raw video ID.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import ParseResult, parse_qs, urlparse

from utils.errors import InvalidInputError

SHORT_LINK_HOST = "youtu.be"
MAIN_SITE_DOMAIN = "youtube.com"

VIDEO_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{11}$")


def _parse_absolute_url(value: str) -> Optional[ParseResult]:
    """Return the parsed URL, or ``None`` if ``value`` is not an absolute URL."""
    try:
        parsed = urlparse(value)
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None
    return parsed


def _id_from_url(parsed: ParseResult, value: str) -> str:
    hostname = parsed.hostname or ""
    if hostname == SHORT_LINK_HOST:
        # youtu.be/<id>: the first path segment is the ID as-is
        segment = parsed.path[1:].split("/", 1)[0]
        if not segment:
            raise InvalidInputError(f"Invalid YouTube URL: {value}")
        return segment
    if MAIN_SITE_DOMAIN in hostname:
        video_ids = parse_qs(parsed.query).get("v")
        if not video_ids:
            raise InvalidInputError(f"Invalid YouTube URL: {value}")
        return video_ids[0]
    raise InvalidInputError(f"Could not extract a video ID from URL: {value}")


def resolve_video_id(value: Optional[str]) -> str:
    """Resolve a YouTube URL or raw video ID to a video ID.

    Args:
        value: A ``https://www.youtube.com/watch?v=...`` URL, a
            ``https://youtu.be/...`` short link or an 11‑character ID.

    Returns:
        The video ID.

    Raises:
        InvalidInputError: If the input is empty, is a URL without a
            usable ID, or is neither a URL nor a valid raw ID.

    Examples::

        >>> resolve_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
        >>> resolve_video_id("https://youtu.be/dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
        >>> resolve_video_id("dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
    """
    if not value:
        raise InvalidInputError("A YouTube URL or video ID is required")

    parsed = _parse_absolute_url(value)
    if parsed is not None:
        return _id_from_url(parsed, value)

    if not VIDEO_ID_PATTERN.fullmatch(value):
        raise InvalidInputError(f"Invalid video ID: {value}")
    return value
