"""MCP tool for retrieving YouTube transcripts.

This module exposes a single tool, ``get_transcript``, that accepts a
YouTube URL (or a bare video ID) and an optional language code, and
returns the video's caption track as one block of plain text.  It uses
``utils.video_id`` to resolve the video ID and
``utils.video_transcript`` to download and flatten the captions.  No
summarisation or post‑processing is performed here.

The tool result holds one text content block:

* ``text`` – The transcript lines, stripped and joined with single
  spaces.  May be empty if every caption line was blank.
* ``metadata`` – ``videoId``, ``language``, ``timestamp`` (ISO‑8601,
  UTC) and ``charCount`` for the returned text.

Example call:

.. code-block:: json

    {
      "url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
      "lang": "ja"
    }

Errors are raised as ``McpError`` with ``INVALID_PARAMS`` for bad
input, ``METHOD_NOT_FOUND`` for an unknown tool and ``INTERNAL_ERROR``
when the captions could not be fetched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple

import anyio
from mcp.shared.exceptions import McpError
from mcp.types import CallToolRequest, CallToolResult, ServerResult, TextContent

from config import get_settings
from server import mcp  # Shared FastMCP instance
from utils.errors import InternalError, InvalidInputError, MethodNotFoundError
from utils.video_id import resolve_video_id
from utils.video_transcript import TranscriptService, get_transcript_service

logger = logging.getLogger(__name__)

TOOL_NAME = "get_transcript"
TOOL_DESCRIPTION = "Fetch the transcript of a YouTube video from its URL or video ID."


def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class TranscriptResult:
    """A fetched transcript and the metadata reported alongside it."""

    text: str
    video_id: str
    language: str
    timestamp: str = field(default_factory=_utc_timestamp)

    @property
    def char_count(self) -> int:
        return len(self.text)

    def to_envelope(self) -> Dict[str, Any]:
        return {
            "content": [
                {
                    "type": "text",
                    "text": self.text,
                    "metadata": {
                        "videoId": self.video_id,
                        "language": self.language,
                        "timestamp": self.timestamp,
                        "charCount": self.char_count,
                    },
                }
            ],
            "isError": False,
        }


def _validate_arguments(arguments: Mapping[str, Any]) -> Tuple[str, str]:
    """Check argument types and apply the default language."""
    url = arguments.get("url")
    if not url or not isinstance(url, str):
        raise InvalidInputError("url is required and must be a string")
    lang = arguments.get("lang")
    if lang is None:
        lang = get_settings().default_language
    elif not isinstance(lang, str):
        raise InvalidInputError("lang must be a string")
    return url, lang


async def _fetch_transcript(
    arguments: Mapping[str, Any], service: TranscriptService
) -> TranscriptResult:
    url, lang = _validate_arguments(arguments)
    try:
        video_id = resolve_video_id(url)
        logger.info("Processing video ID: %s", video_id)
        text = await anyio.to_thread.run_sync(service.fetch, video_id, lang)
        logger.info("Fetched transcript for %s (%d characters)", video_id, len(text))
        return TranscriptResult(text=text, video_id=video_id, language=lang)
    except McpError:
        raise
    except Exception as exc:
        logger.exception("Transcript processing failed for %r", url)
        raise InternalError(f"Error while processing transcript: {exc}") from exc


async def handle_tool_call(
    name: str,
    arguments: Optional[Mapping[str, Any]] = None,
    service: Optional[TranscriptService] = None,
) -> Dict[str, Any]:
    """Dispatch a tool call and return the MCP result envelope.

    Args:
        name: The requested tool name.
        arguments: The raw tool arguments sent by the client.
        service: Transcript service to use; a fresh Innertube‑backed
            service is built when omitted.

    Returns:
        ``{"content": [...], "isError": False}`` on success.

    Raises:
        McpError: ``INVALID_PARAMS``, ``METHOD_NOT_FOUND`` or
            ``INTERNAL_ERROR`` as described in the module docstring.
    """
    if name != TOOL_NAME:
        raise MethodNotFoundError(f"Unknown tool: {name}")
    result = await _fetch_transcript(arguments or {}, service or get_transcript_service())
    return result.to_envelope()


async def _handle_call_tool_request(request: CallToolRequest) -> ServerResult:
    envelope = await handle_tool_call(request.params.name, request.params.arguments)
    return ServerResult(
        CallToolResult(
            content=[TextContent(**block) for block in envelope["content"]],
            isError=envelope["isError"],
        )
    )


@mcp.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION, structured_output=False)
async def get_transcript(url: str, lang: str = "en") -> List[TextContent]:
    """Retrieve a YouTube video's transcript as plain text.

    The signature defines the advertised input schema.  Calls from MCP
    clients are answered by ``_handle_call_tool_request`` with the raw
    arguments, so an omitted ``lang`` falls back to the configured
    default language.

    Args:
        url: A YouTube URL (``youtu.be`` or ``youtube.com/watch?v=``
            format) or an 11‑character video ID.
        lang: Caption language code, e.g. ``"en"`` or ``"ja"``.

    Returns:
        A single text block holding the transcript, with ``metadata``
        describing the video ID, language, fetch time and length.
    """
    envelope = await handle_tool_call(TOOL_NAME, {"url": url, "lang": lang})
    return [TextContent(**block) for block in envelope["content"]]


# Tool calls bypass FastMCP's ToolError wrapping so that McpError codes
# reach the client as JSON-RPC errors.
mcp._mcp_server.request_handlers[CallToolRequest] = _handle_call_tool_request
