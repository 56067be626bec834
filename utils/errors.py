"""Error types raised by the transcript server.

Every error the server raises on purpose is an ``McpError`` so the MCP
SDK can turn it into a JSON-RPC error response without further
translation.  Each class is bound to exactly one ``ErrorKind``; the
router relies on that to tell "bad input" apart from "fetching failed".
"""

from __future__ import annotations

from enum import IntEnum
from typing import Optional

from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND, ErrorData


class ErrorKind(IntEnum):
    """The closed set of error kinds a tool call can end with."""

    INVALID_PARAMS = INVALID_PARAMS
    METHOD_NOT_FOUND = METHOD_NOT_FOUND
    INTERNAL_ERROR = INTERNAL_ERROR


class TranscriptToolError(McpError):
    """Base class for errors carrying an ``ErrorKind``."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR

    def __init__(self, message: str, kind: Optional[ErrorKind] = None) -> None:
        if kind is not None:
            self.kind = kind
        super().__init__(ErrorData(code=int(self.kind), message=message))


class InvalidInputError(TranscriptToolError):
    """The caller supplied a missing or malformed argument."""

    kind = ErrorKind.INVALID_PARAMS


class MethodNotFoundError(TranscriptToolError):
    """The requested tool does not exist."""

    kind = ErrorKind.METHOD_NOT_FOUND


class RetrievalError(TranscriptToolError):
    """The subtitle track could not be retrieved."""

    kind = ErrorKind.INTERNAL_ERROR


class InternalError(TranscriptToolError):
    """An unexpected failure while handling a tool call."""

    kind = ErrorKind.INTERNAL_ERROR


class SubtitleFetchError(Exception):
    """Raised by the Innertube fetcher when a caption track is unavailable."""
