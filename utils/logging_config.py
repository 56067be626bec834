"""Logging setup for the MCP server.

The stdio transport owns stdout, so every log record goes to stderr
where MCP hosts collect server logs.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(
    level: Union[int, str] = logging.INFO,
    format_string: Optional[str] = None,
) -> None:
    """Configure the root logger to write to stderr.

    Args:
        level: Log level, either a ``logging`` constant or its name.
        format_string: Optional override for the record format.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format=format_string or LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )

    # HTTP client chatter is only useful when debugging the fetcher
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
