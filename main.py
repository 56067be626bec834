"""
Entry point for running the YouTube transcript MCP server.

To start the server, run this module directly. It configures logging,
imports the shared server instance from ``server.py`` and calls its
``run()`` method over stdio.  When running via Claude for Desktop,
your configuration should specify something akin to::

    "command": "python",
    "args": ["main.py"]

or use ``uv run main.py`` if you have ``uv`` installed. The server
blocks until the client closes the connection or it receives SIGINT.
"""

from __future__ import annotations

import logging
import sys

from config import get_settings
from utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    setup_logging(get_settings().log_level)

    try:
        # Import here so configuration errors surface as a startup failure.
        from server import mcp  # type: ignore

        mcp.run(transport="stdio")
    except KeyboardInterrupt:
        logger.info("Received interrupt, shutting down")
        sys.exit(0)
    except Exception:
        logger.exception("Server failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
