"""
Configure the FastMCP server instance.

This module creates a shared ``FastMCP`` server (named ``YouTube_MCP``
unless overridden through ``YT_TRANSCRIPT_SERVER_NAME``) and imports
the tool modules so that their decorated functions are registered.

You typically do not run this module directly. Instead, use
``python main.py`` which imports the server and calls ``mcp.run()``.
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from config import get_settings


# Create the shared MCP server instance.
mcp = FastMCP(
    get_settings().server_name,
    instructions=(
        "Fetches the transcript of a YouTube video. Pass a video URL or "
        "ID and, optionally, a caption language code such as 'en' or 'ja'."
    ),
)


# Import tool modules so their decorated functions register with the
# server.  Use absolute imports so the code works when run from the
# project root.
from tools import transcript_tools  # noqa: E402,F401
