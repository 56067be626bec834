"""MCP tool modules registered with the shared server."""
