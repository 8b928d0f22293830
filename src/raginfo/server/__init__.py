"""MCP server for raginfo."""

from raginfo.server.mcp_server import create_mcp_server

__all__ = ["create_mcp_server"]
