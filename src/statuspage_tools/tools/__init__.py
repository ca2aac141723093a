"""
MCP tool registration for the StatusPage integration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastmcp import FastMCP

from .statuspage_tool import register_tools as register_statuspage

if TYPE_CHECKING:
    from statuspage_tools.credentials import CredentialStoreAdapter


def register_all_tools(
    mcp: FastMCP,
    credentials: CredentialStoreAdapter | None = None,
) -> list[str]:
    """Register every tool with ``mcp`` and return the newly registered tool names."""
    before = set(mcp._tool_manager._tools)
    register_statuspage(mcp, credentials=credentials)
    return [name for name in mcp._tool_manager._tools if name not in before]
