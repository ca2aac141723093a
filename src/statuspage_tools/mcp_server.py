"""
MCP server exposing the StatusPage tools.

Run with:
    statuspage-mcp                      # stdio
    statuspage-mcp --transport sse --port 4001
"""

from __future__ import annotations

import argparse
import logging

from fastmcp import FastMCP

from statuspage_tools.credentials import CredentialStoreAdapter
from statuspage_tools.tools import register_all_tools

logger = logging.getLogger(__name__)


def create_server(credentials: CredentialStoreAdapter | None = None) -> FastMCP:
    """Build a FastMCP server with every StatusPage tool registered."""
    if credentials is None:
        credentials = CredentialStoreAdapter.from_env()
    mcp = FastMCP("statuspage-tools")
    tools = register_all_tools(mcp, credentials=credentials)
    missing = credentials.get_missing_for_tools(tools)
    if missing:
        names = ", ".join(spec.env_var for _, spec in missing)
        logger.warning(f"StatusPage tools registered without credentials: {names} not set")
    logger.info(f"Registered {len(tools)} StatusPage tools")
    return mcp


def main() -> None:
    parser = argparse.ArgumentParser(description="StatusPage MCP server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse", "streamable-http"],
        default="stdio",
        help="MCP transport (default: stdio)",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Bind address for network transports")
    parser.add_argument("--port", type=int, default=4001, help="Port for network transports")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    mcp = create_server()
    if args.transport == "stdio":
        mcp.run(transport="stdio")
    else:
        mcp.run(transport=args.transport, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
