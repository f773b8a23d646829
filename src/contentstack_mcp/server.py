"""MCP server for contentstack-mcp.

Exposes the Contentstack operation catalog as MCP tools over stdio. Tool
input schemas are declared explicitly (see ``tools.schemas``), so the
low-level ``mcp`` server is used rather than signature-derived tools.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Mapping, Optional

from dotenv import load_dotenv
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from contentstack_mcp.config import ServerConfig, get_config
from contentstack_mcp.tools import ToolDispatcher, register_tools

logger = logging.getLogger(__name__)


def create_server(
    config: Optional[ServerConfig] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Server:
    """Create and configure the MCP server instance."""

    if config is None:
        config = get_config()

    server: Server = Server(config.server_name, version=config.server_version)
    register_tools(server, ToolDispatcher(config, environ=environ))

    logger.info("Server created: %s v%s", config.server_name, config.server_version)
    return server


async def serve(server: Server) -> None:
    """Run the server until stdin closes."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream, write_stream, server.create_initialization_options()
        )


def main() -> None:
    """Main entry point for the contentstack-mcp server."""

    try:
        load_dotenv()
        config = get_config()
        config.setup_logging()
        server = create_server(config)

        logger.info("Starting %s v%s on stdio", config.server_name, config.server_version)
        asyncio.run(serve(server))

    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
        sys.exit(0)
    except Exception as exc:
        logger.error("Server error: %s: %s", type(exc).__name__, exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
