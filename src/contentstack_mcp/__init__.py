"""Contentstack MCP - Contentstack Management API tools over MCP."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("contentstack-mcp")
except PackageNotFoundError:
    # Package not installed (development mode without editable install)
    __version__ = "1.1.0"

from contentstack_mcp.config import ClientConfig
from contentstack_mcp.core.client import ContentstackClient, initialize
from contentstack_mcp.core.requests import REGION_BASE_URLS
from contentstack_mcp.server import create_server, main

__all__ = [
    "__version__",
    "ClientConfig",
    "ContentstackClient",
    "REGION_BASE_URLS",
    "create_server",
    "initialize",
    "main",
]
