"""MCP tool surface for Contentstack operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from mcp import types

from contentstack_mcp.tools.dispatcher import ToolDispatcher
from contentstack_mcp.tools.schemas import TOOL_DEFINITIONS, ToolDefinition
from contentstack_mcp.tools.validation import ToolArgumentsError, validate_arguments

if TYPE_CHECKING:  # pragma: no cover - import-time typing only
    from mcp.server.lowlevel import Server


def register_tools(server: "Server", dispatcher: ToolDispatcher) -> None:
    """Register the tools/list and tools/call handlers on a low-level server.

    tools/call is installed as a raw request handler: the ``call_tool``
    decorator reports every exception as an ``isError`` result, while an
    ``McpError`` raised here reaches the client as a JSON-RPC error with the
    dispatcher's code.
    """

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return dispatcher.list_tools()

    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        content = await dispatcher.call_tool(
            request.params.name, request.params.arguments
        )
        return types.ServerResult(types.CallToolResult(content=content, isError=False))

    server.request_handlers[types.CallToolRequest] = call_tool


__all__ = [
    "register_tools",
    "ToolDispatcher",
    "ToolDefinition",
    "TOOL_DEFINITIONS",
    "ToolArgumentsError",
    "validate_arguments",
]
