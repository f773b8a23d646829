"""Tool dispatcher: the boundary between MCP tool calls and the client.

For each call the dispatcher looks up the tool, validates its arguments,
resolves a fresh ``ClientConfig`` (the call's ``region`` overrides the
environment), runs the catalog operation and returns the result as one
pretty-printed JSON text block.

Failures map onto JSON-RPC error codes:

* unknown tool -> ``METHOD_NOT_FOUND``
* schema violation -> ``INVALID_PARAMS``
* anything else -> ``INTERNAL_ERROR``
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx
from mcp import McpError
from mcp.types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    ErrorData,
    TextContent,
    Tool,
)

from contentstack_mcp.config import ClientConfig, ServerConfig
from contentstack_mcp.core.client import ContentstackClient
from contentstack_mcp.core.context import request_context
from contentstack_mcp.core.errors import ContentstackError
from contentstack_mcp.tools.schemas import TOOL_DEFINITIONS, ToolDefinition
from contentstack_mcp.tools.validation import ToolArgumentsError, validate_arguments

logger = logging.getLogger(__name__)


def _mcp_error(code: int, message: str) -> McpError:
    return McpError(ErrorData(code=code, message=message))


class ToolDispatcher:
    """Routes named tool calls to Contentstack operations.

    Args:
        config: Server configuration (stack defaults); defaults to ServerConfig()
        environ: Environment mapping for credentials (default: os.environ,
            read at call time)
        transport: Optional httpx transport passed to every client
        tools: Tool definitions to expose
    """

    def __init__(
        self,
        config: Optional[ServerConfig] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        tools: Mapping[str, ToolDefinition] = TOOL_DEFINITIONS,
    ):
        self._config = config or ServerConfig()
        self._environ = environ
        self._transport = transport
        self._tools = tools

    def list_tools(self) -> List[Tool]:
        return [
            Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema,
            )
            for tool in self._tools.values()
        ]

    def get_tool(self, name: str) -> ToolDefinition:
        try:
            return self._tools[name]
        except KeyError:
            raise _mcp_error(METHOD_NOT_FOUND, f"Unknown tool: {name}") from None

    def resolve_client_config(self, arguments: Mapping[str, Any]) -> ClientConfig:
        return self._config.client_config(
            {"region": arguments.get("region")}, self._environ
        )

    @staticmethod
    def bind_arguments(tool: ToolDefinition, arguments: Mapping[str, Any]) -> Dict[str, Any]:
        """Map validated tool arguments onto ``execute`` parameters."""
        return {
            "path_params": {
                placeholder: arguments[arg]
                for placeholder, arg in tool.path_args.items()
            },
            "options": arguments.get(tool.options_arg) if tool.options_arg else None,
            "body": arguments.get(tool.body_arg) if tool.body_arg else None,
        }

    async def call_tool(
        self, name: str, arguments: Optional[Mapping[str, Any]]
    ) -> List[TextContent]:
        """Run one tool call.

        Raises:
            McpError: METHOD_NOT_FOUND, INVALID_PARAMS or INTERNAL_ERROR
        """
        tool = self.get_tool(name)

        with request_context(tool=name):
            try:
                validated = validate_arguments(tool, arguments)
            except ToolArgumentsError as exc:
                raise _mcp_error(INVALID_PARAMS, str(exc)) from exc

            try:
                client = ContentstackClient(
                    self.resolve_client_config(validated),
                    transport=self._transport,
                )
                logger.debug(
                    "Dispatching %s",
                    name,
                    extra={"client": client.config.to_log_dict()},
                )
                result = await client.execute(
                    tool.operation, **self.bind_arguments(tool, validated)
                )
            except ContentstackError as exc:
                logger.info(
                    "Tool %s failed: %s",
                    name,
                    exc.message,
                    extra={"error": exc.to_dict()},
                )
                raise _mcp_error(
                    INTERNAL_ERROR, f"Error executing {name}: {exc.message}"
                ) from exc
            except Exception as exc:
                logger.exception("Unexpected error in %s", name)
                raise _mcp_error(
                    INTERNAL_ERROR, f"Error executing {name}: {exc}"
                ) from exc

            logger.debug("Tool %s succeeded", name)
            text = json.dumps(result, indent=2, ensure_ascii=False)
            return [TextContent(type="text", text=text)]
