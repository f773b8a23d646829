"""Tool definitions: input schemas and argument bindings.

Each ``ToolDefinition`` declares the JSON Schema (Draft 7) of the tool's
arguments and how those arguments map onto a catalog operation: which ones
fill path placeholders, which one carries query options and which one is
the request body.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from contentstack_mcp.core.operations import OPERATIONS
from contentstack_mcp.core.requests import SUPPORTED_REGIONS

TOOL_PREFIX = "contentstack_"


@dataclass(frozen=True)
class ToolDefinition:
    """One MCP tool backed by a catalog operation."""

    name: str
    operation: str
    description: str
    input_schema: Dict[str, Any]
    # placeholder name -> argument name
    path_args: Mapping[str, str] = field(default_factory=dict)
    options_arg: Optional[str] = None
    body_arg: Optional[str] = None
    hints: Tuple[str, ...] = ()


REGION = {
    "type": "string",
    "description": "Contentstack region (NA, EU, AZURE_NA, AZURE_EU, GCP_NA, GCP_EU)",
    "enum": list(SUPPORTED_REGIONS),
}

CONTENT_TYPE_UID = {"type": "string", "minLength": 1, "description": "Content type UID"}
ENTRY_UID = {"type": "string", "minLength": 1, "description": "Entry UID"}

LIST_QUERY = {
    "type": "object",
    "description": (
        "Query parameters. limit, skip, environment, locale, include_count and "
        "order_by are sent as-is; any other field is used as a content filter"
    ),
    "properties": {
        "limit": {"type": "number"},
        "skip": {"type": "number"},
        "environment": {"type": "string"},
        "locale": {"type": "string"},
        "include_count": {"type": "boolean"},
        "order_by": {"type": "string"},
    },
}

ENTRY_OPTIONS = {
    "type": "object",
    "description": "Options for environment, locale, and other parameters",
    "properties": {
        "environment": {"type": "string"},
        "locale": {"type": "string"},
        "include_schema": {"type": "boolean"},
        "include_workflow": {"type": "boolean"},
    },
}

ENTRY_DATA = {
    "type": "object",
    "description": 'Entry payload, e.g. {"entry": {"title": "My entry"}}',
    "properties": {"entry": {"type": "object"}},
    "required": ["entry"],
}

CONTENT_TYPE_DATA = {
    "type": "object",
    "description": (
        'Content type payload, e.g. {"content_type": {"title": "Blog", '
        '"uid": "blog", "schema": [...]}}'
    ),
    "properties": {"content_type": {"type": "object"}},
    "required": ["content_type"],
}

PUBLISH_DATA = {
    "type": "object",
    "description": (
        'Publish details, e.g. {"entry": {"environments": ["production"], '
        '"locales": ["en-us"]}, "locale": "en-us", "version": 1}'
    ),
    "properties": {
        "entry": {
            "type": "object",
            "properties": {
                "environments": {
                    "type": "array",
                    "items": {"type": "string"},
                    "minItems": 1,
                },
                "locales": {"type": "array", "items": {"type": "string"}},
            },
            "required": ["environments"],
        },
        "locale": {"type": "string"},
        "version": {"type": "integer"},
    },
    "required": ["entry"],
}


def _schema(
    properties: Dict[str, Any], required: Tuple[str, ...] = ()
) -> Dict[str, Any]:
    schema: Dict[str, Any] = {
        "type": "object",
        "properties": {**properties, "region": REGION},
        "additionalProperties": False,
    }
    if required:
        schema["required"] = list(required)
    return schema


def _tool(
    operation: str,
    properties: Dict[str, Any],
    required: Tuple[str, ...] = (),
    **binding: Any,
) -> ToolDefinition:
    descriptor = OPERATIONS[operation]
    suffix = "from" if descriptor.method == "GET" else "in"
    return ToolDefinition(
        name=TOOL_PREFIX + operation,
        operation=operation,
        description=f"{descriptor.summary} {suffix} Contentstack",
        input_schema=_schema(properties, required),
        **binding,
    )


_CT_ARGS = {"content_type_uid": "contentTypeUid"}
_ENTRY_ARGS = {"content_type_uid": "contentTypeUid", "entry_uid": "entryUid"}

_DEFINITIONS = [
    _tool(
        "get_content_types",
        {"query": {**LIST_QUERY, "description": "Query parameters (include_count, limit, skip)"}},
        options_arg="query",
    ),
    _tool(
        "get_content_type",
        {"uid": CONTENT_TYPE_UID},
        ("uid",),
        path_args={"content_type_uid": "uid"},
    ),
    _tool(
        "create_content_type",
        {"data": CONTENT_TYPE_DATA},
        ("data",),
        body_arg="data",
        hints=("data_not_string", "content_type_wrapper"),
    ),
    _tool(
        "update_content_type",
        {"uid": CONTENT_TYPE_UID, "data": CONTENT_TYPE_DATA},
        ("uid", "data"),
        path_args={"content_type_uid": "uid"},
        body_arg="data",
        hints=("data_not_string", "content_type_wrapper"),
    ),
    _tool(
        "get_entries",
        {"contentTypeUid": CONTENT_TYPE_UID, "query": LIST_QUERY},
        ("contentTypeUid",),
        path_args=_CT_ARGS,
        options_arg="query",
        hints=("camel_case_args",),
    ),
    _tool(
        "get_entry",
        {"contentTypeUid": CONTENT_TYPE_UID, "entryUid": ENTRY_UID, "options": ENTRY_OPTIONS},
        ("contentTypeUid", "entryUid"),
        path_args=_ENTRY_ARGS,
        options_arg="options",
        hints=("camel_case_args",),
    ),
    _tool(
        "create_entry",
        {"contentTypeUid": CONTENT_TYPE_UID, "data": ENTRY_DATA, "options": ENTRY_OPTIONS},
        ("contentTypeUid", "data"),
        path_args=_CT_ARGS,
        options_arg="options",
        body_arg="data",
        hints=("camel_case_args", "data_not_string", "entry_wrapper"),
    ),
    _tool(
        "update_entry",
        {
            "contentTypeUid": CONTENT_TYPE_UID,
            "entryUid": ENTRY_UID,
            "data": ENTRY_DATA,
            "options": ENTRY_OPTIONS,
        },
        ("contentTypeUid", "entryUid", "data"),
        path_args=_ENTRY_ARGS,
        options_arg="options",
        body_arg="data",
        hints=("camel_case_args", "data_not_string", "entry_wrapper"),
    ),
    _tool(
        "delete_entry",
        {"contentTypeUid": CONTENT_TYPE_UID, "entryUid": ENTRY_UID, "options": ENTRY_OPTIONS},
        ("contentTypeUid", "entryUid"),
        path_args=_ENTRY_ARGS,
        options_arg="options",
        hints=("camel_case_args",),
    ),
    _tool(
        "get_assets",
        {
            "query": {
                "type": "object",
                "description": "Query parameters",
                "properties": {
                    "limit": {"type": "number"},
                    "skip": {"type": "number"},
                    "environment": {"type": "string"},
                    "include_folders": {"type": "boolean"},
                },
            }
        },
        options_arg="query",
    ),
    _tool(
        "get_asset",
        {"assetUid": {"type": "string", "minLength": 1, "description": "Asset UID"}},
        ("assetUid",),
        path_args={"asset_uid": "assetUid"},
        hints=("camel_case_args",),
    ),
    _tool(
        "upload_asset",
        {"data": {"type": "object", "description": "Asset payload"}},
        ("data",),
        body_arg="data",
        hints=("data_not_string",),
    ),
    _tool("get_environments", {}),
    _tool(
        "get_environment",
        {"uid": {"type": "string", "minLength": 1, "description": "Environment UID"}},
        ("uid",),
        path_args={"environment_uid": "uid"},
    ),
    _tool(
        "publish_entry",
        {"contentTypeUid": CONTENT_TYPE_UID, "entryUid": ENTRY_UID, "data": PUBLISH_DATA},
        ("contentTypeUid", "entryUid", "data"),
        path_args=_ENTRY_ARGS,
        body_arg="data",
        hints=("camel_case_args", "data_not_string", "publish_details"),
    ),
    _tool(
        "unpublish_entry",
        {"contentTypeUid": CONTENT_TYPE_UID, "entryUid": ENTRY_UID, "data": PUBLISH_DATA},
        ("contentTypeUid", "entryUid", "data"),
        path_args=_ENTRY_ARGS,
        body_arg="data",
        hints=("camel_case_args", "data_not_string", "publish_details"),
    ),
    _tool("get_languages", {}),
    _tool(
        "localize_entry",
        {
            "contentTypeUid": CONTENT_TYPE_UID,
            "entryUid": ENTRY_UID,
            "data": ENTRY_DATA,
            "options": {
                "type": "object",
                "description": "Options; locale selects the target language",
                "properties": {"locale": {"type": "string"}},
            },
        },
        ("contentTypeUid", "entryUid", "data"),
        path_args=_ENTRY_ARGS,
        options_arg="options",
        body_arg="data",
        hints=("camel_case_args", "data_not_string", "entry_wrapper"),
    ),
]

TOOL_DEFINITIONS: Mapping[str, ToolDefinition] = MappingProxyType(
    {tool.name: tool for tool in _DEFINITIONS}
)
