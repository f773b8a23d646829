"""Catalog of Contentstack Content Management API operations.

Each operation is a static ``OperationDescriptor``: HTTP method, path
template and the names of its path placeholders. Options are routed to the
query string by the request builder; ``accepts_body`` marks operations whose
JSON body is sent to the server.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from contentstack_mcp.core.errors import UnknownOperationError


@dataclass(frozen=True)
class OperationDescriptor:
    """Static description of one API operation."""

    name: str
    method: str
    path_template: str
    path_params: Tuple[str, ...] = ()
    accepts_body: bool = False
    summary: str = ""


_CT = "/content_types/{content_type_uid}"
_ENTRY = _CT + "/entries/{entry_uid}"

_DEFINITIONS = [
    # Content types
    OperationDescriptor(
        "get_content_types", "GET", "/content_types",
        summary="Get all content types",
    ),
    OperationDescriptor(
        "get_content_type", "GET", _CT, ("content_type_uid",),
        summary="Get a specific content type by UID",
    ),
    OperationDescriptor(
        "create_content_type", "POST", "/content_types",
        accepts_body=True,
        summary="Create a new content type",
    ),
    OperationDescriptor(
        "update_content_type", "PUT", _CT, ("content_type_uid",),
        accepts_body=True,
        summary="Update an existing content type",
    ),
    # Entries
    OperationDescriptor(
        "get_entries", "GET", _CT + "/entries", ("content_type_uid",),
        summary="Get entries for a content type",
    ),
    OperationDescriptor(
        "get_entry", "GET", _ENTRY, ("content_type_uid", "entry_uid"),
        summary="Get a specific entry by UID",
    ),
    OperationDescriptor(
        "create_entry", "POST", _CT + "/entries", ("content_type_uid",),
        accepts_body=True,
        summary="Create a new entry",
    ),
    OperationDescriptor(
        "update_entry", "PUT", _ENTRY, ("content_type_uid", "entry_uid"),
        accepts_body=True,
        summary="Update an existing entry",
    ),
    OperationDescriptor(
        "delete_entry", "DELETE", _ENTRY, ("content_type_uid", "entry_uid"),
        summary="Delete an entry",
    ),
    # Assets
    OperationDescriptor(
        "get_assets", "GET", "/assets",
        summary="Get assets",
    ),
    OperationDescriptor(
        "get_asset", "GET", "/assets/{asset_uid}", ("asset_uid",),
        summary="Get a specific asset by UID",
    ),
    OperationDescriptor(
        "upload_asset", "POST", "/assets",
        accepts_body=True,
        summary="Upload an asset",
    ),
    # Environments
    OperationDescriptor(
        "get_environments", "GET", "/environments",
        summary="Get all environments",
    ),
    OperationDescriptor(
        "get_environment", "GET", "/environments/{environment_uid}",
        ("environment_uid",),
        summary="Get a specific environment by UID",
    ),
    # Publishing
    OperationDescriptor(
        "publish_entry", "POST", _ENTRY + "/publish",
        ("content_type_uid", "entry_uid"),
        accepts_body=True,
        summary="Publish an entry to one or more environments",
    ),
    OperationDescriptor(
        "unpublish_entry", "POST", _ENTRY + "/unpublish",
        ("content_type_uid", "entry_uid"),
        accepts_body=True,
        summary="Unpublish an entry from one or more environments",
    ),
    # Languages
    OperationDescriptor(
        "get_languages", "GET", "/locales",
        summary="Get all languages configured on the stack",
    ),
    OperationDescriptor(
        "localize_entry", "POST", _ENTRY + "/localize",
        ("content_type_uid", "entry_uid"),
        accepts_body=True,
        summary="Localize an entry for a locale",
    ),
]

OPERATIONS: Mapping[str, OperationDescriptor] = MappingProxyType(
    {op.name: op for op in _DEFINITIONS}
)


def get_operation(name: str) -> OperationDescriptor:
    """Look up an operation by name.

    Raises:
        UnknownOperationError: If no such operation exists.
    """
    try:
        return OPERATIONS[name]
    except KeyError:
        raise UnknownOperationError(name) from None


def list_operations() -> list[str]:
    return list(OPERATIONS)
