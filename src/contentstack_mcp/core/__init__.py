"""Core request building, response normalization and the API client."""

from contentstack_mcp.core.client import ContentstackClient, initialize
from contentstack_mcp.core.errors import (
    ContentstackError,
    InvalidRegionError,
    RemoteError,
    TransportError,
    UnknownOperationError,
)
from contentstack_mcp.core.operations import OPERATIONS, OperationDescriptor, get_operation
from contentstack_mcp.core.requests import (
    REGION_BASE_URLS,
    STRUCTURAL_OPTIONS,
    RequestDescriptor,
    build_request,
    resolve_base_url,
)
from contentstack_mcp.core.responses import normalize_response, transport_error

__all__ = [
    "ContentstackClient",
    "initialize",
    "ContentstackError",
    "InvalidRegionError",
    "RemoteError",
    "TransportError",
    "UnknownOperationError",
    "OPERATIONS",
    "OperationDescriptor",
    "get_operation",
    "REGION_BASE_URLS",
    "STRUCTURAL_OPTIONS",
    "RequestDescriptor",
    "build_request",
    "resolve_base_url",
    "normalize_response",
    "transport_error",
]
