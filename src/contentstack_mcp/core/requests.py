"""Request building for the Contentstack Content Management API.

Turns an operation descriptor, its path parameters, caller options and an
optional JSON body into a fully resolved ``RequestDescriptor``. Nothing here
performs I/O; building is a pure function of its inputs.

Query routing:
    Options whose key is in ``STRUCTURAL_OPTIONS`` are appended to the query
    string as-is. Any other key is treated as a content filter; all filters
    are collected and sent as a single JSON-encoded ``query`` parameter.

Example:
    >>> request = build_request(
    ...     get_operation("get_entries"),
    ...     {"content_type_uid": "blog"},
    ...     {"limit": 5, "title": "Foo"},
    ...     None,
    ...     ClientConfig(region="EU"),
    ... )
    >>> request.url
    'https://eu-api.contentstack.com/v3/content_types/blog/entries?limit=5&query=%7B%22title%22%3A%22Foo%22%7D'
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote, urlencode

from contentstack_mcp.core.errors import InvalidRegionError

if TYPE_CHECKING:  # pragma: no cover - import-time typing only
    from contentstack_mcp.config import ClientConfig
    from contentstack_mcp.core.operations import OperationDescriptor


REGION_BASE_URLS: Mapping[str, str] = MappingProxyType(
    {
        "NA": "https://api.contentstack.io/v3",
        "EU": "https://eu-api.contentstack.com/v3",
        "AZURE_NA": "https://azure-na-api.contentstack.com/v3",
        "AZURE_EU": "https://azure-eu-api.contentstack.com/v3",
        "GCP_NA": "https://gcp-na-api.contentstack.com/v3",
        "GCP_EU": "https://gcp-eu-api.contentstack.com/v3",
    }
)

SUPPORTED_REGIONS: List[str] = list(REGION_BASE_URLS)

STRUCTURAL_OPTIONS = frozenset(
    [
        "limit",
        "skip",
        "environment",
        "locale",
        "include_count",
        "include_schema",
        "include_workflow",
        "order_by",
    ]
)


@dataclass(frozen=True)
class RequestDescriptor:
    """A single-use, fully resolved HTTP request."""

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[Any] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))


def resolve_base_url(region: Any) -> str:
    """Return the API base URL for a region code (case-insensitive).

    Raises:
        InvalidRegionError: If the region is not a supported code.
    """
    base_url = None
    if isinstance(region, str):
        base_url = REGION_BASE_URLS.get(region.strip().upper())
    if base_url is None:
        raise InvalidRegionError(region, SUPPORTED_REGIONS)
    return base_url


def _format_value(value: Any) -> str:
    """Render a structural option value as one query string value.

    Lists are comma-joined (``["en-us", "fr-fr"]`` -> ``en-us,fr-fr``) and
    objects are sent as compact JSON.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_format_value(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def build_query_params(options: Optional[Mapping[str, Any]]) -> List[Tuple[str, str]]:
    """Partition options into structural params and a JSON ``query`` param.

    The ``query`` parameter only appears when at least one non-structural
    key is present; purely structural options produce the exact same pairs
    a plain ``urlencode`` would.
    """
    params: List[Tuple[str, str]] = []
    if not options:
        return params

    filters: Optional[Dict[str, Any]] = None
    for key, value in options.items():
        if value is None:
            continue
        if key in STRUCTURAL_OPTIONS:
            params.append((key, _format_value(value)))
            continue
        if filters is None:
            filters = {}
        filters[key] = value

    if filters:
        params.append(("query", json.dumps(filters, separators=(",", ":"))))
    return params


def build_path(template: str, path_params: Optional[Mapping[str, Any]]) -> str:
    """Substitute ``{placeholder}`` segments with percent-encoded values."""
    encoded = {
        name: quote(str(value), safe="")
        for name, value in (path_params or {}).items()
    }
    try:
        return template.format(**encoded)
    except KeyError as exc:
        raise ValueError(
            f"Missing path parameter {exc.args[0]!r} for {template}"
        ) from None


def build_headers(config: "ClientConfig") -> Dict[str, str]:
    headers = {
        "api_key": config.api_key or "",
        "authorization": config.management_token or "",
        "Content-Type": "application/json",
    }
    if config.branch:
        headers["branch"] = config.branch
    return headers


def build_request(
    operation: "OperationDescriptor",
    path_params: Optional[Mapping[str, Any]],
    options: Optional[Mapping[str, Any]],
    body: Any,
    config: "ClientConfig",
) -> RequestDescriptor:
    """Build the request descriptor for one operation call.

    Args:
        operation: Catalog entry describing method and path template
        path_params: Values for the template placeholders
        options: Query options (structural keys and content filters)
        body: JSON body; only attached when the operation accepts one
        config: Client configuration snapshot

    Returns:
        RequestDescriptor ready for the transport

    Raises:
        InvalidRegionError: If ``config.region`` is not recognized
    """
    base_url = resolve_base_url(config.region)
    url = base_url + build_path(operation.path_template, path_params)

    query = build_query_params(options)
    if query:
        url = f"{url}?{urlencode(query)}"

    method = operation.method.upper()
    return RequestDescriptor(
        method=method,
        url=url,
        headers=build_headers(config),
        body=body if operation.accepts_body else None,
    )
