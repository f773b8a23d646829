"""Async client for the Contentstack Content Management API.

The client holds an immutable ``ClientConfig`` snapshot and issues one HTTP
request per call. No state is shared between calls, so a single client may
serve concurrent tasks.

Example usage:
    client = ContentstackClient(region="EU", api_key="blt...", management_token="cs...")
    entries = await client.get_entries("blog", {"limit": 5, "title": "Hello"})
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from contentstack_mcp.config import ClientConfig
from contentstack_mcp.core.operations import get_operation
from contentstack_mcp.core.requests import RequestDescriptor, build_request
from contentstack_mcp.core.responses import (
    decode_body,
    normalize_response,
    transport_error,
)

logger = logging.getLogger(__name__)


class ContentstackClient:
    """Contentstack Management API client.

    Attributes:
        config: The resolved client configuration

    Args:
        config: Explicit configuration. When omitted, one is resolved from
            ``overrides`` and the environment.
        environ: Environment mapping used for resolution (default: os.environ)
        transport: Optional httpx transport, mainly for tests
        **overrides: ClientConfig fields (region, api_key, ...)
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **overrides: Any,
    ):
        if config is None:
            config = ClientConfig.resolve(overrides, environ)
        elif overrides:
            raise TypeError("Pass either a ClientConfig or field overrides, not both")
        self.config = config
        self._transport = transport

    def build(
        self,
        operation: str,
        path_params: Optional[Mapping[str, Any]] = None,
        options: Optional[Mapping[str, Any]] = None,
        body: Any = None,
    ) -> RequestDescriptor:
        """Build the request for an operation without sending it."""
        return build_request(
            get_operation(operation), path_params, options, body, self.config
        )

    async def execute(
        self,
        operation: str,
        path_params: Optional[Mapping[str, Any]] = None,
        options: Optional[Mapping[str, Any]] = None,
        body: Any = None,
    ) -> Any:
        """Run one catalog operation and return the decoded response body.

        Raises:
            UnknownOperationError: If the operation is not in the catalog
            InvalidRegionError: If the configured region is not supported
            RemoteError: If the server answers with status >= 400
            TransportError: If no response was received
        """
        request = self.build(operation, path_params, options, body)
        return await self.send(request)

    async def send(self, request: RequestDescriptor) -> Any:
        """Send a built request and normalize the outcome."""
        logger.debug(
            "Contentstack request",
            extra={"method": request.method, "url": request.url},
        )
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.request(
                    request.method,
                    request.url,
                    headers=dict(request.headers),
                    json=request.body,
                )
        except httpx.RequestError as exc:
            raise transport_error(exc) from exc

        logger.debug(
            "Contentstack response",
            extra={"method": request.method, "status_code": response.status_code},
        )
        return normalize_response(response.status_code, decode_body(response.content))

    # Content types

    async def get_content_types(self, options: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.execute("get_content_types", options=options)

    async def get_content_type(
        self, uid: str, options: Optional[Mapping[str, Any]] = None
    ) -> Any:
        return await self.execute(
            "get_content_type", {"content_type_uid": uid}, options
        )

    async def create_content_type(self, data: Any) -> Any:
        return await self.execute("create_content_type", body=data)

    async def update_content_type(self, uid: str, data: Any) -> Any:
        return await self.execute(
            "update_content_type", {"content_type_uid": uid}, body=data
        )

    # Entries

    async def get_entries(
        self, content_type_uid: str, query: Optional[Mapping[str, Any]] = None
    ) -> Any:
        return await self.execute(
            "get_entries", {"content_type_uid": content_type_uid}, query
        )

    async def get_entry(
        self,
        content_type_uid: str,
        entry_uid: str,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        return await self.execute(
            "get_entry",
            {"content_type_uid": content_type_uid, "entry_uid": entry_uid},
            options,
        )

    async def create_entry(
        self,
        content_type_uid: str,
        data: Any,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        return await self.execute(
            "create_entry", {"content_type_uid": content_type_uid}, options, data
        )

    async def update_entry(
        self,
        content_type_uid: str,
        entry_uid: str,
        data: Any,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        return await self.execute(
            "update_entry",
            {"content_type_uid": content_type_uid, "entry_uid": entry_uid},
            options,
            data,
        )

    async def delete_entry(
        self,
        content_type_uid: str,
        entry_uid: str,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        return await self.execute(
            "delete_entry",
            {"content_type_uid": content_type_uid, "entry_uid": entry_uid},
            options,
        )

    # Assets

    async def get_assets(self, query: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.execute("get_assets", options=query)

    async def get_asset(self, asset_uid: str) -> Any:
        return await self.execute("get_asset", {"asset_uid": asset_uid})

    async def upload_asset(self, data: Any) -> Any:
        return await self.execute("upload_asset", body=data)

    # Environments

    async def get_environments(self) -> Any:
        return await self.execute("get_environments")

    async def get_environment(self, uid: str) -> Any:
        return await self.execute("get_environment", {"environment_uid": uid})

    # Publishing

    async def publish_entry(
        self,
        content_type_uid: str,
        entry_uid: str,
        data: Any,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        return await self.execute(
            "publish_entry",
            {"content_type_uid": content_type_uid, "entry_uid": entry_uid},
            options,
            data,
        )

    async def unpublish_entry(
        self,
        content_type_uid: str,
        entry_uid: str,
        data: Any,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        return await self.execute(
            "unpublish_entry",
            {"content_type_uid": content_type_uid, "entry_uid": entry_uid},
            options,
            data,
        )

    # Languages

    async def get_languages(self) -> Any:
        return await self.execute("get_languages")

    async def localize_entry(
        self,
        content_type_uid: str,
        entry_uid: str,
        data: Any,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        return await self.execute(
            "localize_entry",
            {"content_type_uid": content_type_uid, "entry_uid": entry_uid},
            options,
            data,
        )


def initialize(**overrides: Any) -> ContentstackClient:
    """Create a client from explicit settings, falling back to the environment."""
    return ContentstackClient(**overrides)


__all__ = ["ContentstackClient", "initialize"]
