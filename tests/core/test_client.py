"""Tests for ContentstackClient against a mocked HTTP transport."""

import json
from urllib.parse import parse_qs, urlsplit

import httpx
import pytest

from contentstack_mcp.config import ClientConfig
from contentstack_mcp.core.client import ContentstackClient, initialize
from contentstack_mcp.core.errors import (
    InvalidRegionError,
    RemoteError,
    TransportError,
    UnknownOperationError,
)
from contentstack_mcp.core.responses import NO_RESPONSE_MESSAGE


class TestConstruction:
    def test_explicit_values_override_environment(self, stack_env):
        client = ContentstackClient(environ=stack_env, region="EU", api_key="explicit")
        assert client.config.region == "EU"
        assert client.config.api_key == "explicit"
        assert client.config.management_token == "cs_test_management_token"

    def test_environment_fallback(self, stack_env):
        client = ContentstackClient(environ=stack_env)
        assert client.config.api_key == "blt_test_api_key"

    def test_config_and_overrides_conflict(self, client_config):
        with pytest.raises(TypeError):
            ContentstackClient(client_config, region="EU")

    def test_initialize(self):
        client = initialize(region="GCP_EU", api_key="k", management_token="t", environ={})
        assert isinstance(client, ContentstackClient)
        assert client.config.region == "GCP_EU"


class TestExecute:
    @pytest.mark.asyncio
    async def test_get_entries_request_shape(self, client_config, make_transport):
        transport = make_transport(200, {"entries": []})
        client = ContentstackClient(client_config, transport=transport)

        result = await client.get_entries("blog", {"limit": 5, "title": "Foo"})

        assert result == {"entries": []}
        request = transport.last_request
        assert request.method == "GET"
        assert request.url.path == "/v3/content_types/blog/entries"
        params = parse_qs(urlsplit(str(request.url)).query)
        assert params["limit"] == ["5"]
        assert json.loads(params["query"][0]) == {"title": "Foo"}
        assert request.headers["api_key"] == "blt_test_api_key"
        assert request.headers["authorization"] == "cs_test_management_token"

    @pytest.mark.asyncio
    async def test_create_entry_sends_body(self, client_config, make_transport):
        transport = make_transport(201, {"entry": {"uid": "e1"}})
        client = ContentstackClient(client_config, transport=transport)

        result = await client.create_entry("blog", {"entry": {"title": "Hello"}})

        assert result["entry"]["uid"] == "e1"
        request = transport.last_request
        assert request.method == "POST"
        assert json.loads(request.content) == {"entry": {"title": "Hello"}}

    @pytest.mark.asyncio
    async def test_publish_entry_path(self, client_config, make_transport):
        transport = make_transport(200, {"notice": "queued"})
        client = ContentstackClient(client_config, transport=transport)
        body = {"entry": {"environments": ["dev"], "locales": ["en-us"]}}

        await client.publish_entry("blog", "e1", body)

        request = transport.last_request
        assert request.url.path == "/v3/content_types/blog/entries/e1/publish"
        assert json.loads(request.content) == body

    @pytest.mark.asyncio
    async def test_delete_has_no_body(self, client_config, make_transport):
        transport = make_transport(200, {"notice": "deleted"})
        client = ContentstackClient(client_config, transport=transport)

        await client.delete_entry("blog", "e1")

        request = transport.last_request
        assert request.method == "DELETE"
        assert request.content == b""

    @pytest.mark.asyncio
    async def test_eu_region_host(self, make_transport):
        transport = make_transport(200, {"locales": []})
        client = ContentstackClient(
            ClientConfig(region="eu", api_key="k", management_token="t"),
            transport=transport,
        )

        await client.get_languages()

        assert transport.last_request.url.host == "eu-api.contentstack.com"

    @pytest.mark.asyncio
    async def test_remote_error(self, client_config, make_transport):
        transport = make_transport(422, {"error_message": "Title is required"})
        client = ContentstackClient(client_config, transport=transport)

        with pytest.raises(RemoteError) as exc_info:
            await client.create_content_type({"content_type": {}})

        assert exc_info.value.status_code == 422
        assert exc_info.value.message == "Validation error: Title is required"

    @pytest.mark.asyncio
    async def test_non_json_error_body(self, client_config, make_transport):
        transport = make_transport(502, content=b"Bad Gateway")
        client = ContentstackClient(client_config, transport=transport)

        with pytest.raises(RemoteError) as exc_info:
            await client.get_assets()

        assert exc_info.value.message == "Request failed with status 502"
        assert exc_info.value.raw_body == "Bad Gateway"

    @pytest.mark.asyncio
    async def test_transport_failure(self, client_config, make_transport):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = ContentstackClient(client_config, transport=make_transport(handler=refuse))

        with pytest.raises(TransportError) as exc_info:
            await client.get_environments()

        assert exc_info.value.message == NO_RESPONSE_MESSAGE

    @pytest.mark.asyncio
    async def test_invalid_region_sends_nothing(self, make_transport):
        transport = make_transport(200, {})
        client = ContentstackClient(
            ClientConfig(region="MARS", api_key="k", management_token="t"),
            transport=transport,
        )

        with pytest.raises(InvalidRegionError):
            await client.get_content_types()

        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_unknown_operation(self, client_config):
        client = ContentstackClient(client_config)
        with pytest.raises(UnknownOperationError):
            await client.execute("drop_stack")
