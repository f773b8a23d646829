"""
Root pytest configuration and shared fixtures.

Provides a recording httpx transport so client and dispatcher tests run
without network access.
"""

from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from contentstack_mcp.config import ClientConfig, ServerConfig


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it receives."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "No request was sent"
        return self.requests[-1]


@pytest.fixture
def make_transport():
    """Factory for transports answering with a fixed status and JSON body."""

    def _make(
        status_code: int = 200,
        json_body: Optional[Any] = None,
        *,
        content: Optional[bytes] = None,
        handler: Optional[Callable[[httpx.Request], httpx.Response]] = None,
    ) -> RecordingTransport:
        if handler is None:

            def handler(request: httpx.Request) -> httpx.Response:
                if content is not None:
                    return httpx.Response(status_code, content=content)
                return httpx.Response(
                    status_code, json={} if json_body is None else json_body
                )

        return RecordingTransport(handler)

    return _make


@pytest.fixture
def stack_env() -> Dict[str, str]:
    """Environment carrying test credentials for the NA region."""
    return {
        "CONTENTSTACK_REGION": "NA",
        "CONTENTSTACK_API_KEY": "blt_test_api_key",
        "CONTENTSTACK_MANAGEMENT_TOKEN": "cs_test_management_token",
        "CONTENTSTACK_DELIVERY_TOKEN": "cs_test_delivery_token",
    }


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(
        region="NA",
        api_key="blt_test_api_key",
        management_token="cs_test_management_token",
    )


@pytest.fixture
def server_config() -> ServerConfig:
    return ServerConfig(log_level="DEBUG", structured_logging=False)
