"""Exception types raised by the Contentstack client.

Every failed call surfaces exactly one ``ContentstackError``. The subclass
records where the failure happened:

* ``RemoteError`` - the server answered with a status code >= 400
* ``TransportError`` - no response was received at all
* ``InvalidRegionError`` - the request could not be built locally
* ``UnknownOperationError`` - the operation name is not in the catalog
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ContentstackError(Exception):
    """Normalized error surfaced to callers.

    Attributes:
        message: Human-readable description
        status_code: HTTP status when the server responded, else None
        raw_body: Decoded response body when available
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        raw_body: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.raw_body = raw_body

    def to_dict(self) -> Dict[str, Any]:
        """Render the error for structured logs."""
        result: Dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
        }
        if self.status_code is not None:
            result["status_code"] = self.status_code
        return result


class RemoteError(ContentstackError):
    """The Contentstack API returned a 4xx/5xx response."""


class TransportError(ContentstackError):
    """The request never produced a response (DNS, connection, timeout)."""


class InvalidRegionError(ContentstackError):
    """The configured region is not one of the supported region codes."""

    def __init__(self, region: Any, supported: list[str]):
        super().__init__(
            f"Invalid region: {region}. "
            f"Supported regions are: {', '.join(supported)}"
        )
        self.region = region
        self.supported = supported


class UnknownOperationError(ContentstackError):
    """No catalog entry exists for the requested operation."""

    def __init__(self, name: str):
        super().__init__(f"Unknown operation: {name}")
        self.name = name
