"""
Response normalization for Contentstack API calls.

The Management API reports failures in several shapes::

    {"error_message": "...", "error_code": 141, "errors": {...}}
    {"error": "..."}
    {"errors": [{"message": "..."}, ...]}
    {"message": "..."}

``normalize_response`` returns the decoded body for a successful status and
otherwise raises a single ``RemoteError`` whose message is derived from the
first field present, in the order above, and then augmented for statuses
that callers commonly misdiagnose (401, 403, 404, 422).

Transport failures never reach the normalizer; ``transport_error`` builds
the equivalent error for a request that received no response.
"""

import json
import logging
from typing import Any, Optional

from contentstack_mcp.core.errors import RemoteError, TransportError

logger = logging.getLogger(__name__)

NO_RESPONSE_MESSAGE = (
    "No response received from Contentstack server. "
    "Please check your network connection and Contentstack service status."
)

NOT_FOUND_MESSAGE = (
    "Resource not found. This could be due to an invalid UID, "
    "non-existent environment, or missing permissions."
)


def generic_message(status_code: int) -> str:
    return f"Request failed with status {status_code}"


def _join_errors(errors: Any) -> Optional[str]:
    """Flatten an ``errors`` field into one message.

    List items contribute their ``message`` (or ``error_message``). An item
    without either contributes its string form: compact JSON for objects,
    ``str()`` for anything else.
    """
    parts = []
    if isinstance(errors, list):
        for item in errors:
            if isinstance(item, dict):
                text = item.get("message") or item.get("error_message")
                parts.append(str(text) if text else json.dumps(item, separators=(",", ":")))
            else:
                parts.append(str(item))
    elif isinstance(errors, dict):
        # Field-keyed form: {"title": ["is not unique."]}
        for key, detail in errors.items():
            if isinstance(detail, list):
                detail = ", ".join(str(d) for d in detail)
            parts.append(f"{key}: {detail}")
    else:
        return None
    return "; ".join(parts) or None


def derive_error_message(status_code: int, body: Any) -> str:
    """Pick the most specific message available in an error body."""
    if isinstance(body, dict):
        for key in ("error_message", "error"):
            value = body.get(key)
            if value:
                return value if isinstance(value, str) else json.dumps(value)

        if body.get("errors"):
            joined = _join_errors(body["errors"])
            if joined:
                return joined

        message = body.get("message")
        if message:
            return str(message)

    return generic_message(status_code)


def augment_message(status_code: int, message: str) -> str:
    """Apply status-specific wording to a derived message."""
    if status_code == 401:
        return (
            f"Authentication failed: {message}. "
            "Please check your API key and management token."
        )
    if status_code == 403:
        return (
            f"Access forbidden: {message}. "
            "Please check the permissions of your management token."
        )
    if status_code == 422:
        return f"Validation error: {message}"
    if status_code == 404 and message == generic_message(status_code):
        return NOT_FOUND_MESSAGE
    return message


def decode_body(content: bytes) -> Any:
    """Decode a response payload, keeping non-JSON payloads as text."""
    if not content:
        return {}
    text = content.decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except ValueError:
        return text


def normalize_response(status_code: int, body: Any) -> Any:
    """Return the body of a successful response or raise ``RemoteError``.

    Args:
        status_code: HTTP status of the completed exchange
        body: Decoded JSON body (or raw text / None)

    Returns:
        The body unchanged when 200 <= status_code < 400

    Raises:
        RemoteError: For any other status
    """
    if 200 <= status_code < 400:
        return {} if body is None else body

    message = augment_message(status_code, derive_error_message(status_code, body))
    logger.debug("Contentstack request failed: status=%s", status_code)
    raise RemoteError(message, status_code=status_code, raw_body=body)


def transport_error(exc: Optional[BaseException] = None) -> TransportError:
    """Build the error for a request that received no response."""
    if exc is not None:
        logger.warning("No response from Contentstack: %s: %s", type(exc).__name__, exc)
    return TransportError(NO_RESPONSE_MESSAGE)
