"""Structured logging configuration with automatic context injection.

All output goes to stderr; stdout carries the MCP stdio framing and must
never receive log lines.

Usage:
    from contentstack_mcp.core.logging_config import configure_logging

    configure_logging(level="DEBUG", format="human")
"""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO, Union

from contentstack_mcp.core.context import (
    get_correlation_id,
    get_start_time,
    get_tool_name,
)

__all__ = [
    "ContextFilter",
    "StructuredFormatter",
    "HumanReadableFormatter",
    "configure_logging",
]

ROOT_LOGGER = "contentstack_mcp"


class ContextFilter(logging.Filter):
    """Logging filter that injects the call context into log records.

    Adds ``correlation_id``, ``tool`` and ``elapsed_ms`` to every record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        record.tool = get_tool_name() or "-"

        start_time = get_start_time()
        if start_time > 0:
            record.elapsed_ms = round((time.time() - start_time) * 1000, 2)
        else:
            record.elapsed_ms = 0.0

        return True


# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName", "correlation_id", "tool", "elapsed_ms"}


def _json_safe(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


class StructuredFormatter(logging.Formatter):
    """One JSON object per line.

    Example:
        {"timestamp": "2024-01-15T10:30:45.123+00:00", "level": "INFO",
         "logger": "contentstack_mcp.tools.dispatcher", "message": "Tool ...",
         "correlation_id": "req_a1b2c3d4e5f6", "tool": "contentstack_get_entry",
         "elapsed_ms": 42.5, "extra": {"error": {...}}}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", "-"),
            "tool": getattr(record, "tool", "-"),
            "elapsed_ms": getattr(record, "elapsed_ms", 0.0),
        }
        extra = {
            key: _json_safe(value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
        }
        if extra:
            entry["extra"] = extra
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Single-line text for terminals.

    Format: ``2024-01-15 10:30:45 [INFO] [req_a1b2c3] tools.dispatcher: message``.
    The correlation id is omitted outside a tool call.
    """

    def __init__(self, *, include_timestamp: bool = True):
        super().__init__()
        self.include_timestamp = include_timestamp

    def format(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith(ROOT_LOGGER + "."):
            name = name[len(ROOT_LOGGER) + 1:]

        prefix = []
        if self.include_timestamp:
            prefix.append(self.formatTime(record, "%Y-%m-%d %H:%M:%S"))
        prefix.append(f"[{record.levelname}]")
        corr_id = getattr(record, "correlation_id", "-")
        if corr_id != "-":
            prefix.append(f"[{corr_id}]")

        line = f"{' '.join(prefix)} {name}: {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(
    *,
    level: Union[int, str] = logging.INFO,
    format: str = "structured",  # "structured" or "human"
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Configure the root contentstack_mcp logger.

    Args:
        level: Log level (default: INFO)
        format: Output format ("structured" for JSON, "human" for readable)
        stream: Output stream (default: stderr)

    Returns:
        Configured root logger for contentstack_mcp
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    if format == "structured":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(HumanReadableFormatter())
    handler.addFilter(ContextFilter())

    logger.addHandler(handler)
    return logger
