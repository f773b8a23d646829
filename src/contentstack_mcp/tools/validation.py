"""Argument validation for tool calls.

Arguments are checked against the tool's declared JSON Schema with a
Draft 7 validator. All violations are reported at once. Tools may also name
hint checks that recognize common mistakes and add a ``Hint:`` line to the
failure message.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from jsonschema import Draft7Validator
from jsonschema.exceptions import ValidationError

from contentstack_mcp.tools.schemas import ToolDefinition

logger = logging.getLogger(__name__)

HintCheck = Callable[[Mapping[str, Any]], Optional[str]]

_SNAKE_CASE_ARGS = {
    "content_type_uid": "contentTypeUid",
    "contenttypeuid": "contentTypeUid",
    "entry_uid": "entryUid",
    "entryuid": "entryUid",
    "asset_uid": "assetUid",
    "assetuid": "assetUid",
}


class ToolArgumentsError(ValueError):
    """Tool arguments do not match the declared schema.

    Attributes:
        tool: Tool name
        violations: One message per violated constraint
        hints: Human-oriented suggestions for recognized mistakes
    """

    def __init__(self, tool: str, violations: List[str], hints: List[str]):
        self.tool = tool
        self.violations = violations
        self.hints = hints
        super().__init__(self._format())

    def _format(self) -> str:
        lines = [f"Invalid arguments for {self.tool}:"]
        lines.extend(f"- {violation}" for violation in self.violations)
        lines.extend(f"Hint: {hint}" for hint in self.hints)
        return "\n".join(lines)


def _hint_camel_case_args(arguments: Mapping[str, Any]) -> Optional[str]:
    expected = set(_SNAKE_CASE_ARGS.values())
    wrong = [
        key
        for key in arguments
        if key.lower() in _SNAKE_CASE_ARGS and key not in expected
    ]
    if not wrong:
        return None
    renames = ", ".join(f"{key} -> {_SNAKE_CASE_ARGS[key.lower()]}" for key in wrong)
    return f"Argument names are camelCase ({renames})."


def _hint_data_not_string(arguments: Mapping[str, Any]) -> Optional[str]:
    if isinstance(arguments.get("data"), str):
        return "Pass data as a JSON object, not as a JSON-encoded string."
    return None


def _hint_entry_wrapper(arguments: Mapping[str, Any]) -> Optional[str]:
    data = arguments.get("data")
    if isinstance(data, dict) and data and "entry" not in data:
        return (
            'Wrap the entry fields in an "entry" object, e.g. '
            '{"data": {"entry": {"title": "My entry"}}}.'
        )
    return None


def _hint_content_type_wrapper(arguments: Mapping[str, Any]) -> Optional[str]:
    data = arguments.get("data")
    if isinstance(data, dict) and data and "content_type" not in data:
        return (
            'Wrap the content type definition in a "content_type" object, e.g. '
            '{"data": {"content_type": {"title": "Blog", "uid": "blog", "schema": []}}}.'
        )
    return None


def _hint_publish_details(arguments: Mapping[str, Any]) -> Optional[str]:
    data = arguments.get("data")
    if not isinstance(data, dict):
        return None
    if "entry" not in data and ("environments" in data or "locales" in data):
        return (
            "Put environments and locales inside data.entry, e.g. "
            '{"data": {"entry": {"environments": ["production"], '
            '"locales": ["en-us"]}, "locale": "en-us"}}.'
        )
    entry = data.get("entry")
    if isinstance(entry, dict) and not entry.get("environments"):
        return "data.entry.environments must list at least one environment name."
    return None


HINT_CHECKS: Dict[str, HintCheck] = {
    "camel_case_args": _hint_camel_case_args,
    "data_not_string": _hint_data_not_string,
    "entry_wrapper": _hint_entry_wrapper,
    "content_type_wrapper": _hint_content_type_wrapper,
    "publish_details": _hint_publish_details,
}


def _describe(error: ValidationError) -> str:
    path = ".".join(str(part) for part in error.absolute_path)
    return f"{path}: {error.message}" if path else error.message


def collect_hints(tool: ToolDefinition, arguments: Mapping[str, Any]) -> List[str]:
    hints = []
    for name in tool.hints:
        hint = HINT_CHECKS[name](arguments)
        if hint:
            hints.append(hint)
    return hints


def validate_arguments(tool: ToolDefinition, arguments: Any) -> Dict[str, Any]:
    """Validate tool arguments against the tool's input schema.

    Args:
        tool: Tool definition holding the schema
        arguments: Argument bag from the caller (None means no arguments)

    Returns:
        The arguments as a dict

    Raises:
        ToolArgumentsError: Listing every violated constraint plus hints
    """
    if arguments is None:
        arguments = {}

    validator = Draft7Validator(tool.input_schema)
    errors = sorted(
        validator.iter_errors(arguments),
        key=lambda e: ([str(p) for p in e.absolute_path], e.message),
    )
    if not errors:
        return dict(arguments)

    violations = [_describe(error) for error in errors]
    hints = collect_hints(tool, arguments) if isinstance(arguments, dict) else []
    logger.debug(
        "Rejected arguments for %s: %s",
        tool.name,
        json.dumps(violations),
    )
    raise ToolArgumentsError(tool.name, violations, hints)
