"""JSON helpers shared by the vocabulary mappers."""

import json
from typing import Any

from promptconv.core.conversion.errors import SchemaValidationError
from promptconv.core.conversion.result import Err, MapResult, Ok


def to_json_value(value: Any, stage: str) -> MapResult[Any]:
    """Return a detached JSON-compatible copy of *value*.

    Fails with :class:`SchemaValidationError` when *value* cannot be
    serialized (sets, arbitrary objects, NaN). The copy shares no mutable
    state with the prompt record.
    """
    try:
        encoded = json.dumps(value, allow_nan=False)
    except (TypeError, ValueError) as exc:
        return Err(SchemaValidationError(stage, f"not JSON-serializable: {exc}"))
    return Ok(json.loads(encoded))


def tool_arguments(arguments: str | dict[str, Any]) -> str:
    """Tool-call arguments as the JSON string most clients expect."""
    if isinstance(arguments, str):
        return arguments
    return json.dumps(arguments)


def parse_tool_arguments(arguments: str | dict[str, Any]) -> dict[str, Any]:
    """Tool-call arguments as a mapping; unparsable strings are kept under ``raw``."""
    if isinstance(arguments, dict):
        arguments = json.dumps(arguments, default=str)
    try:
        result: Any = json.loads(arguments)
    except (json.JSONDecodeError, TypeError):
        return {"raw": arguments}
    if not isinstance(result, dict):
        return {"raw": arguments}
    return result  # pyright: ignore[reportUnknownVariableType]


def tool_result_text(result: Any) -> str:
    """Render a stored tool result as message text."""
    if isinstance(result, str):
        return result
    return json.dumps(result, default=str)
