"""Anthropic converter — messages API parameters.

Key differences from the stored format:
- System messages become the top-level ``system`` parameter.
- Messages must alternate between user and assistant; consecutive
  same-role messages are merged.
- Tool results are user messages with ``tool_result`` content blocks.
- ``max_tokens`` is required; the configured default fills it in.
- Structured output (``response_format``) is not supported.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from promptconv.core.conversion.capabilities import ProviderProfile
from promptconv.core.conversion.converter import PromptConverter
from promptconv.core.conversion.errors import SchemaValidationError, ToolNotConvertibleError
from promptconv.core.conversion.result import Err, MapResult, NotConvertible, Ok
from promptconv.core.conversion.schema import (
    parse_tool_arguments,
    to_json_value,
    tool_result_text,
)
from promptconv.core.prompt.models import TextPart, ToolCallPart, ToolResultPart

if TYPE_CHECKING:
    from promptconv.core.conversion.tool_choice import ToolChoice
    from promptconv.core.prompt.models import ContentPart, PromptMessage, PromptTool, PromptVersion

_ROLES: dict[str, str] = {
    "system": "system",
    "developer": "system",
    "user": "user",
    "assistant": "assistant",
    "model": "assistant",
    "ai": "assistant",
    "tool": "tool",
}

_EMPTY_INPUT_SCHEMA: dict[str, Any] = {"type": "object", "properties": {}}


class AnthropicConverter(PromptConverter):
    """Converts prompts to ``client.messages.create(**params)`` kwargs."""

    provider = "anthropic"
    display_name = "Anthropic"
    profile = ProviderProfile(
        supports_response_format=False,
        supports_parallel_tool_control=True,
        system_placement="system",
    )

    def base_params(self, prompt: PromptVersion) -> dict[str, Any]:
        base = super().base_params(prompt)
        if base.get("max_tokens") is None:
            base["max_tokens"] = self.config.default_max_tokens
        return base

    def map_messages(self, messages: Sequence[PromptMessage]) -> MapResult[dict[str, Any]]:
        """Lift system messages out and merge consecutive same-role messages."""
        system_parts: list[str] = []
        converted: list[dict[str, Any]] = []

        for msg in messages:
            if _ROLES.get(msg.role) == "system":
                if not isinstance(msg.content, str) and not all(
                    isinstance(p, TextPart) for p in msg.content
                ):
                    return Err(SchemaValidationError("messages", "system message must be text"))
                system_parts.append(msg.text)
                continue

            result = self.map_message(msg)
            if isinstance(result, Err):
                return result
            converted.append(result.value)

        if not converted:
            return Err(SchemaValidationError("messages", "no user/assistant messages"))
        return Ok(
            {
                "system": "\n\n".join(system_parts) if system_parts else None,
                "messages": _merge_consecutive_roles(converted),
            }
        )

    def map_message(self, message: PromptMessage) -> MapResult[dict[str, Any]]:
        """Convert a single non-system message to Anthropic format."""
        role = _ROLES.get(message.role)
        if role is None:
            return Err(SchemaValidationError("messages", f"unknown role {message.role!r}"))
        if role == "system":
            return Err(
                SchemaValidationError("messages", "system messages belong in the system parameter")
            )

        if isinstance(message.content, str):
            if role == "tool":
                return Err(SchemaValidationError("messages", "tool message has no tool_call_id"))
            return Ok({"role": role, "content": message.content})

        blocks = _content_to_anthropic(message.content, role)
        if isinstance(blocks, Err):
            return blocks

        # Tool results are sent back as user turns
        if role == "tool":
            return Ok({"role": "user", "content": blocks.value})
        if role == "user" and len(blocks.value) == 1 and blocks.value[0]["type"] == "text":
            return Ok({"role": "user", "content": blocks.value[0]["text"]})
        return Ok({"role": role, "content": blocks.value})

    def map_tool(self, tool: PromptTool) -> Ok[dict[str, Any]] | Err | NotConvertible:
        if tool.type != "function" or tool.function is None:
            return NotConvertible(
                ToolNotConvertibleError(tool.name, self.provider, f"tool type {tool.type!r}")
            )

        fn = tool.function
        input_schema = to_json_value(fn.parameters or _EMPTY_INPUT_SCHEMA, "tools")
        if isinstance(input_schema, Err):
            return input_schema

        result: dict[str, Any] = {"name": fn.name, "input_schema": input_schema.value}
        if fn.description is not None:
            result["description"] = fn.description
        return Ok(result)

    def tool_name(self, tool: dict[str, Any]) -> str:
        return tool["name"]

    def render_tool_choice(self, choice: ToolChoice) -> Any:
        if choice.kind == "function":
            return {"type": "tool", "name": choice.function_name}
        if choice.kind == "required":
            return {"type": "any"}
        return {"type": choice.kind}

    def tool_fields(
        self,
        tools: list[dict[str, Any]],
        tool_choice: Any,
        *,
        disable_parallel: bool = False,
    ) -> dict[str, Any]:
        if tools and disable_parallel:
            tool_choice = dict(tool_choice or {"type": "auto"})
            if tool_choice["type"] != "none":
                tool_choice["disable_parallel_tool_use"] = True
        return super().tool_fields(tools, tool_choice)


def _content_to_anthropic(
    parts: list[ContentPart], role: str
) -> MapResult[list[dict[str, Any]]]:
    """Convert content parts to Anthropic content blocks."""
    blocks: list[dict[str, Any]] = []
    for part in parts:
        if isinstance(part, TextPart):
            blocks.append({"type": "text", "text": part.text})
        elif isinstance(part, ToolCallPart) and role == "assistant":
            blocks.append(
                {
                    "type": "tool_use",
                    "id": part.tool_call_id,
                    "name": part.tool_call.name,
                    "input": parse_tool_arguments(part.tool_call.arguments),
                }
            )
        elif isinstance(part, ToolResultPart) and role in ("user", "tool"):
            blocks.append(
                {
                    "type": "tool_result",
                    "tool_use_id": part.tool_call_id,
                    "content": tool_result_text(part.tool_result),
                }
            )
        else:
            return Err(
                SchemaValidationError(
                    "messages", f"{part.type} content is not allowed in a {role} message"
                )
            )
    return Ok(blocks)


def _merge_consecutive_roles(
    messages: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Merge consecutive messages with the same role.

    Anthropic requires strict user/assistant alternation. When multiple
    consecutive messages share a role, their content is merged into one message.
    """
    merged: list[dict[str, Any]] = []
    for msg in messages:
        if merged and merged[-1]["role"] == msg["role"]:
            merged[-1]["content"] = _merge_content(merged[-1]["content"], msg["content"])
        else:
            merged.append(msg)
    return merged


def _merge_content(
    existing: str | list[dict[str, Any]], new: str | list[dict[str, Any]]
) -> list[dict[str, Any]]:
    """Merge two content values (str or list of blocks) into a single list."""
    result: list[dict[str, Any]] = []
    for item in (existing, new):
        if isinstance(item, str):
            result.append({"type": "text", "text": item})
        else:
            result.extend(item)
    return result
