"""Gemini converter — ``generateContent`` request parameters.

Key differences from the stored format:
- Role "assistant" becomes "model".
- System messages are passed via a separate ``system_instruction`` field.
- Tool calls and results use ``functionCall`` / ``functionResponse`` parts;
  a response is matched to its call by id to recover the function name,
  and a response without a matching call is rejected.
- Invocation parameters and the response schema live under
  ``generation_config``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from promptconv.core.conversion.assembler import assemble_params
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
    from promptconv.core.prompt.models import (
        JSONSchemaDefinition,
        PromptMessage,
        PromptTool,
        PromptVersion,
    )

_ROLES: dict[str, str] = {
    "system": "system",
    "developer": "system",
    "user": "user",
    "assistant": "model",
    "model": "model",
    "ai": "model",
    "tool": "tool",
}

_MODES: dict[str, str] = {
    "none": "NONE",
    "auto": "AUTO",
    "required": "ANY",
    "function": "ANY",
}


class GeminiConverter(PromptConverter):
    """Converts prompts to Gemini ``generateContent`` request fields."""

    provider = "gemini"
    display_name = "Gemini"
    profile = ProviderProfile(
        supports_response_format=True,
        system_placement="system_instruction",
    )

    def base_params(self, prompt: PromptVersion) -> dict[str, Any]:
        return {"generation_config": super().base_params(prompt) or None}

    def map_messages(self, messages: Sequence[PromptMessage]) -> MapResult[dict[str, Any]]:
        """Lift system messages into ``system_instruction`` and map the rest to contents."""
        call_names = _tool_call_names(messages)
        system_parts: list[dict[str, Any]] = []
        contents: list[dict[str, Any]] = []

        for msg in messages:
            if _ROLES.get(msg.role) == "system":
                if not isinstance(msg.content, str) and not all(
                    isinstance(p, TextPart) for p in msg.content
                ):
                    return Err(SchemaValidationError("messages", "system message must be text"))
                system_parts.append({"text": msg.text})
                continue

            result = _message_to_gemini(msg, call_names)
            if isinstance(result, Err):
                return result
            contents.append(result.value)

        if not contents:
            return Err(SchemaValidationError("messages", "no user/assistant messages"))
        return Ok(
            {
                "system_instruction": {"parts": system_parts} if system_parts else None,
                "contents": contents,
            }
        )

    def map_message(self, message: PromptMessage) -> MapResult[dict[str, Any]]:
        """Convert a single non-system message.

        Tool results need the matching tool call to be named, so a lone tool
        message fails here; :meth:`map_messages` resolves them across the
        conversation.
        """
        return _message_to_gemini(message, {})

    def map_tool(self, tool: PromptTool) -> Ok[dict[str, Any]] | Err | NotConvertible:
        if tool.type != "function" or tool.function is None:
            return NotConvertible(
                ToolNotConvertibleError(tool.name, self.provider, f"tool type {tool.type!r}")
            )

        fn = tool.function
        declaration: dict[str, Any] = {"name": fn.name}
        if fn.description is not None:
            declaration["description"] = fn.description
        if fn.parameters is not None:
            parameters = to_json_value(fn.parameters, "tools")
            if isinstance(parameters, Err):
                return parameters
            declaration["parameters"] = parameters.value
        return Ok(declaration)

    def tool_name(self, tool: dict[str, Any]) -> str:
        return tool["name"]

    def render_tool_choice(self, choice: ToolChoice) -> Any:
        config: dict[str, Any] = {"mode": _MODES[choice.kind]}
        if choice.kind == "function":
            config["allowed_function_names"] = [choice.function_name]
        return {"function_calling_config": config}

    def tool_fields(
        self,
        tools: list[dict[str, Any]],
        tool_choice: Any,
        *,
        disable_parallel: bool = False,
    ) -> dict[str, Any]:
        return {
            "tools": [{"function_declarations": tools}] if tools else None,
            "tool_config": tool_choice,
        }

    def response_format_fields(
        self, definition: JSONSchemaDefinition, schema: dict[str, Any]
    ) -> dict[str, Any]:
        return {
            "generation_config": {
                "response_mime_type": "application/json",
                "response_schema": schema,
            }
        }

    def absent_response_format_fields(self) -> dict[str, Any]:
        return {"generation_config": {"response_mime_type": None, "response_schema": None}}

    def assemble(self, base: dict[str, Any], mapped: dict[str, Any]) -> dict[str, Any]:
        """Merge ``generation_config`` key by key, mapped keys winning."""
        generation_config = assemble_params(
            base.get("generation_config") or {}, mapped.get("generation_config") or {}
        )
        return assemble_params(base, {**mapped, "generation_config": generation_config or None})


def _tool_call_names(messages: Sequence[PromptMessage]) -> dict[str, str]:
    """Map tool-call ids to function names across the whole conversation."""
    names: dict[str, str] = {}
    for msg in messages:
        if isinstance(msg.content, str):
            continue
        for part in msg.content:
            if isinstance(part, ToolCallPart):
                names[part.tool_call_id] = part.tool_call.name
    return names


def _message_to_gemini(
    message: PromptMessage, call_names: Mapping[str, str]
) -> MapResult[dict[str, Any]]:
    """Convert a single non-system message to Gemini format."""
    role = _ROLES.get(message.role)
    if role is None:
        return Err(SchemaValidationError("messages", f"unknown role {message.role!r}"))
    if role == "system":
        return Err(
            SchemaValidationError("messages", "system messages belong in system_instruction")
        )

    if isinstance(message.content, str):
        if role == "tool":
            return Err(SchemaValidationError("messages", "tool message has no tool_call_id"))
        return Ok({"role": role, "parts": [{"text": message.content}]})

    parts: list[dict[str, Any]] = []
    for part in message.content:
        if isinstance(part, TextPart):
            parts.append({"text": part.text})
        elif isinstance(part, ToolCallPart) and role == "model":
            parts.append(
                {
                    "functionCall": {
                        "name": part.tool_call.name,
                        "args": parse_tool_arguments(part.tool_call.arguments),
                    }
                }
            )
        elif isinstance(part, ToolResultPart) and role in ("user", "tool"):
            name = call_names.get(part.tool_call_id)
            if name is None:
                return Err(
                    SchemaValidationError(
                        "messages", f"no tool call with id {part.tool_call_id!r} for tool result"
                    )
                )
            parts.append(
                {
                    "functionResponse": {
                        "name": name,
                        "response": {"content": tool_result_text(part.tool_result)},
                    }
                }
            )
        else:
            return Err(
                SchemaValidationError(
                    "messages", f"{part.type} content is not allowed in a {message.role} message"
                )
            )

    # Function responses are sent back as user turns
    return Ok({"role": "user" if role == "tool" else role, "parts": parts})
