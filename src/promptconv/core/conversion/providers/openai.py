"""OpenAI converter — chat completion parameters.

The stored message format is closest to ChatML, so this is the simplest
mapping: roles pass through (``model``/``ai`` become ``assistant``), tool
calls become ``tool_calls`` entries and tool results become ``tool``
messages carrying a ``tool_call_id``.
"""

from typing import Any

from promptconv.core.conversion.capabilities import ProviderProfile
from promptconv.core.conversion.converter import PromptConverter
from promptconv.core.conversion.errors import SchemaValidationError, ToolNotConvertibleError
from promptconv.core.conversion.result import Err, MapResult, NotConvertible, Ok
from promptconv.core.conversion.schema import tool_arguments, tool_result_text, to_json_value
from promptconv.core.conversion.tool_choice import ToolChoice
from promptconv.core.prompt.models import (
    JSONSchemaDefinition,
    PromptMessage,
    PromptTool,
    TextPart,
    ToolCallPart,
    ToolResultPart,
)

_ROLES: dict[str, str] = {
    "system": "system",
    "developer": "developer",
    "user": "user",
    "assistant": "assistant",
    "model": "assistant",
    "ai": "assistant",
    "tool": "tool",
}


class OpenAIConverter(PromptConverter):
    """Converts prompts to ``client.chat.completions.create(**params)`` kwargs."""

    provider = "openai"
    display_name = "OpenAI"
    profile = ProviderProfile(
        supports_response_format=True,
        supports_parallel_tool_control=True,
    )

    def map_message(self, message: PromptMessage) -> MapResult[dict[str, Any]]:
        """Convert a single message to OpenAI format."""
        role = _ROLES.get(message.role)
        if role is None:
            return Err(SchemaValidationError("messages", f"unknown role {message.role!r}"))

        if role == "tool":
            return _tool_message(message)

        if isinstance(message.content, str):
            return Ok({"role": role, "content": message.content})

        text_parts: list[TextPart] = []
        tool_calls: list[dict[str, Any]] = []
        for part in message.content:
            if isinstance(part, TextPart):
                text_parts.append(part)
            elif isinstance(part, ToolCallPart) and role == "assistant":
                tool_calls.append(
                    {
                        "id": part.tool_call_id,
                        "type": "function",
                        "function": {
                            "name": part.tool_call.name,
                            "arguments": tool_arguments(part.tool_call.arguments),
                        },
                    }
                )
            else:
                return Err(
                    SchemaValidationError(
                        "messages", f"{part.type} content is not allowed in a {role} message"
                    )
                )

        result: dict[str, Any] = {"role": role}
        if role == "assistant":
            text = "".join(p.text for p in text_parts)
            result["content"] = text if text or not tool_calls else None
            if tool_calls:
                result["tool_calls"] = tool_calls
        elif not text_parts:
            return Err(SchemaValidationError("messages", f"{role} message has no content"))
        elif len(text_parts) == 1:
            result["content"] = text_parts[0].text
        else:
            result["content"] = [{"type": "text", "text": p.text} for p in text_parts]
        return Ok(result)

    def map_tool(self, tool: PromptTool) -> Ok[dict[str, Any]] | Err | NotConvertible:
        if tool.type != "function" or tool.function is None:
            return NotConvertible(
                ToolNotConvertibleError(tool.name, self.provider, f"tool type {tool.type!r}")
            )

        fn = tool.function
        function: dict[str, Any] = {"name": fn.name}
        if fn.description is not None:
            function["description"] = fn.description
        if fn.parameters is not None:
            parameters = to_json_value(fn.parameters, "tools")
            if isinstance(parameters, Err):
                return parameters
            function["parameters"] = parameters.value
        if fn.strict is not None:
            function["strict"] = fn.strict
        return Ok({"type": "function", "function": function})

    def tool_name(self, tool: dict[str, Any]) -> str:
        return tool["function"]["name"]

    def render_tool_choice(self, choice: ToolChoice) -> Any:
        if choice.kind == "function":
            return {"type": "function", "function": {"name": choice.function_name}}
        return choice.kind

    def tool_fields(
        self,
        tools: list[dict[str, Any]],
        tool_choice: Any,
        *,
        disable_parallel: bool = False,
    ) -> dict[str, Any]:
        fields = super().tool_fields(tools, tool_choice)
        fields["parallel_tool_calls"] = False if tools and disable_parallel else None
        return fields

    def response_format_fields(
        self, definition: JSONSchemaDefinition, schema: dict[str, Any]
    ) -> dict[str, Any]:
        json_schema: dict[str, Any] = {"name": definition.name, "schema": schema}
        if definition.description is not None:
            json_schema["description"] = definition.description
        if definition.strict is not None:
            json_schema["strict"] = definition.strict
        return {"response_format": {"type": "json_schema", "json_schema": json_schema}}


def _tool_message(message: PromptMessage) -> MapResult[dict[str, Any]]:
    """Convert a tool-result message; it must carry exactly one result."""
    if isinstance(message.content, str):
        return Err(SchemaValidationError("messages", "tool message has no tool_call_id"))

    results = [p for p in message.content if isinstance(p, ToolResultPart)]
    if len(results) != 1:
        return Err(
            SchemaValidationError(
                "messages", f"tool message needs one tool_result part, got {len(results)}"
            )
        )
    return Ok(
        {
            "role": "tool",
            "tool_call_id": results[0].tool_call_id,
            "content": tool_result_text(results[0].tool_result),
        }
    )
