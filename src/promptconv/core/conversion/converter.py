"""PromptConverter — the conversion entry point shared by all providers.

A provider module subclasses :class:`PromptConverter` and supplies the
vocabulary mappers (message, tool, tool choice, response format). The base
class runs the pipeline::

    format templates -> map messages -> map + filter tools
        -> normalize / check / render tool choice -> map response format
        -> assemble

Every mapper returns a :mod:`~promptconv.core.conversion.result` value.
The first ``Err`` (or any unexpected exception) ends the conversion with a
single warning log entry and a ``None`` result. Nothing is raised to the
caller.
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, ClassVar

from promptconv.core.conversion.assembler import assemble_params
from promptconv.core.conversion.capabilities import ProviderProfile
from promptconv.core.conversion.config import ConverterConfig
from promptconv.core.conversion.errors import SchemaValidationError, UnsupportedTemplateKindError
from promptconv.core.conversion.result import Err, MapResult, NotConvertible, Ok, collect
from promptconv.core.conversion.schema import to_json_value
from promptconv.core.conversion.tool_choice import (
    ToolChoice,
    check_tool_choice,
    normalize_tool_choice,
)
from promptconv.core.prompt.formatting import format_messages
from promptconv.core.prompt.models import PromptChatTemplate
from promptconv.utils.telemetry import (
    ATTR_MODEL,
    ATTR_OUTCOME,
    ATTR_PROMPT,
    ATTR_PROVIDER,
    ATTR_STAGE,
    ATTR_TEMPLATE_FORMAT,
    ATTR_TOOLS_CONVERTED,
    ATTR_TOOLS_TOTAL,
    get_tracer,
)

if TYPE_CHECKING:
    from opentelemetry.trace import Span

    from promptconv.core.prompt.models import (
        JSONSchemaDefinition,
        PromptMessage,
        PromptResponseFormat,
        PromptTool,
        PromptVersion,
    )

logger = logging.getLogger(__name__)

_tracer = get_tracer(__name__)


class PromptConverter(ABC):
    """Convert :class:`PromptVersion` records into one provider's call parameters."""

    provider: ClassVar[str]
    display_name: ClassVar[str]
    profile: ClassVar[ProviderProfile] = ProviderProfile()

    def __init__(self, config: ConverterConfig | None = None) -> None:
        self.config = config or ConverterConfig()

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def convert(
        self,
        prompt: PromptVersion,
        variables: Mapping[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """Convert *prompt* into this provider's parameter object.

        Returns ``None`` when the template is not a message list, or when
        any part of the prompt cannot be expressed for this provider. The
        latter is reported as one warning on this module's logger.
        """
        with _tracer.start_as_current_span("prompt.convert") as span:
            span.set_attribute(ATTR_PROVIDER, self.provider)
            span.set_attribute(ATTR_MODEL, prompt.model_name)
            span.set_attribute(ATTR_PROMPT, prompt.label)
            span.set_attribute(ATTR_TEMPLATE_FORMAT, prompt.template_format.value)

            template = prompt.template
            if not isinstance(template, PromptChatTemplate):
                error = UnsupportedTemplateKindError(template.type)
                logger.debug("Skipping prompt %s for %s: %s", prompt.label, self.provider, error)
                span.set_attribute(ATTR_OUTCOME, "unsupported_template")
                return None

            stage = "format"
            try:
                messages = format_messages(template.messages, prompt.template_format, variables)

                stage = "messages"
                message_fields = self.map_messages(messages)
                if isinstance(message_fields, Err):
                    return self._fail(span, prompt, stage, message_fields.error)

                stage = "tools"
                tools = self._map_tools(prompt, span)
                if isinstance(tools, Err):
                    return self._fail(span, prompt, stage, tools.error)

                stage = "tool_choice"
                tool_choice = self._map_tool_choice(prompt, tools.value)
                if isinstance(tool_choice, Err):
                    return self._fail(span, prompt, stage, tool_choice.error)

                stage = "response_format"
                format_fields = self.absent_response_format_fields()
                if prompt.response_format is not None:
                    mapped_format = self.map_response_format(prompt.response_format)
                    if isinstance(mapped_format, Err):
                        return self._fail(span, prompt, stage, mapped_format.error)
                    format_fields = mapped_format.value

                stage = "assemble"
                disable_parallel = bool(prompt.tools and prompt.tools.disable_parallel_tool_calls)
                mapped: dict[str, Any] = {
                    "model": prompt.model_name,
                    **message_fields.value,
                    **self.tool_fields(
                        tools.value, tool_choice.value, disable_parallel=disable_parallel
                    ),
                    **format_fields,
                }
                params = self.assemble(self.base_params(prompt), mapped)
            except Exception as exc:  # noqa: BLE001
                return self._fail(span, prompt, stage, exc, exc_info=True)

            span.set_attribute(ATTR_OUTCOME, "converted")
            return params

    # ------------------------------------------------------------------
    # Vocabulary hooks
    # ------------------------------------------------------------------

    def base_params(self, prompt: PromptVersion) -> dict[str, Any]:
        """Lowest-precedence fields: the prompt's invocation parameters."""
        return copy.deepcopy(prompt.invocation_parameters)

    def map_messages(self, messages: Sequence[PromptMessage]) -> MapResult[dict[str, Any]]:
        """Map the formatted message list into the provider's message fields."""
        mapped = collect(self.map_message(msg) for msg in messages)
        if isinstance(mapped, Err):
            return mapped
        return Ok({"messages": mapped.value})

    @abstractmethod
    def map_message(self, message: PromptMessage) -> MapResult[dict[str, Any]]:
        """Map one message into the provider's message shape."""

    @abstractmethod
    def map_tool(self, tool: PromptTool) -> Ok[dict[str, Any]] | Err | NotConvertible:
        """Map one tool definition, or report it as not convertible."""

    @abstractmethod
    def tool_name(self, tool: dict[str, Any]) -> str:
        """Name of an already-mapped tool."""

    @abstractmethod
    def render_tool_choice(self, choice: ToolChoice) -> Any:
        """Encode a neutral tool choice in the provider's vocabulary."""

    def tool_fields(
        self,
        tools: list[dict[str, Any]],
        tool_choice: Any,
        *,
        disable_parallel: bool = False,
    ) -> dict[str, Any]:
        """Mapped fields for tools; an empty tool list means absent."""
        return {"tools": tools or None, "tool_choice": tool_choice}

    def map_response_format(self, response_format: PromptResponseFormat) -> MapResult[dict[str, Any]]:
        """Map a structured-output constraint into the provider's fields."""
        if not self.profile.supports_response_format:
            return Err(
                SchemaValidationError(
                    "response_format",
                    f"{self.display_name} does not support structured output",
                )
            )
        definition = response_format.json_schema
        schema = to_json_value(definition.schema_ or {}, "response_format")
        if isinstance(schema, Err):
            return schema
        return Ok(self.response_format_fields(definition, schema.value))

    def response_format_fields(
        self, definition: JSONSchemaDefinition, schema: dict[str, Any]
    ) -> dict[str, Any]:
        """Render a validated JSON schema into response-format fields."""
        msg = f"{self.display_name} has no response format rendering"
        raise NotImplementedError(msg)

    def absent_response_format_fields(self) -> dict[str, Any]:
        """Fields that clear a response format the prompt does not declare."""
        return {"response_format": None}

    def assemble(self, base: dict[str, Any], mapped: dict[str, Any]) -> dict[str, Any]:
        """Merge base and mapped fields; mapped fields take precedence."""
        return assemble_params(base, mapped)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _map_tools(self, prompt: PromptVersion, span: Span) -> MapResult[list[dict[str, Any]]]:
        """Map every tool, dropping the ones this provider cannot represent."""
        if prompt.tools is None:
            return Ok([])

        mapped: list[dict[str, Any]] = []
        for tool in prompt.tools.tools:
            result = self.map_tool(tool)
            if isinstance(result, NotConvertible):
                logger.debug("Dropping tool for %s: %s", self.provider, result.error)
                continue
            if isinstance(result, Err):
                return result
            mapped.append(result.value)

        span.set_attribute(ATTR_TOOLS_TOTAL, len(prompt.tools.tools))
        span.set_attribute(ATTR_TOOLS_CONVERTED, len(mapped))
        return Ok(mapped)

    def _map_tool_choice(
        self, prompt: PromptVersion, tools: list[dict[str, Any]]
    ) -> MapResult[Any]:
        """Normalize, check and render the tool choice; absent without tools."""
        directive = prompt.tools.tool_choice if prompt.tools else None
        if not tools or directive is None:
            return Ok(None)

        normalized = normalize_tool_choice(directive)
        if isinstance(normalized, Err):
            return normalized
        checked = check_tool_choice(normalized.value, [self.tool_name(t) for t in tools])
        if isinstance(checked, Err):
            return checked
        return Ok(self.render_tool_choice(checked.value))

    def _fail(
        self,
        span: Span,
        prompt: PromptVersion,
        stage: str,
        error: Exception,
        *,
        exc_info: bool = False,
    ) -> None:
        logger.warning(
            "Failed to convert prompt %s to %s params (stage: %s): %s",
            prompt.label,
            self.display_name,
            stage,
            error,
            exc_info=exc_info,
        )
        span.set_attribute(ATTR_STAGE, stage)
        span.set_attribute(ATTR_OUTCOME, "failed")
        return None
