"""Prompt record schema — the provider-agnostic prompt as stored upstream.

A ``PromptVersion`` is produced by the data-fetching layer and is read-only
to the conversion core. Provider converters turn it into the call
parameters of a specific LLM client.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Content parts: building blocks of multi-part message content
# ---------------------------------------------------------------------------


class TextPart(BaseModel):
    """Plain text content part."""

    type: Literal["text"] = "text"
    text: str


class ToolCallFunction(BaseModel):
    """The function invocation carried by a tool-call part."""

    type: Literal["function"] = "function"
    name: str
    arguments: str | dict[str, Any] = "{}"


class ToolCallPart(BaseModel):
    """A tool invocation recorded in an assistant message template."""

    type: Literal["tool_call"] = "tool_call"
    tool_call_id: str
    tool_call: ToolCallFunction


class ToolResultPart(BaseModel):
    """The result of a tool invocation, carried by a tool message template."""

    type: Literal["tool_result"] = "tool_result"
    tool_call_id: str
    tool_result: Any = None


ContentPart = TextPart | ToolCallPart | ToolResultPart


# ---------------------------------------------------------------------------
# Messages and templates
# ---------------------------------------------------------------------------


class PromptMessage(BaseModel):
    """A single role-tagged message template.

    ``role`` is kept as a free string: whether a role is acceptable is a
    decision of the target provider's message mapper, not of the record.
    """

    role: str
    content: str | list[ContentPart]

    @property
    def text(self) -> str:
        """Concatenated text of the message, ignoring tool parts."""
        if isinstance(self.content, str):
            return self.content
        return "".join(part.text for part in self.content if isinstance(part, TextPart))

    @classmethod
    def system(cls, text: str) -> "PromptMessage":
        """Create a system message template."""
        return cls(role="system", content=text)

    @classmethod
    def user(cls, text: str) -> "PromptMessage":
        """Create a user message template."""
        return cls(role="user", content=text)

    @classmethod
    def assistant(cls, text: str) -> "PromptMessage":
        """Create an assistant message template."""
        return cls(role="assistant", content=text)


class PromptChatTemplate(BaseModel):
    """Message-list template — the only kind the converters accept."""

    type: Literal["chat"] = "chat"
    messages: list[PromptMessage]


class PromptStringTemplate(BaseModel):
    """Raw string template (completion style)."""

    type: Literal["string"] = "string"
    template: str


PromptTemplate = PromptChatTemplate | PromptStringTemplate


class TemplateFormat(str, Enum):
    """Placeholder syntax used inside message templates."""

    MUSTACHE = "MUSTACHE"
    F_STRING = "F_STRING"
    NONE = "NONE"


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


class PromptFunctionDefinition(BaseModel):
    """A callable function exposed to the model."""

    name: str
    description: str | None = None
    parameters: dict[str, Any] | None = None
    strict: bool | None = None


class PromptTool(BaseModel):
    """A tool definition.

    ``type="function"`` is the portable kind. Other kinds (provider-native
    tools such as web search) are preserved verbatim, extra keys included,
    and left to each provider's tool mapper to accept or reject.
    """

    model_config = ConfigDict(extra="allow")

    type: str = "function"
    function: PromptFunctionDefinition | None = None

    @property
    def name(self) -> str | None:
        """Function name, or the ``name`` extra key of a native tool."""
        if self.function is not None:
            return self.function.name
        extra = self.model_extra or {}
        name = extra.get("name")
        return name if isinstance(name, str) else None

    @classmethod
    def from_function(
        cls,
        name: str,
        description: str | None = None,
        parameters: dict[str, Any] | None = None,
    ) -> "PromptTool":
        """Create a function tool."""
        fn = PromptFunctionDefinition(name=name, description=description, parameters=parameters)
        return cls(type="function", function=fn)


class PromptTools(BaseModel):
    """Tool definitions plus the directive on how the model may use them.

    ``tool_choice`` accepts several vocabularies (``"auto"``,
    ``{"type": "specific_function", "function_name": ...}``, OpenAI and
    Anthropic shapes) and is normalized during conversion.
    """

    tools: list[PromptTool] = []
    tool_choice: str | dict[str, Any] | None = None
    disable_parallel_tool_calls: bool | None = None


# ---------------------------------------------------------------------------
# Response format
# ---------------------------------------------------------------------------


class JSONSchemaDefinition(BaseModel):
    """Named JSON schema constraining the model's output."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str | None = None
    schema_: dict[str, Any] | None = Field(default=None, alias="schema")
    strict: bool | None = None


class PromptResponseFormat(BaseModel):
    """Structured-output constraint (JSON schema wrapper)."""

    type: Literal["json_schema"] = "json_schema"
    json_schema: JSONSchemaDefinition


# ---------------------------------------------------------------------------
# Prompt record
# ---------------------------------------------------------------------------


class PromptVersion(BaseModel):
    """A stored, provider-agnostic prompt."""

    model_config = ConfigDict(protected_namespaces=())

    id: str | None = None
    name: str | None = None
    description: str | None = None
    model_provider: str | None = None
    model_name: str
    invocation_parameters: dict[str, Any] = Field(default_factory=lambda: dict[str, Any]())
    template: PromptTemplate
    template_format: TemplateFormat = TemplateFormat.MUSTACHE
    tools: PromptTools | None = None
    response_format: PromptResponseFormat | None = None

    @property
    def label(self) -> str:
        """Human-readable identifier used in diagnostics."""
        return self.name or self.id or self.model_name

    @classmethod
    def chat(
        cls,
        model_name: str,
        messages: list[PromptMessage],
        **fields: Any,
    ) -> "PromptVersion":
        """Create a prompt with a message-list template."""
        return cls(
            model_name=model_name,
            template=PromptChatTemplate(messages=messages),
            **fields,
        )
