"""Prompt record schema and template formatting."""

from promptconv.core.prompt.formatting import (
    FStringFormatter,
    MustacheFormatter,
    NoOpFormatter,
    TemplateFormatter,
    format_messages,
    get_formatter,
)
from promptconv.core.prompt.models import (
    ContentPart,
    JSONSchemaDefinition,
    PromptChatTemplate,
    PromptFunctionDefinition,
    PromptMessage,
    PromptResponseFormat,
    PromptStringTemplate,
    PromptTemplate,
    PromptTool,
    PromptTools,
    PromptVersion,
    TemplateFormat,
    TextPart,
    ToolCallFunction,
    ToolCallPart,
    ToolResultPart,
)

__all__ = [
    "ContentPart",
    "FStringFormatter",
    "JSONSchemaDefinition",
    "MustacheFormatter",
    "NoOpFormatter",
    "PromptChatTemplate",
    "PromptFunctionDefinition",
    "PromptMessage",
    "PromptResponseFormat",
    "PromptStringTemplate",
    "PromptTemplate",
    "PromptTool",
    "PromptTools",
    "PromptVersion",
    "TemplateFormat",
    "TemplateFormatter",
    "TextPart",
    "ToolCallFunction",
    "ToolCallPart",
    "ToolResultPart",
    "format_messages",
    "get_formatter",
]
