"""Template formatting — interpolate variables into message templates.

Each ``TemplateFormat`` maps to a formatter implementing the
``TemplateFormatter`` protocol. Formatting only touches text: string
content and ``TextPart`` parts. Tool-call and tool-result parts pass
through unchanged.

Placeholders whose name is missing from the variables are left as-is,
the same policy as :meth:`string.Template.safe_substitute`.
"""

import json
import re
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from promptconv.core.prompt.models import (
    ContentPart,
    PromptMessage,
    TemplateFormat,
    TextPart,
)


class TemplateFormatter(Protocol):
    """Protocol for a placeholder syntax."""

    def format(self, text: str, variables: Mapping[str, Any]) -> str:
        """Return *text* with every known placeholder replaced."""
        ...


class MustacheFormatter:
    """``{{ name }}`` placeholders. ``\\{{`` produces a literal ``{{``."""

    _pattern = re.compile(r"(?P<escape>\\)?\{\{\s*(?P<name>[^{}\s]+)\s*\}\}")

    def format(self, text: str, variables: Mapping[str, Any]) -> str:
        def _replace(match: re.Match[str]) -> str:
            if match.group("escape"):
                return match.group(0)[1:]
            name = match.group("name")
            if name not in variables:
                return match.group(0)
            return _stringify(variables[name])

        return self._pattern.sub(_replace, text)


class FStringFormatter:
    """``{name}`` placeholders. ``{{`` and ``}}`` are literal braces."""

    _pattern = re.compile(r"\{\{|\}\}|\{(?P<name>[^{}]+)\}")

    def format(self, text: str, variables: Mapping[str, Any]) -> str:
        def _replace(match: re.Match[str]) -> str:
            token = match.group(0)
            if token == "{{":
                return "{"
            if token == "}}":
                return "}"
            name = match.group("name").strip()
            if name not in variables:
                return token
            return _stringify(variables[name])

        return self._pattern.sub(_replace, text)


class NoOpFormatter:
    """No placeholder syntax — text is returned untouched."""

    def format(self, text: str, variables: Mapping[str, Any]) -> str:
        return text


def get_formatter(template_format: TemplateFormat) -> TemplateFormatter:
    """Return the formatter for a template format."""
    mapping: dict[TemplateFormat, TemplateFormatter] = {
        TemplateFormat.MUSTACHE: MustacheFormatter(),
        TemplateFormat.F_STRING: FStringFormatter(),
        TemplateFormat.NONE: NoOpFormatter(),
    }
    return mapping[template_format]


def format_messages(
    messages: Sequence[PromptMessage],
    template_format: TemplateFormat,
    variables: Mapping[str, Any] | None,
) -> list[PromptMessage]:
    """Interpolate *variables* into every message template.

    When *variables* is ``None`` the messages are returned without any
    substitution, so a prompt can be previewed with its placeholders intact.
    The input messages are never modified; formatted messages are copies.
    """
    if variables is None:
        return list(messages)

    formatter = get_formatter(template_format)
    return [_format_message(msg, formatter, variables) for msg in messages]


def _format_message(
    message: PromptMessage,
    formatter: TemplateFormatter,
    variables: Mapping[str, Any],
) -> PromptMessage:
    if isinstance(message.content, str):
        return message.model_copy(update={"content": formatter.format(message.content, variables)})

    parts: list[ContentPart] = []
    for part in message.content:
        if isinstance(part, TextPart):
            parts.append(TextPart(text=formatter.format(part.text, variables)))
        else:
            parts.append(part)
    return message.model_copy(update={"content": parts})


def _stringify(value: Any) -> str:
    """Render a variable value as template text."""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, default=str)
    return str(value)
