"""Error types for prompt conversion.

These are carried as values inside :class:`~promptconv.core.conversion.result.Err`
and reported by the converter entry point. None of them escape
:meth:`PromptConverter.convert`.
"""


class ConversionError(Exception):
    """Base error for all prompt conversion failures."""


class UnsupportedTemplateKindError(ConversionError):
    """The prompt template is not a message-list template."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Unsupported template kind: {kind}")


class SchemaValidationError(ConversionError):
    """A value does not fit the shape the target provider expects."""

    def __init__(self, stage: str, detail: str = "") -> None:
        self.stage = stage
        self.detail = detail
        super().__init__(f"Invalid {stage}" + (f": {detail}" if detail else ""))


class ToolNotConvertibleError(ConversionError):
    """A tool has no representation for the target provider."""

    def __init__(self, tool_name: str | None, provider: str, reason: str = "") -> None:
        self.tool_name = tool_name
        self.provider = provider
        self.reason = reason
        msg = f"Tool {tool_name or '<unnamed>'} cannot be converted for {provider}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class ToolChoiceReferencesMissingToolError(ConversionError):
    """The tool choice forces a tool that is not in the converted tool list."""

    def __init__(self, tool_name: str, available: list[str] | None = None) -> None:
        self.tool_name = tool_name
        self.available = available or []
        super().__init__(
            f"Tool choice references missing tool: {tool_name}"
            + (f" (available: {', '.join(self.available)})" if self.available else "")
        )
