"""Tool-choice normalization — the provider-neutral first stage.

Stored prompts express the tool-choice directive in several vocabularies.
``normalize_tool_choice`` folds all of them into a single ``ToolChoice``
which each provider converter then renders into its own encoding.

Accepted inputs:

* strings: ``none``, ``auto``, ``required`` and the synonyms
  ``zero_or_more`` (auto), ``one_or_more`` / ``any`` (required)
* ``{"type": <one of the strings above>}``
* ``{"type": "specific_function", "function_name": "lookup"}``
* ``{"type": "function", "function": {"name": "lookup"}}`` (OpenAI)
* ``{"type": "tool", "name": "lookup"}`` (Anthropic)
"""

from collections.abc import Sequence
from typing import Any, Literal

from pydantic import BaseModel, model_validator

from promptconv.core.conversion.errors import (
    SchemaValidationError,
    ToolChoiceReferencesMissingToolError,
)
from promptconv.core.conversion.result import Err, MapResult, Ok

ToolChoiceKind = Literal["none", "auto", "required", "function"]

_KIND_SYNONYMS: dict[str, ToolChoiceKind] = {
    "none": "none",
    "auto": "auto",
    "zero_or_more": "auto",
    "required": "required",
    "one_or_more": "required",
    "any": "required",
}

_STAGE = "tool_choice"


class ToolChoice(BaseModel):
    """Provider-neutral tool-choice directive."""

    kind: ToolChoiceKind
    function_name: str | None = None

    @model_validator(mode="after")
    def _check_function_name(self) -> "ToolChoice":
        if self.kind == "function" and not self.function_name:
            msg = "a 'function' tool choice requires function_name"
            raise ValueError(msg)
        return self

    @classmethod
    def force(cls, function_name: str) -> "ToolChoice":
        """Create a directive that forces one named tool."""
        return cls(kind="function", function_name=function_name)


def normalize_tool_choice(directive: str | dict[str, Any]) -> MapResult[ToolChoice]:
    """Fold a stored tool-choice directive into a :class:`ToolChoice`."""
    if isinstance(directive, str):
        kind = _KIND_SYNONYMS.get(directive)
        if kind is None:
            return Err(SchemaValidationError(_STAGE, f"unknown tool choice {directive!r}"))
        return Ok(ToolChoice(kind=kind))

    choice_type = directive.get("type")
    if not isinstance(choice_type, str):
        return Err(SchemaValidationError(_STAGE, "tool choice object has no 'type'"))

    if choice_type in _KIND_SYNONYMS:
        return Ok(ToolChoice(kind=_KIND_SYNONYMS[choice_type]))

    name = _forced_name(choice_type, directive)
    if name is None:
        return Err(SchemaValidationError(_STAGE, f"cannot read tool choice {directive!r}"))
    return Ok(ToolChoice.force(name))


def check_tool_choice(choice: ToolChoice, tool_names: Sequence[str]) -> MapResult[ToolChoice]:
    """Fail when *choice* forces a tool that is not among *tool_names*."""
    if choice.kind == "function" and choice.function_name not in tool_names:
        name = choice.function_name or ""
        return Err(ToolChoiceReferencesMissingToolError(name, list(tool_names)))
    return Ok(choice)


def _forced_name(choice_type: str, directive: dict[str, Any]) -> str | None:
    """Extract the forced tool name from one of the object vocabularies."""
    name: Any = None
    if choice_type == "specific_function":
        name = directive.get("function_name")
    elif choice_type == "function":
        function = directive.get("function")
        if isinstance(function, dict):
            name = function.get("name")  # pyright: ignore[reportUnknownMemberType]
    elif choice_type == "tool":
        name = directive.get("name")
    return name if isinstance(name, str) and name else None
