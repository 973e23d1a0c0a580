"""Prompt-to-provider conversion: mappers, assembly and the entry point."""

from promptconv.core.conversion.assembler import assemble_params
from promptconv.core.conversion.capabilities import ProviderProfile
from promptconv.core.conversion.config import ConverterConfig
from promptconv.core.conversion.converter import PromptConverter
from promptconv.core.conversion.errors import (
    ConversionError,
    SchemaValidationError,
    ToolChoiceReferencesMissingToolError,
    ToolNotConvertibleError,
    UnsupportedTemplateKindError,
)
from promptconv.core.conversion.registry import (
    UnknownProviderError,
    available_providers,
    get_converter,
    resolve_provider,
)
from promptconv.core.conversion.result import Err, MapResult, NotConvertible, Ok
from promptconv.core.conversion.tool_choice import ToolChoice, normalize_tool_choice

__all__ = [
    "ConversionError",
    "ConverterConfig",
    "Err",
    "MapResult",
    "NotConvertible",
    "Ok",
    "PromptConverter",
    "ProviderProfile",
    "SchemaValidationError",
    "ToolChoice",
    "ToolChoiceReferencesMissingToolError",
    "ToolNotConvertibleError",
    "UnknownProviderError",
    "UnsupportedTemplateKindError",
    "assemble_params",
    "available_providers",
    "get_converter",
    "normalize_tool_choice",
    "resolve_provider",
]
