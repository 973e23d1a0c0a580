"""promptconv SDK — programmatic interface for loading and converting prompts."""

from promptconv.sdk.convert import to_anthropic, to_azure_openai, to_gemini, to_openai, to_sdk
from promptconv.sdk.errors import ConfigValidationError, PromptLoadError
from promptconv.sdk.loader import ConfigLoader, PromptLoader, load_variables

__all__ = [
    "ConfigLoader",
    "ConfigValidationError",
    "PromptLoadError",
    "PromptLoader",
    "load_variables",
    "to_anthropic",
    "to_azure_openai",
    "to_gemini",
    "to_openai",
    "to_sdk",
]
