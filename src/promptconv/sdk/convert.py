"""Per-provider conversion entry points.

Each function has the same contract::

    to_<provider>(prompt, variables=None, *, config=None) -> dict | None

``None`` means the prompt cannot be used with that provider; the reason is
logged as a warning, never raised.

Usage::

    from openai import OpenAI
    from promptconv import to_openai

    params = to_openai(prompt, {"question": "What is 2+2?"})
    if params is not None:
        OpenAI().chat.completions.create(**params)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from promptconv.core.conversion.providers.anthropic import AnthropicConverter
from promptconv.core.conversion.providers.azure_openai import AzureOpenAIConverter
from promptconv.core.conversion.providers.gemini import GeminiConverter
from promptconv.core.conversion.providers.openai import OpenAIConverter
from promptconv.core.conversion.registry import get_converter

if TYPE_CHECKING:
    from collections.abc import Mapping

    from promptconv.core.conversion.config import ConverterConfig
    from promptconv.core.prompt.models import PromptVersion


def to_openai(
    prompt: PromptVersion,
    variables: Mapping[str, Any] | None = None,
    *,
    config: ConverterConfig | None = None,
) -> dict[str, Any] | None:
    """Convert *prompt* to OpenAI chat completion parameters."""
    return OpenAIConverter(config).convert(prompt, variables)


def to_azure_openai(
    prompt: PromptVersion,
    variables: Mapping[str, Any] | None = None,
    *,
    config: ConverterConfig | None = None,
) -> dict[str, Any] | None:
    """Convert *prompt* to Azure OpenAI chat completion parameters."""
    return AzureOpenAIConverter(config).convert(prompt, variables)


def to_anthropic(
    prompt: PromptVersion,
    variables: Mapping[str, Any] | None = None,
    *,
    config: ConverterConfig | None = None,
) -> dict[str, Any] | None:
    """Convert *prompt* to Anthropic messages parameters."""
    return AnthropicConverter(config).convert(prompt, variables)


def to_gemini(
    prompt: PromptVersion,
    variables: Mapping[str, Any] | None = None,
    *,
    config: ConverterConfig | None = None,
) -> dict[str, Any] | None:
    """Convert *prompt* to Gemini generateContent parameters."""
    return GeminiConverter(config).convert(prompt, variables)


def to_sdk(
    prompt: PromptVersion,
    provider: str,
    variables: Mapping[str, Any] | None = None,
    *,
    config: ConverterConfig | None = None,
) -> dict[str, Any] | None:
    """Convert *prompt* for the provider named *provider* (aliases accepted).

    Raises:
        UnknownProviderError: If no converter is registered for *provider*.
    """
    return get_converter(provider, config).convert(prompt, variables)
