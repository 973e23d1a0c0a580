"""Converter lookup by provider name."""

from promptconv.core.conversion.config import ConverterConfig
from promptconv.core.conversion.converter import PromptConverter
from promptconv.core.conversion.providers.anthropic import AnthropicConverter
from promptconv.core.conversion.providers.azure_openai import AzureOpenAIConverter
from promptconv.core.conversion.providers.gemini import GeminiConverter
from promptconv.core.conversion.providers.openai import OpenAIConverter

CONVERTERS: dict[str, type[PromptConverter]] = {
    OpenAIConverter.provider: OpenAIConverter,
    AzureOpenAIConverter.provider: AzureOpenAIConverter,
    AnthropicConverter.provider: AnthropicConverter,
    GeminiConverter.provider: GeminiConverter,
}

ALIASES: dict[str, str] = {
    "azure": "azure_openai",
    "google": "gemini",
}


class UnknownProviderError(KeyError):
    """No converter is registered for the requested provider."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"Unknown provider: {provider}")

    def __str__(self) -> str:
        return str(self.args[0])


def resolve_provider(provider: str) -> str:
    """Return the canonical provider name for *provider* or an alias of it."""
    key = provider.lower().replace("-", "_")
    key = ALIASES.get(key, key)
    if key not in CONVERTERS:
        raise UnknownProviderError(provider)
    return key


def get_converter(provider: str, config: ConverterConfig | None = None) -> PromptConverter:
    """Return a converter instance for *provider*."""
    return CONVERTERS[resolve_provider(provider)](config)


def available_providers() -> list[str]:
    """Canonical names of all registered providers."""
    return list(CONVERTERS)
