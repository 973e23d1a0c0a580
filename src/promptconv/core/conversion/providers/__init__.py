"""Provider-specific converter implementations."""

from promptconv.core.conversion.providers.anthropic import AnthropicConverter
from promptconv.core.conversion.providers.azure_openai import AzureOpenAIConverter
from promptconv.core.conversion.providers.gemini import GeminiConverter
from promptconv.core.conversion.providers.openai import OpenAIConverter

__all__ = ["AnthropicConverter", "AzureOpenAIConverter", "GeminiConverter", "OpenAIConverter"]
