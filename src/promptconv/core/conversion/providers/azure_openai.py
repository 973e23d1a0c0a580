"""Azure OpenAI converter.

Azure's chat completion client takes the same parameters as OpenAI's; the
``model`` field carries the deployment name. The prompt's ``model_name``
is used as-is, so prompts targeting Azure should store the deployment.
"""

from promptconv.core.conversion.providers.openai import OpenAIConverter


class AzureOpenAIConverter(OpenAIConverter):
    """Converts prompts to ``AzureOpenAI().chat.completions.create(**params)`` kwargs."""

    provider = "azure_openai"
    display_name = "Azure OpenAI"
