"""Tests for the per-provider conversion functions."""

from __future__ import annotations

import pytest

import promptconv
from promptconv.core.conversion.config import ConverterConfig
from promptconv.core.conversion.registry import UnknownProviderError
from promptconv.core.prompt.models import PromptMessage, PromptStringTemplate, PromptVersion
from promptconv.sdk.convert import to_anthropic, to_azure_openai, to_gemini, to_openai, to_sdk


def _prompt() -> PromptVersion:
    return PromptVersion.chat(
        "some-model",
        [PromptMessage.system("You are {{role}}"), PromptMessage.user("Hi")],
    )


class TestConvertFunctions:
    def test_to_openai(self) -> None:
        params = to_openai(_prompt(), {"role": "helper"})
        assert params is not None
        assert params["messages"][0] == {"role": "system", "content": "You are helper"}

    def test_to_azure_openai_matches_openai(self) -> None:
        assert to_azure_openai(_prompt(), {"role": "helper"}) == to_openai(_prompt(), {"role": "helper"})

    def test_to_anthropic_with_config(self) -> None:
        params = to_anthropic(_prompt(), config=ConverterConfig(default_max_tokens=99))
        assert params is not None
        assert params["max_tokens"] == 99
        assert params["system"] == "You are {{role}}"

    def test_to_gemini(self) -> None:
        params = to_gemini(_prompt(), {"role": "helper"})
        assert params is not None
        assert params["system_instruction"] == {"parts": [{"text": "You are helper"}]}

    def test_string_template_is_none_everywhere(self) -> None:
        prompt = PromptVersion(model_name="m", template=PromptStringTemplate(template="Hi"))
        for fn in (to_openai, to_azure_openai, to_anthropic, to_gemini):
            assert fn(prompt) is None


class TestToSdk:
    def test_dispatch_by_name(self) -> None:
        assert to_sdk(_prompt(), "google", {"role": "x"}) == to_gemini(_prompt(), {"role": "x"})

    def test_unknown_provider(self) -> None:
        with pytest.raises(UnknownProviderError):
            to_sdk(_prompt(), "cohere")

    def test_package_level_export(self) -> None:
        assert promptconv.to_openai(_prompt()) == to_openai(_prompt())
