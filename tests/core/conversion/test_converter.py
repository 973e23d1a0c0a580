"""Tests for the PromptConverter entry point (pipeline, failure containment, logging)."""

import copy
import logging
from typing import Any

import pytest

from promptconv.core.conversion.converter import PromptConverter
from promptconv.core.conversion.providers.openai import OpenAIConverter
from promptconv.core.prompt.models import (
    JSONSchemaDefinition,
    PromptMessage,
    PromptResponseFormat,
    PromptStringTemplate,
    PromptTool,
    PromptTools,
    PromptVersion,
)

_LOGGER = "promptconv.core.conversion.converter"

_LOOKUP_PARAMS: dict[str, Any] = {
    "type": "object",
    "properties": {"query": {"type": "string"}},
    "required": ["query"],
}


def _prompt(**fields: Any) -> PromptVersion:
    messages = fields.pop("messages", [PromptMessage.system("You are {{role}}")])
    return PromptVersion.chat(fields.pop("model_name", "gpt-4"), messages, **fields)


def _lookup_tool() -> PromptTool:
    return PromptTool.from_function("lookup", "Look up a fact", _LOOKUP_PARAMS)


def _native_tool() -> PromptTool:
    return PromptTool.model_validate({"type": "web_search_20250305", "name": "web_search"})


def _warnings(caplog: pytest.LogCaptureFixture) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.name == _LOGGER and r.levelno == logging.WARNING]


class TestEndToEnd:
    def test_openai_scenario(self) -> None:
        prompt = _prompt(tools=PromptTools(tools=[_lookup_tool()], tool_choice="auto"))
        params = OpenAIConverter().convert(prompt, {"role": "helper"})

        assert params == {
            "model": "gpt-4",
            "messages": [{"role": "system", "content": "You are helper"}],
            "tools": [
                {
                    "type": "function",
                    "function": {
                        "name": "lookup",
                        "description": "Look up a fact",
                        "parameters": _LOOKUP_PARAMS,
                    },
                }
            ],
            "tool_choice": "auto",
        }

    def test_without_variables_templates_are_kept(self) -> None:
        params = OpenAIConverter().convert(_prompt())
        assert params is not None
        assert params["messages"] == [{"role": "system", "content": "You are {{role}}"}]

    def test_minimal_prompt_has_only_model_and_messages(self) -> None:
        params = OpenAIConverter().convert(_prompt(), {"role": "helper"})
        assert params is not None
        assert set(params) == {"model", "messages"}


class TestPrecedence:
    def test_model_name_wins_over_invocation_parameters(self) -> None:
        prompt = _prompt(model_name="y", invocation_parameters={"model": "x", "temperature": 0.1})
        params = OpenAIConverter().convert(prompt)
        assert params is not None
        assert params["model"] == "y"
        assert params["temperature"] == 0.1

    def test_mapped_messages_win_over_invocation_parameters(self) -> None:
        prompt = _prompt(invocation_parameters={"messages": [{"role": "user", "content": "x"}]})
        params = OpenAIConverter().convert(prompt, {"role": "helper"})
        assert params is not None
        assert params["messages"] == [{"role": "system", "content": "You are helper"}]

    def test_invocation_tools_removed_when_prompt_has_none(self) -> None:
        prompt = _prompt(invocation_parameters={"tools": [{"type": "function"}], "tool_choice": "required"})
        params = OpenAIConverter().convert(prompt)
        assert params is not None
        assert "tools" not in params
        assert "tool_choice" not in params

    def test_invocation_response_format_removed_when_prompt_has_none(self) -> None:
        smuggled = {"type": "json_schema", "json_schema": {"name": "a", "schema": {}}}
        prompt = _prompt(invocation_parameters={"response_format": smuggled, "temperature": 0})
        params = OpenAIConverter().convert(prompt)
        assert params is not None
        assert "response_format" not in params
        assert params["temperature"] == 0

    def test_declared_response_format_wins_over_invocation(self) -> None:
        prompt = _prompt(
            invocation_parameters={"response_format": {"type": "json_object"}},
            response_format=PromptResponseFormat(json_schema=JSONSchemaDefinition(name="a")),
        )
        params = OpenAIConverter().convert(prompt)
        assert params is not None
        assert params["response_format"]["type"] == "json_schema"


class TestToolFiltering:
    def test_non_convertible_tool_is_dropped(self) -> None:
        prompt = _prompt(tools=PromptTools(tools=[_lookup_tool(), _native_tool()]))
        params = OpenAIConverter().convert(prompt)
        assert params is not None
        assert [t["function"]["name"] for t in params["tools"]] == ["lookup"]

    def test_all_filtered_collapses_to_absent(self) -> None:
        prompt = _prompt(tools=PromptTools(tools=[_native_tool()], tool_choice="required"))
        params = OpenAIConverter().convert(prompt)
        assert params is not None
        assert "tools" not in params
        assert "tool_choice" not in params

    def test_empty_tool_list_is_absent(self) -> None:
        params = OpenAIConverter().convert(_prompt(tools=PromptTools(tools=[], tool_choice="auto")))
        assert params is not None
        assert "tools" not in params
        assert "tool_choice" not in params

    def test_filtering_logs_no_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        prompt = _prompt(tools=PromptTools(tools=[_lookup_tool(), _native_tool()]))
        with caplog.at_level(logging.DEBUG, logger="promptconv"):
            OpenAIConverter().convert(prompt)
        assert _warnings(caplog) == []
        assert any("web_search" in r.getMessage() for r in caplog.records)


class TestToolChoice:
    def test_choice_dropped_without_tools(self) -> None:
        params = OpenAIConverter().convert(_prompt(tools=PromptTools(tool_choice="required")))
        assert params is not None
        assert "tool_choice" not in params

    def test_forced_tool(self) -> None:
        tools = PromptTools(
            tools=[_lookup_tool()],
            tool_choice={"type": "specific_function", "function_name": "lookup"},
        )
        params = OpenAIConverter().convert(_prompt(tools=tools))
        assert params is not None
        assert params["tool_choice"] == {"type": "function", "function": {"name": "lookup"}}

    def test_forced_filtered_tool_fails(self, caplog: pytest.LogCaptureFixture) -> None:
        tools = PromptTools(
            tools=[_lookup_tool(), _native_tool()],
            tool_choice={"type": "tool", "name": "web_search"},
        )
        with caplog.at_level(logging.WARNING, logger="promptconv"):
            assert OpenAIConverter().convert(_prompt(tools=tools)) is None
        records = _warnings(caplog)
        assert len(records) == 1
        assert "tool_choice" in records[0].getMessage()
        assert "web_search" in records[0].getMessage()

    def test_unreadable_choice_fails(self) -> None:
        tools = PromptTools(tools=[_lookup_tool()], tool_choice="sometimes")
        assert OpenAIConverter().convert(_prompt(tools=tools)) is None


class TestFailures:
    def test_unserializable_schema_fails_closed(self, caplog: pytest.LogCaptureFixture) -> None:
        definition = JSONSchemaDefinition(name="answer", schema_={"type": "string", "enum": {"a", "b"}})
        prompt = _prompt(response_format=PromptResponseFormat(json_schema=definition))

        with caplog.at_level(logging.WARNING, logger="promptconv"):
            assert OpenAIConverter().convert(prompt) is None

        records = _warnings(caplog)
        assert len(records) == 1
        message = records[0].getMessage()
        assert "Failed to convert prompt" in message
        assert "OpenAI" in message
        assert "response_format" in message

    def test_unknown_role_fails(self, caplog: pytest.LogCaptureFixture) -> None:
        prompt = _prompt(messages=[PromptMessage(role="narrator", content="hi")], name="story")
        with caplog.at_level(logging.WARNING, logger="promptconv"):
            assert OpenAIConverter().convert(prompt) is None
        records = _warnings(caplog)
        assert len(records) == 1
        assert "story" in records[0].getMessage()
        assert "messages" in records[0].getMessage()

    def test_string_template_returns_none_without_warning(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        prompt = PromptVersion(model_name="gpt-4", template=PromptStringTemplate(template="Hi"))
        with caplog.at_level(logging.WARNING, logger="promptconv"):
            assert OpenAIConverter().convert(prompt) is None
        assert _warnings(caplog) == []

    def test_unexpected_exception_is_contained(self, caplog: pytest.LogCaptureFixture) -> None:
        class BrokenConverter(OpenAIConverter):
            def tool_name(self, tool: dict[str, Any]) -> str:
                raise RuntimeError("boom")

        tools = PromptTools(tools=[_lookup_tool()], tool_choice="auto")
        with caplog.at_level(logging.WARNING, logger="promptconv"):
            assert BrokenConverter().convert(_prompt(tools=tools)) is None
        records = _warnings(caplog)
        assert len(records) == 1
        assert "boom" in records[0].getMessage()
        assert records[0].exc_info is not None


class TestPurity:
    def test_inputs_not_mutated(self) -> None:
        prompt = _prompt(
            invocation_parameters={"temperature": 0.5, "stop": ["\n"]},
            tools=PromptTools(tools=[_lookup_tool()], tool_choice="auto"),
            response_format=PromptResponseFormat(
                json_schema=JSONSchemaDefinition(name="a", schema_={"type": "object"})
            ),
        )
        variables = {"role": "helper"}
        before = copy.deepcopy(prompt.model_dump())

        params = OpenAIConverter().convert(prompt, variables)

        assert params is not None
        assert prompt.model_dump() == before
        assert variables == {"role": "helper"}

    def test_output_shares_no_state_with_record(self) -> None:
        prompt = _prompt(
            invocation_parameters={"stop": ["\n"]},
            tools=PromptTools(tools=[_lookup_tool()]),
        )
        params = OpenAIConverter().convert(prompt)
        assert params is not None

        params["stop"].append("END")
        params["tools"][0]["function"]["parameters"]["required"].append("extra")

        assert prompt.invocation_parameters["stop"] == ["\n"]
        assert _LOOKUP_PARAMS["required"] == ["query"]

    def test_converter_is_reusable(self) -> None:
        converter = OpenAIConverter()
        first = converter.convert(_prompt(), {"role": "a"})
        second = converter.convert(_prompt(), {"role": "b"})
        assert first is not None and second is not None
        assert first["messages"][0]["content"] == "You are a"
        assert second["messages"][0]["content"] == "You are b"


class TestAbstractBase:
    def test_cannot_instantiate(self) -> None:
        with pytest.raises(TypeError):
            PromptConverter()  # type: ignore[abstract]
