"""Tests for ``promptconv convert`` CLI command."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from click.testing import CliRunner

from promptconv.cli import main

if TYPE_CHECKING:
    from pathlib import Path

_PROMPT_YAML = """\
name: greeting
model_name: gpt-4o
invocation_parameters:
  temperature: 0.2
template:
  type: chat
  messages:
    - role: system
      content: "You are {{role}}"
    - role: user
      content: Hello
"""


def _write_prompt(tmp_path: Path, content: str = _PROMPT_YAML) -> Path:
    f = tmp_path / "prompt.yaml"
    f.write_text(content)
    return f


class TestConvertCommand:
    def test_convert_json(self, tmp_path: Path) -> None:
        f = _write_prompt(tmp_path)

        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(f), "--var", "role=helper", "--json"])

        assert result.exit_code == 0
        params = json.loads(result.output)
        assert params["model"] == "gpt-4o"
        assert params["temperature"] == 0.2
        assert params["messages"][0] == {"role": "system", "content": "You are helper"}

    def test_convert_with_title(self, tmp_path: Path) -> None:
        f = _write_prompt(tmp_path)

        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(f), "--provider", "anthropic"])

        assert result.exit_code == 0
        assert "Anthropic parameters for greeting" in result.output
        assert '"max_tokens": 1024' in result.output

    def test_without_variables_templates_are_kept(self, tmp_path: Path) -> None:
        f = _write_prompt(tmp_path)

        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(f), "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output)["messages"][0]["content"] == "You are {{role}}"

    def test_vars_file(self, tmp_path: Path) -> None:
        f = _write_prompt(tmp_path)
        vars_file = tmp_path / "vars.json"
        vars_file.write_text(json.dumps({"role": "a pirate"}))

        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(f), "--vars-file", str(vars_file), "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output)["messages"][0]["content"] == "You are a pirate"

    def test_config_file(self, tmp_path: Path) -> None:
        f = _write_prompt(tmp_path)
        config = tmp_path / "config.yaml"
        config.write_text("default_max_tokens: 2048\n")

        runner = CliRunner()
        result = runner.invoke(
            main, ["convert", str(f), "-p", "anthropic", "--config", str(config), "--json"]
        )

        assert result.exit_code == 0
        assert json.loads(result.output)["max_tokens"] == 2048

    def test_bad_var(self, tmp_path: Path) -> None:
        f = _write_prompt(tmp_path)

        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(f), "--var", "novalue"])

        assert result.exit_code != 0
        assert "NAME=VALUE" in result.output

    def test_unknown_provider(self, tmp_path: Path) -> None:
        f = _write_prompt(tmp_path)

        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(f), "--provider", "cohere"])

        assert result.exit_code == 2
        assert "Unknown provider" in result.output

    def test_unconvertible_prompt(self, tmp_path: Path) -> None:
        content = _PROMPT_YAML + "response_format:\n  json_schema:\n    name: answer\n"
        f = _write_prompt(tmp_path, content)

        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(f), "-p", "anthropic"])

        assert result.exit_code == 1
        assert "cannot be used with Anthropic" in result.output

    def test_string_template(self, tmp_path: Path) -> None:
        f = _write_prompt(tmp_path, "model_name: gpt-4o\ntemplate:\n  type: string\n  template: Hi\n")

        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(f)])

        assert result.exit_code == 1
        assert "string templates are not convertible" in result.output

    def test_invalid_prompt_file(self, tmp_path: Path) -> None:
        f = _write_prompt(tmp_path, "name: broken\n")

        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(f)])

        assert result.exit_code == 1
        assert "Error loading prompt" in result.output
