"""Tests for ``promptconv providers`` and top-level CLI options."""

from __future__ import annotations

from unittest.mock import patch

from click.testing import CliRunner

from promptconv.cli import main


class TestProvidersCommand:
    def test_lists_providers(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["providers"])

        assert result.exit_code == 0
        assert "Providers" in result.output
        for name in ("openai", "azure_openai", "anthropic", "gemini"):
            assert name in result.output


class TestMainOptions:
    def test_version(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_trace_without_sdk(self) -> None:
        runner = CliRunner()
        with patch(
            "promptconv.utils.telemetry.configure_telemetry",
            side_effect=ImportError("opentelemetry-sdk is required"),
        ):
            result = runner.invoke(main, ["--trace", "providers"])

        assert result.exit_code == 1
        assert "Tracing unavailable" in result.output
