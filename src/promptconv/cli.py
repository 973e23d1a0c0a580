"""promptconv CLI entrypoint."""

from __future__ import annotations

import sys

import click

from promptconv import __version__


@click.group()
@click.version_option(version=__version__, prog_name="promptconv")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level for conversion diagnostics (default: config value or WARNING).",
)
@click.option("--trace", is_flag=True, help="Export conversion spans to stderr.")
@click.option("--otlp-endpoint", default=None, help="Export conversion spans via OTLP/gRPC.")
@click.pass_context
def main(ctx: click.Context, log_level: str | None, trace: bool, otlp_endpoint: str | None) -> None:
    """promptconv — convert stored prompts into LLM provider call parameters."""
    from promptconv.utils.log import configure_logging

    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level
    configure_logging(log_level or "WARNING")

    if trace or otlp_endpoint:
        from promptconv.cli_commands._output import console
        from promptconv.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(export_to_console=trace, otlp_endpoint=otlp_endpoint)
        except ImportError as exc:
            console.print(f"[red]Tracing unavailable:[/red] {exc}")
            sys.exit(1)


# Register subcommands
from promptconv.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
