"""``promptconv providers`` — list the registered provider converters."""

from __future__ import annotations

import click

from promptconv.cli_commands._output import print_providers_table
from promptconv.core.conversion.registry import ALIASES, available_providers, get_converter


@click.command("providers")
def providers() -> None:
    """List supported providers and what their parameters can express."""
    converters = [get_converter(name) for name in available_providers()]
    print_providers_table(converters, ALIASES)
