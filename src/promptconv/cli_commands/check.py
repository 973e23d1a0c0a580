"""``promptconv check`` — which providers can run a prompt."""

from __future__ import annotations

from typing import Any

import click

from promptconv.cli_commands._inputs import load_config, load_inputs
from promptconv.cli_commands._output import print_check_table
from promptconv.core.conversion.registry import available_providers, get_converter


@click.command("check")
@click.argument("prompt_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--var", "var_items", multiple=True, metavar="NAME=VALUE", help="Template variable.")
@click.option(
    "--vars-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML or JSON file with template variables.",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Converter config file.",
)
@click.pass_context
def check(
    ctx: click.Context,
    prompt_file: str,
    var_items: tuple[str, ...],
    vars_file: str | None,
    config_file: str | None,
) -> None:
    """Convert a prompt for every provider and report the outcome.

    Failure reasons are logged as warnings on stderr.
    """
    config = load_config(ctx, config_file)
    prompt, variables = load_inputs(prompt_file, var_items, vars_file)

    results: dict[str, dict[str, Any] | None] = {}
    for provider in available_providers():
        results[provider] = get_converter(provider, config).convert(prompt, variables)

    print_check_table(prompt.label, results)
