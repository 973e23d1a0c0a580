"""``promptconv convert`` — print a prompt as one provider's call parameters."""

from __future__ import annotations

import sys

import click

from promptconv.cli_commands._inputs import load_config, load_inputs
from promptconv.cli_commands._output import console, print_params
from promptconv.core.conversion.registry import UnknownProviderError, get_converter
from promptconv.core.prompt.models import PromptChatTemplate


@click.command("convert")
@click.argument("prompt_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--provider",
    "-p",
    default="openai",
    show_default=True,
    help="Target provider (openai, azure_openai, anthropic, gemini or an alias).",
)
@click.option(
    "--var",
    "var_items",
    multiple=True,
    metavar="NAME=VALUE",
    help="Template variable binding. Repeatable.",
)
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
@click.option("--json", "as_json", is_flag=True, help="Output only the JSON parameters.")
@click.pass_context
def convert(
    ctx: click.Context,
    prompt_file: str,
    provider: str,
    var_items: tuple[str, ...],
    vars_file: str | None,
    config_file: str | None,
    as_json: bool,
) -> None:
    """Convert a prompt record into provider call parameters.

    PROMPT_FILE is a YAML or JSON prompt record. Without --var or
    --vars-file the templates are left uninterpolated.
    """
    config = load_config(ctx, config_file)
    prompt, variables = load_inputs(prompt_file, var_items, vars_file)

    try:
        converter = get_converter(provider, config)
    except UnknownProviderError as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(2)

    params = converter.convert(prompt, variables)
    if params is None:
        reason = ""
        if not isinstance(prompt.template, PromptChatTemplate):
            reason = f" ({prompt.template.type} templates are not convertible)"
        console.print(
            f"[red]Prompt {prompt.label} cannot be used with {converter.display_name}{reason}.[/red]"
        )
        sys.exit(1)

    print_params(
        params,
        title=f"{converter.display_name} parameters for {prompt.label}",
        as_json=as_json,
    )
