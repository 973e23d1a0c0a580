"""Reading CLI inputs: prompt file, variables and config."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from promptconv.cli_commands._output import console
from promptconv.sdk.errors import ConfigValidationError, PromptLoadError
from promptconv.sdk.loader import ConfigLoader, PromptLoader, load_variables
from promptconv.utils.log import configure_logging

if TYPE_CHECKING:
    from promptconv.core.conversion.config import ConverterConfig
    from promptconv.core.prompt.models import PromptVersion


def parse_var_items(items: tuple[str, ...]) -> dict[str, str]:
    """Parse repeated ``NAME=VALUE`` options into a mapping."""
    variables: dict[str, str] = {}
    for item in items:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected NAME=VALUE, got {item!r}", param_hint="--var")
        variables[name] = value
    return variables


def load_inputs(
    prompt_file: str,
    var_items: tuple[str, ...],
    vars_file: str | None,
) -> tuple[PromptVersion, dict[str, Any] | None]:
    """Load the prompt and its variables; exit with a message on failure.

    Variables are ``None`` (no interpolation) unless ``--vars-file`` or
    ``--var`` is given; ``--var`` entries override file entries.
    """
    try:
        prompt = PromptLoader(Path(prompt_file)).load()
        variables: dict[str, Any] | None = None
        if vars_file:
            variables = load_variables(Path(vars_file))
        if var_items:
            variables = {**(variables or {}), **parse_var_items(var_items)}
    except PromptLoadError as exc:
        console.print(f"[red]Error loading prompt:[/red] {exc}")
        sys.exit(1)
    return prompt, variables


def load_config(ctx: click.Context, config_file: str | None) -> ConverterConfig | None:
    """Load the converter config, applying its log level unless ``--log-level`` was given."""
    if not config_file:
        return None
    try:
        config = ConfigLoader(Path(config_file)).load()
    except ConfigValidationError as exc:
        console.print(f"[red]Error loading config:[/red] {exc}")
        sys.exit(1)

    if not (ctx.obj or {}).get("log_level"):
        configure_logging(config.log_level)
    return config
