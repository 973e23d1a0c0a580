"""Shared CLI output formatters."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from promptconv.core.conversion.converter import PromptConverter

console = Console()


def print_params(params: dict[str, Any], *, title: str | None = None, as_json: bool = False) -> None:
    """Print a provider parameter object."""
    if not as_json and title:
        console.print(f"[bold]{title}[/bold]")
    console.print_json(json.dumps(params))


def print_providers_table(converters: list[PromptConverter], aliases: dict[str, str]) -> None:
    """Pretty-print registered providers and their capability profiles."""
    table = Table(title="Providers")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Display")
    table.add_column("Aliases")
    table.add_column("Response format")
    table.add_column("Parallel control")
    table.add_column("System")

    for converter in converters:
        row = converter.profile.as_row()
        names = [alias for alias, target in aliases.items() if target == converter.provider]
        table.add_row(
            converter.provider,
            converter.display_name,
            ", ".join(names) or "-",
            row["response_format"],
            row["parallel_control"],
            row["system"],
        )

    console.print(table)


def print_check_table(label: str, results: dict[str, dict[str, Any] | None]) -> None:
    """Pretty-print per-provider conversion outcomes for one prompt."""
    table = Table(title=f"Compatibility: {label}")
    table.add_column("Provider", style="cyan", no_wrap=True)
    table.add_column("Result", no_wrap=True)
    table.add_column("Fields")

    for provider, params in results.items():
        if params is None:
            table.add_row(provider, "[red]unsupported[/red]", "-")
        else:
            table.add_row(provider, "[green]ok[/green]", _truncate(", ".join(sorted(params))))

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
