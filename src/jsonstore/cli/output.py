"""Rich output formatting for the jsonstore CLI."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from rich.console import Console
from rich.table import Table

# Shared console instance; command modules print through this
console = Console()


def print_value(value: Any) -> None:
    """Print a decoded value; JSON containers are pretty-printed."""
    if isinstance(value, str):
        console.print(value, highlight=False)
    else:
        console.print_json(json.dumps(value))


def print_error(message: str) -> None:
    console.print(f"[red]Error:[/red] {message}", highlight=False)


def create_values_table(values: Mapping[str, Any], title: str | None = None) -> Table:
    """Table with one row per key and its JSON-encoded value."""
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in values.items():
        table.add_row(key, "[dim]null[/dim]" if value is None else json.dumps(value))
    return table
