"""Document commands for the jsonstore CLI.

Each command opens a store from the global settings, issues one call and
prints the decoded reply.
"""

from __future__ import annotations

from typing import Any

import typer

from jsonstore.client import JsonStore

from .helpers import parse_value, run_with_store
from .output import console, create_values_table, print_value

PathArgument = typer.Argument(
    None,
    help="Path inside the document: dotted (a.b.0) or bracketed (['a']['b'][0]). "
    "Defaults to the root.",
)


def get(
    key: str = typer.Argument(..., help="Key holding the document"),
    path: str | None = PathArgument,
) -> None:
    """Print the value stored at PATH."""

    async def _op(store: JsonStore) -> Any:
        return await store.get(key, path)

    value = run_with_store(_op)
    print_value(value)


def set_value(
    key: str = typer.Argument(..., help="Key holding the document"),
    path: str = typer.Argument(..., help="Target path; use . for the root"),
    value: str = typer.Argument(..., help="JSON value (plain text is stored as a string)"),
    recursive: bool = typer.Option(
        False,
        "--recursive",
        "-r",
        help="Create missing parent objects instead of failing",
    ),
) -> None:
    """Write VALUE at PATH."""
    parsed = parse_value(value)

    async def _op(store: JsonStore) -> Any:
        return await store.set(key, path, parsed, recursive=recursive)

    print_value(run_with_store(_op))


def delete_value(
    key: str = typer.Argument(..., help="Key holding the document"),
    path: str | None = PathArgument,
) -> None:
    """Delete the value at PATH (the whole key when PATH is omitted)."""

    async def _op(store: JsonStore) -> int:
        return await store.delete(key, path)

    deleted = run_with_store(_op)
    console.print(f"Deleted {deleted} value(s)")


def type_of(
    key: str = typer.Argument(..., help="Key holding the document"),
    path: str | None = PathArgument,
) -> None:
    """Print the JSON type at PATH."""

    async def _op(store: JsonStore) -> str | None:
        return await store.type(key, path)

    kind = run_with_store(_op)
    console.print(kind if kind is not None else "[dim]null[/dim]")


def mget(
    keys: list[str] = typer.Argument(..., help="Keys to read"),
    path: str | None = typer.Option(None, "--path", "-p", help="Path read from every key"),
) -> None:
    """Read the same PATH from several keys."""

    async def _op(store: JsonStore) -> dict[str, Any]:
        return await store.mget(keys, path)

    console.print(create_values_table(run_with_store(_op)))


def keys(
    key: str = typer.Argument(..., help="Key holding the document"),
    path: str | None = PathArgument,
) -> None:
    """List the member names of the object at PATH."""

    async def _op(store: JsonStore) -> list[str] | None:
        return await store.objkeys(key, path)

    names = run_with_store(_op)
    if names is None:
        console.print("[dim]null[/dim]")
        return
    for name in names:
        console.print(name, highlight=False)
