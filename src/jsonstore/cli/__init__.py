"""jsonstore CLI.

Built with Typer. Global options (connection, config file, logging) are
collected by the app callback into ``helpers`` state; every command then
opens a store from that state.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from jsonstore import __version__

from . import helpers as helpers
from .commands import delete_value, get, keys, mget, set_value, type_of
from .output import console

app = typer.Typer(
    name="jsonstore",
    help="Read and write path-addressed JSON documents in Redis",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"jsonstore v{__version__}")
        raise typer.Exit()


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMATS = ("json", "console")


def log_level_callback(value: str | None) -> str | None:
    """Validate and upper-case the log level option."""
    if value is None:
        return None
    level = value.upper()
    if level not in LOG_LEVELS:
        raise typer.BadParameter(f"must be one of {', '.join(LOG_LEVELS)}")
    return level


def log_format_callback(value: str | None) -> str | None:
    """Validate and lower-case the log format option."""
    if value is None:
        return None
    fmt = value.lower()
    if fmt not in LOG_FORMATS:
        raise typer.BadParameter(f"must be one of {', '.join(LOG_FORMATS)}")
    return fmt


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="YAML store configuration file",
            envvar="JSONSTORE_CONFIG",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    host: Annotated[
        str | None,
        typer.Option("--host", "-H", help="Redis host", envvar="JSONSTORE_HOST"),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option("--port", "-p", help="Redis port", envvar="JSONSTORE_PORT"),
    ] = None,
    db: Annotated[
        int | None,
        typer.Option("--db", help="Redis database index", envvar="JSONSTORE_DB"),
    ] = None,
    password: Annotated[
        str | None,
        typer.Option("--password", help="Redis password", envvar="JSONSTORE_PASSWORD"),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            "-L",
            callback=log_level_callback,
            help="Logging level (DEBUG, INFO, WARNING, ERROR)",
            envvar="JSONSTORE_LOG_LEVEL",
        ),
    ] = None,
    log_format: Annotated[
        str | None,
        typer.Option(
            "--log-format",
            callback=log_format_callback,
            help="Log format: json or console",
            envvar="JSONSTORE_LOG_FORMAT",
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Path for log file output", envvar="JSONSTORE_LOG_FILE"),
    ] = None,
) -> None:
    """jsonstore - path-addressed JSON documents in Redis."""
    settings = helpers.get_settings()
    settings.config_file = config_file
    settings.host = host
    settings.port = port
    settings.db = db
    settings.password = password
    settings.log_level = log_level  # type: ignore[assignment]
    settings.log_format = log_format  # type: ignore[assignment]
    settings.log_file = log_file


app.command()(get)
app.command(name="set")(set_value)
app.command(name="del")(delete_value)
app.command(name="type")(type_of)
app.command()(mget)
app.command()(keys)


__all__ = ["app", "main"]
