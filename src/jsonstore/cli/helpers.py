"""Shared utilities for jsonstore CLI commands.

Holds the settings collected by the global options callback, builds the
StoreConfig from them and runs a store coroutine with consistent error
reporting.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, TypeVar

import typer
from redis.exceptions import RedisError

from jsonstore.client import JsonStore
from jsonstore.core.config import LogConfig, StoreConfig
from jsonstore.core.errors import JsonStoreError
from jsonstore.core.logging import configure_logging, get_logger

from .output import console, print_error

_logger = get_logger("cli")

T = TypeVar("T")


@dataclass
class CliSettings:
    """Settings gathered from global options and environment variables."""

    config_file: Path | None = None
    host: str | None = None
    port: int | None = None
    db: int | None = None
    password: str | None = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None
    log_format: Literal["json", "console"] | None = None
    log_file: Path | None = None


# Single global settings instance, filled by the app callback
_settings = CliSettings()


def get_settings() -> CliSettings:
    return _settings


def reset_settings() -> None:
    """Restore default settings (used between CLI invocations in tests)."""
    global _settings
    _settings = CliSettings()


def build_store_config(settings: CliSettings | None = None) -> StoreConfig:
    """Merge the config file (if any) with command-line overrides."""
    settings = settings or _settings
    config = (
        StoreConfig.from_yaml(settings.config_file)
        if settings.config_file is not None
        else StoreConfig()
    )
    overrides: dict[str, Any] = {
        name: value
        for name, value in (
            ("host", settings.host),
            ("port", settings.port),
            ("db", settings.db),
            ("password", settings.password),
        )
        if value is not None
    }
    log_overrides: dict[str, Any] = {
        name: value
        for name, value in (
            ("level", settings.log_level),
            ("format", settings.log_format),
            ("file_path", settings.log_file),
        )
        if value is not None
    }
    if log_overrides:
        # validated, so bad values fail here rather than inside configure_logging
        overrides["log"] = LogConfig.model_validate({**config.log.model_dump(), **log_overrides})
    return config.model_copy(update=overrides) if overrides else config


def configure_cli_logging(config: StoreConfig) -> None:
    log = config.log
    configure_logging(
        level=log.level,
        format=log.format,
        file_path=log.file_path,
        max_file_size_mb=log.max_file_size_mb,
        backup_count=log.backup_count,
        include_timestamps=log.include_timestamps,
    )


def parse_value(raw: str) -> Any:
    """Parse a command-line value as JSON, falling back to the plain string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def run_with_store(operation: Callable[[JsonStore], Awaitable[T]]) -> T:
    """Connect, run ``operation`` against the store and close again.

    Store and connection errors are printed and turned into exit code 1.
    """
    config = build_store_config()
    configure_cli_logging(config)

    async def _run() -> T:
        async with JsonStore(config) as store:
            return await operation(store)

    try:
        return asyncio.run(_run())
    except (JsonStoreError, RedisError) as exc:
        _logger.debug("cli_command_failed", error_type=type(exc).__name__)
        print_error(str(exc))
        raise typer.Exit(1) from exc


__all__ = [
    "CliSettings",
    "build_store_config",
    "configure_cli_logging",
    "console",
    "get_settings",
    "parse_value",
    "reset_settings",
    "run_with_store",
]
