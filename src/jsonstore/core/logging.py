"""Structured logging infrastructure for jsonstore.

Provides structured logging using structlog with a component name bound to
every event. Supports console and JSON output, optionally to a rotating file.

Example usage:
    from jsonstore.core.logging import get_logger, configure_logging

    # Configure once at startup
    configure_logging(level="DEBUG", format="console")

    # Get a component-specific logger
    logger = get_logger("dispatcher")

    # Log with context
    logger.info("command_dispatched", operation="JSON.GET")

    # Bind context for a scope
    key_logger = logger.bind(key="user:1")
    key_logger.info("autocreate_triggered")
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Literal

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Field names whose values must never reach a log sink
SENSITIVE_PATTERNS = frozenset({
    "password",
    "passwd",
    "token",
    "secret",
    "credential",
    "auth",
})


def _sanitize_value(key: str, value: Any) -> Any:
    """Return "[REDACTED]" for sensitive field names, the value otherwise."""
    key_lower = key.lower()
    for pattern in SENSITIVE_PATTERNS:
        if pattern in key_lower:
            return "[REDACTED]"
    return value


def _sanitize_event_dict(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that redacts sensitive fields.

    Nested dicts (for example a connection kwargs mapping) are sanitized one
    level deep.
    """
    sanitized: EventDict = {}
    for key, value in event_dict.items():
        if isinstance(value, dict):
            sanitized[key] = {
                k: _sanitize_value(k, v) for k, v in value.items()
            }
        else:
            sanitized[key] = _sanitize_value(key, value)
    return sanitized


def _add_timestamp(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that adds an ISO8601 UTC timestamp."""
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


_LIBRARY_LOGGER = "jsonstore"

_UNCONFIGURED_PROCESSORS: list[Processor] = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_log_level,
    _sanitize_event_dict,
    structlog.processors.KeyValueRenderer(key_order=["event"]),
]


class StoreLogger:
    """jsonstore logger wrapper around structlog.

    The logger is bound to a component name and can carry extra context for a
    scope (for example the key being written).

    Note: the underlying structlog logger is fetched on every call so that
    loggers created at import time still honour a later configure_logging().
    """

    def __init__(
        self,
        component: str,
        **initial_context: Any,
    ) -> None:
        self._component = component
        self._context: dict[str, Any] = {"component": component, **initial_context}

    def _get_logger(self) -> structlog.stdlib.BoundLogger:
        if not structlog.is_configured():
            # library use without configure_logging(): stdlib levels apply,
            # so debug/info events are dropped instead of printed
            return structlog.wrap_logger(
                logging.getLogger(_LIBRARY_LOGGER),
                processors=_UNCONFIGURED_PROCESSORS,
                wrapper_class=structlog.stdlib.BoundLogger,
            ).bind(**self._context)
        logger: structlog.stdlib.BoundLogger = structlog.get_logger().bind(**self._context)
        return logger

    def bind(self, **context: Any) -> StoreLogger:
        """Create a new logger with additional bound context."""
        new_logger = StoreLogger.__new__(StoreLogger)
        new_logger._component = self._component
        new_logger._context = {**self._context, **context}
        return new_logger

    def unbind(self, *keys: str) -> StoreLogger:
        """Create a new logger with the given keys removed from its context."""
        new_logger = StoreLogger.__new__(StoreLogger)
        new_logger._component = self._component
        new_logger._context = {k: v for k, v in self._context.items() if k not in keys}
        return new_logger

    @property
    def context(self) -> dict[str, Any]:
        """A copy of the bound context."""
        return dict(self._context)

    def debug(self, event: str, **kw: Any) -> None:
        self._get_logger().debug(event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self._get_logger().info(event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._get_logger().warning(event, **kw)

    def error(self, event: str, **kw: Any) -> None:
        self._get_logger().error(event, **kw)

    def exception(self, event: str, **kw: Any) -> None:
        """Log an exception with traceback. Call from an except block."""
        self._get_logger().exception(event, **kw)


def _get_processors(
    format: Literal["json", "console"],  # noqa: A002
    include_timestamps: bool,
) -> list[Processor]:
    """Build the structlog processor chain for the given renderer."""
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        _sanitize_event_dict,
    ]

    if include_timestamps:
        processors.append(_add_timestamp)

    renderer: Processor
    if format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    processors.extend([
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ])
    return processors


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO",
    format: Literal["json", "console"] = "console",  # noqa: A002
    file_path: Path | None = None,
    max_file_size_mb: int = 50,
    backup_count: int = 5,
    include_timestamps: bool = True,
) -> None:
    """Configure jsonstore structured logging.

    Call once at application startup. Console output goes to stderr; JSON
    output goes to ``file_path`` when given, stdout otherwise.

    Args:
        level: Minimum log level to capture.
        format: "json" for structured lines, "console" for human-readable.
        file_path: Optional rotating log file.
        max_file_size_mb: Size at which the log file is rotated (MB).
        backup_count: Number of rotated files to keep.
        include_timestamps: Whether to add ISO8601 timestamps.
    """
    log_level = getattr(logging, level)

    handler: logging.Handler
    if file_path is not None:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            file_path,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
    elif format == "json":
        handler = logging.StreamHandler(sys.stdout)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    # cache_logger_on_first_use=False keeps import-time loggers in sync with
    # whatever configuration is applied later
    structlog.configure(
        processors=_get_processors(format, include_timestamps),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(component: str, **initial_context: Any) -> StoreLogger:
    """Get a jsonstore logger for a component.

    Args:
        component: The component name (e.g., "dispatcher", "materializer").
        **initial_context: Additional context to bind.
    """
    return StoreLogger(component, **initial_context)


__all__ = [
    "SENSITIVE_PATTERNS",
    "StoreLogger",
    "configure_logging",
    "get_logger",
]
