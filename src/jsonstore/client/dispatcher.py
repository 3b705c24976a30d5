"""Command dispatch and response normalization.

Every remote call goes through ``CommandDispatcher.invoke``: the operation
name is checked against the supported set, a cached ``CommandHandle`` issues
the call once over the redis connection, and the raw reply is decoded into a
JSON value. Store errors come back as ``RemoteFailure`` with a category from
the ``FailureClassifier``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Protocol

from redis.exceptions import RedisError

from jsonstore.core.constants import SUPPORTED_COMMANDS, TRUNCATE_ERROR_MESSAGE_CHARS
from jsonstore.core.errors import (
    FailureClassifier,
    RemoteFailure,
    StoreNotConnected,
    UnsupportedOperation,
)
from jsonstore.core.logging import get_logger

_logger = get_logger("dispatcher")


class CommandConnection(Protocol):
    """The part of ``redis.asyncio.Redis`` the dispatcher relies on."""

    async def execute_command(self, *args: Any, **options: Any) -> Any: ...


@dataclass(frozen=True)
class CommandHandle:
    """Reusable capability for issuing one remote operation.

    Handles are plain values: two handles for the same name are equal, so
    recreating one is harmless.
    """

    name: str

    async def __call__(self, connection: CommandConnection, *args: Any) -> Any:
        return await connection.execute_command(self.name, *args)


def decode_response(response: Any) -> Any:
    """Turn a raw reply into a JSON value.

    Structured replies (None, numbers, lists, dicts) are returned unchanged.
    Text is parsed as JSON; text that is not valid JSON (for example ``OK``)
    is returned verbatim. Never raises.
    """
    if isinstance(response, bytes):
        try:
            response = response.decode("utf-8")
        except UnicodeDecodeError:
            return response
    if not isinstance(response, str):
        return response
    try:
        return json.loads(response)
    except ValueError:
        return response


class CommandDispatcher:
    """Sends supported operations to the store and normalizes their replies.

    The dispatcher owns the invocation-handle cache for its connection. The
    cache only grows, holds at most one handle per supported operation, and
    needs no locking because handles are created idempotently.
    """

    def __init__(
        self,
        connection: CommandConnection | None = None,
        classifier: FailureClassifier | None = None,
        supported_commands: frozenset[str] = SUPPORTED_COMMANDS,
    ) -> None:
        self._connection = connection
        self._classifier = classifier or FailureClassifier()
        self._supported = supported_commands
        self._handles: dict[str, CommandHandle] = {}

    @property
    def classifier(self) -> FailureClassifier:
        return self._classifier

    @property
    def connection(self) -> CommandConnection | None:
        return self._connection

    def attach(self, connection: CommandConnection | None) -> None:
        """Point the dispatcher at a (new) connection. Cached handles stay valid."""
        self._connection = connection

    @property
    def handles(self) -> Mapping[str, CommandHandle]:
        """Read-only view of the handle cache."""
        return MappingProxyType(self._handles)

    def is_supported(self, operation: str) -> bool:
        return operation in self._supported

    def handle_for(self, operation: str) -> CommandHandle:
        """Return the cached handle for ``operation``, creating it on first use.

        Raises:
            UnsupportedOperation: If ``operation`` is not a supported command.
        """
        if not self.is_supported(operation):
            raise UnsupportedOperation(operation)
        handle = self._handles.get(operation)
        if handle is None:
            handle = self._handles[operation] = CommandHandle(operation)
        return handle

    async def invoke(self, operation: str, *args: Any) -> Any:
        """Issue one remote operation and return its decoded reply.

        Args:
            operation: Command name, e.g. ``"JSON.GET"``.
            *args: Positional command arguments, sent in order.

        Returns:
            The decoded JSON value, or the raw text if it is not valid JSON.

        Raises:
            UnsupportedOperation: ``operation`` is not supported; nothing is sent.
            StoreNotConnected: No connection has been attached.
            RemoteFailure: The store answered with an error.
        """
        handle = self.handle_for(operation)
        if self._connection is None:
            raise StoreNotConnected()

        _logger.debug("command_dispatched", operation=operation, arg_count=len(args))
        try:
            response = await handle(self._connection, *args)
        except RedisError as exc:
            failure = self._classifier.classify(str(exc))
            _logger.debug(
                "command_failed",
                operation=operation,
                category=failure.category.value,
                message=failure.message[:TRUNCATE_ERROR_MESSAGE_CHARS],
            )
            raise RemoteFailure.from_classified(failure) from exc

        return decode_response(response)
