"""JsonStore: async client facade for a RedisJSON document store.

Example usage:
    async with JsonStore(StoreConfig(host="localhost")) as store:
        await store.set("user:1", "profile.name", "Ada", recursive=True)
        name = await store.get("user:1", "profile.name")

Paths may be dotted text, bracket text or a list of segments; omitting the
path addresses the document root.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from types import TracebackType
from typing import Any

import redis.asyncio as redis

from jsonstore.core.config import StoreConfig
from jsonstore.core.constants import (
    CMD_ARRAPPEND,
    CMD_ARRINDEX,
    CMD_ARRINSERT,
    CMD_ARRLEN,
    CMD_ARRPOP,
    CMD_ARRTRIM,
    CMD_DEBUG,
    CMD_DEL,
    CMD_GET,
    CMD_MGET,
    CMD_NUMINCRBY,
    CMD_NUMMULTBY,
    CMD_OBJKEYS,
    CMD_OBJLEN,
    CMD_RESP,
    CMD_STRAPPEND,
    CMD_STRLEN,
    CMD_TYPE,
)
from jsonstore.core.errors import ResponseDecodeError
from jsonstore.core.logging import get_logger
from jsonstore.core.path import PathLike, normalize

from .dispatcher import CommandConnection, CommandDispatcher
from .materializer import AncestorMaterializer

_logger = get_logger("store")


def _as_list(values: Any) -> list[Any]:
    return values if isinstance(values, list) else [values]


class JsonStore:
    """Client for one RedisJSON connection.

    The store owns its connection, the command dispatcher (and with it the
    invocation-handle cache) and the auto-create materializer. Every method
    is a coroutine; calls issued concurrently are not serialized against
    each other.
    """

    def __init__(
        self,
        config: StoreConfig | None = None,
        *,
        connection: CommandConnection | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            config: Connection settings and auto-create phrases. Defaults apply
                when omitted.
            connection: An existing redis connection to use instead of
                creating one in ``connect()``. The store does not close it.
        """
        self.config = config or StoreConfig()
        self._owns_connection = connection is None
        self._dispatcher = CommandDispatcher(
            connection=connection,
            classifier=self.config.autocreate.build_classifier(),
        )
        self._materializer = AncestorMaterializer(self._dispatcher)

    @property
    def dispatcher(self) -> CommandDispatcher:
        return self._dispatcher

    @property
    def is_connected(self) -> bool:
        return self._dispatcher.connection is not None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def connect(self) -> JsonStore:
        """Open the redis connection (if none was injected) and verify it with PING."""
        if self._dispatcher.connection is None:
            connection = redis.Redis(**self.config.connection_kwargs())
            try:
                await connection.ping()
            except Exception:
                await connection.aclose()
                raise
            self._dispatcher.attach(connection)
            self._owns_connection = True
            _logger.info(
                "store_connected",
                host=self.config.host,
                port=self.config.port,
                db=self.config.db,
            )
        return self

    async def close(self) -> None:
        """Close the connection if this store created it."""
        connection = self._dispatcher.connection
        if connection is None:
            return
        self._dispatcher.attach(None)
        if self._owns_connection:
            await connection.aclose()  # type: ignore[attr-defined]
            _logger.info("store_closed", host=self.config.host, port=self.config.port)

    async def __aenter__(self) -> JsonStore:
        return await self.connect()

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def execute(self, operation: str, *args: Any) -> Any:
        """Send any supported operation with raw arguments."""
        return await self._dispatcher.invoke(operation, *args)

    # -------------------------------------------------------------------------
    # Documents
    # -------------------------------------------------------------------------

    async def get(self, key: str, path: PathLike = None) -> Any:
        """Read the value at ``path``. Returns None for a missing key."""
        return await self._dispatcher.invoke(CMD_GET, key, normalize(path))

    async def mget(self, keys: str | Iterable[str], path: PathLike = None) -> dict[str, Any]:
        """Read the same path from several keys.

        Returns:
            Mapping of each requested key to its value, in input order, with
            None where the key or path does not exist.

        Raises:
            ResponseDecodeError: An element is not valid JSON. No partial
                result is returned.
        """
        key_list = [keys] if isinstance(keys, str) else list(keys)
        response = await self._dispatcher.invoke(CMD_MGET, *key_list, normalize(path))
        result: dict[str, Any] = {}
        for key, raw in zip(key_list, response or []):
            if raw is None:
                result[key] = None
                continue
            try:
                result[key] = json.loads(raw)
            except (TypeError, ValueError) as exc:
                raise ResponseDecodeError(key, str(raw)) from exc
        for key in key_list:
            result.setdefault(key, None)
        return result

    async def set(
        self,
        key: str,
        path: PathLike,
        value: Any,
        *,
        recursive: bool = False,
    ) -> Any:
        """Write ``value`` at ``path``.

        A new key must be written at the root unless ``recursive`` is set, in
        which case missing ancestors are created (see ``AncestorMaterializer``).
        An existing value at ``path`` is replaced.
        """
        return await self._materializer.write(key, path, value, auto_create=recursive)

    async def delete(self, key: str, path: PathLike = None) -> int:
        """Delete the value at ``path``; deleting the root deletes the key.

        Returns:
            Number of values deleted (0 when key or path does not exist).
        """
        return await self._dispatcher.invoke(CMD_DEL, key, normalize(path))

    async def forget(self, key: str, path: PathLike = None) -> int:
        """Alias of ``delete``."""
        return await self.delete(key, path)

    async def type(self, key: str, path: PathLike = None) -> str | None:
        """Type name of the value at ``path``, or None if it does not exist."""
        return await self._dispatcher.invoke(CMD_TYPE, key, normalize(path))

    # -------------------------------------------------------------------------
    # Numbers and strings
    # -------------------------------------------------------------------------

    async def numincrby(self, key: str, path: PathLike, number: int | float) -> Any:
        return await self._dispatcher.invoke(CMD_NUMINCRBY, key, normalize(path), number)

    async def nummultby(self, key: str, path: PathLike, number: int | float) -> Any:
        return await self._dispatcher.invoke(CMD_NUMMULTBY, key, normalize(path), number)

    async def strappend(self, key: str, path: PathLike, value: str) -> int:
        """Append to the string at ``path``; returns the new length."""
        return await self._dispatcher.invoke(
            CMD_STRAPPEND, key, normalize(path), json.dumps(value)
        )

    async def strlen(self, key: str, path: PathLike = None) -> int | None:
        return await self._dispatcher.invoke(CMD_STRLEN, key, normalize(path))

    # -------------------------------------------------------------------------
    # Arrays
    # -------------------------------------------------------------------------

    async def arrappend(self, key: str, path: PathLike, values: Any) -> int:
        """Append one value, or each item of a list, to the array at ``path``.

        To append a list as a single element, wrap it: ``[[1, 2]]``.

        Returns:
            The new array length.
        """
        encoded = [json.dumps(v) for v in _as_list(values)]
        return await self._dispatcher.invoke(CMD_ARRAPPEND, key, normalize(path), *encoded)

    async def arrindex(
        self,
        key: str,
        path: PathLike,
        value: Any,
        start: int | None = None,
        stop: int | None = None,
    ) -> int:
        """Index of the first occurrence of ``value`` in the array, or -1."""
        args: list[Any] = [key, normalize(path), json.dumps(value)]
        if start is not None:
            args.append(start)
            if stop is not None:
                args.append(stop)
        return await self._dispatcher.invoke(CMD_ARRINDEX, *args)

    async def arrinsert(self, key: str, path: PathLike, index: int, values: Any) -> int:
        """Insert one value, or each item of a list, before ``index``."""
        encoded = [json.dumps(v) for v in _as_list(values)]
        return await self._dispatcher.invoke(
            CMD_ARRINSERT, key, normalize(path), index, *encoded
        )

    async def arrlen(self, key: str, path: PathLike = None) -> int | None:
        return await self._dispatcher.invoke(CMD_ARRLEN, key, normalize(path))

    async def arrpop(self, key: str, path: PathLike = None, index: int | None = None) -> Any:
        """Remove and return an element (the last one by default)."""
        args: list[Any] = [key, normalize(path)]
        if index is not None:
            args.append(index)
        return await self._dispatcher.invoke(CMD_ARRPOP, *args)

    async def arrtrim(self, key: str, path: PathLike, start: int, stop: int) -> int:
        """Keep only elements ``start`` through ``stop`` (inclusive)."""
        return await self._dispatcher.invoke(CMD_ARRTRIM, key, normalize(path), start, stop)

    # -------------------------------------------------------------------------
    # Objects and introspection
    # -------------------------------------------------------------------------

    async def objkeys(self, key: str, path: PathLike = None) -> list[str] | None:
        return await self._dispatcher.invoke(CMD_OBJKEYS, key, normalize(path))

    async def objlen(self, key: str, path: PathLike = None) -> int | None:
        return await self._dispatcher.invoke(CMD_OBJLEN, key, normalize(path))

    async def debug_memory(self, key: str, path: PathLike = None) -> int:
        """Memory usage in bytes of the value at ``path``."""
        return await self._dispatcher.invoke(CMD_DEBUG, "MEMORY", key, normalize(path))

    async def resp(self, key: str, path: PathLike = None) -> Any:
        """The value at ``path`` in the store's RESP form."""
        return await self._dispatcher.invoke(CMD_RESP, key, normalize(path))
