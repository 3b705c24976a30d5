"""Shared test helpers for jsonstore tests."""

from __future__ import annotations

import asyncio
import json
from typing import Any

from redis.exceptions import ResponseError

from jsonstore.core.path import Segment, parse_segments

_MISSING = object()


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _step(container: Any, segment: Segment) -> Any:
    if isinstance(container, dict) and isinstance(segment, str):
        return container.get(segment, _MISSING)
    if isinstance(container, list) and isinstance(segment, int):
        return container[segment] if segment < len(container) else _MISSING
    return _MISSING


class FakeJsonRedis:
    """In-memory stand-in for a redis connection with the RedisJSON module.

    Implements the subset of legacy-path JSON commands the tests exercise and
    raises the same error text the module does (with redis-py's ``ERR``
    prefix already stripped). Every call is recorded in ``calls``.

    With ``yield_between_calls`` each command suspends once before touching
    the data, so concurrent callers interleave the way they would against a
    real server.
    """

    def __init__(
        self,
        documents: dict[str, Any] | None = None,
        *,
        yield_between_calls: bool = False,
    ) -> None:
        self.documents: dict[str, Any] = documents if documents is not None else {}
        self.calls: list[tuple[Any, ...]] = []
        self.yield_between_calls = yield_between_calls
        self.closed = False

    async def ping(self) -> bool:
        return True

    async def aclose(self) -> None:
        self.closed = True

    def calls_for(self, command: str) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == command]

    async def execute_command(self, *args: Any, **options: Any) -> Any:
        self.calls.append(args)
        if self.yield_between_calls:
            await asyncio.sleep(0)
        command, *rest = args
        handler = getattr(self, "_" + command.replace("JSON.", "json_").lower())
        return handler(*rest)

    # -- resolution -------------------------------------------------------

    def _resolve(self, key: str, path: str | tuple[Segment, ...]) -> Any:
        segments = parse_segments(path) if isinstance(path, str) else path
        value = self.documents.get(key, _MISSING)
        for segment in segments:
            if value is _MISSING:
                break
            value = _step(value, segment)
        return value

    # -- commands ---------------------------------------------------------

    def _json_set(self, key: str, path: str, raw: str) -> str:
        value = json.loads(raw)
        segments = parse_segments(path)
        if not segments:
            self.documents[key] = value
            return "OK"
        if key not in self.documents:
            raise ResponseError("new objects must be created at the root")
        parent = self.documents[key]
        for segment in segments[:-1]:
            parent = _step(parent, segment)
            if parent is _MISSING:
                raise ResponseError("missing key at non-terminal path level")
        last = segments[-1]
        if isinstance(parent, dict) and isinstance(last, str):
            parent[last] = value
        elif isinstance(parent, list) and isinstance(last, int) and last < len(parent):
            parent[last] = value
        elif isinstance(parent, list):
            raise ResponseError("array index out of range")
        else:
            raise ResponseError("wrong static path type")
        return "OK"

    def _json_get(self, key: str, path: str) -> str | None:
        if key not in self.documents:
            return None
        value = self.documents[key]
        for level, segment in enumerate(parse_segments(path)):
            value = _step(value, segment)
            if value is _MISSING:
                raise ResponseError(f"key '{segment}' does not exist at level {level} in path")
        return json.dumps(value)

    def _json_type(self, key: str, path: str) -> str | None:
        value = self._resolve(key, path)
        return None if value is _MISSING else _type_name(value)

    def _json_mget(self, *args: str) -> list[str | None]:
        *keys, path = args
        results: list[str | None] = []
        for key in keys:
            value = self._resolve(key, path)
            results.append(None if value is _MISSING else json.dumps(value))
        return results

    def _json_del(self, key: str, path: str) -> int:
        segments = parse_segments(path)
        if key not in self.documents:
            return 0
        if not segments:
            del self.documents[key]
            return 1
        parent = self._resolve(key, segments[:-1])
        last = segments[-1]
        if isinstance(parent, dict) and last in parent:
            del parent[last]
            return 1
        if isinstance(parent, list) and isinstance(last, int) and last < len(parent):
            del parent[last]
            return 1
        return 0

    def _json_numincrby(self, key: str, path: str, number: int | float) -> str:
        current = self._resolve(key, path)
        updated = current + number
        self._json_set(key, path, json.dumps(updated))
        return json.dumps(updated)

    def _json_objkeys(self, key: str, path: str) -> list[str] | None:
        value = self._resolve(key, path)
        return list(value) if isinstance(value, dict) else None
