"""Writes that create their own missing ancestors.

A plain ``JSON.SET`` fails when a container above the target does not exist
yet. With auto-create requested, ``AncestorMaterializer`` reacts to such a
failure by walking from the target toward the root, probing each prefix with
``JSON.TYPE``, and wrapping the value in one single-key object per missing
level. The first prefix that exists (or the root) becomes the anchor, and a
single ``JSON.SET`` at the anchor writes the whole nested value.

For example, writing ``42`` at ``a.b.c`` into a document holding ``{"a": {}}``
probes ``['a']['b']`` (missing) then ``['a']`` (an object) and finally sends
``JSON.SET key ['a'] {"b": {"c": 42}}``.

Known properties:

- The corrective write replaces the anchor's current value, so other
  members of the anchor object are not preserved.
- Probes and the corrective write are separate calls, not a transaction.
  Another writer can change the document in between; two auto-create
  writes racing on the same missing ancestor can leave only one of their
  branches in place. No locking is attempted.
- Array indices in the missing part of the path are materialized as object
  keys (``"0"``), since the store cannot create arrays by path.
"""

from __future__ import annotations

import json
from typing import Any

from jsonstore.core.constants import CMD_SET, CMD_TYPE
from jsonstore.core.errors import RemoteFailure
from jsonstore.core.logging import get_logger
from jsonstore.core.path import JsonPath, PathLike

from .dispatcher import CommandDispatcher

_logger = get_logger("materializer")


class AncestorMaterializer:
    """Implements ``JSON.SET`` with optional ancestor auto-create."""

    def __init__(self, dispatcher: CommandDispatcher) -> None:
        self._dispatcher = dispatcher

    async def _set(self, key: str, canonical: str, value: Any) -> Any:
        return await self._dispatcher.invoke(CMD_SET, key, canonical, json.dumps(value))

    async def write(
        self,
        key: str,
        path: PathLike,
        value: Any,
        *,
        auto_create: bool = False,
    ) -> Any:
        """Set ``value`` at ``path``, materializing missing ancestors if asked.

        Args:
            key: Store key holding the document.
            path: Target location in any form ``normalize`` accepts.
            value: JSON-serializable value.
            auto_create: Recover from a missing-ancestor failure by creating
                the missing containers. Off by default.

        Returns:
            The store's reply to the write that succeeded.

        Raises:
            RemoteFailure: The direct write failed and auto-create was off or
                not applicable, or the corrective write failed.
        """
        target = JsonPath.parse(path)
        try:
            return await self._set(key, target.canonical, value)
        except RemoteFailure as failure:
            if not (auto_create and failure.allows_autocreate):
                raise
            _logger.info(
                "autocreate_triggered",
                key=key,
                path=target.canonical,
                category=failure.category.value,
            )

        return await self.materialize(key, target, value)

    async def materialize(self, key: str, path: JsonPath, value: Any) -> Any:
        """Walk toward the root and write the nested value at the first existing prefix.

        Each iteration drops one trailing segment, adds one nesting level to
        the value and probes the remaining prefix. The walk ends at the first
        prefix whose type is not null, or at the root after ``len(path)``
        iterations.
        """
        anchor = path
        built = value
        while not anchor.is_root:
            built = {str(anchor.segments[-1]): built}
            anchor = anchor.parent
            kind = await self._dispatcher.invoke(CMD_TYPE, key, anchor.canonical)
            _logger.debug("autocreate_probe", key=key, prefix=anchor.canonical, type=kind)
            if kind is not None:
                break

        _logger.info(
            "autocreate_corrective_write",
            key=key,
            anchor=anchor.canonical,
            levels_created=len(path) - len(anchor),
        )
        return await self._set(key, anchor.canonical, built)
