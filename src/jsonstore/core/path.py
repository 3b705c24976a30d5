"""Path addressing for JSON documents.

Users address a location inside a document either with dotted text
(``"a.b.0"``), with text already in the store's bracket syntax
(``"['a']['b'][0]"``), or with an explicit list of segments
(``["a", "b", 0]``). Everything is converted to the bracket syntax before it
is sent; the document root is ``.``.

Conversion never raises:

- text that is already bracket syntax is passed through unchanged;
- a segment that is a non-negative integer (or all-digit text) becomes an
  array index, anything else becomes a quoted property name;
- one leading ``.`` (the legacy root prefix) is dropped, so ``".a.b"`` and
  ``"a.b"`` are the same path;
- the path is cut at the first empty segment, so ``"a..b"`` and ``"a.b."``
  address ``['a']`` and ``['a']['b']`` respectively.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Union

from jsonstore.core.constants import ROOT_PATH

Segment = Union[str, int]
"""A property name or an array index."""

PathLike = Union[str, Iterable[Segment], "JsonPath", None]
"""Anything ``normalize`` accepts."""

_GROUP = r"\[(?:'[^']*'|\"(?:[^\"\\]|\\.)*\"|[^\[\]'\"]*)\]"
_ESCAPED = re.compile(r"\\(.)")
_BRACKET_FORM = re.compile(rf"^(?:{_GROUP})+$")
_BRACKET_GROUP = re.compile(_GROUP)


def is_bracket_form(text: str) -> bool:
    """Whether ``text`` consists solely of one or more ``[...]`` groups."""
    return bool(_BRACKET_FORM.match(text))


def _coerce(segment: object) -> Segment | None:
    """Turn a raw segment into a name or index; None marks an empty segment."""
    if segment is None:
        return None
    if isinstance(segment, bool):
        return str(segment)
    if isinstance(segment, int):
        return segment if segment >= 0 else str(segment)
    text = str(segment)
    if not text:
        return None
    if text.isascii() and text.isdigit():
        return int(text)
    return text


def _parse_bracket_group(group: object) -> Segment | None:
    inner = str(group)[1:-1].strip()
    if len(inner) >= 2 and inner[0] == inner[-1] == "'":
        return inner[1:-1] or None
    if len(inner) >= 2 and inner[0] == inner[-1] == '"':
        return _ESCAPED.sub(r"\1", inner[1:-1]) or None
    return _coerce(inner)


def _truncate(
    raw: Iterable[object], coerce: Callable[[object], Segment | None]
) -> tuple[Segment, ...]:
    segments: list[Segment] = []
    for item in raw:
        segment = coerce(item)
        if segment is None:
            break
        segments.append(segment)
    return tuple(segments)


def parse_segments(path: PathLike) -> tuple[Segment, ...]:
    """Split a path into its segments, stopping at the first empty one.

    Args:
        path: Dotted text, bracket text, a segment list, a JsonPath or None.

    Returns:
        Tuple of property names (str) and array indices (int). Empty for the root.
    """
    if path is None:
        return ()
    if isinstance(path, JsonPath):
        return path.segments
    if isinstance(path, str):
        if is_bracket_form(path):
            return _truncate(_BRACKET_GROUP.findall(path), _parse_bracket_group)
        # legacy paths may start with the root dot: ".a.b" is "a.b"
        if path.startswith(ROOT_PATH):
            path = path[len(ROOT_PATH):]
        return _truncate(path.split("."), _coerce)
    return _truncate(path, _coerce)


def format_segment(segment: Segment) -> str:
    """Render one segment in bracket syntax.

    Names are single-quoted unless they contain ``'`` or a backslash; those
    are double-quoted with ``"`` and ``\\`` backslash-escaped.
    """
    if isinstance(segment, int):
        return f"[{segment}]"
    if "'" in segment or "\\" in segment:
        escaped = segment.replace("\\", "\\\\").replace('"', '\\"')
        return f'["{escaped}"]'
    return f"['{segment}']"


def format_segments(segments: Iterable[Segment]) -> str:
    """Render a segment sequence in bracket syntax; no segments is the root."""
    rendered = "".join(format_segment(s) for s in segments)
    return rendered or ROOT_PATH


def normalize(path: PathLike) -> str:
    """Convert any supported path form to the store's canonical syntax.

    >>> normalize(["a", "b", 0])
    "['a']['b'][0]"
    >>> normalize("a.b.0")
    "['a']['b'][0]"
    >>> normalize("")
    '.'
    """
    if isinstance(path, JsonPath):
        return path.canonical
    if isinstance(path, str) and is_bracket_form(path):
        return path
    return format_segments(parse_segments(path))


@dataclass(frozen=True)
class JsonPath:
    """An immutable, already-parsed path."""

    segments: tuple[Segment, ...] = ()

    @classmethod
    def parse(cls, path: PathLike) -> JsonPath:
        if isinstance(path, JsonPath):
            return path
        return cls(parse_segments(path))

    @property
    def canonical(self) -> str:
        return format_segments(self.segments)

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def parent(self) -> JsonPath:
        """The path one level up. The root is its own parent."""
        return JsonPath(self.segments[:-1])

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        return self.canonical

