"""Failure categories for remote store errors.

The remote store reports failures as free text only, so categories are
derived by substring matching (see ``classifier.py``). Three categories mark
a write that can be retried by materializing missing ancestors; everything
else is ``OTHER``.

| Category | Trigger phrase (default) | Auto-create eligible |
|----------|--------------------------|----------------------|
| MISSING_INTERMEDIATE_ANCESTOR | "non-terminal path level" | Yes |
| MUST_CREATE_AT_ROOT | "must be created at the root" | Yes |
| FAILURE_AT_PATH_DEPTH_ZERO | "at level 0 in path" | Yes |
| OTHER | anything else | No |
"""

from __future__ import annotations

from enum import Enum


class FailureCategory(str, Enum):
    """High-level category of a failed remote call."""

    MISSING_INTERMEDIATE_ANCESTOR = "missing_intermediate_ancestor"
    """An intermediate level of the target path does not exist."""

    MUST_CREATE_AT_ROOT = "must_create_at_root"
    """The key does not exist and can only be created at the document root."""

    FAILURE_AT_PATH_DEPTH_ZERO = "failure_at_path_depth_zero"
    """The failure occurred at the first level of the path."""

    OTHER = "other"
    """Any failure the classifier does not recognise."""

    @property
    def allows_autocreate(self) -> bool:
        """Whether a recursive write may materialize ancestors for this failure."""
        return self in AUTOCREATE_CATEGORIES


AUTOCREATE_CATEGORIES: frozenset[FailureCategory] = frozenset({
    FailureCategory.MISSING_INTERMEDIATE_ANCESTOR,
    FailureCategory.MUST_CREATE_AT_ROOT,
    FailureCategory.FAILURE_AT_PATH_DEPTH_ZERO,
})
