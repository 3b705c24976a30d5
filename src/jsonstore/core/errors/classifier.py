"""FailureClassifier: substring-based classification of remote error text.

The remote store gives no structured error codes, so this is the single
place that maps message text to a ``FailureCategory``. The phrases differ
between store versions; pass custom lists (or set them through
``StoreConfig.autocreate``) rather than editing the algorithm that consumes
the categories.
"""

from __future__ import annotations

from collections.abc import Iterable

from jsonstore.core.constants import (
    CREATE_AT_ROOT_PHRASES,
    DEPTH_ZERO_PHRASES,
    MISSING_ANCESTOR_PHRASES,
    TRUNCATE_ERROR_MESSAGE_CHARS,
)
from jsonstore.core.logging import get_logger

from .codes import FailureCategory
from .models import ClassifiedFailure

_logger = get_logger("errors")


def _normalize_phrases(phrases: Iterable[str]) -> tuple[str, ...]:
    """Lower-case and drop empty phrases (an empty phrase would match everything)."""
    return tuple(p.lower() for p in phrases if p)


class FailureClassifier:
    """Classifies remote failure messages by substring matching.

    Categories are checked in a fixed priority order: missing intermediate
    ancestor, must-create-at-root, failure-at-depth-zero. Matching is
    case-insensitive. Text matching none of them is ``OTHER``.
    """

    def __init__(
        self,
        missing_ancestor_phrases: Iterable[str] | None = None,
        create_at_root_phrases: Iterable[str] | None = None,
        depth_zero_phrases: Iterable[str] | None = None,
    ) -> None:
        """Initialize classifier with trigger phrases.

        Args:
            missing_ancestor_phrases: Text signalling a missing intermediate level.
            create_at_root_phrases: Text signalling the key must be created at the root.
            depth_zero_phrases: Text signalling a failure at path depth zero.
                Pass an empty list to disable this category for stores that
                never emit it.
        """
        self._rules: list[tuple[FailureCategory, tuple[str, ...]]] = [
            (
                FailureCategory.MISSING_INTERMEDIATE_ANCESTOR,
                _normalize_phrases(
                    MISSING_ANCESTOR_PHRASES
                    if missing_ancestor_phrases is None
                    else missing_ancestor_phrases
                ),
            ),
            (
                FailureCategory.MUST_CREATE_AT_ROOT,
                _normalize_phrases(
                    CREATE_AT_ROOT_PHRASES
                    if create_at_root_phrases is None
                    else create_at_root_phrases
                ),
            ),
            (
                FailureCategory.FAILURE_AT_PATH_DEPTH_ZERO,
                _normalize_phrases(
                    DEPTH_ZERO_PHRASES if depth_zero_phrases is None else depth_zero_phrases
                ),
            ),
        ]

    def phrases_for(self, category: FailureCategory) -> tuple[str, ...]:
        """Return the (lower-cased) phrases that select ``category``."""
        for rule_category, phrases in self._rules:
            if rule_category is category:
                return phrases
        return ()

    def classify(self, message: str) -> ClassifiedFailure:
        """Classify a raw remote error message.

        Args:
            message: Error text as returned by the store.

        Returns:
            ClassifiedFailure carrying the category and the unmodified message.
        """
        haystack = message.lower()
        for category, phrases in self._rules:
            if any(phrase in haystack for phrase in phrases):
                _logger.debug(
                    "failure_classified",
                    category=category.value,
                    message=message[:TRUNCATE_ERROR_MESSAGE_CHARS],
                )
                return ClassifiedFailure(category=category, message=message)
        return ClassifiedFailure(category=FailureCategory.OTHER, message=message)
