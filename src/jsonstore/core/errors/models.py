"""Data models for error classification."""

from __future__ import annotations

from dataclasses import dataclass

from .codes import FailureCategory


@dataclass(frozen=True)
class ClassifiedFailure:
    """A remote failure message tagged with its category.

    Produced per failed call and consumed by the caller immediately.
    """

    category: FailureCategory
    message: str
