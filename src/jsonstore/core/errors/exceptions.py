"""Exceptions raised by the jsonstore client."""

from __future__ import annotations

from .codes import FailureCategory
from .models import ClassifiedFailure


class JsonStoreError(Exception):
    """Base class for every jsonstore error."""


class UnsupportedOperation(JsonStoreError):
    """The requested operation is not in the supported command set.

    Raised before anything is sent to the store.
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Unsupported command: {operation}")


class RemoteFailure(JsonStoreError):
    """The store answered a command with an error."""

    def __init__(self, category: FailureCategory, message: str) -> None:
        self.category = category
        self.message = message
        super().__init__(message)

    @classmethod
    def from_classified(cls, failure: ClassifiedFailure) -> RemoteFailure:
        return cls(failure.category, failure.message)

    @property
    def allows_autocreate(self) -> bool:
        """Whether a recursive write may recover from this failure."""
        return self.category.allows_autocreate

    def __repr__(self) -> str:
        return f"RemoteFailure(category={self.category.value!r}, message={self.message!r})"


class ResponseDecodeError(JsonStoreError, ValueError):
    """A multi-key read returned an element that is not valid JSON."""

    def __init__(self, key: str, raw: str) -> None:
        self.key = key
        self.raw = raw
        super().__init__(f"Value for key {key!r} is not valid JSON: {raw[:80]!r}")


class StoreNotConnected(JsonStoreError):
    """A command was issued before the store connection was established."""

    def __init__(self) -> None:
        super().__init__("JsonStore is not connected; call connect() first")
