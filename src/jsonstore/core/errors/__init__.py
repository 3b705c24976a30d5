"""Error classification and exceptions.

Re-exports all public symbols.
"""

from jsonstore.core.errors.codes import AUTOCREATE_CATEGORIES, FailureCategory
from jsonstore.core.errors.models import ClassifiedFailure
from jsonstore.core.errors.classifier import FailureClassifier
from jsonstore.core.errors.exceptions import (
    JsonStoreError,
    RemoteFailure,
    ResponseDecodeError,
    StoreNotConnected,
    UnsupportedOperation,
)

__all__ = [
    "AUTOCREATE_CATEGORIES",
    "ClassifiedFailure",
    "FailureCategory",
    "FailureClassifier",
    "JsonStoreError",
    "RemoteFailure",
    "ResponseDecodeError",
    "StoreNotConnected",
    "UnsupportedOperation",
]
