"""Core domain models, path addressing and configuration."""

from jsonstore.core.config import AutoCreateConfig, LogConfig, StoreConfig
from jsonstore.core.errors import (
    ClassifiedFailure,
    FailureCategory,
    FailureClassifier,
    JsonStoreError,
    RemoteFailure,
    ResponseDecodeError,
    StoreNotConnected,
    UnsupportedOperation,
)
from jsonstore.core.path import JsonPath, normalize, parse_segments

__all__ = [
    "AutoCreateConfig",
    "ClassifiedFailure",
    "FailureCategory",
    "FailureClassifier",
    "JsonPath",
    "JsonStoreError",
    "LogConfig",
    "RemoteFailure",
    "ResponseDecodeError",
    "StoreConfig",
    "StoreNotConnected",
    "UnsupportedOperation",
    "normalize",
    "parse_segments",
]
