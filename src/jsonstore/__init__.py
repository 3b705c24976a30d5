"""jsonstore: async client for path-addressed JSON documents in Redis."""

__version__ = "0.3.0"

from jsonstore.client import AncestorMaterializer, CommandDispatcher, JsonStore
from jsonstore.core import (
    FailureCategory,
    JsonPath,
    JsonStoreError,
    RemoteFailure,
    ResponseDecodeError,
    StoreConfig,
    StoreNotConnected,
    UnsupportedOperation,
    normalize,
)

__all__ = [
    "AncestorMaterializer",
    "CommandDispatcher",
    "FailureCategory",
    "JsonPath",
    "JsonStore",
    "JsonStoreError",
    "RemoteFailure",
    "ResponseDecodeError",
    "StoreConfig",
    "StoreNotConnected",
    "UnsupportedOperation",
    "__version__",
    "normalize",
]
