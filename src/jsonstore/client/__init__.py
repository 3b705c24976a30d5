"""RedisJSON client: command dispatch, auto-create writes and the store facade."""

from jsonstore.client.dispatcher import CommandDispatcher, CommandHandle, decode_response
from jsonstore.client.materializer import AncestorMaterializer
from jsonstore.client.store import JsonStore

__all__ = [
    "AncestorMaterializer",
    "CommandDispatcher",
    "CommandHandle",
    "JsonStore",
    "decode_response",
]
