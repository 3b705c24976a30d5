"""Global constants for jsonstore.

Centralizes the remote command names, error trigger phrases and connection
defaults so they are discoverable and easy to update when the store changes.
"""

# =============================================================================
# Remote command names
# =============================================================================

CMD_GET = "JSON.GET"
CMD_SET = "JSON.SET"
CMD_DEL = "JSON.DEL"
CMD_TYPE = "JSON.TYPE"
CMD_MGET = "JSON.MGET"
CMD_NUMINCRBY = "JSON.NUMINCRBY"
CMD_NUMMULTBY = "JSON.NUMMULTBY"
CMD_STRAPPEND = "JSON.STRAPPEND"
CMD_STRLEN = "JSON.STRLEN"
CMD_ARRAPPEND = "JSON.ARRAPPEND"
CMD_ARRINDEX = "JSON.ARRINDEX"
CMD_ARRINSERT = "JSON.ARRINSERT"
CMD_ARRLEN = "JSON.ARRLEN"
CMD_ARRPOP = "JSON.ARRPOP"
CMD_ARRTRIM = "JSON.ARRTRIM"
CMD_OBJKEYS = "JSON.OBJKEYS"
CMD_OBJLEN = "JSON.OBJLEN"
CMD_DEBUG = "JSON.DEBUG"
CMD_RESP = "JSON.RESP"

SUPPORTED_COMMANDS: frozenset[str] = frozenset({
    CMD_GET,
    CMD_SET,
    CMD_DEL,
    CMD_TYPE,
    CMD_MGET,
    CMD_NUMINCRBY,
    CMD_NUMMULTBY,
    CMD_STRAPPEND,
    CMD_STRLEN,
    CMD_ARRAPPEND,
    CMD_ARRINDEX,
    CMD_ARRINSERT,
    CMD_ARRLEN,
    CMD_ARRPOP,
    CMD_ARRTRIM,
    CMD_OBJKEYS,
    CMD_OBJLEN,
    CMD_DEBUG,
    CMD_RESP,
})
"""Every operation the dispatcher will send. Anything else is rejected locally."""

# =============================================================================
# Path syntax
# =============================================================================

ROOT_PATH = "."
"""Canonical form of the document root."""

# =============================================================================
# Auto-create trigger phrases
# =============================================================================

MISSING_ANCESTOR_PHRASES: tuple[str, ...] = ("non-terminal path level",)
"""Remote error text meaning an intermediate path level does not exist."""

CREATE_AT_ROOT_PHRASES: tuple[str, ...] = ("must be created at the root",)
"""Remote error text meaning a new key can only be written at the root."""

DEPTH_ZERO_PHRASES: tuple[str, ...] = ("at level 0 in path",)
"""Remote error text meaning the failure happened at the first path level."""

# =============================================================================
# Connection defaults
# =============================================================================

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 6379
DEFAULT_DB = 0

DEFAULT_SOCKET_TIMEOUT_SECONDS = 10.0
"""Per-command socket timeout for the redis connection."""

DEFAULT_CONNECT_TIMEOUT_SECONDS = 5.0
"""Timeout for establishing the redis connection."""

# =============================================================================
# Logging
# =============================================================================

TRUNCATE_ERROR_MESSAGE_CHARS = 200
"""Maximum characters of a remote error message included in log events."""
