"""Configuration models for jsonstore.

Pydantic models for connecting to the store, tuning auto-create failure
matching and logging. Configuration can be built in code or loaded from YAML:

    host: redis.internal
    port: 6380
    password: hunter2
    autocreate:
      depth_zero_phrases: []   # store version never emits this phrase
    log:
      level: DEBUG
      format: json
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from jsonstore.core.constants import (
    CREATE_AT_ROOT_PHRASES,
    DEFAULT_CONNECT_TIMEOUT_SECONDS,
    DEFAULT_DB,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_SOCKET_TIMEOUT_SECONDS,
    DEPTH_ZERO_PHRASES,
    MISSING_ANCESTOR_PHRASES,
)
from jsonstore.core.errors import FailureClassifier


class LogConfig(BaseModel):
    """Configuration for structured logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Minimum log level to capture",
    )
    format: Literal["json", "console"] = Field(
        default="console",
        description="Output format: json for structured, console for human-readable",
    )
    file_path: Path | None = Field(
        default=None,
        description="Path for rotating log file output",
    )
    max_file_size_mb: int = Field(
        default=50,
        gt=0,
        le=1000,
        description="Maximum log file size before rotation (MB)",
    )
    backup_count: int = Field(
        default=5,
        ge=0,
        le=100,
        description="Number of rotated log files to keep",
    )
    include_timestamps: bool = Field(
        default=True,
        description="Include ISO8601 UTC timestamps in log entries",
    )


class AutoCreateConfig(BaseModel):
    """Error phrases that make a failed write eligible for auto-create.

    The exact wording depends on the store version, so all three lists can
    be overridden. An empty list disables that trigger.
    """

    missing_ancestor_phrases: list[str] = Field(
        default_factory=lambda: list(MISSING_ANCESTOR_PHRASES),
        description="Text meaning an intermediate path level is missing",
    )
    create_at_root_phrases: list[str] = Field(
        default_factory=lambda: list(CREATE_AT_ROOT_PHRASES),
        description="Text meaning a new key must be created at the root",
    )
    depth_zero_phrases: list[str] = Field(
        default_factory=lambda: list(DEPTH_ZERO_PHRASES),
        description="Text meaning the failure happened at path depth zero",
    )

    def build_classifier(self) -> FailureClassifier:
        return FailureClassifier(
            missing_ancestor_phrases=self.missing_ancestor_phrases,
            create_at_root_phrases=self.create_at_root_phrases,
            depth_zero_phrases=self.depth_zero_phrases,
        )


class StoreConfig(BaseModel):
    """Connection and behaviour settings for a JsonStore."""

    host: str = Field(default=DEFAULT_HOST, description="Redis server host")
    port: int = Field(default=DEFAULT_PORT, gt=0, le=65535, description="Redis server port")
    db: int = Field(default=DEFAULT_DB, ge=0, description="Redis logical database index")
    username: str | None = Field(default=None, description="ACL username")
    password: str | None = Field(default=None, description="Redis password")
    socket_timeout: float = Field(
        default=DEFAULT_SOCKET_TIMEOUT_SECONDS,
        gt=0,
        description="Per-command socket timeout in seconds",
    )
    socket_connect_timeout: float = Field(
        default=DEFAULT_CONNECT_TIMEOUT_SECONDS,
        gt=0,
        description="Connection timeout in seconds",
    )
    autocreate: AutoCreateConfig = Field(default_factory=AutoCreateConfig)
    log: LogConfig = Field(default_factory=LogConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> StoreConfig:
        """Load store configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data or {})

    @classmethod
    def from_yaml_string(cls, yaml_str: str) -> StoreConfig:
        """Load store configuration from a YAML string."""
        data = yaml.safe_load(yaml_str)
        return cls.model_validate(data or {})

    def connection_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``redis.asyncio.Redis``."""
        return {
            "host": self.host,
            "port": self.port,
            "db": self.db,
            "username": self.username,
            "password": self.password,
            "socket_timeout": self.socket_timeout,
            "socket_connect_timeout": self.socket_connect_timeout,
            "decode_responses": True,
        }
