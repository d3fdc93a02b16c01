"""Core module exports."""

from apichangelog.core.console import pluralize, progress, status
from apichangelog.core.errors import (
    ApiChangelogError,
    ConfigError,
    ErrorCode,
    RenderError,
    SnapshotError,
)
from apichangelog.core.logging import (
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)

__all__ = [
    # Errors
    "ApiChangelogError",
    "ConfigError",
    "ErrorCode",
    "RenderError",
    "SnapshotError",
    # Logging
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Console
    "pluralize",
    "progress",
    "status",
]
