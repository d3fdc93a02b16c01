"""apichangelog error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Snapshot (discovery, reading, parsing)
- 4xxx: Render (output format, reading and writing the changelog)

The diff/analysis core raises none of these for well-formed snapshots.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Snapshot (3xxx)
    SNAPSHOT_ROOT_NOT_FOUND = 3001
    SNAPSHOT_FILE_UNREADABLE = 3002
    SNAPSHOT_PARSE_FAILED = 3003
    SNAPSHOT_GRAMMAR_UNAVAILABLE = 3004

    # Render (4xxx)
    RENDER_UNKNOWN_FORMAT = 4001
    RENDER_WRITE_FAILED = 4002
    RENDER_READ_FAILED = 4003


@dataclass(frozen=True, slots=True)
class ApiChangelogError(Exception):
    """Base error with structured context for CLI and JSON output."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(ApiChangelogError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class SnapshotError(ApiChangelogError):
    """Errors raised while building a snapshot from a source tree."""

    @classmethod
    def root_not_found(cls, path: str) -> "SnapshotError":
        return cls(
            code=ErrorCode.SNAPSHOT_ROOT_NOT_FOUND,
            message=f"Path does not exist or is not a directory: {path}",
            details={"path": path},
        )

    @classmethod
    def file_unreadable(cls, path: str, reason: str) -> "SnapshotError":
        return cls(
            code=ErrorCode.SNAPSHOT_FILE_UNREADABLE,
            message=f"Cannot read {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def parse_failed(cls, path: str, reason: str) -> "SnapshotError":
        return cls(
            code=ErrorCode.SNAPSHOT_PARSE_FAILED,
            message=f"Failed to parse {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def grammar_unavailable(cls, grammar: str) -> "SnapshotError":
        return cls(
            code=ErrorCode.SNAPSHOT_GRAMMAR_UNAVAILABLE,
            message=f"Grammar not installed: {grammar}",
            details={"grammar": grammar},
        )


class RenderError(ApiChangelogError):
    """Errors raised while producing or writing a report."""

    @classmethod
    def unknown_format(cls, fmt: str) -> "RenderError":
        return cls(
            code=ErrorCode.RENDER_UNKNOWN_FORMAT,
            message=f"Unknown output format '{fmt}' (expected markdown or json)",
            details={"format": fmt},
        )

    @classmethod
    def write_failed(cls, path: str, reason: str) -> "RenderError":
        return cls(
            code=ErrorCode.RENDER_WRITE_FAILED,
            message=f"Cannot write {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def read_failed(cls, path: str, reason: str) -> "RenderError":
        return cls(
            code=ErrorCode.RENDER_READ_FAILED,
            message=f"Cannot read existing changelog {path}: {reason}",
            details={"path": path, "reason": reason},
        )
