"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config() (CLI options end up here)
2. Environment variables (APICHANGELOG__SECTION__KEY)
3. Project YAML (<project>/.apichangelog.yaml)
4. Global YAML (~/.config/apichangelog/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    APICHANGELOG__<SECTION>__<KEY>=<VALUE>

Examples:
    APICHANGELOG__LOGGING__LEVEL=DEBUG
    APICHANGELOG__ANALYSIS__STRICT_SEMVER=true
    APICHANGELOG__OUTPUT__FORMAT=json
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from apichangelog.config.constants import (
    DEFAULT_CURRENT_VERSION,
    DEFAULT_EXTENSIONS,
    DEFAULT_IGNORE_PATTERNS,
    DEFAULT_OUTPUT_FILE,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
OutputFormat = Literal["markdown", "json"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        APICHANGELOG__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. Per-file parse failures log at WARNING.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class DiscoveryConfig(BaseModel):
    """Source file discovery.

    Env vars:
        APICHANGELOG__DISCOVERY__MAX_FILE_SIZE_KB: Skip files larger than this
    """

    extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTENSIONS),
        description="File extensions treated as PHP source.",
    )
    ignore_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS),
        description="Shell-style patterns matched against '/'-prefixed relative paths.",
    )
    max_file_size_kb: int = Field(
        default=2048,
        description="Skip files larger than this (KB). Generated files are rarely API.",
    )

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        normalized = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                continue
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        if not normalized:
            raise ValueError("At least one extension is required")
        return normalized

    @field_validator("max_file_size_kb")
    @classmethod
    def validate_max_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"max_file_size_kb must be positive, got {v}")
        return v


class AnalysisConfig(BaseModel):
    """Version recommendation settings.

    Env vars:
        APICHANGELOG__ANALYSIS__CURRENT_VERSION: Version being released from
        APICHANGELOG__ANALYSIS__STRICT_SEMVER: Disable the 0.x downgrade
        APICHANGELOG__ANALYSIS__NO_EMPTY_CHANGESET: Keep the version when nothing changed
    """

    current_version: str = Field(
        default=DEFAULT_CURRENT_VERSION,
        description="Version the old snapshot corresponds to.",
    )
    strict_semver: bool = Field(
        default=False,
        description="Treat 0.x releases like 1.x (breaking changes bump major).",
    )
    no_empty_changeset: bool = Field(
        default=False,
        description="When nothing changed at all, recommend the current version.",
    )


class OutputConfig(BaseModel):
    """Report output.

    Env vars:
        APICHANGELOG__OUTPUT__FORMAT: markdown or json
        APICHANGELOG__OUTPUT__FILE: Target file, relative to NEW_PATH
    """

    format: OutputFormat = "markdown"
    file: str = DEFAULT_OUTPUT_FILE


class ApiChangelogConfig(BaseModel):
    """Root configuration.

    All settings can be configured via:
    1. Environment variables: APICHANGELOG__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
