"""Config module exports."""

from apichangelog.config.loader import load_config
from apichangelog.config.models import (
    AnalysisConfig,
    ApiChangelogConfig,
    DiscoveryConfig,
    LoggingConfig,
    LogOutputConfig,
    OutputConfig,
)

__all__ = [
    "load_config",
    "AnalysisConfig",
    "ApiChangelogConfig",
    "DiscoveryConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "OutputConfig",
]
