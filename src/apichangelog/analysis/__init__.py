"""SemVer analysis exports."""

from apichangelog.analysis.release import ReleaseDecision, decide_release
from apichangelog.analysis.semver import (
    Version,
    aggregate_severity,
    analyze_severity,
    bump_version,
    recommended_version,
    should_bump_major,
    should_bump_minor,
)

__all__ = [
    "ReleaseDecision",
    "Version",
    "aggregate_severity",
    "analyze_severity",
    "bump_version",
    "decide_release",
    "recommended_version",
    "should_bump_major",
    "should_bump_minor",
]
