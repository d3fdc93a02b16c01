"""SemVer severity aggregation and version recommendation.

Aggregation is strictly Major > Minor > Patch regardless of counts. A
0.x.y codebase has no stable contract, so an aggregate MAJOR is reported
as MINOR unless ``strict`` is set.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from apichangelog.model import Change, Severity

_LEADING_INT = re.compile(r"\d+")


@dataclass(frozen=True, slots=True)
class Version:
    """Three-component version. Missing or non-numeric components read as 0."""

    major: int = 0
    minor: int = 0
    patch: int = 0

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse ``"1.2.3"``, ``"1.2"``, ``"v1"`` or ``""`` leniently.

        Each component contributes its leading digits; extra components
        beyond three are ignored.
        """
        parts = text.strip().lstrip("vV").split(".") if text.strip() else []
        numbers = [_leading_int(part) for part in parts[:3]]
        numbers += [0] * (3 - len(numbers))
        return cls(*numbers)

    def bump(self, severity: Severity) -> Version:
        if severity is Severity.MAJOR:
            return Version(self.major + 1, 0, 0)
        if severity is Severity.MINOR:
            return Version(self.major, self.minor + 1, 0)
        return Version(self.major, self.minor, self.patch + 1)

    @property
    def is_pre_release(self) -> bool:
        return self.major == 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def _leading_int(part: str) -> int:
    match = _LEADING_INT.match(part.strip())
    return int(match.group()) if match else 0


def aggregate_severity(changes: Iterable[object]) -> Severity:
    """Highest severity among ``Change`` entries; non-``Change`` entries are skipped."""
    highest = Severity.PATCH
    for change in changes:
        if not isinstance(change, Change):
            continue
        if change.severity is Severity.MAJOR:
            return Severity.MAJOR
        if change.severity.rank > highest.rank:
            highest = change.severity
    return highest


def analyze_severity(
    changes: Iterable[object],
    current_version: str = "1.0.0",
    strict: bool = False,
) -> Severity:
    """Overall severity of ``changes`` for a codebase at ``current_version``."""
    severity = aggregate_severity(changes)
    if severity is Severity.MAJOR and not strict and Version.parse(current_version).is_pre_release:
        return Severity.MINOR
    return severity


def recommended_version(
    current_version: str,
    changes: Iterable[object],
    strict: bool = False,
) -> str:
    changes = list(changes)
    severity = analyze_severity(changes, current_version, strict)
    return str(Version.parse(current_version).bump(severity))


def bump_version(current_version: str, severity: Severity) -> str:
    return str(Version.parse(current_version).bump(severity))


def should_bump_major(
    changes: Iterable[object], current_version: str = "1.0.0", strict: bool = False
) -> bool:
    return analyze_severity(changes, current_version, strict) is Severity.MAJOR


def should_bump_minor(
    changes: Iterable[object], current_version: str = "1.0.0", strict: bool = False
) -> bool:
    return analyze_severity(changes, current_version, strict) is Severity.MINOR
