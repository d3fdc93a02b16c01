"""Release decision for one comparison run.

Combines API changes and internal file changes into the version and
severity that get reported, and whether a changelog entry is produced
at all.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from apichangelog.analysis.semver import analyze_severity, bump_version
from apichangelog.model import Change, FileChange, Severity


@dataclass(frozen=True, slots=True)
class ReleaseDecision:
    current_version: str
    recommended_version: str
    severity: Severity
    write_changelog: bool = True


def decide_release(
    changes: Sequence[Change],
    file_changes: Sequence[FileChange],
    current_version: str,
    *,
    strict: bool = False,
    no_empty_changeset: bool = False,
) -> ReleaseDecision:
    """Pick the version to release.

    - API changes drive the bump through the severity analyzer.
    - Internal file changes alone are a patch release.
    - Nothing at all is a patch release too, unless ``no_empty_changeset``
      is set: then the current version is kept and no entry is written.
    """
    if not changes and not file_changes and no_empty_changeset:
        return ReleaseDecision(current_version, current_version, Severity.PATCH, False)
    if not changes and file_changes:
        return ReleaseDecision(
            current_version, bump_version(current_version, Severity.PATCH), Severity.PATCH
        )
    severity = analyze_severity(changes, current_version, strict)
    return ReleaseDecision(current_version, bump_version(current_version, severity), severity)
