"""JSON report rendering."""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from typing import Any

from apichangelog.model import Change, FileChange, Severity


def serialize_change(change: Change) -> dict[str, Any]:
    element = change.element
    return {
        "type": change.change_type.value,
        "severity": change.severity.value,
        "description": change.description,
        "element": {
            "type": element.kind.value,
            "name": element.name,
            "namespace": element.namespace,
            "fqn": element.fqn,
            "internal": change.is_internal,
        },
    }


def serialize_file_change(file_change: FileChange) -> dict[str, str]:
    return {
        "path": file_change.relative_path,
        "oldChecksum": file_change.old_checksum,
        "newChecksum": file_change.new_checksum,
    }


def build_report(
    changes: Iterable[object],
    current_version: str,
    recommended_version: str,
    severity: Severity,
    file_changes: Sequence[FileChange] = (),
) -> dict[str, Any]:
    """Assemble the report dict; non-``Change`` entries are skipped."""
    return {
        "currentVersion": current_version,
        "recommendedVersion": recommended_version,
        "severity": severity.value,
        "changes": [serialize_change(c) for c in changes if isinstance(c, Change)],
        "fileChanges": [serialize_file_change(fc) for fc in file_changes],
    }


def render_json(
    changes: Iterable[object],
    current_version: str,
    recommended_version: str,
    severity: Severity,
    file_changes: Sequence[FileChange] = (),
) -> str:
    """Pretty-printed JSON report. Non-ASCII text is kept as is."""
    report = build_report(changes, current_version, recommended_version, severity, file_changes)
    return json.dumps(report, indent=4, ensure_ascii=False)
