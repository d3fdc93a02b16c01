"""Markdown changelog rendering.

Output shape::

    # Changelog

    ## [1.1.0] - 2024-05-01

    ### Added

    - 🟡 **class** `App\\Widget`: New class added

Sections with no entries are omitted; a release with nothing at all to
report gets a single "No API changes detected" entry under Changed.
``render_for_file`` splices a new
release block into an existing changelog below its top heading.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Sequence

from apichangelog.config.constants import CHANGELOG_HEADING, DATE_FORMAT
from apichangelog.model import Change, ChangeType, FileChange, Severity
from apichangelog.render.describe import describe_change

_BADGES = {
    Severity.MAJOR: "🔴",
    Severity.MINOR: "🟡",
    Severity.PATCH: "🟢",
}

NO_CHANGES_LINE = "- No API changes detected"

_SECTIONS = (
    ("Added", ChangeType.ADDED),
    ("Changed", ChangeType.MODIFIED),
    ("Removed", ChangeType.REMOVED),
)


def format_change(change: Change) -> str:
    """Render one change as a Markdown list item (no trailing newline)."""
    badge = _BADGES.get(change.severity, "⚪")
    marker = " *@internal*" if change.is_internal else ""
    return (
        f"- {badge} **{change.element.kind.value}** `{change.fqn}`{marker}: "
        f"{describe_change(change)}"
    )


def format_file_change(file_change: FileChange) -> str:
    return f"- `{file_change.relative_path}`: internal changes (no API modification)"


def render_release(
    changes: Iterable[object],
    version: str,
    date: dt.date | None = None,
    file_changes: Sequence[FileChange] = (),
) -> str:
    """Render the ``## [version] - date`` block and its sections."""
    date = date or dt.date.today()
    api_changes = [change for change in changes if isinstance(change, Change)]

    lines = [f"## [{version}] - {date.strftime(DATE_FORMAT)}", ""]
    for title, change_type in _SECTIONS:
        group = [change for change in api_changes if change.change_type == change_type]
        if not group:
            continue
        lines += [f"### {title}", ""]
        lines += [format_change(change) for change in group]
        lines.append("")

    if not api_changes and not file_changes:
        lines += ["### Changed", "", NO_CHANGES_LINE, ""]

    if file_changes:
        lines += ["### Internal", ""]
        lines += [format_file_change(fc) for fc in file_changes]
        lines.append("")

    return "\n".join(lines) + "\n"


def render_changelog(
    changes: Iterable[object],
    version: str,
    date: dt.date | None = None,
    file_changes: Sequence[FileChange] = (),
) -> str:
    """Render a standalone changelog document with a single release."""
    return f"{CHANGELOG_HEADING}\n\n" + render_release(changes, version, date, file_changes)


def render_for_file(
    existing: str | None,
    changes: Iterable[object],
    version: str,
    date: dt.date | None = None,
    file_changes: Sequence[FileChange] = (),
) -> str:
    """Return ``existing`` with a new release inserted below its heading.

    Earlier releases are kept as they are. Without an existing document
    (or one lacking a ``# Changelog`` heading) a fresh document is
    produced, followed by the previous text.
    """
    release = render_release(changes, version, date, file_changes)
    if not existing or not existing.strip():
        return f"{CHANGELOG_HEADING}\n\n{release}"

    lines = existing.splitlines(keepends=True)
    for index, line in enumerate(lines):
        if line.rstrip() == CHANGELOG_HEADING:
            head = "".join(lines[: index + 1])
            rest = "".join(lines[index + 1 :]).lstrip("\n")
            if not head.endswith("\n"):
                head += "\n"
            return f"{head}\n{release}{rest}"

    return f"{CHANGELOG_HEADING}\n\n{release}{existing}"
