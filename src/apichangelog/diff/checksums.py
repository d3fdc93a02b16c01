"""File checksum comparison: internal edits that left the API untouched.

A file whose checksum differs between snapshots but which declares no
element involved in any API change is reported as a ``FileChange``. Files
present in only one snapshot are not reported (their declarations already
show up as added/removed elements).
"""

from __future__ import annotations

from collections.abc import Iterable

from apichangelog.model import ApiSnapshot, Change, FileChange


def files_with_api_changes(changes: Iterable[Change]) -> set[str]:
    """Source files referenced by either side of any change."""
    files: set[str] = set()
    for change in changes:
        if change.element.source_file is not None:
            files.add(change.element.source_file)
        if change.old_element is not None and change.old_element.source_file is not None:
            files.add(change.old_element.source_file)
    return files


def compare_checksums(
    old: ApiSnapshot,
    new: ApiSnapshot,
    changes: Iterable[Change],
) -> list[FileChange]:
    """Return files changed on disk without API impact, sorted by path."""
    touched = files_with_api_changes(changes)
    file_changes: list[FileChange] = []

    for path, new_checksum in new.file_checksums.items():
        old_checksum = old.file_checksums.get(path)
        if old_checksum is None or old_checksum == new_checksum:
            continue
        if path in touched:
            continue
        file_changes.append(FileChange(path, old_checksum, new_checksum))

    file_changes.sort(key=lambda fc: fc.relative_path)
    return file_changes
