"""Source file discovery and checksums."""

from __future__ import annotations

import fnmatch
import hashlib
import os
from collections.abc import Iterable, Sequence
from pathlib import Path

import structlog

from apichangelog.config.constants import DEFAULT_EXTENSIONS, PRUNED_DIRS

log = structlog.get_logger(__name__)


def is_ignored(path: Path, root: Path, patterns: Iterable[str]) -> bool:
    """Check a file against shell-style ignore patterns.

    Each pattern is tried on the absolute path and on the root-relative
    POSIX path with a leading ``/``, so ``*/vendor/*`` also matches a
    top-level ``vendor/`` directory.
    """
    absolute = path.as_posix()
    relative = "/" + path.relative_to(root).as_posix()
    return any(
        fnmatch.fnmatchcase(absolute, pattern) or fnmatch.fnmatchcase(relative, pattern)
        for pattern in patterns
    )


def discover_files(
    root: Path,
    ignore_patterns: Sequence[str] = (),
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    max_file_size: int | None = None,
) -> list[str]:
    """Return root-relative POSIX paths of source files, sorted.

    VCS and dependency-cache directories are pruned before patterns apply.
    Files larger than ``max_file_size`` bytes are skipped.
    """
    root = root.resolve()
    suffixes = tuple(ext.lower() for ext in extensions)
    found: list[str] = []

    for dirpath, dirnames, filenames in os.walk(root):
        # Prune in-place; sorted for a stable walk order
        dirnames[:] = sorted(d for d in dirnames if d not in PRUNED_DIRS)

        for filename in filenames:
            if not filename.lower().endswith(suffixes):
                continue
            path = Path(dirpath) / filename
            if is_ignored(path, root, ignore_patterns):
                continue
            if max_file_size is not None:
                try:
                    size = path.stat().st_size
                except OSError:
                    size = 0
                if size > max_file_size:
                    log.debug("file_skipped_size", path=str(path), size=size)
                    continue
            found.append(path.relative_to(root).as_posix())

    found.sort()
    log.debug("files_discovered", root=str(root), count=len(found))
    return found


def file_checksum(content: bytes) -> str:
    """MD5 hex digest of file content. Used for change detection only."""
    return hashlib.md5(content, usedforsecurity=False).hexdigest()
