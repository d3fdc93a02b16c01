"""Snapshot building: discover, checksum and extract every source file of a tree."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import structlog

from apichangelog.config.models import DiscoveryConfig
from apichangelog.core.console import progress
from apichangelog.core.errors import SnapshotError
from apichangelog.extract.discovery import discover_files, file_checksum
from apichangelog.extract.php import ExtractedFile, PhpExtractor
from apichangelog.model import ApiSnapshot

log = structlog.get_logger(__name__)


class SnapshotBuilder:
    """Build ``ApiSnapshot`` objects from source directories.

    A file that cannot be read or parsed is logged and skipped; its
    error is kept in ``failures`` for the most recent ``build`` call.
    The checksum of a file that was read but failed to parse is still
    recorded.
    """

    def __init__(
        self,
        config: DiscoveryConfig | None = None,
        extractor: PhpExtractor | None = None,
    ) -> None:
        self._config = config or DiscoveryConfig()
        self._extractor = extractor
        self.failures: list[SnapshotError] = []

    @property
    def extractor(self) -> PhpExtractor:
        if self._extractor is None:
            self._extractor = PhpExtractor()
        return self._extractor

    def build(
        self,
        root: Path,
        ignore_patterns: Sequence[str] | None = None,
        *,
        label: str = "Parsing",
    ) -> ApiSnapshot:
        """Snapshot every matching file under ``root``.

        Args:
            root: Codebase root directory.
            ignore_patterns: Overrides the configured ignore patterns.
            label: Progress bar caption.

        Raises:
            SnapshotError: ``root`` is missing or not a directory, or the
                PHP grammar cannot be loaded.
        """
        if not root.is_dir():
            raise SnapshotError.root_not_found(str(root))

        patterns = (
            list(ignore_patterns)
            if ignore_patterns is not None
            else self._config.ignore_patterns
        )
        paths = discover_files(
            root,
            patterns,
            self._config.extensions,
            max_file_size=self._config.max_file_size_kb * 1024,
        )

        self.failures = []
        snapshot = ApiSnapshot()
        base = root.resolve()
        extractor = self.extractor

        for relative_path in progress(paths, desc=label):
            try:
                content = (base / relative_path).read_bytes()
            except OSError as e:
                self._record_failure(SnapshotError.file_unreadable(relative_path, str(e)))
                continue

            snapshot.add_file_checksum(relative_path, file_checksum(content))

            try:
                extracted = extractor.extract(content, relative_path)
            except SnapshotError as e:
                self._record_failure(e)
                continue
            _merge(snapshot, extracted)

        log.info(
            "snapshot_built",
            root=str(root),
            files=len(paths),
            elements=snapshot.element_count,
            failures=len(self.failures),
        )
        return snapshot

    def _record_failure(self, error: SnapshotError) -> None:
        log.warning("file_skipped", error=error.error_name, **error.details)
        self.failures.append(error)


def _merge(snapshot: ApiSnapshot, extracted: ExtractedFile) -> None:
    for cls in extracted.classes:
        snapshot.add_class(cls)
    for interface in extracted.interfaces:
        snapshot.add_interface(interface)
    for function in extracted.functions:
        snapshot.add_function(function)
    for constant in extracted.constants:
        snapshot.add_constant(constant)


def build_snapshot(
    root: Path,
    ignore_patterns: Sequence[str] | None = None,
    config: DiscoveryConfig | None = None,
) -> ApiSnapshot:
    """Build a snapshot of ``root`` with a one-off builder."""
    return SnapshotBuilder(config).build(root, ignore_patterns)
