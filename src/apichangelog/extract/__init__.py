"""Snapshot builder for PHP source trees."""

from apichangelog.extract.builder import SnapshotBuilder, build_snapshot
from apichangelog.extract.discovery import discover_files, file_checksum, is_ignored
from apichangelog.extract.php import ExtractedFile, PhpExtractor, constant_value

__all__ = [
    "ExtractedFile",
    "PhpExtractor",
    "SnapshotBuilder",
    "build_snapshot",
    "constant_value",
    "discover_files",
    "file_checksum",
    "is_ignored",
]
