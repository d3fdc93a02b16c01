"""Tests for extract/builder.py."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from apichangelog.config.models import DiscoveryConfig
from apichangelog.core.errors import ErrorCode, SnapshotError
from apichangelog.extract import SnapshotBuilder, build_snapshot, file_checksum

WriteTree = Callable[[Path, dict[str, str]], Path]

USER = "<?php\nnamespace App;\n\nclass User\n{\n    public function getName(): string {}\n}\n"
HELPERS = "<?php\nnamespace App;\n\nconst LIMIT = 5;\n\nfunction helper(int $x) {}\n"


class TestSnapshotBuilder:
    """Tests for SnapshotBuilder.build."""

    def test_collects_elements_and_checksums(self, tmp_path: Path, write_tree: WriteTree) -> None:
        root = write_tree(tmp_path, {"src/User.php": USER, "src/helpers.php": HELPERS})

        snapshot = build_snapshot(root)

        assert list(snapshot.classes) == ["App\\User"]
        assert list(snapshot.functions) == ["App\\helper"]
        assert list(snapshot.constants) == ["App\\LIMIT"]
        assert snapshot.file_checksums == {
            "src/User.php": file_checksum(USER.encode()),
            "src/helpers.php": file_checksum(HELPERS.encode()),
        }

    def test_default_ignores_apply(self, tmp_path: Path, write_tree: WriteTree) -> None:
        root = write_tree(tmp_path, {"src/User.php": USER, "vendor/dep/Lib.php": HELPERS})

        snapshot = build_snapshot(root)

        assert list(snapshot.file_checksums) == ["src/User.php"]
        assert snapshot.functions == {}

    def test_explicit_patterns_override_config(
        self, tmp_path: Path, write_tree: WriteTree
    ) -> None:
        root = write_tree(tmp_path, {"src/User.php": USER, "vendor/dep/Lib.php": HELPERS})

        snapshot = build_snapshot(root, ignore_patterns=["*/src/*"])

        assert list(snapshot.file_checksums) == ["vendor/dep/Lib.php"]

    def test_broken_file_is_skipped_but_checksummed(
        self, tmp_path: Path, write_tree: WriteTree
    ) -> None:
        root = write_tree(tmp_path, {"src/User.php": USER, "src/Broken.php": "<?php\nclass {"})
        builder = SnapshotBuilder()

        snapshot = builder.build(root)

        assert list(snapshot.classes) == ["App\\User"]
        assert "src/Broken.php" in snapshot.file_checksums
        (failure,) = builder.failures
        assert failure.code == ErrorCode.SNAPSHOT_PARSE_FAILED
        assert failure.details["path"] == "src/Broken.php"

    def test_failures_reset_between_builds(self, tmp_path: Path, write_tree: WriteTree) -> None:
        broken = write_tree(tmp_path / "broken", {"a.php": "<?php\nfunction ("})
        clean = write_tree(tmp_path / "clean", {"a.php": HELPERS})
        builder = SnapshotBuilder()

        builder.build(broken)
        assert len(builder.failures) == 1
        builder.build(clean)
        assert builder.failures == []

    def test_later_duplicate_replaces_earlier(self, tmp_path: Path, write_tree: WriteTree) -> None:
        root = write_tree(
            tmp_path,
            {
                "a.php": "<?php\nfunction dup(int $x) {}\n",
                "b.php": "<?php\nfunction dup(string $x) {}\n",
            },
        )

        snapshot = build_snapshot(root)

        assert snapshot.functions["dup"].source_file == "b.php"

    def test_config_extensions(self, tmp_path: Path, write_tree: WriteTree) -> None:
        root = write_tree(tmp_path, {"lib.inc": HELPERS, "User.php": USER})

        snapshot = build_snapshot(root, config=DiscoveryConfig(extensions=["inc"]))

        assert list(snapshot.file_checksums) == ["lib.inc"]

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        with pytest.raises(SnapshotError) as exc_info:
            build_snapshot(tmp_path / "nope")
        assert exc_info.value.code == ErrorCode.SNAPSHOT_ROOT_NOT_FOUND

    def test_file_root_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "file.php"
        path.write_text("<?php")
        with pytest.raises(SnapshotError):
            build_snapshot(path)

    def test_empty_directory(self, tmp_path: Path) -> None:
        snapshot = build_snapshot(tmp_path)
        assert snapshot.element_count == 0
        assert snapshot.file_checksums == {}
