"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_config() precedence: kwargs > env > project yaml > global yaml > defaults
"""

from __future__ import annotations

from pathlib import Path

import pytest

from apichangelog.config import loader
from apichangelog.config.loader import _deep_merge, _load_yaml, load_config
from apichangelog.core.errors import ConfigError, ErrorCode


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        """Returns empty dict when file doesn't exist."""
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("analysis:\n  strict_semver: true\n")

        assert _load_yaml(yaml_file) == {"analysis": {"strict_semver": True}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert _load_yaml(yaml_file) == {}

    def test_raises_on_invalid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text("analysis: [unclosed\n")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_raises_on_non_mapping(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="top level must be a mapping"):
            _load_yaml(yaml_file)


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_nested_keys_are_merged(self) -> None:
        base = {"analysis": {"strict_semver": True, "current_version": "1.0.0"}}
        override = {"analysis": {"current_version": "2.0.0"}}

        assert _deep_merge(base, override) == {
            "analysis": {"strict_semver": True, "current_version": "2.0.0"}
        }

    def test_non_dict_values_replace(self) -> None:
        assert _deep_merge({"a": [1]}, {"a": [2]}) == {"a": [2]}

    def test_base_is_not_mutated(self) -> None:
        base = {"a": {"b": 1}}
        _deep_merge(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}


class TestLoadConfig:
    """Tests for load_config precedence."""

    def test_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)

        assert config.analysis.current_version == "1.0.0"
        assert config.output.format == "markdown"
        assert config.output.file == "CHANGELOG.md"
        assert config.logging.level == "WARNING"
        assert config.discovery.ignore_patterns == ["*/vendor/*", "*/tests/*", "*/test/*"]

    def test_project_yaml(self, tmp_path: Path) -> None:
        (tmp_path / ".apichangelog.yaml").write_text(
            "analysis:\n  current_version: 3.1.0\noutput:\n  format: json\n"
        )

        config = load_config(tmp_path)

        assert config.analysis.current_version == "3.1.0"
        assert config.output.format == "json"

    def test_project_overrides_global(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        global_file = tmp_path / "global.yaml"
        global_file.write_text("analysis:\n  current_version: 9.9.9\n  strict_semver: true\n")
        monkeypatch.setattr(loader, "GLOBAL_CONFIG_PATH", global_file)
        project = tmp_path / "project"
        project.mkdir()
        (project / ".apichangelog.yaml").write_text("analysis:\n  current_version: 2.0.0\n")

        config = load_config(project)

        assert config.analysis.current_version == "2.0.0"
        assert config.analysis.strict_semver is True

    def test_env_overrides_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / ".apichangelog.yaml").write_text("output:\n  format: json\n")
        monkeypatch.setenv("APICHANGELOG__OUTPUT__FORMAT", "markdown")
        monkeypatch.setenv("APICHANGELOG__ANALYSIS__STRICT_SEMVER", "true")

        config = load_config(tmp_path)

        assert config.output.format == "markdown"
        assert config.analysis.strict_semver is True

    def test_kwargs_override_everything(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / ".apichangelog.yaml").write_text("analysis:\n  current_version: 3.0.0\n")
        monkeypatch.setenv("APICHANGELOG__ANALYSIS__CURRENT_VERSION", "4.0.0")

        config = load_config(tmp_path, analysis={"current_version": "5.0.0"})

        assert config.analysis.current_version == "5.0.0"

    def test_kwargs_merge_with_yaml_section(self, tmp_path: Path) -> None:
        (tmp_path / ".apichangelog.yaml").write_text("analysis:\n  strict_semver: true\n")

        config = load_config(tmp_path, analysis={"current_version": "0.4.0"})

        assert config.analysis.current_version == "0.4.0"
        assert config.analysis.strict_semver is True

    def test_invalid_value_raises_config_error(self, tmp_path: Path) -> None:
        (tmp_path / ".apichangelog.yaml").write_text("output:\n  format: html\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert exc_info.value.details["field"] == "output.format"

    def test_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / ".apichangelog.yaml").write_text("output:\n  file: API.md\n")
        monkeypatch.chdir(tmp_path)

        assert load_config().output.file == "API.md"
