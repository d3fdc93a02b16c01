"""Tests for core/console.py module.

Covers:
- _is_tty() function
- status() function
- progress() generator
- pluralize() function
- suppress_console_logs() context manager
"""

from __future__ import annotations

import sys
from io import StringIO
from unittest.mock import patch

import pytest

from apichangelog.core.console import (
    _PROGRESS_THRESHOLD,
    _STYLES,
    _is_tty,
    definition_list,
    is_console_suppressed,
    pluralize,
    progress,
    status,
    suppress_console_logs,
)


class TestIsTty:
    def test_false_for_stringio(self) -> None:
        """Returns False for non-TTY stderr."""
        original = sys.stderr
        try:
            sys.stderr = StringIO()
            assert _is_tty() is False
        finally:
            sys.stderr = original


class TestStatus:
    """Tests for status function."""

    def test_prints_message(self) -> None:
        with patch("apichangelog.core.console._console") as mock_console:
            status("Analyzing codebases")
            mock_console.print.assert_called_once()

    @pytest.mark.parametrize(("style", "mark"), [("success", "✓"), ("error", "✗")])
    def test_styles(self, style: str, mark: str) -> None:
        with patch("apichangelog.core.console._console") as mock_console:
            status("Done", style=style)
            assert mark in mock_console.print.call_args[0][0]

    def test_with_indent(self) -> None:
        with patch("apichangelog.core.console._console") as mock_console:
            status("Parsing old codebase...", indent=2)
            assert mock_console.print.call_args[0][0] == (
                "  " + _STYLES["info"] + "Parsing old codebase..."
            )


class TestProgress:
    """Tests for progress generator."""

    def test_yields_all_items(self) -> None:
        assert list(progress([1, 2, 3], desc="Parsing")) == [1, 2, 3]

    def test_iterator_without_len(self) -> None:
        assert list(progress(iter([1, 2, 3]))) == [1, 2, 3]

    def test_large_input_on_tty_suppresses_logs(self) -> None:
        """While the bar is live, console logging is paused."""
        items = list(range(_PROGRESS_THRESHOLD + 1))
        seen: list[bool] = []

        with (
            patch("apichangelog.core.console._is_tty", return_value=True),
            patch("apichangelog.core.console._console", new=None),
            patch("apichangelog.core.console.Progress") as mock_progress,
        ):
            for _ in progress(items, desc="Parsing"):
                seen.append(is_console_suppressed())

        assert all(seen) and len(seen) == len(items)
        assert mock_progress.return_value.__enter__.return_value.advance.call_count == len(items)
        assert is_console_suppressed() is False


class TestPluralize:
    @pytest.mark.parametrize(
        ("count", "expected"),
        [(0, "0 changes"), (1, "1 change"), (2, "2 changes")],
    )
    def test_regular(self, count: int, expected: str) -> None:
        assert pluralize(count, "change") == expected

    def test_irregular(self) -> None:
        assert pluralize(3, "entry", "entries") == "3 entries"


class TestSuppressConsoleLogs:
    def test_resets_after_exception(self) -> None:
        with pytest.raises(RuntimeError), suppress_console_logs():
            assert is_console_suppressed()
            raise RuntimeError("boom")
        assert not is_console_suppressed()


class TestDefinitionList:
    def test_prints_table(self) -> None:
        with patch("apichangelog.core.console._console") as mock_console:
            definition_list([("Current:", "1.0.0"), ("Recommended:", "1.1.0")])
            table = mock_console.print.call_args[0][0]
            assert table.row_count == 2
