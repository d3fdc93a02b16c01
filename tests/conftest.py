"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides helpers for building small PHP source trees.
"""

import logging
import os
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local apichangelog package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of apichangelog modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("apichangelog"):
        del sys.modules[module_name]


WriteTree = Callable[[Path, dict[str, str]], Path]


def _write_tree(root: Path, files: dict[str, str]) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


@pytest.fixture
def write_tree() -> WriteTree:
    """Write ``{relative_path: content}`` under a root and return the root."""
    return _write_tree


@pytest.fixture(autouse=True)
def _isolate_global_config(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Keep a developer's ~/.config/apichangelog and APICHANGELOG__* env out of tests."""
    from apichangelog.config import loader

    monkeypatch.setattr(
        loader, "GLOBAL_CONFIG_PATH", tmp_path_factory.mktemp("global") / "config.yaml"
    )
    for key in list(os.environ):
        if key.upper().startswith("APICHANGELOG__"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def _reset_root_handlers() -> Iterator[None]:
    """Drop handlers bound to streams that CliRunner closes after each invoke."""
    yield
    root = logging.getLogger()
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
