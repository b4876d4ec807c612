"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from batl.core.paths import BATLRC_FILENAME, ROOT_ENV_VAR, RootSearch, ensure_root_dirs


@pytest.fixture
def batl_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A set-up Battalion root selected through BATL_ROOT."""
    root = tmp_path / "battalion"
    ensure_root_dirs(root)
    (root / BATLRC_FILENAME).write_text('[api]\ncredentials = "YOUR-KEY-GOES-HERE"\n')
    monkeypatch.setenv(ROOT_ENV_VAR, str(root))
    return root


@pytest.fixture
def no_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An environment in which no Battalion root resolves.

    Returns the (empty) home directory.
    """
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.delenv(ROOT_ENV_VAR, raising=False)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    return home


@pytest.fixture
def isolated_search(tmp_path: Path) -> RootSearch:
    """Root resolution inputs that ignore the real process state."""
    home = tmp_path / "home"
    cwd = tmp_path / "cwd"
    home.mkdir()
    cwd.mkdir()
    return RootSearch(environ={}, cwd=cwd, home=home)
