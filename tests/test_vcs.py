from __future__ import annotations

from pathlib import Path

import pytest

from sprout.errors import ToolNotFoundError
from sprout.vcs import GitInitializer


def test_git_initializer_commands(tmp_path: Path, runner, tools_available):
    GitInitializer(runner).initialize(tmp_path, "Initial project setup")
    assert runner.commands == [
        ("git", "init"),
        ("git", "add", "."),
        ("git", "commit", "-m", "Initial project setup"),
    ]
    assert all(cwd == tmp_path for _, cwd in runner.calls)


def test_git_missing(tmp_path: Path, runner, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr("sprout.tools.shutil.which", lambda tool: None)
    with pytest.raises(ToolNotFoundError):
        GitInitializer(runner).initialize(tmp_path, "x")
    assert runner.calls == []
