from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from sprout.errors import ExternalToolFailure, NonZeroExitError, ToolNotFoundError
from sprout.tools import require_tool, run_tool


def test_require_tool_missing(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr("sprout.tools.shutil.which", lambda tool: None)
    with pytest.raises(ToolNotFoundError) as excinfo:
        require_tool("uv", "Install it with 'pip install uv'")
    assert isinstance(excinfo.value, ExternalToolFailure)
    assert "'uv' command not found" in str(excinfo.value)
    assert "pip install uv" in str(excinfo.value)


def test_require_tool_absolute_path(tmp_path: Path):
    executable = tmp_path / "python"
    executable.write_text("", encoding="utf-8")
    assert require_tool(str(executable)) == str(executable)
    with pytest.raises(ToolNotFoundError):
        require_tool(str(tmp_path / "absent"))


def test_run_tool_captures_output(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    seen = {}

    def fake_run(command, **kwargs):
        seen["command"] = command
        seen["cwd"] = kwargs["cwd"]
        return subprocess.CompletedProcess(command, 0, stdout="ok\n", stderr="")

    monkeypatch.setattr("sprout.tools.shutil.which", lambda tool: f"/usr/bin/{tool}")
    monkeypatch.setattr("sprout.tools.subprocess.run", fake_run)

    result = run_tool(["git", "init"], cwd=tmp_path)

    assert seen["command"] == ("/usr/bin/git", "init")
    assert seen["cwd"] == tmp_path
    assert result.argv == ("git", "init")
    assert result.stdout == "ok\n"


def test_run_tool_non_zero_exit(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr("sprout.tools.shutil.which", lambda tool: f"/usr/bin/{tool}")
    monkeypatch.setattr(
        "sprout.tools.subprocess.run",
        lambda command, **kwargs: subprocess.CompletedProcess(command, 2, stdout="", stderr="warn\nfatal: nope\n"),
    )

    with pytest.raises(NonZeroExitError) as excinfo:
        run_tool(["git", "commit", "-m", "x"])

    assert excinfo.value.returncode == 2
    assert excinfo.value.argv == ("git", "commit", "-m", "x")
    assert "fatal: nope" in str(excinfo.value)


def test_run_tool_rejects_empty_argv():
    with pytest.raises(ValueError):
        run_tool([])
