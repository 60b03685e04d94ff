from __future__ import annotations

import sys
from pathlib import Path
from typing import Sequence

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from sprout.errors import NonZeroExitError, ToolNotFoundError  # noqa: E402
from sprout.tools import ToolResult  # noqa: E402

FROZEN_REQUIREMENTS = "duckdb==1.1.0\npandas==2.2.2\n"


class FakeRunner:
    """Stand-in for :func:`sprout.tools.run_tool` that records every command."""

    def __init__(self, *, missing: Sequence[str] = (), failing: Sequence[str] = ()) -> None:
        self.calls: list[tuple[tuple[str, ...], Path | None]] = []
        self.missing = set(missing)
        self.failing = tuple(failing)

    def __call__(self, argv: Sequence[str], *, cwd: str | Path | None = None, hint: str = "") -> ToolResult:
        argv = tuple(argv)
        if argv[0] in self.missing:
            raise ToolNotFoundError(argv[0], hint)
        self.calls.append((argv, Path(cwd) if cwd is not None else None))
        command = " ".join(argv)
        if any(command.startswith(prefix) for prefix in self.failing):
            raise NonZeroExitError(argv, 1, "boom")
        stdout = FROZEN_REQUIREMENTS if "freeze" in argv else ""
        return ToolResult(argv=argv, returncode=0, stdout=stdout, stderr="")

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [argv for argv, _ in self.calls]


@pytest.fixture()
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def tools_available(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pretend every external tool is installed."""

    monkeypatch.setattr("sprout.provision.require_tool", lambda tool, hint="": f"/usr/bin/{tool}")
    monkeypatch.setattr("sprout.vcs.require_tool", lambda tool, hint="": f"/usr/bin/{tool}")


@pytest.fixture()
def make_runner():
    return FakeRunner


@pytest.fixture()
def frozen_requirements() -> str:
    return FROZEN_REQUIREMENTS
