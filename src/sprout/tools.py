"""Blocking invocation of external command line tools."""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from .errors import NonZeroExitError, ToolNotFoundError

__all__ = ["CommandRunner", "ToolResult", "require_tool", "run_tool"]


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Captured output of a finished command."""

    argv: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str


CommandRunner = Callable[..., ToolResult]


def require_tool(tool: str, hint: str = "") -> str:
    """Return the absolute path of ``tool`` or raise :class:`ToolNotFoundError`."""

    if Path(tool).is_absolute():
        if Path(tool).exists():
            return tool
        raise ToolNotFoundError(tool, hint)
    resolved = shutil.which(tool)
    if resolved is None:
        raise ToolNotFoundError(tool, hint)
    return resolved


def run_tool(argv: Sequence[str], *, cwd: str | Path | None = None, hint: str = "") -> ToolResult:
    """Run ``argv`` to completion and return its captured output.

    The executable is resolved on ``PATH`` first so a missing tool is
    reported as :class:`ToolNotFoundError` rather than a bare ``OSError``.
    A non-zero exit status raises :class:`NonZeroExitError`. Nothing is
    retried.
    """

    if not argv:
        raise ValueError("argv must not be empty")

    executable = require_tool(argv[0], hint)
    command = (executable, *argv[1:])
    LOGGER.debug("Running %s (cwd=%s)", shlex.join(argv), cwd)
    try:
        completed = subprocess.run(
            command,
            cwd=cwd,
            capture_output=True,
            check=False,
            text=True,
        )
    except FileNotFoundError as exc:
        raise ToolNotFoundError(argv[0], hint) from exc

    result = ToolResult(
        argv=tuple(argv),
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )
    if completed.returncode != 0:
        raise NonZeroExitError(argv, completed.returncode, completed.stderr)
    return result
