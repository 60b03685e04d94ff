"""Initialise a git repository holding the freshly scaffolded project."""

from __future__ import annotations

import logging
from pathlib import Path

from .tools import CommandRunner, require_tool, run_tool

__all__ = ["GitInitializer"]


LOGGER = logging.getLogger(__name__)


class GitInitializer:
    """Create a repository, stage everything and record one initial commit."""

    name = "git"

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self._run = runner or run_tool

    def check(self) -> None:
        require_tool("git")

    def initialize(self, root: Path, message: str) -> None:
        self.check()
        LOGGER.info("Initializing git repository in %s", root)
        self._run(["git", "init"], cwd=root)
        self._run(["git", "add", "."], cwd=root)
        self._run(["git", "commit", "-m", message], cwd=root)
        LOGGER.info("Recorded initial commit: %s", message)
