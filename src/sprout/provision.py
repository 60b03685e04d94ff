"""Environment provisioners: create a virtual environment and install into it."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .config import ProjectSpec, ScaffoldSettings, TemplateProfile, interpreter_path
from .errors import ConfigError, ExternalToolFailure
from .tools import CommandRunner, require_tool, run_tool

__all__ = [
    "EnvironmentProvisioner",
    "PROVISIONERS",
    "ProvisionResult",
    "UvProvisioner",
    "VenvPipProvisioner",
    "create_provisioner",
]


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProvisionResult:
    interpreter: Path
    lock_file: Path
    installed: tuple[str, ...]


class EnvironmentProvisioner(ABC):
    """Strategy for creating an isolated environment and installing packages."""

    name = "provisioner"

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self._run = runner or run_tool

    @abstractmethod
    def check(self) -> None:
        """Raise :class:`~sprout.errors.ToolNotFoundError` when the tool is unavailable."""

    @abstractmethod
    def create_environment(self, root: Path, venv_dir: str) -> Path:
        """Create the environment below ``root`` and return its interpreter."""

    @abstractmethod
    def install(self, interpreter: Path, requirements: Sequence[str], *, cwd: Path) -> None:
        """Install ``requirements`` into the environment of ``interpreter``."""

    @abstractmethod
    def freeze(self, interpreter: Path, *, cwd: Path) -> str:
        """Return the pinned requirement list of the environment."""

    def requirements_for(self, spec: ProjectSpec, settings: ScaffoldSettings) -> tuple[str, ...]:
        if spec.profile is TemplateProfile.PACKAGED:
            return ("-e", ".[dev]")
        return tuple(settings.default_libraries)

    def provision(self, spec: ProjectSpec, settings: ScaffoldSettings) -> ProvisionResult:
        """Create the environment, install declared dependencies and export the lock file."""

        self.check()
        LOGGER.info("Creating virtual environment '%s' with %s", settings.venv_dir, self.name)
        interpreter = self.create_environment(spec.root, settings.venv_dir)

        installed: tuple[str, ...] = ()
        if settings.install:
            installed = self.requirements_for(spec, settings)
            if installed:
                LOGGER.info("Installing %s", " ".join(installed))
                self.install(interpreter, installed, cwd=spec.root)
        else:
            LOGGER.info("Skipping dependency installation")

        lock_path = spec.root / spec.profile.lock_file
        frozen = self.freeze(interpreter, cwd=spec.root)
        try:
            lock_path.write_text(frozen, encoding="utf-8")
        except OSError as exc:
            raise ExternalToolFailure(f"cannot write '{lock_path}': {exc.strerror or exc}") from exc
        LOGGER.info("Wrote %s", lock_path)
        return ProvisionResult(interpreter=interpreter, lock_file=lock_path, installed=installed)


class UvProvisioner(EnvironmentProvisioner):
    """Provision with ``uv venv`` and ``uv pip``."""

    name = "uv"
    hint = "Install it with 'pip install uv' or see https://github.com/astral-sh/uv"

    def check(self) -> None:
        require_tool("uv", self.hint)

    def create_environment(self, root: Path, venv_dir: str) -> Path:
        self._run(["uv", "venv", venv_dir, "--seed"], cwd=root, hint=self.hint)
        return interpreter_path(root, venv_dir)

    def install(self, interpreter: Path, requirements: Sequence[str], *, cwd: Path) -> None:
        self._run(["uv", "pip", "install", "--python", str(interpreter), *requirements], cwd=cwd, hint=self.hint)

    def freeze(self, interpreter: Path, *, cwd: Path) -> str:
        result = self._run(
            ["uv", "pip", "freeze", "--exclude-editable", "--python", str(interpreter)],
            cwd=cwd,
            hint=self.hint,
        )
        return result.stdout


class VenvPipProvisioner(EnvironmentProvisioner):
    """Provision with the standard ``venv`` module and ``pip``."""

    name = "venv"

    def __init__(self, runner: CommandRunner | None = None, *, python: str = "python3") -> None:
        super().__init__(runner)
        self.python = python

    def check(self) -> None:
        require_tool(self.python, "A Python interpreter is needed to create the environment.")

    def create_environment(self, root: Path, venv_dir: str) -> Path:
        self._run([self.python, "-m", "venv", venv_dir], cwd=root)
        return interpreter_path(root, venv_dir)

    def install(self, interpreter: Path, requirements: Sequence[str], *, cwd: Path) -> None:
        self._run([str(interpreter), "-m", "pip", "install", *requirements], cwd=cwd)

    def freeze(self, interpreter: Path, *, cwd: Path) -> str:
        result = self._run([str(interpreter), "-m", "pip", "freeze", "--exclude-editable"], cwd=cwd)
        return result.stdout


PROVISIONERS = {
    UvProvisioner.name: UvProvisioner,
    VenvPipProvisioner.name: VenvPipProvisioner,
}


def create_provisioner(
    name: str,
    *,
    python: str = "python3",
    runner: CommandRunner | None = None,
) -> EnvironmentProvisioner:
    """Instantiate the provisioner registered under ``name``."""

    if name == VenvPipProvisioner.name:
        return VenvPipProvisioner(runner, python=python)
    if name == UvProvisioner.name:
        return UvProvisioner(runner)
    choices = ", ".join(sorted(PROVISIONERS))
    raise ConfigError(f"unknown installer '{name}'. Expected one of: {choices}")
