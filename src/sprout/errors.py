"""Exception hierarchy shared by the scaffold engine and the CLI."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from .schema import ScaffoldResult

__all__ = [
    "ConfigError",
    "DirectoryCreateFailed",
    "DirectoryExistsError",
    "EmptyNameError",
    "ExternalToolFailure",
    "FileWriteFailed",
    "MaterializationError",
    "NameValidationError",
    "NonZeroExitError",
    "PlanError",
    "RootCreationFailed",
    "SproutError",
    "ToolNotFoundError",
    "UnsafeNameError",
]


class SproutError(RuntimeError):
    """Base class for every failure reported by :mod:`sprout`."""

    category = "error"
    exit_code = 1

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigError(SproutError):
    """Raised when a settings file cannot be read or validated."""

    category = "config"


class NameValidationError(SproutError):
    """The requested project name cannot be used."""

    category = "validation"


class EmptyNameError(NameValidationError):
    category = "EmptyName"

    def __init__(self) -> None:
        super().__init__("project name must not be empty")


class UnsafeNameError(NameValidationError):
    category = "UnsafeName"

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"project name {name!r} is not usable: {reason}")
        self.name = name
        self.reason = reason


class DirectoryExistsError(NameValidationError):
    category = "DirectoryExists"

    def __init__(self, path: Path) -> None:
        super().__init__(f"directory '{path}' already exists")
        self.path = path


class PlanError(SproutError):
    """A computed plan violates its own ordering or path rules."""

    category = "PlanError"


class MaterializationError(SproutError):
    """Writing a plan to disk failed part way through.

    ``result`` carries the failed :class:`~sprout.schema.ScaffoldResult`,
    including the paths that were created before the failure.
    """

    category = "materialization"

    def __init__(self, message: str, result: "ScaffoldResult | None" = None) -> None:
        super().__init__(message)
        self.result = result


class RootCreationFailed(MaterializationError):
    category = "RootCreationFailed"


class DirectoryCreateFailed(MaterializationError):
    category = "DirectoryCreateFailed"


class FileWriteFailed(MaterializationError):
    category = "FileWriteFailed"


class ExternalToolFailure(SproutError):
    """An external collaborator (installer, VCS) could not complete."""

    category = "external"

    def __init__(self, message: str, *, argv: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.argv = tuple(argv)
        self.result: "ScaffoldResult | None" = None


class ToolNotFoundError(ExternalToolFailure):
    category = "ToolNotFound"

    def __init__(self, tool: str, hint: str = "") -> None:
        message = f"'{tool}' command not found"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(message, argv=(tool,))
        self.tool = tool


class NonZeroExitError(ExternalToolFailure):
    category = "NonZeroExit"

    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        command = " ".join(argv)
        message = f"'{command}' exited with status {returncode}"
        detail = stderr.strip()
        if detail:
            message = f"{message}: {detail.splitlines()[-1]}"
        super().__init__(message, argv=argv)
        self.returncode = returncode
        self.stderr = stderr
