"""Turn a raw project name into a :class:`~sprout.config.ProjectSpec`."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from .config import ProjectSpec, TemplateProfile
from .errors import DirectoryExistsError, EmptyNameError, UnsafeNameError
from .naming import is_package_name, package_name_for, unsafe_name_reason

__all__ = ["validate"]


def _path_exists(path: Path) -> bool:
    return path.exists() or path.is_symlink()


def validate(
    raw_name: str | None,
    profile: TemplateProfile | str = TemplateProfile.MINIMAL,
    *,
    cwd: str | Path | None = None,
    exists: Callable[[Path], bool] | None = None,
) -> ProjectSpec:
    """Validate ``raw_name`` for ``profile`` and resolve it against ``cwd``.

    ``exists`` is the directory-existence probe. It defaults to a filesystem
    check and is the only thing consulted outside the arguments; nothing is
    created or modified.

    Raises
    ------
    EmptyNameError
        ``raw_name`` is empty or whitespace only.
    UnsafeNameError
        ``raw_name`` is a traversal segment, contains path separators or
        characters illegal in paths, or cannot be turned into an importable
        package for a profile that needs one.
    DirectoryExistsError
        ``cwd / raw_name`` already exists.
    """

    name = (raw_name or "").strip()
    if not name:
        raise EmptyNameError()

    reason = unsafe_name_reason(name)
    if reason is not None:
        raise UnsafeNameError(name, reason)

    profile = TemplateProfile(profile)
    package_name = package_name_for(name)
    if profile.requires_package_name and not is_package_name(package_name):
        raise UnsafeNameError(
            name,
            f"'{package_name}' is not a valid Python package name for the '{profile.value}' profile",
        )

    base = Path(cwd) if cwd is not None else Path.cwd()
    root = (base.expanduser() / name).absolute()
    probe = exists or _path_exists
    if probe(root):
        raise DirectoryExistsError(root)

    return ProjectSpec(name=name, package_name=package_name, profile=profile, root=root)
