"""Configuration helpers shared by the scaffold engine and CLI."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigError
from .naming import slugify

__all__ = [
    "DEFAULT_LIBRARIES",
    "ProjectSpec",
    "ScaffoldSettings",
    "TemplateProfile",
    "activate_command",
    "interpreter_path",
    "load_settings",
]


DEFAULT_LIBRARIES: Tuple[str, ...] = ("pandas", "streamlit", "duckdb", "jupyterlab", "pytest")


class TemplateProfile(str, Enum):
    """Named variants of the generated project layout."""

    MINIMAL = "minimal"
    PACKAGED = "packaged"

    @property
    def requires_package_name(self) -> bool:
        return self is TemplateProfile.PACKAGED

    @property
    def lock_file(self) -> str:
        """File receiving the installer's frozen dependency list."""

        if self is TemplateProfile.MINIMAL:
            return "requirements.txt"
        return "requirements.lock"


class ScaffoldSettings(BaseModel):
    """Tunable behaviour for a scaffold run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    default_libraries: Tuple[str, ...] = Field(
        default=DEFAULT_LIBRARIES,
        description="Libraries installed into every new environment.",
    )
    venv_dir: str = Field(default="venv", min_length=1, description="Virtual environment directory name.")
    installer: str = Field(default="uv", description="Environment provisioner strategy: 'uv' or 'venv'.")
    python: str = Field(default="python3", description="Interpreter used by the 'venv' provisioner.")
    env_info_file: str = Field(default=".env_info.txt", min_length=1)
    commit_message: str = Field(default="Initial project setup", min_length=1)
    init_git: bool = True
    install: bool = True

    def merged(self, **overrides: Any) -> "ScaffoldSettings":
        """Return a copy with the non-``None`` ``overrides`` applied and re-validated."""

        values = self.model_dump()
        values.update({key: value for key, value in overrides.items() if value is not None})
        return _validate_settings(values, source="command line")


def _validate_settings(values: Mapping[str, Any], *, source: str) -> ScaffoldSettings:
    try:
        return ScaffoldSettings.model_validate(dict(values))
    except PydanticValidationError as exc:
        raise ConfigError(f"invalid settings from {source}: {exc}") from exc


def load_settings(path: str | Path | None = None) -> ScaffoldSettings:
    """Load :class:`ScaffoldSettings` from a TOML file.

    The file may either hold the settings at the top level or inside a
    ``[tool.sprout]`` table, so a project's own ``pyproject.toml`` can be
    reused. ``None`` returns the defaults.
    """

    if path is None:
        return ScaffoldSettings()

    config_path = Path(path).expanduser()
    try:
        with config_path.open("rb") as handle:
            data = tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"cannot read settings file '{config_path}': {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"settings file '{config_path}' is not valid TOML: {exc}") from exc

    tool = data.get("tool")
    table = tool.get("sprout", {}) if isinstance(tool, dict) else data
    if not isinstance(table, dict):
        raise ConfigError(f"[tool.sprout] in '{config_path}' must be a table")
    return _validate_settings(table, source=str(config_path))


def interpreter_path(root: Path, venv_dir: str) -> Path:
    """Absolute path of the interpreter inside the project's environment."""

    if os.name == "nt":
        return root / venv_dir / "Scripts" / "python.exe"
    return root / venv_dir / "bin" / "python"


def activate_command(root: Path, venv_dir: str) -> str:
    if os.name == "nt":
        return str(root / venv_dir / "Scripts" / "activate")
    return f"source {root / venv_dir / 'bin' / 'activate'}"


@dataclass(frozen=True, slots=True)
class ProjectSpec:
    """Validated description of the project to create.

    Attributes
    ----------
    name:
        The project name exactly as it will appear on disk.
    package_name:
        :attr:`name` with every ``-`` replaced by ``_``. Only guaranteed to be
        importable for profiles that require a package.
    profile:
        The :class:`TemplateProfile` used to compute the plan.
    root:
        Absolute path of the directory that will be created.
    """

    name: str
    package_name: str
    profile: TemplateProfile
    root: Path

    @property
    def distribution_name(self) -> str:
        """Name used for the ``[project]`` table of the generated manifest."""

        return slugify(self.name) or self.package_name

    def context(self, settings: ScaffoldSettings | None = None) -> Mapping[str, Any]:
        """Return the values exposed to project templates."""

        settings = settings or ScaffoldSettings()
        return {
            "name": self.name,
            "package_name": self.package_name,
            "distribution_name": self.distribution_name,
            "profile": self.profile.value,
            "root": str(self.root),
            "venv_dir": settings.venv_dir,
            "interpreter": str(interpreter_path(self.root, settings.venv_dir)),
            "activate_command": activate_command(self.root, settings.venv_dir),
            "installer": settings.installer,
            "env_info_file": settings.env_info_file,
            "lock_file": self.profile.lock_file,
            "libraries": list(settings.default_libraries),
        }
