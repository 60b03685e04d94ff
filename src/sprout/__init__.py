"""Scaffold new Python projects.

The package validates a project name, computes a deterministic file and
directory plan for a template profile, writes it to disk, provisions a
virtual environment and records an initial git commit. Each stage can be used
on its own or through :class:`ScaffoldEngine` and the ``sprout`` command.
"""

from __future__ import annotations

from .config import ProjectSpec, ScaffoldSettings, TemplateProfile, load_settings
from .engine import ScaffoldEngine, ScaffoldReport
from .errors import (
    DirectoryExistsError,
    EmptyNameError,
    ExternalToolFailure,
    MaterializationError,
    NameValidationError,
    SproutError,
    UnsafeNameError,
)
from .materialize import materialize, rollback
from .plan import build_plan
from .schema import FileNode, NodeKind, ScaffoldPlan, ScaffoldResult
from .template import TemplateRenderer, TemplateRenderingError
from .validate import validate

__all__ = [
    "DirectoryExistsError",
    "EmptyNameError",
    "ExternalToolFailure",
    "FileNode",
    "MaterializationError",
    "NameValidationError",
    "NodeKind",
    "ProjectSpec",
    "ScaffoldEngine",
    "ScaffoldPlan",
    "ScaffoldReport",
    "ScaffoldResult",
    "ScaffoldSettings",
    "SproutError",
    "TemplateProfile",
    "TemplateRenderer",
    "TemplateRenderingError",
    "UnsafeNameError",
    "build_plan",
    "load_settings",
    "materialize",
    "rollback",
    "validate",
]

__version__ = "0.1.0"
