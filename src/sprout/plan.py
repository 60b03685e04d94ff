"""Compute the ordered file/directory plan for a project."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from .config import ProjectSpec, ScaffoldSettings
from .errors import PlanError
from .profiles import layout_for
from .schema import FileNode, NodeKind, ScaffoldPlan
from .template import TemplateRenderer, TemplateRenderingError

__all__ = ["build_plan"]


def _render(renderer: TemplateRenderer, template: str, context: Mapping[str, Any]) -> str:
    try:
        return renderer.render_string(template, context, missing="error")
    except TemplateRenderingError as exc:
        raise PlanError(f"cannot render template: {exc}") from exc


def _order_key(path: str) -> tuple[int, str]:
    return len(PurePosixPath(path).parts), path


def build_plan(
    spec: ProjectSpec,
    settings: ScaffoldSettings | None = None,
    *,
    renderer: TemplateRenderer | None = None,
) -> ScaffoldPlan:
    """Return the deterministic :class:`ScaffoldPlan` for ``spec``.

    Directories come first, shallowest to deepest, so every file follows the
    directories that contain it. Parent directories a layout does not list
    explicitly are added. Files keep the order of the profile layout.
    """

    settings = settings or ScaffoldSettings()
    renderer = renderer or TemplateRenderer()
    context = spec.context(settings)
    layout = layout_for(spec.profile)

    directories: set[str] = set()
    files: list[tuple[str, str]] = []
    for directory in layout.directories:
        directories.add(_render(renderer, directory, context))
    for path_template, content_template in layout.files:
        path = _render(renderer, path_template, context)
        files.append((path, _render(renderer, content_template, context)))

    for path in [*directories, *(path for path, _ in files)]:
        directories.update(str(parent) for parent in PurePosixPath(path).parents if str(parent) != ".")

    try:
        nodes = [
            FileNode(relative_path=directory, kind=NodeKind.DIRECTORY)
            for directory in sorted(directories, key=_order_key)
        ]
        nodes.extend(
            FileNode(relative_path=path, kind=NodeKind.TEXT_FILE, content=content) for path, content in files
        )
        return ScaffoldPlan(profile=spec.profile, nodes=tuple(nodes))
    except PydanticValidationError as exc:
        raise PlanError(f"inconsistent plan for '{spec.name}': {exc}") from exc
