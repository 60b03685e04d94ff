"""Scaffold engine: validate, plan, materialize, provision and commit."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .config import ProjectSpec, ScaffoldSettings, TemplateProfile
from .errors import (
    DirectoryCreateFailed,
    ExternalToolFailure,
    FileWriteFailed,
    MaterializationError,
    RootCreationFailed,
)
from .materialize import materialize, rollback
from .plan import build_plan
from .provision import EnvironmentProvisioner, ProvisionResult, create_provisioner
from .schema import ScaffoldPlan, ScaffoldResult
from .template import TemplateRenderer
from .validate import validate
from .vcs import GitInitializer

__all__ = ["ScaffoldEngine", "ScaffoldReport"]


LOGGER = logging.getLogger(__name__)

_MATERIALIZATION_ERRORS = {
    error.category: error for error in (RootCreationFailed, DirectoryCreateFailed, FileWriteFailed)
}


@dataclass(frozen=True, slots=True)
class ScaffoldReport:
    """Everything a successful run produced."""

    spec: ProjectSpec
    plan: ScaffoldPlan
    result: ScaffoldResult
    environment: ProvisionResult | None = None
    committed: bool = False


class ScaffoldEngine:
    """Run the scaffold pipeline for one project.

    Stages run strictly in sequence and each receives its inputs explicitly.
    A materialization failure removes the partially created root, since
    nothing outside the process depends on it yet. Failures of the
    provisioner or git happen after the project files exist and leave them
    in place.
    """

    def __init__(
        self,
        settings: ScaffoldSettings | None = None,
        *,
        provisioner: EnvironmentProvisioner | None = None,
        vcs: GitInitializer | None = None,
        renderer: TemplateRenderer | None = None,
        cwd: str | Path | None = None,
    ) -> None:
        self.settings = settings or ScaffoldSettings()
        self.provisioner = provisioner or create_provisioner(self.settings.installer, python=self.settings.python)
        self.vcs = vcs or GitInitializer()
        self.renderer = renderer or TemplateRenderer()
        self.cwd = Path(cwd) if cwd is not None else None

    def check_tools(self) -> None:
        """Verify the external tools this run needs before anything is created."""

        self.provisioner.check()
        if self.settings.init_git:
            self.vcs.check()

    def prepare(self, raw_name: str | None, profile: TemplateProfile | str) -> tuple[ProjectSpec, ScaffoldPlan]:
        """Validate ``raw_name`` and compute its plan without touching the filesystem."""

        spec = validate(raw_name, profile, cwd=self.cwd)
        plan = build_plan(spec, self.settings, renderer=self.renderer)
        return spec, plan

    def run(
        self,
        raw_name: str | None,
        profile: TemplateProfile | str = TemplateProfile.MINIMAL,
    ) -> ScaffoldReport:
        """Scaffold the project named ``raw_name``.

        Raises
        ------
        NameValidationError
            Nothing was created.
        MaterializationError
            The partially created root was removed; ``error.result`` lists what
            had been created.
        ExternalToolFailure
            The project files remain on disk; ``error.result`` describes them.
        """

        spec, plan = self.prepare(raw_name, profile)
        LOGGER.info("Creating '%s' (%s profile) at %s", spec.name, spec.profile.value, spec.root)

        result = materialize(plan, spec.root)
        if not result.ok:
            result = rollback(result)
            error_type = _MATERIALIZATION_ERRORS.get(result.reason or "", MaterializationError)
            raise error_type(result.message or "materialization failed", result)

        try:
            environment = self.provisioner.provision(spec, self.settings)
            committed = False
            if self.settings.init_git:
                self.vcs.initialize(spec.root, self.settings.commit_message)
                committed = True
        except ExternalToolFailure as exc:
            LOGGER.error("External tool failed after scaffolding %s: %s", spec.root, exc)
            exc.result = result
            raise

        return ScaffoldReport(spec=spec, plan=plan, result=result, environment=environment, committed=committed)
