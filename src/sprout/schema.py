"""Plan and result schemas exchanged between the scaffold stages."""

from __future__ import annotations

from enum import Enum
from pathlib import PurePosixPath
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .config import TemplateProfile


class NodeKind(str, Enum):
    """Kinds of entries a plan can create."""

    DIRECTORY = "directory"
    TEXT_FILE = "text_file"


class Outcome(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class FileNode(BaseModel):
    """Single directory or text file to create, relative to the project root."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    relative_path: str = Field(..., min_length=1, description="POSIX style path relative to the root.")
    kind: NodeKind = Field(..., description="Whether the node is a directory or a text file.")
    content: Optional[str] = Field(None, description="Rendered text for text files.")

    @model_validator(mode="after")
    def _check_node(self) -> "FileNode":
        path = PurePosixPath(self.relative_path)
        if path.is_absolute() or ".." in path.parts or str(path) != self.relative_path:
            raise ValueError(f"'{self.relative_path}' must be a normalised relative path")
        if self.kind is NodeKind.DIRECTORY and self.content is not None:
            raise ValueError(f"directory '{self.relative_path}' cannot carry content")
        if self.kind is NodeKind.TEXT_FILE and self.content is None:
            raise ValueError(f"text file '{self.relative_path}' needs content")
        return self

    @property
    def parents(self) -> Tuple[str, ...]:
        """Ancestor directories of this node, outermost first."""

        parents = PurePosixPath(self.relative_path).parents
        return tuple(str(parent) for parent in reversed(parents) if str(parent) != ".")

    @property
    def depth(self) -> int:
        return len(PurePosixPath(self.relative_path).parts)


class ScaffoldPlan(BaseModel):
    """Ordered set of :class:`FileNode` entries for one project.

    Every node's ancestor directories appear as directory nodes earlier in
    :attr:`nodes`, so the plan can be materialized front to back.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    profile: TemplateProfile
    nodes: Tuple[FileNode, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def _check_order(self) -> "ScaffoldPlan":
        seen_directories: set[str] = set()
        seen_paths: set[str] = set()
        for node in self.nodes:
            if node.relative_path in seen_paths:
                raise ValueError(f"'{node.relative_path}' appears more than once")
            missing = [parent for parent in node.parents if parent not in seen_directories]
            if missing:
                raise ValueError(f"'{node.relative_path}' is listed before its directory '{missing[0]}'")
            seen_paths.add(node.relative_path)
            if node.kind is NodeKind.DIRECTORY:
                seen_directories.add(node.relative_path)
        return self

    @property
    def directories(self) -> Tuple[FileNode, ...]:
        return tuple(node for node in self.nodes if node.kind is NodeKind.DIRECTORY)

    @property
    def files(self) -> Tuple[FileNode, ...]:
        return tuple(node for node in self.nodes if node.kind is NodeKind.TEXT_FILE)

    def get(self, relative_path: str) -> FileNode | None:
        for node in self.nodes:
            if node.relative_path == relative_path:
                return node
        return None

    def index(self, relative_path: str) -> int:
        """Position of ``relative_path`` in the plan."""

        for position, node in enumerate(self.nodes):
            if node.relative_path == relative_path:
                return position
        raise KeyError(relative_path)


class ScaffoldResult(BaseModel):
    """Outcome of materializing a plan."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    root: str = Field(..., description="Absolute path of the project root.")
    created_paths: Tuple[str, ...] = Field(default_factory=tuple, description="Paths created, in order.")
    outcome: Outcome = Outcome.SUCCESS
    reason: Optional[str] = Field(None, description="Error category when the outcome is a failure.")
    message: Optional[str] = Field(None, description="Human readable failure description.")
    failed_path: Optional[str] = Field(None, description="Path that could not be created, if any.")
    rolled_back: bool = False

    @classmethod
    def success(cls, root: str, created_paths: Tuple[str, ...]) -> "ScaffoldResult":
        return cls(root=root, created_paths=created_paths)

    @classmethod
    def failure(
        cls,
        root: str,
        reason: str,
        message: str,
        partial_paths: Tuple[str, ...] = (),
        failed_path: str | None = None,
    ) -> "ScaffoldResult":
        return cls(
            root=root,
            created_paths=partial_paths,
            outcome=Outcome.FAILURE,
            reason=reason,
            message=message,
            failed_path=failed_path,
        )

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    @property
    def partial_paths(self) -> Tuple[str, ...]:
        """Paths created before a failure. Empty for successful results."""

        if self.ok:
            return ()
        return self.created_paths


__all__ = [
    "FileNode",
    "NodeKind",
    "Outcome",
    "ScaffoldPlan",
    "ScaffoldResult",
]
