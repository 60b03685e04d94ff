"""Write a :class:`~sprout.schema.ScaffoldPlan` to the filesystem."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .errors import DirectoryCreateFailed, FileWriteFailed, RootCreationFailed
from .schema import NodeKind, ScaffoldPlan, ScaffoldResult

__all__ = ["materialize", "rollback"]


LOGGER = logging.getLogger(__name__)


def materialize(plan: ScaffoldPlan, root: str | Path) -> ScaffoldResult:
    """Create ``root`` and every node of ``plan`` beneath it, in plan order.

    Filesystem errors do not propagate. The first failure stops processing
    and is reported as a failed :class:`ScaffoldResult` listing everything
    created before it, so the caller can choose to :func:`rollback`.
    ``root`` must not exist yet. Missing parents of ``root`` are created and
    listed ahead of it in ``created_paths``.
    """

    root_path = Path(root).expanduser().absolute()
    root_text = str(root_path)
    created: list[str] = []

    missing_parents = [parent for parent in reversed(root_path.parents) if not parent.exists()]
    try:
        for parent in missing_parents:
            parent.mkdir()
            created.append(str(parent))
        root_path.mkdir()
    except OSError as exc:
        LOGGER.error("Cannot create project root %s: %s", root_path, exc)
        return ScaffoldResult.failure(
            root_text,
            RootCreationFailed.category,
            f"cannot create project directory '{root_path}': {exc.strerror or exc}",
            partial_paths=tuple(created),
            failed_path=root_text,
        )
    created.append(root_text)
    LOGGER.info("Created project directory %s", root_path)

    for node in plan.nodes:
        destination = root_path / node.relative_path
        try:
            if node.kind is NodeKind.DIRECTORY:
                destination.mkdir()
            else:
                destination.write_text(node.content or "", encoding="utf-8")
        except OSError as exc:
            if node.kind is NodeKind.DIRECTORY:
                category = DirectoryCreateFailed.category
                message = f"cannot create directory '{destination}': {exc.strerror or exc}"
            else:
                category = FileWriteFailed.category
                message = f"cannot write '{destination}': {exc.strerror or exc}"
            LOGGER.error("%s", message)
            return ScaffoldResult.failure(
                root_text, category, message, partial_paths=tuple(created), failed_path=str(destination)
            )
        created.append(str(destination))
        LOGGER.debug("Created %s %s", node.kind.value, destination)

    return ScaffoldResult.success(root_text, tuple(created))


def rollback(result: ScaffoldResult) -> ScaffoldResult:
    """Delete the root of a failed ``result`` and mark it as rolled back.

    The outermost path :func:`materialize` created is removed, which is the
    root itself or the first missing parent it had to create. Results that
    created nothing are returned unchanged.
    """

    if result.ok or result.rolled_back or not result.partial_paths:
        return result

    outermost = Path(result.partial_paths[0])
    LOGGER.warning("Removing partially created project directory %s", outermost)
    shutil.rmtree(outermost, ignore_errors=True)
    return result.model_copy(update={"rolled_back": not outermost.exists()})
