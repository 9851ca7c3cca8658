"""Populate the JMeter working tree from the resolved dependency set.

Generic compile/runtime artifacts are copied into ``lib``, ``ApacheJMeter_*``
artifacts and tagged plugins into ``lib/ext``, the core jar into ``bin`` and
the config archive is unpacked into ``bin``.
"""

from __future__ import annotations

import shutil
from collections.abc import Collection, Iterable, Sequence
from pathlib import Path

import structlog

from jmeter_stage.archive import extract_config_resources
from jmeter_stage.classifier import CONFIG_ARTIFACT_ID, CORE_ARTIFACT_ID, classify
from jmeter_stage.config import DEFAULT_LOG_CONFIG_FILENAME
from jmeter_stage.declarations import PluginDeclarationSource
from jmeter_stage.exceptions import MissingDependencyError, TreePopulationError
from jmeter_stage.models.dependency import DependencyRecord, Placement, Role
from jmeter_stage.models.tree import WorkingTree

log = structlog.get_logger("jmeter_stage.populator")


def find_dependency_named(
    dependencies: Iterable[DependencyRecord], artifact_id: str
) -> DependencyRecord:
    """Search the resolved set for the first artifact with *artifact_id*."""
    for dep in dependencies:
        if dep.artifact_id == artifact_id:
            return dep
    raise MissingDependencyError(artifact_id)


def require_engine_dependencies(dependencies: Sequence[DependencyRecord]) -> None:
    """Fail fast when the config bundle or the core jar is not resolved."""
    for artifact_id in (CONFIG_ARTIFACT_ID, CORE_ARTIFACT_ID):
        find_dependency_named(dependencies, artifact_id)


def _destination(dep: DependencyRecord, role: Role, tree: WorkingTree) -> Path | None:
    if role is Role.ENGINE_CORE_BINARY:
        return tree.bin_dir / f"{CORE_ARTIFACT_ID}.jar"
    if role is Role.ENGINE_EXTENSION:
        return tree.lib_ext_dir / dep.file.name
    if role is Role.PLAIN_LIBRARY:
        return tree.lib_dir / dep.file.name
    return None


def _copy(dep: DependencyRecord, destination: Path) -> None:
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(dep.file, destination)
    except OSError as e:
        raise TreePopulationError(dep.coordinate, str(e)) from e


def populate(
    dependencies: Iterable[DependencyRecord],
    declarations: PluginDeclarationSource,
    explicit_tags: Collection[str],
    tree: WorkingTree,
    log_config_filename: str = DEFAULT_LOG_CONFIG_FILENAME,
) -> list[Placement]:
    """Classify every dependency and materialise it in *tree*.

    Existing files are overwritten, so re-running with the same inputs yields
    the same tree. The first failure aborts the run; files already copied are
    left in place.

    Returns:
        One Placement per input dependency, in input order.

    Raises:
        TreePopulationError: a dependency could not be copied.
        ArchiveExtractionError: the config archive could not be unpacked.
    """
    placements: list[Placement] = []
    for dep in dependencies:
        role = classify(dep, declarations, explicit_tags)

        if role is Role.ENGINE_CONFIG_BUNDLE:
            # Entries are named bin/..., so they land in tree.bin_dir.
            extract_config_resources(dep.file, tree.work_dir, log_config_filename)
            placements.append(Placement(dependency=dep, role=role))
            continue

        destination = _destination(dep, role, tree)
        if destination is None:
            log.debug("populate.skipped", dependency=str(dep), scope=dep.scope.value)
            placements.append(Placement(dependency=dep, role=role))
            continue

        _copy(dep, destination)
        log.debug(
            "populate.copied",
            dependency=str(dep),
            role=role.value,
            destination=str(destination),
        )
        placements.append(Placement(dependency=dep, role=role, destination=destination))

    log.info(
        "populate.done",
        staged=sum(1 for p in placements if p.role is not Role.SKIP),
        skipped=sum(1 for p in placements if p.role is Role.SKIP),
    )
    return placements
