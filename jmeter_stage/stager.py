"""Staging driver — build the JMeter working tree end to end.

Steps:
    1. Check the config archive and core jar are resolved (no disk writes yet)
    2. Create the directory skeleton
    3. Copy the user's advanced logging configuration into bin/
    4. Populate bin/, lib/ and lib/ext/ from the resolved dependencies
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from jmeter_stage.config import LOG_CONFIG_PROPERTY, StagingConfig
from jmeter_stage.exceptions import AdvancedLoggingError
from jmeter_stage.models.dependency import Placement
from jmeter_stage.models.tree import WorkingTree
from jmeter_stage.populator import populate, require_engine_dependencies
from jmeter_stage.schemas import ResolutionManifest
from jmeter_stage.tree import build_tree

log = structlog.get_logger("jmeter_stage.stager")


@dataclass
class StagingResult:
    tree: WorkingTree
    placements: list[Placement] = field(default_factory=list)
    jmeter_properties: dict[str, str] = field(default_factory=dict)


def configure_advanced_logging(config: StagingConfig, tree: WorkingTree) -> dict[str, str]:
    """Copy ``<test files dir>/<log config filename>`` into bin/ if the user ships one.

    Returns the JMeter properties to set (empty when there is no such file).
    """
    if config.test_files_directory is None:
        return {}
    source = Path(config.test_files_directory) / config.log_config_filename
    if not source.is_file():
        return {}
    destination = tree.bin_dir / config.log_config_filename
    try:
        shutil.copy2(source, destination)
    except OSError as e:
        raise AdvancedLoggingError(str(e)) from e
    log.info("stage.advanced_logging", source=str(source), destination=str(destination))
    return {LOG_CONFIG_PROPERTY: config.log_config_filename}


def stage(
    config: StagingConfig,
    resolution: ResolutionManifest,
    base_dir: Path | None = None,
) -> StagingResult:
    """Materialise the working tree described by *config* and *resolution*.

    Args:
        config: Staging configuration.
        resolution: Resolved dependencies and plugin declarations.
        base_dir: Directory relative artifact paths are resolved against.

    Raises:
        StagingError: any failure; nothing is retried or rolled back.
    """
    dependencies = resolution.dependency_records(base_dir)
    require_engine_dependencies(dependencies)

    tree = build_tree(config.work_dir, config.results_directory)

    properties = config.output_format_properties()
    properties.update(configure_advanced_logging(config, tree))

    placements = populate(
        dependencies,
        resolution.plugin_declarations(),
        config.jmeter_plugins,
        tree,
        log_config_filename=config.log_config_filename,
    )
    log.info("stage.done", work_dir=str(tree.work_dir), dependencies=len(dependencies))
    return StagingResult(tree=tree, placements=placements, jmeter_properties=properties)
