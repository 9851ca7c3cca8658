"""Generate the directory tree utilised by JMeter."""

from __future__ import annotations

import os
import re
from pathlib import Path

import structlog

from jmeter_stage.exceptions import DirectoryCreationError
from jmeter_stage.models.tree import WorkingTree

log = structlog.get_logger("jmeter_stage.tree")

_SEPARATOR_RE = re.compile(r"[\\/|]")


def normalize_separators(raw: str) -> str:
    """Replace ``/``, ``\\`` and ``|`` in a configured path with the host separator."""
    return _SEPARATOR_RE.sub(lambda _: os.sep, raw)


def _mkdirs(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationError(str(path), e.strerror or str(e)) from e


def build_tree(work_dir: Path | str, results_dir_override: str | None = None) -> WorkingTree:
    """Create the JMeter working directories under *work_dir*.

    Args:
        work_dir: Root of the working tree.
        results_dir_override: Results directory used verbatim (after separator
            normalisation) instead of ``<work_dir>/results``.

    Returns:
        WorkingTree with absolute paths.

    Raises:
        DirectoryCreationError: any directory cannot be created. Directories
            created before the failure are left in place.
    """
    root = Path(work_dir).absolute()
    lib_dir = root / "lib"
    if results_dir_override is not None:
        results_dir = Path(normalize_separators(results_dir_override)).absolute()
    else:
        results_dir = root / "results"

    tree = WorkingTree(
        work_dir=root,
        bin_dir=root / "bin",
        lib_dir=lib_dir,
        lib_ext_dir=lib_dir / "ext",
        # JMeter expects <workdir>/lib/junit and complains if it can't find it.
        lib_junit_dir=lib_dir / "junit",
        logs_dir=root / "logs",
        results_dir=results_dir,
    )

    for path in (
        tree.logs_dir,
        tree.bin_dir,
        tree.results_dir,
        tree.lib_ext_dir,
        tree.lib_junit_dir,
    ):
        _mkdirs(path)

    log.info("tree.created", work_dir=str(root), results_dir=str(results_dir))
    return tree
