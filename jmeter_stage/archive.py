"""Extract configuration resources from the ApacheJMeter_config archive."""

from __future__ import annotations

import shutil
import zipfile
import zlib
from pathlib import Path

import structlog

from jmeter_stage.exceptions import ArchiveExtractionError

log = structlog.get_logger("jmeter_stage.archive")

# Only files under bin/ are wanted; properties files are handled by the
# property merging step downstream.
ENTRY_PREFIX = "bin"
PROPERTIES_SUFFIX = ".properties"

# Corrupt, truncated, encrypted or unsupported-compression entries.
_ENTRY_READ_ERRORS = (
    OSError,
    zipfile.BadZipFile,
    zlib.error,
    EOFError,
    RuntimeError,
    NotImplementedError,
)


def _is_within_directory(base_dir: Path, target: Path) -> bool:
    try:
        target.resolve().relative_to(base_dir.resolve())
        return True
    except ValueError:
        return False


def _wanted(info: zipfile.ZipInfo) -> bool:
    name = info.filename
    return (
        not info.is_dir()
        and name.startswith(ENTRY_PREFIX)
        and not name.endswith(PROPERTIES_SUFFIX)
    )


def extract_config_resources(
    archive_path: Path, target_root: Path, skip_if_filename: str
) -> list[Path]:
    """Copy the non-properties ``bin*`` entries of *archive_path* under *target_root*.

    Entries are processed in archive order. When an entry ending with
    *skip_if_filename* would overwrite an existing file, extraction stops for
    all remaining entries so a user supplied log configuration survives.

    Returns:
        Paths written, in archive order.

    Raises:
        ArchiveExtractionError: archive missing, malformed, or an entry
            cannot be written.
    """
    root = Path(target_root)
    written: list[Path] = []
    try:
        with zipfile.ZipFile(archive_path, "r") as zf:
            for info in zf.infolist():
                if not _wanted(info):
                    continue
                name = info.filename.replace("\\", "/")
                destination = root / name
                if not _is_within_directory(root, destination):
                    raise ArchiveExtractionError(
                        str(archive_path), "entry escapes the target directory", entry=name
                    )
                if name.endswith(skip_if_filename) and destination.exists():
                    log.info(
                        "extract.stopped_early",
                        archive=str(archive_path),
                        entry=name,
                        existing=str(destination),
                    )
                    break
                try:
                    destination.parent.mkdir(parents=True, exist_ok=True)
                    with zf.open(info, "r") as src, open(destination, "wb") as dst:
                        shutil.copyfileobj(src, dst)
                except _ENTRY_READ_ERRORS as e:
                    raise ArchiveExtractionError(str(archive_path), str(e), entry=name) from e
                written.append(destination)
                log.debug("extract.entry", entry=name, destination=str(destination))
    except zipfile.BadZipFile as e:
        raise ArchiveExtractionError(str(archive_path), f"not a valid archive: {e}") from e
    except OSError as e:
        raise ArchiveExtractionError(str(archive_path), str(e)) from e

    log.info("extract.done", archive=str(archive_path), entries=len(written))
    return written
