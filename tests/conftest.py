"""Shared pytest fixtures for jmeter-stage tests."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest
import structlog

from jmeter_stage.models.dependency import DependencyRecord, Scope


@pytest.fixture(autouse=True)
def _quiet_structlog():
    """Keep structlog output out of captured stdout."""
    structlog.configure(
        processors=[],
        logger_factory=structlog.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def make_jar(tmp_path: Path):
    """Build a zip archive from ``{entry_name: content}``; a ``None`` value makes a directory entry."""

    def _make(name: str, entries: dict[str, bytes | str | None]) -> Path:
        path = tmp_path / "repo" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w") as zf:
            for entry, content in entries.items():
                if content is None:
                    zf.writestr(zipfile.ZipInfo(entry.rstrip("/") + "/"), b"")
                else:
                    zf.writestr(entry, content)
        return path

    return _make


@pytest.fixture
def make_dep(tmp_path: Path):
    """Create a DependencyRecord backed by a real file under tmp_path/repo."""

    def _make(
        artifact_id: str,
        group_id: str = "org.example",
        version: str = "1.0",
        scope: Scope = Scope.COMPILE,
        trail: tuple[str, ...] = (),
        file: Path | None = None,
        content: bytes | None = None,
    ) -> DependencyRecord:
        if file is None:
            file = tmp_path / "repo" / f"{artifact_id}-{version}.jar"
            file.parent.mkdir(parents=True, exist_ok=True)
            file.write_bytes(content if content is not None else artifact_id.encode())
        return DependencyRecord(
            group_id=group_id,
            artifact_id=artifact_id,
            version=version,
            scope=scope,
            file=file,
            dependency_trail=trail,
        )

    return _make
