"""Data models for resolved dependencies and their placement."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Scope(Enum):
    """Maven dependency scope. Only COMPILE and RUNTIME are staged."""

    COMPILE = "compile"
    RUNTIME = "runtime"
    PROVIDED = "provided"
    TEST = "test"
    SYSTEM = "system"


ELIGIBLE_SCOPES = frozenset({Scope.COMPILE, Scope.RUNTIME})


class Role(Enum):
    """Where a resolved dependency goes in the JMeter working tree."""

    ENGINE_CORE_BINARY = "engine_core_binary"  # bin/ApacheJMeter.jar
    ENGINE_CONFIG_BUNDLE = "engine_config_bundle"  # unpacked into bin/
    ENGINE_EXTENSION = "engine_extension"  # lib/ext
    PLAIN_LIBRARY = "plain_library"  # lib
    SKIP = "skip"


@dataclass(frozen=True)
class DependencyRecord:
    """A single resolved build dependency plus its resolution provenance."""

    group_id: str
    artifact_id: str
    version: str
    scope: Scope
    file: Path
    dependency_trail: tuple[str, ...] = field(default_factory=tuple)

    @property
    def coordinate(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    def __str__(self) -> str:
        return f"{self.coordinate}:{self.version}"


@dataclass(frozen=True)
class Placement:
    """Outcome of staging one dependency."""

    dependency: DependencyRecord
    role: Role
    destination: Path | None = None  # None for SKIP and the unpacked config bundle
