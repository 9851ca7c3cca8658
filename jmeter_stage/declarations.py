"""Plugin declaration sources — the dependencies a project declares on the plugin itself.

Hosts expose these through one of two resolution models:

  * a declared dependency list, where every entry carries its ``version``
  * an introduced-dependency artifact set, where entries carry ``base_version``

The classifier only needs a membership test over a dependency trail, so both
models sit behind :class:`PluginDeclarationSource`.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class DeclaredCoordinate:
    """A ``group:artifact`` pair plus the version string it was declared with."""

    group_id: str
    artifact_id: str
    version: str

    @property
    def coordinate(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"


def trail_mentions(trail: Sequence[str], coordinate: str, version: str) -> bool:
    """True when a single trail entry contains both the coordinate and the version.

    Substring matching is deliberately loose: resolvers format trail entries
    differently, so no structural comparison is attempted. A short version
    string can match inside a longer one.
    """
    for parent in trail:
        if coordinate in parent and version in parent:
            return True
    return False


@runtime_checkable
class PluginDeclarationSource(Protocol):
    """Interface every host resolution model must satisfy."""

    def declares(self, trail: Sequence[str]) -> bool: ...


class DeclaredPluginDependencies:
    """Declared dependency list (versions as written in the project's plugin block)."""

    def __init__(self, dependencies: Iterable[DeclaredCoordinate] = ()) -> None:
        self._dependencies = tuple(dependencies)

    def declares(self, trail: Sequence[str]) -> bool:
        return any(
            trail_mentions(trail, dep.coordinate, dep.version) for dep in self._dependencies
        )


class IntroducedPluginArtifacts:
    """Introduced-dependency artifact set; ``version`` holds each artifact's base version."""

    def __init__(self, artifacts: Iterable[DeclaredCoordinate] = ()) -> None:
        self._artifacts = tuple(artifacts)

    def declares(self, trail: Sequence[str]) -> bool:
        # Base versions keep SNAPSHOT qualifiers unexpanded, matching how they
        # appear in resolver trails.
        return any(
            trail_mentions(trail, art.coordinate, art.version) for art in self._artifacts
        )
