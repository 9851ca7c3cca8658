"""Resolution manifest schemas — the dependency set handed over by the build host."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from jmeter_stage.declarations import (
    DeclaredCoordinate,
    DeclaredPluginDependencies,
    IntroducedPluginArtifacts,
    PluginDeclarationSource,
)
from jmeter_stage.exceptions import ConfigurationError
from jmeter_stage.models.dependency import DependencyRecord, Scope


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ArtifactSchema(_CamelModel):
    group_id: str = Field(alias="groupId")
    artifact_id: str = Field(alias="artifactId")
    version: str
    scope: Scope = Scope.COMPILE
    file: Path
    dependency_trail: list[str] = Field(default_factory=list, alias="dependencyTrail")

    @field_validator("scope", mode="before")
    @classmethod
    def _lower_scope(cls, v: object) -> object:
        return v.strip().lower() if isinstance(v, str) else v

    def to_record(self, base_dir: Path | None = None) -> DependencyRecord:
        file = self.file
        if base_dir is not None and not file.is_absolute():
            file = base_dir / file
        return DependencyRecord(
            group_id=self.group_id,
            artifact_id=self.artifact_id,
            version=self.version,
            scope=self.scope,
            file=file.absolute(),
            dependency_trail=tuple(self.dependency_trail),
        )


class PluginDependencySchema(_CamelModel):
    group_id: str = Field(alias="groupId")
    artifact_id: str = Field(alias="artifactId")
    version: str


class IntroducedArtifactSchema(_CamelModel):
    group_id: str = Field(alias="groupId")
    artifact_id: str = Field(alias="artifactId")
    base_version: str = Field(alias="baseVersion")


class ResolutionManifest(_CamelModel):
    artifacts: list[ArtifactSchema] = Field(default_factory=list)
    plugin_dependencies: list[PluginDependencySchema] | None = Field(
        default=None, alias="pluginDependencies"
    )
    introduced_dependency_artifacts: list[IntroducedArtifactSchema] | None = Field(
        default=None, alias="introducedDependencyArtifacts"
    )

    def dependency_records(self, base_dir: Path | None = None) -> list[DependencyRecord]:
        return [a.to_record(base_dir) for a in self.artifacts]

    def plugin_declarations(self) -> PluginDeclarationSource:
        """Pick the declaration source for whichever resolution model the host used."""
        if self.plugin_dependencies is not None:
            return DeclaredPluginDependencies(
                DeclaredCoordinate(d.group_id, d.artifact_id, d.version)
                for d in self.plugin_dependencies
            )
        return IntroducedPluginArtifacts(
            DeclaredCoordinate(a.group_id, a.artifact_id, a.base_version)
            for a in self.introduced_dependency_artifacts or []
        )


def load_manifest(path: Path) -> ResolutionManifest:
    """Read and validate a resolution manifest JSON file."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Unable to read manifest '{path}': {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in manifest '{path}': {e}") from e
    try:
        return ResolutionManifest.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid manifest '{path}': {e}") from e
