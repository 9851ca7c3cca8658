"""jmeter-stage: classify resolved dependencies into a private JMeter working tree."""

__version__ = "0.1.0"

from jmeter_stage.archive import extract_config_resources
from jmeter_stage.classifier import classify
from jmeter_stage.config import StagingConfig
from jmeter_stage.declarations import (
    DeclaredCoordinate,
    DeclaredPluginDependencies,
    IntroducedPluginArtifacts,
    PluginDeclarationSource,
)
from jmeter_stage.models.dependency import DependencyRecord, Placement, Role, Scope
from jmeter_stage.models.tree import WorkingTree
from jmeter_stage.populator import find_dependency_named, populate
from jmeter_stage.stager import StagingResult, stage
from jmeter_stage.tree import build_tree

__all__ = [
    "DeclaredCoordinate",
    "DeclaredPluginDependencies",
    "DependencyRecord",
    "IntroducedPluginArtifacts",
    "Placement",
    "PluginDeclarationSource",
    "Role",
    "Scope",
    "StagingConfig",
    "StagingResult",
    "WorkingTree",
    "build_tree",
    "classify",
    "extract_config_resources",
    "find_dependency_named",
    "populate",
    "stage",
]
