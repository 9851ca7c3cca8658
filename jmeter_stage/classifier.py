"""Dependency classification — decide where each resolved artifact belongs.

Rules are evaluated in a fixed order and the first match wins:

  1. scope other than compile/runtime          -> SKIP
  2. ApacheJMeter_config                       -> ENGINE_CONFIG_BUNDLE
  3. ApacheJMeter                              -> ENGINE_CORE_BINARY
  4. ApacheJMeter_*                            -> ENGINE_EXTENSION
  5. pulled in by an org.apache.jmeter artifact -> PLAIN_LIBRARY
  6. pulled in by a declared plugin dependency -> ENGINE_EXTENSION if tagged
                                                  as a plugin, else PLAIN_LIBRARY
  7. anything else                             -> SKIP
"""

from __future__ import annotations

from collections.abc import Collection

from jmeter_stage.declarations import PluginDeclarationSource
from jmeter_stage.models.dependency import ELIGIBLE_SCOPES, DependencyRecord, Role

CONFIG_ARTIFACT_ID = "ApacheJMeter_config"
CORE_ARTIFACT_ID = "ApacheJMeter"
EXTENSION_PREFIX = "ApacheJMeter_"
JMETER_GROUP = "org.apache.jmeter"


def is_jmeter_dependency(dep: DependencyRecord) -> bool:
    """Work out if an artifact was pulled in by JMeter itself."""
    return any(JMETER_GROUP in parent for parent in dep.dependency_trail)


def is_explicit_dependency(
    dep: DependencyRecord, declarations: PluginDeclarationSource
) -> bool:
    """True if the artifact is needed by a dependency declared on the plugin."""
    return declarations.declares(dep.dependency_trail)


def is_marked_as_plugin(dep: DependencyRecord, explicit_tags: Collection[str]) -> bool:
    return dep.coordinate in explicit_tags


def classify(
    dep: DependencyRecord,
    declarations: PluginDeclarationSource,
    explicit_tags: Collection[str] = frozenset(),
) -> Role:
    """Map a resolved dependency to its working tree role. Pure, no I/O."""
    if dep.scope not in ELIGIBLE_SCOPES:
        return Role.SKIP

    if dep.artifact_id == CONFIG_ARTIFACT_ID:
        return Role.ENGINE_CONFIG_BUNDLE
    if dep.artifact_id == CORE_ARTIFACT_ID:
        return Role.ENGINE_CORE_BINARY
    if dep.artifact_id.startswith(EXTENSION_PREFIX):
        return Role.ENGINE_EXTENSION

    # Must run before the declaration check: a JMeter transitive can also
    # substring-match an unrelated declared coordinate.
    if is_jmeter_dependency(dep):
        return Role.PLAIN_LIBRARY

    if is_explicit_dependency(dep, declarations):
        if is_marked_as_plugin(dep, explicit_tags):
            return Role.ENGINE_EXTENSION
        return Role.PLAIN_LIBRARY

    return Role.SKIP
