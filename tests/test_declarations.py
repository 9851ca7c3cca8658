"""Tests for plugin declaration sources."""

from __future__ import annotations

from jmeter_stage.declarations import (
    DeclaredCoordinate,
    DeclaredPluginDependencies,
    IntroducedPluginArtifacts,
    PluginDeclarationSource,
    trail_mentions,
)

_TRAIL = (
    "com.lazerycode.jmeter:jmeter-maven-plugin:maven-plugin:1.10.0",
    "kg.apc:jmeter-plugins-standard:jar:1.1.3",
)


class TestTrailMentions:
    def test_coordinate_and_version_in_same_entry(self):
        assert trail_mentions(_TRAIL, "kg.apc:jmeter-plugins-standard", "1.1.3")

    def test_coordinate_and_version_in_different_entries(self):
        # version only appears alongside another coordinate
        trail = ("kg.apc:jmeter-plugins-standard:jar:2.0", "org.x:y:jar:1.1.3")
        assert not trail_mentions(trail, "kg.apc:jmeter-plugins-standard", "1.1.3")

    def test_empty_trail(self):
        assert not trail_mentions((), "a:b", "1")

    def test_version_substring_false_positive_is_accepted(self):
        # Known approximation: "1.1" is a substring of "1.1.3"
        assert trail_mentions(_TRAIL, "kg.apc:jmeter-plugins-standard", "1.1")


class TestSources:
    def test_both_models_satisfy_protocol(self):
        assert isinstance(DeclaredPluginDependencies(), PluginDeclarationSource)
        assert isinstance(IntroducedPluginArtifacts(), PluginDeclarationSource)

    def test_declared_dependencies(self):
        source = DeclaredPluginDependencies(
            [DeclaredCoordinate("kg.apc", "jmeter-plugins-standard", "1.1.3")]
        )
        assert source.declares(_TRAIL)

    def test_introduced_artifacts_use_base_version(self):
        trail = ("com.acme:plugin:jar:1.0-SNAPSHOT",)
        source = IntroducedPluginArtifacts([DeclaredCoordinate("com.acme", "plugin", "1.0-SNAPSHOT")])
        assert source.declares(trail)

    def test_models_are_interchangeable(self):
        declared = [DeclaredCoordinate("kg.apc", "jmeter-plugins-standard", "1.1.3")]
        for source in (DeclaredPluginDependencies(declared), IntroducedPluginArtifacts(declared)):
            assert source.declares(_TRAIL)
            assert not source.declares(("org.other:thing:jar:1.1.3",))

    def test_empty_source_declares_nothing(self):
        assert not DeclaredPluginDependencies().declares(_TRAIL)
        assert not IntroducedPluginArtifacts().declares(_TRAIL)
