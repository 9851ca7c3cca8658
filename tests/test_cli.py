"""Tests for CLI commands — real files under tmp_path, logging setup mocked."""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from jmeter_stage.cli import main


@pytest.fixture(autouse=True)
def _no_logging_setup():
    with patch("jmeter_stage.cli.setup_logging"):
        yield


@pytest.fixture(autouse=True)
def _clean_env():
    with patch.dict(os.environ, {}, clear=False):
        for k in [k for k in os.environ if k.startswith("JMETER_STAGE_")]:
            os.environ.pop(k, None)
        yield


@pytest.fixture
def manifest_path(tmp_path: Path, make_jar) -> Path:
    make_jar("ApacheJMeter_config-5.0.jar", {"bin/logkit.xml": "<default/>"})
    repo = tmp_path / "repo"
    (repo / "ApacheJMeter-5.0.jar").write_bytes(b"core")
    (repo / "ApacheJMeter_http-5.0.jar").write_bytes(b"http")
    (repo / "gson-2.8.jar").write_bytes(b"gson")
    artifacts = [
        ("org.apache.jmeter", "ApacheJMeter_config", "5.0", "compile", []),
        ("org.apache.jmeter", "ApacheJMeter", "5.0", "compile", []),
        ("org.apache.jmeter", "ApacheJMeter_http", "5.0", "compile", []),
        ("com.google.code.gson", "gson", "2.8", "test", []),
    ]
    payload = {
        "artifacts": [
            {
                "groupId": g,
                "artifactId": a,
                "version": v,
                "scope": s,
                "file": f"repo/{a}-{v}.jar",
                "dependencyTrail": trail,
            }
            for g, a, v, s, trail in artifacts
        ],
        "pluginDependencies": [],
    }
    path = tmp_path / "deps.json"
    path.write_text(json.dumps(payload))
    return path


class TestStageCommand:
    def test_stage_text_output(self, tmp_path: Path, manifest_path: Path):
        work = tmp_path / "jmeter"
        result = CliRunner().invoke(main, ["stage", str(manifest_path), "--work-dir", str(work)])
        assert result.exit_code == 0, result.output
        assert "JMeter working tree:" in result.output
        assert "Staged 3 of 4 dependencies" in result.output
        assert (work / "bin" / "ApacheJMeter.jar").read_bytes() == b"core"
        assert (work / "lib" / "ext" / "ApacheJMeter_http-5.0.jar").is_file()

    def test_stage_json_output(self, tmp_path: Path, manifest_path: Path):
        work = tmp_path / "jmeter"
        result = CliRunner().invoke(
            main,
            ["stage", str(manifest_path), "--work-dir", str(work), "--results-format", "CSV", "--json"],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["tree"]["bin"] == str(work / "bin")
        assert data["jmeter_properties"] == {"jmeter.save.saveservice.output_format": "csv"}
        roles = [p["role"] for p in data["placements"]]
        assert roles == ["engine_config_bundle", "engine_core_binary", "engine_extension", "skip"]

    def test_skip_tests(self, tmp_path: Path, manifest_path: Path):
        work = tmp_path / "jmeter"
        result = CliRunner().invoke(
            main, ["stage", str(manifest_path), "--work-dir", str(work), "--skip-tests"]
        )
        assert result.exit_code == 0
        assert "Tests are skipped." in result.output
        assert not work.exists()

    def test_missing_core_reports_error(self, tmp_path: Path):
        path = tmp_path / "deps.json"
        path.write_text(json.dumps({"artifacts": []}))
        result = CliRunner().invoke(main, ["stage", str(path), "--work-dir", str(tmp_path / "w")])
        assert result.exit_code == 1
        assert "Unable to find artifact 'ApacheJMeter_config'!" in result.output

    def test_invalid_plugin_option(self, tmp_path: Path, manifest_path: Path):
        result = CliRunner().invoke(
            main, ["stage", str(manifest_path), "--work-dir", str(tmp_path / "w"), "--plugin", "bad"]
        )
        assert result.exit_code == 1
        assert "group:artifact" in result.output


class TestClassifyCommand:
    def test_classify_json(self, tmp_path: Path, manifest_path: Path):
        result = CliRunner().invoke(main, ["classify", str(manifest_path), "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data[0] == {"dependency": "org.apache.jmeter:ApacheJMeter_config:5.0",
                           "role": "engine_config_bundle"}
        assert data[-1]["role"] == "skip"
        # dry run: nothing written next to the manifest
        assert not (tmp_path / "target").exists()

    def test_classify_text(self, manifest_path: Path):
        result = CliRunner().invoke(main, ["classify", str(manifest_path)])
        assert result.exit_code == 0, result.output
        assert "lib/ext" in result.output
        assert "bin (unpacked)" in result.output

    def test_missing_manifest(self, tmp_path: Path):
        result = CliRunner().invoke(main, ["classify", str(tmp_path / "none.json")])
        assert result.exit_code != 0
