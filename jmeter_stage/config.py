"""Staging configuration.

Values come from ``JMETER_STAGE_*`` environment variables, overridden by CLI
options:

    JMETER_STAGE_WORK_DIR            — working tree root (default: target/jmeter)
    JMETER_STAGE_RESULTS_DIR         — results directory override
    JMETER_STAGE_LOG_CONFIG_FILENAME — advanced logging file (default: logkit.xml)
    JMETER_STAGE_TEST_FILES_DIR      — test files directory (default: src/test/jmeter)
    JMETER_STAGE_PLUGINS             — comma separated group:artifact plugin tags
    JMETER_STAGE_RESULTS_FORMAT      — xml | csv (default: xml)
    JMETER_STAGE_SKIP_TESTS          — true | false (default: false)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from jmeter_stage.exceptions import ConfigurationError

_ENV_PREFIX = "JMETER_STAGE_"

DEFAULT_LOG_CONFIG_FILENAME = "logkit.xml"
OUTPUT_FORMAT_PROPERTY = "jmeter.save.saveservice.output_format"
LOG_CONFIG_PROPERTY = "log_config"


class StagingConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    work_dir: Path = Path("target/jmeter")
    results_directory: str | None = None
    log_config_filename: str = DEFAULT_LOG_CONFIG_FILENAME
    test_files_directory: Path | None = Path("src/test/jmeter")
    jmeter_plugins: frozenset[str] = frozenset()
    results_file_format: Literal["xml", "csv"] = "xml"
    skip_tests: bool = False

    @field_validator("results_file_format", mode="before")
    @classmethod
    def _lower_format(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("log_config_filename")
    @classmethod
    def _non_empty_filename(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("log_config_filename must not be empty")
        return v

    @field_validator("jmeter_plugins", mode="before")
    @classmethod
    def _plugin_coordinates(cls, v: Any) -> Any:
        """Accept ``group:artifact`` strings or ``{groupId, artifactId}`` mappings."""
        if isinstance(v, str):
            v = v.split(",")
        if v is None:
            return frozenset()
        coordinates: set[str] = set()
        for item in v:
            if isinstance(item, dict):
                coordinate = f"{item.get('groupId', '')}:{item.get('artifactId', '')}"
            else:
                coordinate = str(item).strip()
            if not coordinate:
                continue
            group_id, sep, artifact_id = coordinate.partition(":")
            if not sep or not group_id or not artifact_id:
                raise ValueError(f"plugin '{coordinate}' is not in group:artifact form")
            coordinates.add(coordinate)
        return frozenset(coordinates)

    @property
    def results_output_is_csv(self) -> bool:
        return self.results_file_format == "csv"

    def output_format_properties(self) -> dict[str, str]:
        return {OUTPUT_FORMAT_PROPERTY: self.results_file_format}

    @classmethod
    def from_env(cls, **overrides: Any) -> StagingConfig:
        """Build a config from the environment; non-None *overrides* win."""
        values: dict[str, Any] = {}
        env_map = {
            "work_dir": "WORK_DIR",
            "results_directory": "RESULTS_DIR",
            "log_config_filename": "LOG_CONFIG_FILENAME",
            "test_files_directory": "TEST_FILES_DIR",
            "jmeter_plugins": "PLUGINS",
            "results_file_format": "RESULTS_FORMAT",
        }
        for field_name, suffix in env_map.items():
            raw = os.environ.get(_ENV_PREFIX + suffix)
            if raw:
                values[field_name] = raw
        skip = os.environ.get(_ENV_PREFIX + "SKIP_TESTS")
        if skip:
            values["skip_tests"] = skip.strip().lower() in ("1", "true", "yes")

        values.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid staging configuration: {e}") from e
