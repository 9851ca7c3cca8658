"""Working tree model."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class WorkingTree:
    """Absolute paths of the directories JMeter runs from."""

    work_dir: Path
    bin_dir: Path
    lib_dir: Path
    lib_ext_dir: Path
    lib_junit_dir: Path
    logs_dir: Path
    results_dir: Path

    def as_dict(self) -> dict[str, str]:
        return {
            "work_dir": str(self.work_dir),
            "bin": str(self.bin_dir),
            "lib": str(self.lib_dir),
            "lib_ext": str(self.lib_ext_dir),
            "lib_junit": str(self.lib_junit_dir),
            "logs": str(self.logs_dir),
            "results": str(self.results_dir),
        }
