"""Data models for CommitGate."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Verdict(str, Enum):
    """Overall outcome of a pipeline run."""

    PASS = "PASS"
    FAIL = "FAIL"
    SKIPPED = "SKIPPED"


@dataclass
class ToolResult:
    """Outcome of a single external tool invocation."""

    command: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def error_text(self) -> str:
        """The most useful diagnostic text: stderr if any, otherwise stdout."""
        return self.stderr.strip() or self.stdout.strip()


@dataclass
class StageResult:
    """Aggregate result of one pipeline stage over the staged file set."""

    stage: str
    passed: bool = True
    skipped: bool = False
    checked: list[str] = field(default_factory=list)
    diagnostics: list[str] = field(default_factory=list)

    def fail(self, *lines: str) -> None:
        """Mark the stage failed and record diagnostic lines."""
        self.passed = False
        self.diagnostics.extend(line for line in lines if line)

    def to_dict(self) -> dict:
        return {
            "stage": self.stage,
            "passed": self.passed,
            "skipped": self.skipped,
            "checked": list(self.checked),
            "diagnostics": list(self.diagnostics),
        }


@dataclass
class RunReport:
    """Everything a single run produced; never persisted across runs."""

    verdict: str
    timestamp: str
    branch: str | None = None
    files: list[str] = field(default_factory=list)
    stages: list[StageResult] = field(default_factory=list)
    failure: str | None = None

    @property
    def failed_stage(self) -> str | None:
        for result in self.stages:
            if not result.passed:
                return result.stage
        return None

    def to_dict(self) -> dict:
        return {
            "verdict": self.verdict,
            "timestamp": self.timestamp,
            "branch": self.branch,
            "files": list(self.files),
            "stages": [s.to_dict() for s in self.stages],
            "failed_stage": self.failed_stage,
            "failure": self.failure,
        }
