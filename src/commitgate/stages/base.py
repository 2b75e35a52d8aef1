"""Stage context and pipeline entry types shared by all CommitGate stages."""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from commitgate.config import CommitGateConfig
from commitgate.models import StageResult
from commitgate.process import build_command


@dataclass
class StageContext:
    """Read-only inputs of a stage: repository root, config and staged files."""

    root: Path
    config: CommitGateConfig
    files: list[str] = field(default_factory=list)
    out: TextIO = field(default_factory=lambda: sys.stdout)

    @property
    def bin_dir(self) -> str:
        return str((self.root / self.config.bin_dir).resolve())

    def source_files(self) -> list[str]:
        """Staged files with the source extension, anywhere in the tree."""
        return [f for f in self.files if self.config.is_source_file(f)]

    def source_tree_files(self) -> list[str]:
        """Staged source files below the source root."""
        return [f for f in self.files if self.config.is_source_tree_file(f)]

    def command(self, template: tuple[str, ...], file: str | None = None) -> list[str]:
        return build_command(
            template, file, bin=self.bin_dir, standard=self.config.coding_standard
        )


StageFunc = Callable[[StageContext], StageResult]


@dataclass(frozen=True)
class Stage:
    """One entry of the ordered pipeline."""

    stage_id: str
    title: str
    func: StageFunc
    failure_message: str
