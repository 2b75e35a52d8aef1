"""Core CommitGate engine — branch skip, file discovery and the ordered stage pipeline."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TextIO

from commitgate.config import CommitGateConfig
from commitgate.errors import PolicyViolation
from commitgate.git import GitRepository
from commitgate.models import RunReport, StageResult, Verdict
from commitgate.stages import PIPELINE, Stage, StageContext


class CommitGateEngine:
    """Runs the pre-commit pipeline against the files staged in one repository.

    Stages run strictly in order. Each stage finishes its whole file set before
    reporting; the first failing stage raises ``PolicyViolation`` and nothing
    after it runs.
    """

    def __init__(
        self,
        config: CommitGateConfig,
        root: str | Path,
        repo: GitRepository | None = None,
        out: TextIO | None = None,
        pipeline: list[Stage] | None = None,
    ) -> None:
        self.config = config
        self.root = Path(root)
        self.repo = repo or GitRepository(self.root)
        self.out = out if out is not None else sys.stdout
        self.pipeline = PIPELINE if pipeline is None else pipeline

    def _say(self, message: str) -> None:
        print(message, file=self.out, flush=True)

    def is_branch_whitelisted(self) -> tuple[bool, str | None]:
        """Check the current branch against ``precommit-skip-branches``.

        Git is only consulted when a skip list is configured. Matching is a
        case-insensitive substring test.

        Raises:
            GitError: If the branch name cannot be determined.
        """
        if not self.config.skip_branches:
            return False, None

        branch = self.repo.current_branch()
        lowered = branch.lower()
        skip = any(entry.lower() in lowered for entry in self.config.skip_branches)
        return skip, branch

    def run(self) -> RunReport:
        """Run the whole pipeline.

        Returns:
            A PASS or SKIPPED report.

        Raises:
            GitError: If git cannot answer.
            PolicyViolation: On the first failing stage, with the report attached.
        """
        self._say("🚦 CommitGate quality check")
        report = RunReport(
            verdict=Verdict.PASS.value,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

        skip, report.branch = self.is_branch_whitelisted()
        if skip:
            self._say("⏭️  Skipping checks for this branch, since it is whitelisted")
            report.verdict = Verdict.SKIPPED.value
            return report

        self._say("📄 Fetching files")
        report.files = self.repo.staged_files()
        ctx = StageContext(root=self.root, config=self.config, files=report.files, out=self.out)

        for stage in self.pipeline:
            if not self.config.is_stage_enabled(stage.stage_id):
                report.stages.append(StageResult(stage=stage.stage_id, skipped=True))
                continue

            self._say(f"▶️  {stage.title}")
            result = stage.func(ctx)
            report.stages.append(result)
            for line in result.diagnostics:
                self._say(line)

            if not result.passed:
                report.verdict = Verdict.FAIL.value
                report.failure = stage.failure_message
                raise PolicyViolation(stage.stage_id, stage.failure_message, report)

        self._say("✅ Everything checks out!")
        return report
