"""JSON run reporter for CommitGate."""

from __future__ import annotations

import json
from pathlib import Path

from commitgate.models import RunReport


class JSONReporter:
    """Serialize a RunReport to JSON, for CI jobs that archive hook results."""

    def render(self, report: RunReport) -> str:
        return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)

    def summary(self, report: RunReport) -> str:
        """One-line outcome: the verdict, plus the failing stage when there is one."""
        if report.failed_stage:
            return f"{report.verdict} at {report.failed_stage}"
        return report.verdict

    def write(self, report: RunReport, output_path: str | Path) -> Path:
        """Write the report to ``output_path``, creating parent directories.

        Returns:
            The path written.
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(report) + "\n", encoding="utf-8")
        return path
