"""Run reporters for CommitGate."""

from commitgate.reporters.json_reporter import JSONReporter

__all__ = ["JSONReporter"]
