"""Exception hierarchy for CommitGate.

Every fatal condition of a run is raised as a ``CommitGateError`` subclass and
turned into a non-zero exit code by the CLI:

- ``ConfigError``      — unreadable or malformed settings file
- ``GitError``         — git could not answer (branch, revision, staged diff)
- ``PolicyViolation``  — a pipeline stage finished unsuccessfully
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from commitgate.models import RunReport


class CommitGateError(Exception):
    """Base class for all fatal CommitGate errors."""

    exit_code: int = 1

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigError(CommitGateError):
    """The settings file could not be read or has an invalid shape."""


class GitError(CommitGateError):
    """The version-control collaborator failed or returned nothing usable."""


class PolicyViolation(CommitGateError):
    """A pipeline stage reported failure and the commit must be aborted."""

    def __init__(self, stage: str, message: str, report: RunReport | None = None) -> None:
        super().__init__(message)
        self.stage = stage
        self.report = report
