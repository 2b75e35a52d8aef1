"""Dependency lock check — a changed manifest must be committed with its lock file.

Manifest and lock paths are repository-relative, so the default pair only
covers the root ``composer.json``. Runs before any external process is spawned.
"""

from __future__ import annotations

from commitgate.models import StageResult
from commitgate.stages.base import StageContext


def check_lock_files(ctx: StageContext) -> StageResult:
    result = StageResult(stage="lock-files")
    staged = set(ctx.files)

    for manifest, lock in ctx.config.lock_files:
        if manifest not in staged:
            continue
        result.checked.append(manifest)
        if lock not in staged:
            result.fail(f"{lock} must be committed if {manifest} is modified!")

    return result
