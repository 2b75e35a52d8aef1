"""Mess detection — opt-in stage, disabled by default."""

from __future__ import annotations

from commitgate.models import StageResult
from commitgate.process import run_tool
from commitgate.stages.base import StageContext


def mess_detect(ctx: StageContext) -> StageResult:
    result = StageResult(stage="mess-detect")

    for file in ctx.source_tree_files():
        result.checked.append(file)
        tool = run_tool(ctx.command(ctx.config.mess_command, file), cwd=ctx.root)
        if not tool.ok:
            result.fail(file, tool.stderr.strip(), tool.stdout.strip())

    return result
