"""Syntax lint — run the syntax checker on every staged source file."""

from __future__ import annotations

from commitgate.models import StageResult
from commitgate.process import run_tool
from commitgate.stages.base import StageContext


def syntax_lint(ctx: StageContext) -> StageResult:
    """Lint each file; keeps going after a failure so every error is reported."""
    result = StageResult(stage="lint")

    for file in ctx.source_files():
        result.checked.append(file)
        tool = run_tool(ctx.command(ctx.config.lint_command, file), cwd=ctx.root)
        if not tool.ok:
            result.fail(file, tool.error_text)

    return result
