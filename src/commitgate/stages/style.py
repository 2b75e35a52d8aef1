"""Code style stages: in-place auto-fix followed by a read-only style check."""

from __future__ import annotations

from commitgate.models import StageResult
from commitgate.process import run_tool
from commitgate.stages.base import StageContext


def auto_fix_code_style(ctx: StageContext) -> StageResult:
    """Run the fixer on each source-tree file.

    Exit codes listed in ``fix-ok-exit-codes`` count as success (phpcbf exits
    1 after fixing); any other code fails the stage.
    """
    result = StageResult(stage="fix-style")

    for file in ctx.source_tree_files():
        result.checked.append(file)
        tool = run_tool(ctx.command(ctx.config.fix_command, file), cwd=ctx.root)
        if tool.returncode not in ctx.config.fix_ok_exit_codes:
            result.fail(file, tool.stdout.strip() or tool.stderr.strip())

    return result


def check_code_style(ctx: StageContext) -> StageResult:
    result = StageResult(stage="check-style")

    for file in ctx.source_tree_files():
        result.checked.append(file)
        tool = run_tool(ctx.command(ctx.config.style_command, file), cwd=ctx.root)
        if not tool.ok:
            result.fail(tool.stdout.strip() or tool.stderr.strip())

    return result
