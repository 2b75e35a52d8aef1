"""Forbidden function scan over staged files in the source tree."""

from __future__ import annotations

import re

from commitgate.models import StageResult
from commitgate.stages.base import StageContext


def call_pattern(name: str) -> re.Pattern:
    """Case-insensitive pattern for a call of ``name``.

    The name must not be preceded by an identifier character or ``$`` so that
    ``var_dump(`` does not match ``dump`` and ``$dump(`` is not a call of it.
    """
    return re.compile(rf"(?<![\w$]){re.escape(name)}\s*\(", re.IGNORECASE)


def find_forbidden_calls(source: str, names: tuple[str, ...]) -> list[str]:
    """Names from ``names`` that are called somewhere in ``source``, in order."""
    return [name for name in names if call_pattern(name).search(source)]


def forbidden_functions(ctx: StageContext) -> StageResult:
    result = StageResult(stage="forbidden-functions")

    for file in ctx.source_tree_files():
        result.checked.append(file)
        try:
            source = (ctx.root / file).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            result.fail(f"Could not read {file}: {e}")
            continue
        for name in find_forbidden_calls(source, ctx.config.forbidden_functions):
            result.fail(f"{name} found in {file}")

    return result
