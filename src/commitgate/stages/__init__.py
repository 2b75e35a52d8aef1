"""Pipeline stages for CommitGate, in execution order."""

from commitgate.stages.base import Stage, StageContext
from commitgate.stages.forbidden import forbidden_functions
from commitgate.stages.lint import syntax_lint
from commitgate.stages.lock_files import check_lock_files
from commitgate.stages.mess import mess_detect
from commitgate.stages.style import auto_fix_code_style, check_code_style
from commitgate.stages.unit_tests import run_unit_tests

PIPELINE = [
    Stage(
        "lock-files",
        "Checking dependency lock files",
        check_lock_files,
        "Lock files must be committed together with their modified manifests!",
    ),
    Stage(
        "lint",
        "Running PHP lint",
        syntax_lint,
        "There are some PHP syntax errors!",
    ),
    Stage(
        "forbidden-functions",
        "Checking for forbidden functions",
        forbidden_functions,
        "There are still forbidden functions in this commit!",
    ),
    Stage(
        "fix-style",
        "Fixing code style",
        auto_fix_code_style,
        "Could not auto fix everything!",
    ),
    Stage(
        "check-style",
        "Checking code style",
        check_code_style,
        "There are coding standard violations which could not be fixed automatically!",
    ),
    Stage(
        "mess-detect",
        "Checking code mess",
        mess_detect,
        "There are mess detector violations!",
    ),
    Stage(
        "unit-tests",
        "Running unit tests",
        run_unit_tests,
        "Fix the unit tests!",
    ),
]

__all__ = [
    "PIPELINE",
    "Stage",
    "StageContext",
    "check_lock_files",
    "syntax_lint",
    "forbidden_functions",
    "auto_fix_code_style",
    "check_code_style",
    "mess_detect",
    "run_unit_tests",
]
