"""CommitGate init command — bootstrap settings and hook files for a repository."""

from __future__ import annotations

import json
import stat
from pathlib import Path

from commitgate.config import DEFAULT_CODING_STANDARD, DEFAULT_FORBIDDEN_FUNCTIONS, SETTINGS_FILENAME

# ---------------------------------------------------------------------------
# Template builders
# ---------------------------------------------------------------------------


def _build_settings(standard: str, skip_branches: list[str]) -> str:
    settings = {
        "precommit-skip-branches": skip_branches,
        "forbidden-functions": [],
        "coding-standard": standard,
        "source-root": "src",
        "bin-dir": "vendor/bin",
        "stages": {"mess-detect": {"enabled": False}},
    }
    return json.dumps(settings, indent=4) + "\n"


def _build_precommit_config() -> str:
    return """\
# .pre-commit-config.yaml — CommitGate pre-commit hook
# Install: pip install pre-commit && pre-commit install
repos:
  - repo: local
    hooks:
      - id: commitgate
        name: CommitGate Quality Check
        entry: python -m commitgate run
        language: python
        always_run: true
        pass_filenames: false
"""


def _build_git_hook() -> str:
    return """\
#!/bin/sh
# Installed by `commitgate init`. Aborts the commit when any check fails.
exec python3 -m commitgate run
"""


# ---------------------------------------------------------------------------
# Interactive helpers
# ---------------------------------------------------------------------------


def _prompt(question: str, default: str = "") -> str:
    """Prompt with an optional default value."""
    if default:
        answer = input(f"  {question} [{default}]: ").strip()
        return answer if answer else default
    return input(f"  {question}: ").strip()


def _prompt_yn(question: str, default: bool = False) -> bool:
    """Yes/no prompt."""
    default_str = "Y/n" if default else "y/N"
    answer = input(f"  {question} [{default_str}]: ").strip().lower()
    if not answer:
        return default
    return answer.startswith("y")


def _write_file(path: Path, content: str, executable: bool = False) -> bool:
    """Write file, prompting if it already exists. Returns True if written."""
    if path.exists() and not _prompt_yn(f"{path} already exists. Overwrite?", default=False):
        print(f"  Skipped: {path}")
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    if executable:
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    print(f"  Creating {path} ... done")
    return True


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------


def init_command(args: object) -> int:
    """Execute the init command — interactive repository bootstrap.

    Args:
        args: Parsed CLI arguments with optional ``path``, ``standard``,
              and ``no_hook`` attributes.

    Returns:
        0 on success, 1 if the git hook was requested outside a git repository.
    """
    root = Path(getattr(args, "path", None) or ".").resolve()
    no_hook = getattr(args, "no_hook", False)

    print()
    print("CommitGate Init")
    print("-" * 50)

    standard = _prompt("Coding standard?", default=getattr(args, "standard", None) or DEFAULT_CODING_STANDARD)
    branches = _prompt("Branches to skip (comma separated, blank for none)?")
    skip_branches = [b.strip() for b in branches.split(",") if b.strip()]

    print("-" * 50)
    print(f"  Built-in forbidden functions: {', '.join(DEFAULT_FORBIDDEN_FUNCTIONS)}")

    _write_file(root / SETTINGS_FILENAME, _build_settings(standard, skip_branches))
    _write_file(root / ".pre-commit-config.yaml", _build_precommit_config())

    exit_code = 0
    if not no_hook:
        git_dir = root / ".git"
        if git_dir.is_dir():
            _write_file(git_dir / "hooks" / "pre-commit", _build_git_hook(), executable=True)
        else:
            print(f"  No git repository at {root}; git hook not installed")
            exit_code = 1

    print("-" * 50)
    print("Done! CommitGate is configured for this repository.")
    print()
    print("  Next steps:")
    print(f"    1. Review {SETTINGS_FILENAME} and adjust the tool commands")
    print("    2. composer require --dev squizlabs/php_codesniffer symfony/phpunit-bridge")
    print("    3. commitgate run   (check what is staged right now)")
    print()
    return exit_code
