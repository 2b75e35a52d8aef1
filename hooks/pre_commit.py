#!/usr/bin/env python3
"""Git pre-commit hook for CommitGate.

Install by copying or symlinking this file to `.git/hooks/pre-commit`,
or use with the pre-commit framework:

    # .pre-commit-config.yaml
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

from __future__ import annotations

import subprocess
import sys


def main(argv: list[str] | None = None) -> int:
    """Run CommitGate on staged changes, passing through any extra run options."""
    extra = sys.argv[1:] if argv is None else argv
    result = subprocess.run([sys.executable, "-m", "commitgate", "run", *extra])
    return result.returncode


if __name__ == "__main__":
    sys.exit(main())
