"""Git collaborator for CommitGate.

Only three questions are ever asked of git: the current branch, whether a
revision exists, and which files are added or modified in the index.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from commitgate.errors import GitError

# Hash of the empty tree; the diff base for a repository with no commits yet.
EMPTY_TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"


def find_repo_root(start: str | Path = ".") -> Path:
    """Return the git top-level directory for ``start``, or ``start`` itself."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            capture_output=True,
            text=True,
            check=True,
            cwd=start,
        )
        top = result.stdout.strip()
        if top:
            return Path(top)
    except (subprocess.CalledProcessError, FileNotFoundError):
        pass
    return Path(start).resolve()


class GitRepository:
    """Thin wrapper around the git CLI for one working tree."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def _git(self, *args: str) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(
                ["git", *args],
                capture_output=True,
                text=True,
                cwd=self.root,
            )
        except FileNotFoundError as e:
            raise GitError("git is not installed or not in PATH") from e

    def current_branch(self) -> str:
        """Name of the checked-out branch (``HEAD`` when detached).

        Raises:
            GitError: If git cannot report a branch name.
        """
        result = self._git("rev-parse", "--abbrev-ref", "HEAD")
        if result.returncode != 0:
            # No commits yet: HEAD is a symbolic ref to an unborn branch.
            result = self._git("symbolic-ref", "--short", "-q", "HEAD")
        branch = result.stdout.strip()
        if result.returncode != 0 or not branch:
            raise GitError("Could not determine the current GIT branch.")
        return branch.splitlines()[0]

    def revision_exists(self, revision: str) -> bool:
        return self._git("rev-parse", "--verify", "--quiet", revision).returncode == 0

    def staged_files(self) -> list[str]:
        """Paths added or modified in the index, in git's output order.

        Raises:
            GitError: If the diff against the base revision fails.
        """
        against = "HEAD" if self.revision_exists("HEAD") else EMPTY_TREE
        result = self._git("diff-index", "--cached", "--name-status", "-z", against)
        if result.returncode != 0:
            raise GitError(f"Error running git diff-index: {result.stderr.strip()}")
        return parse_name_status(result.stdout)


def parse_name_status(output: str) -> list[str]:
    """Extract added/modified paths from ``git diff-index --name-status -z`` output.

    Entries are NUL-separated ``status, path`` pairs; copy and rename entries
    carry two paths.
    """
    fields = output.split("\0")
    files: list[str] = []
    i = 0
    while i < len(fields) - 1:
        status = fields[i]
        if not status:
            i += 1
            continue
        if status[0] in "RC":
            i += 3
            continue
        path = fields[i + 1]
        if status[0] in "AM" and path not in files:
            files.append(path)
        i += 2
    return files
