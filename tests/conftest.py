"""Shared test fixtures for CommitGate tests."""

import shutil
import subprocess
import sys
from pathlib import Path

import pytest

from commitgate.config import CommitGateConfig
from commitgate.stages.base import StageContext


@pytest.fixture
def config():
    return CommitGateConfig()


@pytest.fixture
def make_ctx(tmp_path, config):
    """Build a StageContext rooted at tmp_path, writing the given files."""

    def _make(files=None, cfg=None, contents=None):
        for rel, text in (contents or {}).items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text)
        return StageContext(root=tmp_path, config=cfg or config, files=list(files or []))

    return _make


def _git(cwd: Path, *args: str) -> str:
    result = subprocess.run(["git", *args], cwd=cwd, capture_output=True, text=True, check=True)
    return result.stdout


@pytest.fixture
def git_repo(tmp_path):
    """An empty git repository with an identity configured."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q", "-b", "main")
    _git(repo, "config", "user.email", "dev@example.com")
    _git(repo, "config", "user.name", "Dev")
    _git(repo, "config", "commit.gpgsign", "false")
    return repo


@pytest.fixture
def git():
    return _git


# Fake external tools, run as `python <script> <file>`.

_FAKE_LINT = """\
import sys
text = open(sys.argv[1]).read()
if "<?php" in text and text.count("{") != text.count("}"):
    print("PHP Parse error: unbalanced braces in " + sys.argv[1], file=sys.stderr)
    sys.exit(255)
print("No syntax errors detected in " + sys.argv[1])
"""

# Converts tabs to four spaces; exits 1 when it changed something, like phpcbf.
_FAKE_FIXER = """\
import sys
path = sys.argv[1]
text = open(path).read()
fixed = text.replace("\\t", "    ")
if fixed != text:
    open(path, "w").write(fixed)
    print("Fixed 1 file")
    sys.exit(1)
sys.exit(0)
"""

_FAKE_CHECKER = """\
import sys
if "\\t" in open(sys.argv[1]).read():
    print("FILE: " + sys.argv[1] + " | ERROR | Tabs must be spaces")
    sys.exit(2)
"""

_FAKE_TESTS = """\
print("PHPUnit fake")
print("OK (1 test, 1 assertion)")
"""


@pytest.fixture
def fake_tools(tmp_path):
    """Settings dict pointing every collaborator at a small Python script."""
    tools = tmp_path / "tools"
    tools.mkdir()
    scripts = {
        "lint": _FAKE_LINT,
        "fix": _FAKE_FIXER,
        "style": _FAKE_CHECKER,
        "tests": _FAKE_TESTS,
    }
    for name, body in scripts.items():
        (tools / f"{name}.py").write_text(body)
    return {
        "lint-command": [sys.executable, str(tools / "lint.py")],
        "fix-command": [sys.executable, str(tools / "fix.py")],
        "style-command": [sys.executable, str(tools / "style.py")],
        "test-command": [sys.executable, str(tools / "tests.py")],
    }
