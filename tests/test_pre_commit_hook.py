"""Tests for hooks/pre_commit.py"""

import sys
from unittest.mock import MagicMock, patch

import pre_commit


class TestPreCommitHook:
    def test_runs_commitgate_with_current_interpreter(self):
        with patch("subprocess.run", return_value=MagicMock(returncode=0)) as mock_run:
            assert pre_commit.main([]) == 0
        cmd = mock_run.call_args[0][0]
        assert cmd == [sys.executable, "-m", "commitgate", "run"]

    def test_forwards_failure_exit_code(self):
        with patch("subprocess.run", return_value=MagicMock(returncode=1)):
            assert pre_commit.main([]) == 1

    def test_extra_arguments_passed_to_run(self):
        with patch("subprocess.run", return_value=MagicMock(returncode=0)) as mock_run:
            pre_commit.main(["--report", "gate.json"])
        cmd = mock_run.call_args[0][0]
        assert cmd[3:] == ["run", "--report", "gate.json"]
