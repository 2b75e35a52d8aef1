"""Tests for the opt-in mess detection stage."""

from unittest.mock import patch

from commitgate.models import ToolResult
from commitgate.stages.mess import mess_detect


class TestMessDetect:
    def test_file_placed_before_ruleset(self, make_ctx):
        with patch("commitgate.stages.mess.run_tool") as mock_run:
            mock_run.side_effect = lambda cmd, cwd: ToolResult(cmd, 0)
            result = mess_detect(make_ctx(["src/A.php"]))
        assert result.passed
        assert mock_run.call_args[0][0][1:] == ["src/A.php", "text", "controversial"]

    def test_violation_reports_both_streams(self, make_ctx):
        with patch("commitgate.stages.mess.run_tool") as mock_run:
            mock_run.side_effect = lambda cmd, cwd: ToolResult(cmd, 2, stdout="CamelCase violation", stderr="warning")
            result = mess_detect(make_ctx(["src/A.php"]))
        assert not result.passed
        assert result.diagnostics == ["src/A.php", "warning", "CamelCase violation"]
