"""Tests for the commitgate init command."""

import argparse
import json
import os
from unittest.mock import patch

from commitgate.config import CommitGateConfig
from commitgate.init_command import (
    _build_git_hook,
    _build_precommit_config,
    _build_settings,
    init_command,
)


class TestTemplates:
    def test_settings_is_valid_json(self):
        data = json.loads(_build_settings("PSR12", ["release"]))
        assert data["coding-standard"] == "PSR12"
        assert data["precommit-skip-branches"] == ["release"]

    def test_settings_loadable_as_config(self, tmp_path):
        (tmp_path / ".githook-settings").write_text(_build_settings("PSR12", ["wip"]))
        config = CommitGateConfig.load(root=tmp_path)
        assert config.coding_standard == "PSR12"
        assert config.skip_branches == ("wip",)

    def test_precommit_config_has_commitgate_hook(self):
        content = _build_precommit_config()
        assert "commitgate" in content
        assert "python -m commitgate run" in content

    def test_git_hook_runs_commitgate(self):
        content = _build_git_hook()
        assert content.startswith("#!/bin/sh")
        assert "commitgate run" in content


class TestInitCommand:
    def test_creates_settings_and_precommit_config(self, tmp_path):
        args = argparse.Namespace(path=str(tmp_path), standard=None, no_hook=True)
        inputs = iter(["", "release, hotfix"])
        with patch("builtins.input", side_effect=inputs):
            assert init_command(args) == 0
        data = json.loads((tmp_path / ".githook-settings").read_text())
        assert data["coding-standard"] == "Dovab"
        assert data["precommit-skip-branches"] == ["release", "hotfix"]
        assert (tmp_path / ".pre-commit-config.yaml").exists()

    def test_standard_argument_is_default(self, tmp_path):
        args = argparse.Namespace(path=str(tmp_path), standard="PSR12", no_hook=True)
        inputs = iter(["", ""])
        with patch("builtins.input", side_effect=inputs):
            init_command(args)
        data = json.loads((tmp_path / ".githook-settings").read_text())
        assert data["coding-standard"] == "PSR12"
        assert data["precommit-skip-branches"] == []

    def test_installs_executable_git_hook(self, tmp_path):
        (tmp_path / ".git" / "hooks").mkdir(parents=True)
        args = argparse.Namespace(path=str(tmp_path), standard=None, no_hook=False)
        inputs = iter(["", ""])
        with patch("builtins.input", side_effect=inputs):
            assert init_command(args) == 0
        hook = tmp_path / ".git" / "hooks" / "pre-commit"
        assert hook.exists()
        assert os.access(hook, os.X_OK)

    def test_hook_requested_outside_git_repo(self, tmp_path, capsys):
        args = argparse.Namespace(path=str(tmp_path), standard=None, no_hook=False)
        inputs = iter(["", ""])
        with patch("builtins.input", side_effect=inputs):
            assert init_command(args) == 1
        assert "No git repository" in capsys.readouterr().out

    def test_overwrite_prompt_on_existing_file(self, tmp_path):
        (tmp_path / ".githook-settings").write_text('{"existing": true}\n')
        args = argparse.Namespace(path=str(tmp_path), standard=None, no_hook=True)
        # standard, branches, then overwrite .githook-settings → n
        inputs = iter(["", "", "n"])
        with patch("builtins.input", side_effect=inputs):
            init_command(args)
        assert "existing" in (tmp_path / ".githook-settings").read_text()

    def test_overwrite_confirmed(self, tmp_path):
        (tmp_path / ".githook-settings").write_text('{"existing": true}\n')
        args = argparse.Namespace(path=str(tmp_path), standard=None, no_hook=True)
        inputs = iter(["", "", "y"])
        with patch("builtins.input", side_effect=inputs):
            init_command(args)
        assert "existing" not in (tmp_path / ".githook-settings").read_text()
