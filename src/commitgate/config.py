"""Configuration management for CommitGate."""

from __future__ import annotations

import json
import shlex
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml  # type: ignore

from commitgate.errors import ConfigError

SETTINGS_FILENAME = ".githook-settings"

DEFAULT_FORBIDDEN_FUNCTIONS = ("dump", "var_dump", "is_null")
DEFAULT_CODING_STANDARD = "Dovab"

_DEFAULT_CONFIG: dict[str, Any] = {
    "precommit-skip-branches": [],
    "forbidden-functions": [],
    "source-root": "src",
    "source-extension": ".php",
    "bin-dir": "vendor/bin",
    "coding-standard": DEFAULT_CODING_STANDARD,
    "lint-command": "php -l",
    "fix-command": "{bin}/phpcbf --standard={standard}",
    "fix-ok-exit-codes": [0, 1],
    "style-command": "{bin}/phpcs --standard={standard}",
    "mess-command": "{bin}/phpmd {file} text controversial",
    "test-command": "{bin}/simple-phpunit",
    "test-timeout": 3600,
    "lock-files": {"composer.json": "composer.lock"},
    "stages": {
        "lock-files": {"enabled": True},
        "lint": {"enabled": True},
        "forbidden-functions": {"enabled": True},
        "fix-style": {"enabled": True},
        "check-style": {"enabled": True},
        "mess-detect": {"enabled": False},
        "unit-tests": {"enabled": True},
    },
}


@dataclass(frozen=True)
class CommitGateConfig:
    """Immutable run configuration: built-in defaults merged with `.githook-settings`."""

    skip_branches: tuple[str, ...] = ()
    forbidden_functions: tuple[str, ...] = DEFAULT_FORBIDDEN_FUNCTIONS
    source_root: str = "src"
    source_extension: str = ".php"
    bin_dir: str = "vendor/bin"
    coding_standard: str = DEFAULT_CODING_STANDARD
    lint_command: tuple[str, ...] = ("php", "-l")
    fix_command: tuple[str, ...] = ("{bin}/phpcbf", "--standard={standard}")
    fix_ok_exit_codes: tuple[int, ...] = (0, 1)
    style_command: tuple[str, ...] = ("{bin}/phpcs", "--standard={standard}")
    mess_command: tuple[str, ...] = ("{bin}/phpmd", "{file}", "text", "controversial")
    test_command: tuple[str, ...] = ("{bin}/simple-phpunit",)
    test_timeout: float = 3600
    lock_files: tuple[tuple[str, str], ...] = (("composer.json", "composer.lock"),)
    enabled_stages: Mapping[str, bool] = field(
        default_factory=lambda: MappingProxyType({"mess-detect": False})
    )

    @classmethod
    def load(cls, config_path: str | Path | None = None, root: str | Path = ".") -> CommitGateConfig:
        """Load configuration, falling back to defaults.

        Search order:
        1. Explicit ``config_path`` argument (must exist)
        2. ``.githook-settings`` in ``root``
        3. Built-in defaults

        Raises:
            ConfigError: If the file cannot be read or parsed, or holds a value
                of the wrong type.
        """
        raw: dict[str, Any] = dict(_DEFAULT_CONFIG)

        if config_path:
            path = Path(config_path)
            if not path.exists():
                raise ConfigError(f"Settings file not found: {path}")
        else:
            path = Path(root) / SETTINGS_FILENAME

        if path.exists():
            raw = _deep_merge(raw, _read_settings(path))

        return cls._from_raw(raw)

    @classmethod
    def _from_raw(cls, raw: dict[str, Any]) -> CommitGateConfig:
        """Build config from a raw dict (merged defaults + user overrides)."""
        skip = raw.get("precommit-skip-branches") or []
        if isinstance(skip, str):
            skip = [skip]
        skip_branches = tuple(s for s in _str_list(skip, "precommit-skip-branches") if s)

        extra = _str_list(raw.get("forbidden-functions") or [], "forbidden-functions")
        forbidden: list[str] = []
        seen: set[str] = set()
        for name in (*DEFAULT_FORBIDDEN_FUNCTIONS, *extra):
            if name and name.lower() not in seen:
                seen.add(name.lower())
                forbidden.append(name)

        lock_raw = raw.get("lock-files") or {}
        if not isinstance(lock_raw, dict):
            raise ConfigError("'lock-files' must be a mapping of manifest to lock file")

        codes = raw.get("fix-ok-exit-codes")
        if not isinstance(codes, list) or not all(isinstance(c, int) for c in codes):
            raise ConfigError("'fix-ok-exit-codes' must be a list of integers")

        timeout = raw.get("test-timeout")
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigError("'test-timeout' must be a positive number of seconds")

        stages_raw = raw.get("stages") or {}
        if not isinstance(stages_raw, dict):
            raise ConfigError("'stages' must be a mapping of stage id to settings")
        stages: dict[str, bool] = {}
        for name, settings in stages_raw.items():
            if isinstance(settings, dict):
                settings = settings.get("enabled", True)
            if not isinstance(settings, bool):
                raise ConfigError(f"'stages.{name}.enabled' must be true or false")
            stages[name] = settings

        return cls(
            skip_branches=skip_branches,
            forbidden_functions=tuple(forbidden),
            source_root=_str(raw, "source-root").strip("/"),
            source_extension=_str(raw, "source-extension"),
            bin_dir=_str(raw, "bin-dir"),
            coding_standard=_str(raw, "coding-standard"),
            lint_command=_command(raw, "lint-command"),
            fix_command=_command(raw, "fix-command"),
            fix_ok_exit_codes=tuple(codes),
            style_command=_command(raw, "style-command"),
            mess_command=_command(raw, "mess-command"),
            test_command=_command(raw, "test-command"),
            test_timeout=timeout,
            lock_files=tuple((str(k), str(v)) for k, v in lock_raw.items()),
            enabled_stages=MappingProxyType(stages),
        )

    def is_stage_enabled(self, stage_id: str) -> bool:
        """Check if a stage is enabled in the config."""
        return self.enabled_stages.get(stage_id, True)

    def is_source_file(self, file_path: str) -> bool:
        """True for files with the source extension anywhere in the repository."""
        return file_path.lower().endswith(self.source_extension.lower())

    def is_source_tree_file(self, file_path: str) -> bool:
        """True for source files below the designated source root."""
        if not self.is_source_file(file_path):
            return False
        if not self.source_root:
            return True
        return file_path.startswith(self.source_root + "/")


def _read_settings(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not read settings file {path}: {e}") from e

    # YAML rejects tab indentation, which is common in hand-written JSON.
    try:
        loaded = json.loads(text)
    except json.JSONDecodeError:
        try:
            loaded = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed settings file {path}: {e}") from e

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping at the top level")
    return loaded


def _str(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string")
    return value


def _str_list(value: Any, key: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a string or a list of strings")
    return value


def _command(raw: dict[str, Any], key: str) -> tuple[str, ...]:
    value = raw.get(key)
    if isinstance(value, str):
        parts = shlex.split(value)
    elif isinstance(value, list) and all(isinstance(v, str) for v in value):
        parts = list(value)
    else:
        raise ConfigError(f"'{key}' must be a command string or a list of arguments")
    if not parts:
        raise ConfigError(f"'{key}' must not be empty")
    return tuple(parts)


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep-merge override dict into base dict."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
