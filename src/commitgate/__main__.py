"""CommitGate CLI entry point.

Usage:
    commitgate run [--config PATH] [--root PATH] [--report PATH]
    commitgate stages [--config PATH] [--root PATH]
    commitgate init [--path DIR] [--standard NAME] [--no-hook]
    python -m commitgate run [options]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from commitgate.config import CommitGateConfig
from commitgate.engine import CommitGateEngine
from commitgate.errors import CommitGateError, PolicyViolation
from commitgate.git import find_repo_root
from commitgate.init_command import init_command
from commitgate.models import RunReport
from commitgate.reporters.json_reporter import JSONReporter
from commitgate.stages import PIPELINE


def _resolve_root(args: argparse.Namespace) -> Path:
    if getattr(args, "root", None):
        return Path(args.root).resolve()
    return find_repo_root(Path.cwd())


def _write_report(report: RunReport | None, output_path: str | None) -> None:
    if report is None or not output_path:
        return
    reporter = JSONReporter()
    path = reporter.write(report, output_path)
    print(f"📁 Report written to {path} ({reporter.summary(report)})", file=sys.stderr)


def run_command(args: argparse.Namespace) -> int:
    """Execute the run command."""
    root = _resolve_root(args)
    report: RunReport | None = None
    try:
        config = CommitGateConfig.load(args.config, root=root)
        engine = CommitGateEngine(config, root)
        report = engine.run()
    except PolicyViolation as e:
        _write_report(e.report, args.report)
        print(f"❌ {e.message}", file=sys.stderr)
        return e.exit_code
    except CommitGateError as e:
        print(f"❌ {e.message}", file=sys.stderr)
        return e.exit_code

    _write_report(report, args.report)
    return 0


def stages_command(args: argparse.Namespace) -> int:
    """List pipeline stages with their enabled state."""
    root = _resolve_root(args)
    try:
        config = CommitGateConfig.load(args.config, root=root)
    except CommitGateError as e:
        print(f"❌ {e.message}", file=sys.stderr)
        return e.exit_code

    for position, stage in enumerate(PIPELINE, start=1):
        state = "enabled" if config.is_stage_enabled(stage.stage_id) else "disabled"
        print(f"{position}. {stage.stage_id:<20} {state:<9} {stage.title}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="commitgate",
        description="CommitGate — pre-commit quality gate for staged changes",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run subcommand
    run_parser = subparsers.add_parser("run", help="Check the staged files and abort on failure")
    run_parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to the settings file (default: <root>/.githook-settings)",
    )
    run_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Repository root (default: git top-level of the current directory)",
    )
    run_parser.add_argument(
        "--report",
        type=str,
        default=None,
        help="Write a JSON run report to this path",
    )

    # stages subcommand
    stages_parser = subparsers.add_parser("stages", help="List the pipeline stages in order")
    stages_parser.add_argument("--config", type=str, default=None, help="Path to the settings file")
    stages_parser.add_argument("--root", type=str, default=None, help="Repository root")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Bootstrap CommitGate settings and hooks for this repository",
    )
    init_parser.add_argument(
        "--path",
        type=str,
        default=None,
        help="Target repository to initialize (default: current directory)",
    )
    init_parser.add_argument(
        "--standard",
        type=str,
        default=None,
        help="Pre-select the coding standard name",
    )
    init_parser.add_argument(
        "--no-hook",
        action="store_true",
        default=False,
        help="Do not install .git/hooks/pre-commit",
    )

    return parser


def main() -> None:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args()

    if args.command == "run":
        sys.exit(run_command(args))
    elif args.command == "stages":
        sys.exit(stages_command(args))
    elif args.command == "init":
        sys.exit(init_command(args))
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":  # pragma: no cover
    main()
