"""External tool invocation for CommitGate stages.

Every collaborator (syntax checker, fixer, style checker, test runner) is run
exactly once per relevant file as a blocking subprocess. Invocation problems
such as a missing executable or a timeout never raise: they come back as a
failed ``ToolResult`` so the calling stage fails like any other tool failure.
"""

from __future__ import annotations

import os
import signal
import subprocess
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from commitgate.models import ToolResult

EXIT_NOT_FOUND = 127
EXIT_TIMEOUT = 124


def build_command(template: Sequence[str], file: str | None = None, **values: str) -> list[str]:
    """Expand ``{bin}``/``{standard}``/``{file}`` placeholders in a command template.

    If ``file`` is given and the template has no ``{file}`` placeholder, the
    file is appended as the last argument.
    """
    if file is not None:
        values["file"] = file
    cmd = []
    for part in template:
        for key, value in values.items():
            part = part.replace("{" + key + "}", value)
        cmd.append(part)
    if file is not None and not any("{file}" in part for part in template):
        cmd.append(file)
    return cmd


def run_tool(cmd: list[str], cwd: str | Path) -> ToolResult:
    """Run a command to completion, capturing stdout and stderr."""
    try:
        result = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True, errors="replace")
    except FileNotFoundError:
        return ToolResult(cmd, EXIT_NOT_FOUND, stderr=f"Command not found: {cmd[0]}")
    except OSError as e:
        return ToolResult(cmd, EXIT_NOT_FOUND, stderr=f"Could not run {cmd[0]}: {e}")
    return ToolResult(cmd, result.returncode, stdout=result.stdout, stderr=result.stderr)


def stream_tool(cmd: list[str], cwd: str | Path, out: TextIO, timeout: float) -> ToolResult:
    """Run a command, echoing its combined output to ``out`` as it arrives.

    The process and everything it spawned are killed once ``timeout`` seconds
    have passed. The captured
    output is returned in ``ToolResult.stdout``.
    """
    try:
        proc = subprocess.Popen(
            cmd,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            bufsize=1,
            start_new_session=True,
        )
    except FileNotFoundError:
        return ToolResult(cmd, EXIT_NOT_FOUND, stderr=f"Command not found: {cmd[0]}")
    except OSError as e:
        return ToolResult(cmd, EXIT_NOT_FOUND, stderr=f"Could not run {cmd[0]}: {e}")

    timed_out = threading.Event()

    def _kill() -> None:
        timed_out.set()
        # Runners fork workers; killing only the direct child leaves them holding stdout.
        try:
            if hasattr(os, "killpg"):
                os.killpg(proc.pid, signal.SIGKILL)
            else:
                proc.kill()
        except ProcessLookupError:
            pass

    watchdog = threading.Timer(timeout, _kill)
    watchdog.start()
    captured: list[str] = []
    try:
        assert proc.stdout is not None
        for line in proc.stdout:
            captured.append(line)
            out.write(line)
            out.flush()
        returncode = proc.wait()
    finally:
        watchdog.cancel()
        if proc.stdout is not None:
            proc.stdout.close()

    if timed_out.is_set():
        return ToolResult(
            cmd,
            EXIT_TIMEOUT,
            stdout="".join(captured),
            stderr=f"{cmd[0]} timed out after {timeout:g} seconds",
        )
    return ToolResult(cmd, returncode, stdout="".join(captured))
