"""Subprocess execution with rich error context.

Wraps subprocess.run() so that a failing git call surfaces as a RuntimeError
carrying the operation being attempted, the command line and git's own output.
Callers in the core translate that RuntimeError into a GtrError subclass.
"""

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def run_subprocess_with_context(
    cmd: Sequence[str],
    operation_context: str,
    cwd: Path | None = None,
    check: bool = True,
    **kwargs: Any,
) -> subprocess.CompletedProcess[str]:
    """Execute a command, re-raising failures as RuntimeError with context.

    Args:
        cmd: Command and arguments to execute
        operation_context: Human-readable description of operation ("add worktree at ...")
        cwd: Working directory for command execution
        check: Whether to raise on non-zero exit (default: True)
        **kwargs: Additional arguments passed to subprocess.run()

    Returns:
        CompletedProcess instance from subprocess.run()

    Raises:
        RuntimeError: If command fails or the binary is not found
    """
    command_line = " ".join(str(arg) for arg in cmd)
    logger.debug("Running %s (cwd=%s)", command_line, cwd)
    try:
        return subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=check,
            **kwargs,
        )
    except subprocess.CalledProcessError as e:
        raise RuntimeError(_describe_failure(operation_context, command_line, e)) from e
    except FileNotFoundError as e:
        raise RuntimeError(
            f"Command not found while trying to {operation_context}: {cmd[0]}\n"
            f"Full command: {command_line}"
        ) from e


def _describe_failure(
    operation_context: str, command_line: str, error: subprocess.CalledProcessError
) -> str:
    lines = [
        f"Failed to {operation_context}",
        f"Command: {command_line}",
        f"Exit code: {error.returncode}",
    ]
    for stream, output in (("stdout", error.stdout), ("stderr", error.stderr)):
        if output and output.strip():
            lines.append(f"{stream}: {output.strip()}")
    return "\n".join(lines)
