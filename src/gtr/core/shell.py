"""Shell operations interface and implementation.

Covers running user-facing programs (hooks, editors, AI tools) with the
terminal attached, and locating executables on PATH.
"""

import logging
import os
import shutil
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)


class Shell(ABC):
    """Abstract interface for running interactive commands."""

    @abstractmethod
    def get_installed_tool_path(self, tool_name: str) -> str | None:
        """Return the absolute path of an executable on PATH, or None if missing."""
        ...

    @abstractmethod
    def run_command(
        self,
        command: list[str],
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> int:
        """Run a command with inherited stdio and return its exit code.

        Args:
            command: Program and arguments
            cwd: Working directory (current directory if None)
            env: Extra environment variables layered over the current environment

        Raises:
            FileNotFoundError: The program does not exist
        """
        ...


class RealShell(Shell):
    """Production implementation using shutil and subprocess."""

    def get_installed_tool_path(self, tool_name: str) -> str | None:
        return shutil.which(tool_name)

    def run_command(
        self,
        command: list[str],
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> int:
        merged_env = None
        if env:
            merged_env = {**os.environ, **env}
        logger.debug("Running %s in %s", command, cwd)
        result = subprocess.run(command, cwd=cwd, env=merged_env, check=False)
        return result.returncode
