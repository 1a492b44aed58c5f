"""Raw access to the git-config backed configuration stores.

Four independently addressable stores hold gtr settings, in priority order:

1. local   - ``git config --local`` (the repository's .git/config)
2. project - ``<repo root>/.gtrconfig``, git-config syntax, committed for the team
3. global  - ``git config --global``
4. system  - ``git config --system``

ConfigStore only reads and writes raw keys in one store at a time. Precedence,
environment fallback and key mapping live in ConfigResolver.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path

from gtr.core.config_keys import PROJECT_CONFIG_FILENAME
from gtr.core.subprocess import run_subprocess_with_context

logger = logging.getLogger(__name__)


class ConfigScope(Enum):
    """Configuration tiers, highest priority first."""

    LOCAL = "local"
    PROJECT_FILE = "project"
    GLOBAL = "global"
    SYSTEM = "system"
    ENVIRONMENT = "environment"
    DEFAULT = "default"

    @property
    def label(self) -> str:
        """Origin label shown by `gtr config list`."""
        if self is ConfigScope.PROJECT_FILE:
            return PROJECT_CONFIG_FILENAME
        return self.value


STORE_SCOPES: tuple[ConfigScope, ...] = (
    ConfigScope.LOCAL,
    ConfigScope.PROJECT_FILE,
    ConfigScope.GLOBAL,
    ConfigScope.SYSTEM,
)


class ConfigStore(ABC):
    """Abstract interface over the four git-config stores.

    Implementations must preserve value order within a store and must
    distinguish an empty value from an absent key.
    """

    @abstractmethod
    def get_all(self, scope: ConfigScope, key: str) -> list[str]:
        """All values of a key in one store, in file order. Empty list if absent."""
        ...

    @abstractmethod
    def get_regexp(self, scope: ConfigScope, pattern: str) -> list[tuple[str, str]]:
        """All (key, value) pairs in one store whose key matches a regex."""
        ...

    @abstractmethod
    def set_value(self, scope: ConfigScope, key: str, value: str) -> None:
        """Replace every value of a key in one store with a single value."""
        ...

    @abstractmethod
    def add_value(self, scope: ConfigScope, key: str, value: str) -> None:
        """Append a value to a multi-valued key in one store."""
        ...

    @abstractmethod
    def unset_all(self, scope: ConfigScope, key: str) -> None:
        """Remove every value of a key in one store. Absent keys are not an error."""
        ...


def split_null_values(output: str) -> list[str]:
    """Split ``git config --null --get-all`` output into values.

    Each value is terminated by NUL, so an empty value shows up as a lone NUL
    and is kept as "".
    """
    if not output:
        return []
    return output.split("\0")[:-1]


def split_null_entries(output: str) -> list[tuple[str, str]]:
    """Split ``git config --null --get-regexp`` output into (key, value) pairs.

    Records are NUL-terminated; within a record the key ends at the first
    newline. A record with no newline is a key with no value at all, which is
    reported as "". Values may themselves contain spaces or newlines.
    """
    entries: list[tuple[str, str]] = []
    for record in split_null_values(output):
        if not record:
            continue
        key, _, value = record.partition("\n")
        entries.append((key, value))
    return entries


class RealConfigStore(ConfigStore):
    """Production implementation calling ``git config``.

    Args:
        repo_root: Main repository root, or None outside a repository. Without a
            repository the local and project stores read as empty.
    """

    def __init__(self, repo_root: Path | None) -> None:
        self._repo_root = repo_root

    def project_file(self) -> Path | None:
        if self._repo_root is None:
            return None
        return self._repo_root / PROJECT_CONFIG_FILENAME

    def _scope_args(self, scope: ConfigScope) -> list[str] | None:
        match scope:
            case ConfigScope.LOCAL:
                if self._repo_root is None:
                    return None
                return ["--local"]
            case ConfigScope.PROJECT_FILE:
                project_file = self.project_file()
                if project_file is None:
                    return None
                return ["--file", str(project_file)]
            case ConfigScope.GLOBAL:
                return ["--global"]
            case ConfigScope.SYSTEM:
                return ["--system"]
            case _:
                raise ValueError(f"{scope.value} is not a config store scope")

    def _readable(self, scope: ConfigScope) -> list[str] | None:
        args = self._scope_args(scope)
        if scope is ConfigScope.PROJECT_FILE:
            project_file = self.project_file()
            if project_file is None or not project_file.is_file():
                return None
        return args

    def _read(self, args: list[str]) -> str:
        cmd = ["git", "config", *args]
        logger.debug("Running %s", " ".join(cmd))
        result = subprocess.run(
            cmd,
            cwd=self._repo_root,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
        # Exit code 1 means "key not found"; anything else is a store we cannot read
        if result.returncode == 1:
            return ""
        if result.returncode != 0:
            logger.debug("git config exited %d: %s", result.returncode, result.stderr.strip())
            return ""
        return result.stdout

    def get_all(self, scope: ConfigScope, key: str) -> list[str]:
        args = self._readable(scope)
        if args is None:
            return []
        return split_null_values(self._read([*args, "--null", "--get-all", key]))

    def get_regexp(self, scope: ConfigScope, pattern: str) -> list[tuple[str, str]]:
        args = self._readable(scope)
        if args is None:
            return []
        return split_null_entries(self._read([*args, "--null", "--get-regexp", pattern]))

    def _writable(self, scope: ConfigScope, key: str) -> list[str]:
        args = self._scope_args(scope)
        if args is None:
            raise RuntimeError(f"Cannot write '{key}' to {scope.value} config outside a repository")
        return args

    def set_value(self, scope: ConfigScope, key: str, value: str) -> None:
        args = self._writable(scope, key)
        run_subprocess_with_context(
            ["git", "config", *args, "--replace-all", key, value],
            operation_context=f"set config '{key}' in {scope.value} scope",
            cwd=self._repo_root,
        )

    def add_value(self, scope: ConfigScope, key: str, value: str) -> None:
        args = self._writable(scope, key)
        run_subprocess_with_context(
            ["git", "config", *args, "--add", key, value],
            operation_context=f"add config '{key}' in {scope.value} scope",
            cwd=self._repo_root,
        )

    def unset_all(self, scope: ConfigScope, key: str) -> None:
        args = self._writable(scope, key)
        if scope is ConfigScope.PROJECT_FILE and self._readable(scope) is None:
            return
        result = run_subprocess_with_context(
            ["git", "config", *args, "--unset-all", key],
            operation_context=f"unset config '{key}' in {scope.value} scope",
            cwd=self._repo_root,
            check=False,
        )
        # Exit code 5 means the key was not set
        if result.returncode not in (0, 5):
            raise RuntimeError(
                f"Failed to unset config '{key}' in {scope.value} scope\n"
                f"Exit code: {result.returncode}\nstderr: {result.stderr.strip()}"
            )
