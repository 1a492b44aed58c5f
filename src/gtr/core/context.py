"""Application context with dependency injection."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import click

from gtr.cli.output import user_output
from gtr.core.adapters import LauncherRegistry, default_registry
from gtr.core.config_resolver import ConfigResolver
from gtr.core.config_store import ConfigStore, RealConfigStore
from gtr.core.git.abc import Git
from gtr.core.git.real import RealGit
from gtr.core.repo_discovery import NoRepoSentinel, RepoContext, discover_repo_or_sentinel
from gtr.core.shell import RealShell, Shell


@dataclass(frozen=True)
class GtrContext:
    """Immutable context holding all dependencies for gtr operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    git: Git
    config_store: ConfigStore
    shell: Shell
    launchers: LauncherRegistry
    environ: Mapping[str, str]
    cwd: Path  # Current working directory at CLI invocation
    repo: RepoContext | NoRepoSentinel

    @property
    def config(self) -> ConfigResolver:
        """Resolver over the config stores. Built per access; reads are never cached."""
        return ConfigResolver(self.config_store, self.environ)

    @staticmethod
    def for_test(
        git: Git | None = None,
        config_store: ConfigStore | None = None,
        shell: Shell | None = None,
        launchers: LauncherRegistry | None = None,
        environ: Mapping[str, str] | None = None,
        cwd: Path | None = None,
        repo: RepoContext | NoRepoSentinel | None = None,
    ) -> "GtrContext":
        """Create test context with optional pre-configured integration classes.

        Unspecified integrations default to empty fakes, the environment
        defaults to empty, and the launcher registry defaults to the built-in
        launchers on top of the (fake) shell.

        Example:
            >>> git = FakeGit(current_branches={Path("/repo"): "main"})
            >>> ctx = GtrContext.for_test(git=git, cwd=Path("/repo"))
        """
        from tests.fakes.config_store import FakeConfigStore
        from tests.fakes.git import FakeGit
        from tests.fakes.shell import FakeShell

        if git is None:
            git = FakeGit()

        if config_store is None:
            config_store = FakeConfigStore()

        if shell is None:
            shell = FakeShell()

        if launchers is None:
            launchers = default_registry(shell)

        if environ is None:
            environ = {}

        if cwd is None:
            cwd = Path("/test/default/cwd")

        if repo is None:
            repo = NoRepoSentinel()

        return GtrContext(
            git=git,
            config_store=config_store,
            shell=shell,
            launchers=launchers,
            environ=environ,
            cwd=cwd,
            repo=repo,
        )


def safe_cwd() -> tuple[Path | None, str | None]:
    """Get current working directory, detecting if it no longer exists.

    Returns:
        (path, None) on success, (None, error_message) if the directory was deleted
    """
    try:
        return (Path.cwd(), None)
    except (FileNotFoundError, OSError):
        return (None, "Current working directory no longer exists")


def create_context() -> GtrContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution.
    """
    cwd, error_msg = safe_cwd()
    if cwd is None:
        assert error_msg is not None
        user_output(click.style("Error: ", fg="red") + error_msg)
        user_output("\nThe directory you're running from has been deleted.")
        user_output("Please change to a valid directory and try again.")
        raise SystemExit(1)

    git = RealGit()
    repo = discover_repo_or_sentinel(cwd, git)
    repo_root = repo.root if isinstance(repo, RepoContext) else None
    shell = RealShell()

    return GtrContext(
        git=git,
        config_store=RealConfigStore(repo_root),
        shell=shell,
        launchers=default_registry(shell),
        environ=os.environ,
        cwd=cwd,
        repo=repo,
    )
