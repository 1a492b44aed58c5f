"""Repository discovery functionality.

Discovers the main repository root from any directory inside the main checkout
or one of its worktrees. The root is derived from git's common directory rather
than from ``--show-toplevel``, so every worktree sees the same root (and
therefore the same .gtrconfig and the same worktrees directory).
"""

from dataclasses import dataclass
from pathlib import Path

from gtr.core.errors import NotInRepository
from gtr.core.git.abc import Git


@dataclass(frozen=True)
class RepoContext:
    """Represents the main repository of the current invocation."""

    root: Path
    common_dir: Path

    @property
    def name(self) -> str:
        return self.root.name


@dataclass(frozen=True)
class NoRepoSentinel:
    """Sentinel value indicating execution outside a git repository.

    Commands that require repo context check for this sentinel and fail fast.
    """

    message: str = "Not inside a git repository"


def discover_repo_or_sentinel(cwd: Path, git: Git) -> RepoContext | NoRepoSentinel:
    """Find the main repository for `cwd`.

    Args:
        cwd: Current working directory to start from
        git: Git operations interface

    Returns:
        RepoContext if inside a git repository, NoRepoSentinel otherwise
    """
    if not cwd.exists():
        return NoRepoSentinel(message=f"Start path '{cwd}' does not exist")

    common_dir = git.get_git_common_dir(cwd)
    if common_dir is None:
        return NoRepoSentinel()

    if common_dir.name == ".git":
        root = common_dir.parent
    else:
        # Separate git dir (e.g. --separate-git-dir): fall back to the checkout top level
        toplevel = git.get_repo_root(cwd)
        if toplevel is None:
            return NoRepoSentinel(message=f"Cannot determine repository root for {cwd}")
        root = toplevel

    return RepoContext(root=root, common_dir=common_dir)


def discover_repo(cwd: Path, git: Git) -> RepoContext:
    """Like discover_repo_or_sentinel(), raising NotInRepository instead."""
    repo = discover_repo_or_sentinel(cwd, git)
    if isinstance(repo, NoRepoSentinel):
        raise NotInRepository(cwd)
    return repo
