"""High-level git operations interface.

This module provides a clean abstraction over git subprocess calls, making the
codebase more testable.

Architecture:
- Git: Abstract base class defining the interface
- RealGit: Production implementation using subprocess
- FakeGit (tests/fakes): In-memory implementation for tests
"""

from abc import ABC, abstractmethod
from pathlib import Path

from gtr.core.worktree_status import WorktreeSection


class Git(ABC):
    """Abstract interface for git operations.

    All implementations (real and fake) must implement this interface.
    Mutating operations raise RuntimeError with git's output when git fails;
    query operations return None/False instead of raising.
    """

    @abstractmethod
    def get_repo_root(self, cwd: Path) -> Path | None:
        """Get the top-level directory of the checkout containing cwd."""
        ...

    @abstractmethod
    def get_git_common_dir(self, cwd: Path) -> Path | None:
        """Get the common git directory, absolute.

        For a linked worktree this is the main repository's ``.git`` directory,
        not the worktree's private gitdir.
        """
        ...

    @abstractmethod
    def get_current_branch(self, cwd: Path) -> str | None:
        """Get the checked-out branch via ``git branch --show-current``.

        Returns None when detached or when git is too old to support the flag.
        """
        ...

    @abstractmethod
    def get_abbrev_ref_head(self, cwd: Path) -> str | None:
        """Resolve HEAD symbolically (``git rev-parse --abbrev-ref HEAD``).

        Returns the literal ``HEAD`` when detached.
        """
        ...

    @abstractmethod
    def resolve_symbolic_ref(self, repo_root: Path, ref: str) -> str | None:
        """Get the target of a symbolic ref (e.g. refs/remotes/origin/HEAD)."""
        ...

    @abstractmethod
    def ref_exists(self, repo_root: Path, ref: str) -> bool:
        """Check whether a fully-qualified ref (refs/heads/x, refs/remotes/origin/x) exists."""
        ...

    @abstractmethod
    def list_worktrees(self, repo_root: Path) -> list[WorktreeSection]:
        """List all worktrees known to git, main worktree first. Empty if git fails."""
        ...

    @abstractmethod
    def add_worktree(
        self,
        repo_root: Path,
        path: Path,
        *,
        branch: str,
        start_point: str | None,
        create_branch: bool,
        force: bool,
    ) -> None:
        """Add a new git worktree.

        Args:
            repo_root: Path to the git repository root
            path: Path where the worktree should be created
            branch: Branch to check out (or to create when create_branch is True)
            start_point: Ref the new branch starts at (only used with create_branch)
            create_branch: True to create a new branch, False to check out an existing one
            force: Allow checking out a branch that is already checked out elsewhere
        """
        ...

    @abstractmethod
    def remove_worktree(self, repo_root: Path, path: Path, *, force: bool) -> None:
        """Remove a worktree.

        Args:
            repo_root: Path to the git repository root
            path: Path to the worktree to remove
            force: True to force removal even if worktree has uncommitted changes
        """
        ...

    @abstractmethod
    def create_tracking_branch(self, repo_root: Path, branch: str, remote_ref: str) -> None:
        """Create a local branch tracking a remote branch (``git branch --track``)."""
        ...

    @abstractmethod
    def delete_branch(self, repo_root: Path, branch: str, *, force: bool) -> None:
        """Delete a local branch (``-d``, or ``-D`` when force is True)."""
        ...

    @abstractmethod
    def fetch(self, repo_root: Path, remote: str) -> None:
        """Fetch from a remote."""
        ...
