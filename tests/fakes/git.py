"""Fake git operations for testing.

FakeGit is an in-memory implementation that accepts pre-configured state in its
constructor. Worktree directories are real directories (tests pass tmp_path
based paths), because identifier resolution and removal check the filesystem.
"""

import shutil
from pathlib import Path

from gtr.core.git.abc import Git
from gtr.core.worktree_status import WorktreeSection


class FakeGit(Git):
    """In-memory fake implementation of git operations.

    This class has NO public setup methods. All state is provided via constructor
    using keyword arguments with sensible defaults (empty collections).
    Mutations (add/remove worktree, branch changes) update the in-memory state
    and are recorded for assertions.
    """

    def __init__(
        self,
        *,
        git_common_dirs: dict[Path, Path] | None = None,
        repo_roots: dict[Path, Path] | None = None,
        current_branches: dict[Path, str | None] | None = None,
        abbrev_ref_heads: dict[Path, str] | None = None,
        symbolic_refs: dict[str, str] | None = None,
        local_branches: set[str] | None = None,
        remote_branches: set[str] | None = None,
        worktree_sections: list[WorktreeSection] | None = None,
        fetch_raises: Exception | None = None,
        add_worktree_raises: Exception | None = None,
        remove_worktree_raises: Exception | None = None,
        delete_branch_raises: Exception | None = None,
    ) -> None:
        """Create FakeGit with pre-configured state.

        Args:
            git_common_dirs: cwd -> common git dir, for repository discovery
            repo_roots: cwd -> checkout top level
            current_branches: checkout path -> branch (None for a detached HEAD)
            abbrev_ref_heads: checkout path -> ``rev-parse --abbrev-ref HEAD`` output
            symbolic_refs: symbolic ref -> target (e.g. origin/HEAD -> origin/main)
            local_branches: Names of refs/heads/* branches
            remote_branches: Remote-tracking branches as ``origin/<name>``
            worktree_sections: Parsed ``git worktree list --porcelain`` sections
            fetch_raises: Exception raised by fetch()
            add_worktree_raises: Exception raised by add_worktree()
            remove_worktree_raises: Exception raised by remove_worktree()
            delete_branch_raises: Exception raised by delete_branch()
        """
        self._git_common_dirs = git_common_dirs if git_common_dirs is not None else {}
        self._repo_roots = repo_roots if repo_roots is not None else {}
        self._current_branches = dict(current_branches) if current_branches is not None else {}
        self._abbrev_ref_heads = abbrev_ref_heads if abbrev_ref_heads is not None else {}
        self._symbolic_refs = symbolic_refs if symbolic_refs is not None else {}
        self._local_branches = set(local_branches) if local_branches is not None else set()
        self._remote_branches = remote_branches if remote_branches is not None else set()
        self._worktree_sections = list(worktree_sections) if worktree_sections else []
        self._fetch_raises = fetch_raises
        self._add_worktree_raises = add_worktree_raises
        self._remove_worktree_raises = remove_worktree_raises
        self._delete_branch_raises = delete_branch_raises

        self._added_worktrees: list[tuple[Path, str, str | None, bool, bool]] = []
        self._removed_worktrees: list[tuple[Path, bool]] = []
        self._created_tracking_branches: list[tuple[str, str]] = []
        self._deleted_branches: list[tuple[str, bool]] = []
        self._fetch_calls: list[tuple[Path, str]] = []

    def get_repo_root(self, cwd: Path) -> Path | None:
        return self._repo_roots.get(cwd)

    def get_git_common_dir(self, cwd: Path) -> Path | None:
        return self._git_common_dirs.get(cwd)

    def get_current_branch(self, cwd: Path) -> str | None:
        return self._current_branches.get(cwd)

    def get_abbrev_ref_head(self, cwd: Path) -> str | None:
        if cwd in self._abbrev_ref_heads:
            return self._abbrev_ref_heads[cwd]
        if cwd in self._current_branches:
            return self._current_branches[cwd] or "HEAD"
        return None

    def resolve_symbolic_ref(self, repo_root: Path, ref: str) -> str | None:
        return self._symbolic_refs.get(ref)

    def ref_exists(self, repo_root: Path, ref: str) -> bool:
        if ref.startswith("refs/heads/"):
            return ref.removeprefix("refs/heads/") in self._local_branches
        if ref.startswith("refs/remotes/"):
            return ref.removeprefix("refs/remotes/") in self._remote_branches
        return False

    def list_worktrees(self, repo_root: Path) -> list[WorktreeSection]:
        return list(self._worktree_sections)

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
        """Mimic ``git worktree add``, including its refusals."""
        if self._add_worktree_raises is not None:
            raise self._add_worktree_raises
        if create_branch and branch in self._local_branches:
            raise RuntimeError(f"fatal: a branch named '{branch}' already exists")
        if not create_branch and branch not in self._local_branches:
            raise RuntimeError(f"fatal: invalid reference: {branch}")
        if not force and branch in self._current_branches.values():
            raise RuntimeError(f"fatal: '{branch}' is already checked out")

        path.mkdir(parents=True)
        self._local_branches.add(branch)
        self._current_branches[path] = branch
        self._worktree_sections.append(
            WorktreeSection(path=path, branch=branch, markers=frozenset(), reasons={})
        )
        self._added_worktrees.append((path, branch, start_point, create_branch, force))

    def remove_worktree(self, repo_root: Path, path: Path, *, force: bool) -> None:
        if self._remove_worktree_raises is not None:
            raise self._remove_worktree_raises

        shutil.rmtree(path, ignore_errors=True)
        self._current_branches.pop(path, None)
        self._worktree_sections = [s for s in self._worktree_sections if s.path != path]
        self._removed_worktrees.append((path, force))

    def create_tracking_branch(self, repo_root: Path, branch: str, remote_ref: str) -> None:
        self._local_branches.add(branch)
        self._created_tracking_branches.append((branch, remote_ref))

    def delete_branch(self, repo_root: Path, branch: str, *, force: bool) -> None:
        if self._delete_branch_raises is not None:
            raise self._delete_branch_raises
        self._local_branches.discard(branch)
        self._deleted_branches.append((branch, force))

    def fetch(self, repo_root: Path, remote: str) -> None:
        self._fetch_calls.append((repo_root, remote))
        if self._fetch_raises is not None:
            raise self._fetch_raises

    @property
    def local_branches(self) -> set[str]:
        return set(self._local_branches)

    @property
    def added_worktrees(self) -> list[tuple[Path, str, str | None, bool, bool]]:
        """(path, branch, start_point, create_branch, force) per add_worktree() call.

        This property is for test assertions only.
        """
        return self._added_worktrees.copy()

    @property
    def removed_worktrees(self) -> list[tuple[Path, bool]]:
        return self._removed_worktrees.copy()

    @property
    def created_tracking_branches(self) -> list[tuple[str, str]]:
        return self._created_tracking_branches.copy()

    @property
    def deleted_branches(self) -> list[tuple[str, bool]]:
        return self._deleted_branches.copy()

    @property
    def fetch_calls(self) -> list[tuple[Path, str]]:
        return self._fetch_calls.copy()
