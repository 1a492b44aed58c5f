"""Production Git implementation using subprocess."""

import logging
import subprocess
from pathlib import Path

from gtr.core.git.abc import Git
from gtr.core.subprocess import run_subprocess_with_context
from gtr.core.worktree_status import WorktreeSection, parse_worktree_porcelain

logger = logging.getLogger(__name__)


class RealGit(Git):
    """Production implementation using subprocess.

    All git operations execute actual git commands via subprocess.
    """

    def get_repo_root(self, cwd: Path) -> Path | None:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0 or not result.stdout.strip():
            return None
        return Path(result.stdout.strip())

    def get_git_common_dir(self, cwd: Path) -> Path | None:
        result = subprocess.run(
            ["git", "rev-parse", "--git-common-dir"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None

        git_dir = Path(result.stdout.strip())
        if not git_dir.is_absolute():
            git_dir = cwd / git_dir

        return git_dir.resolve()

    def get_current_branch(self, cwd: Path) -> str | None:
        result = subprocess.run(
            ["git", "branch", "--show-current"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def get_abbrev_ref_head(self, cwd: Path) -> str | None:
        result = subprocess.run(
            ["git", "rev-parse", "--abbrev-ref", "HEAD"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def resolve_symbolic_ref(self, repo_root: Path, ref: str) -> str | None:
        result = subprocess.run(
            ["git", "symbolic-ref", "--quiet", ref],
            cwd=repo_root,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def ref_exists(self, repo_root: Path, ref: str) -> bool:
        result = subprocess.run(
            ["git", "show-ref", "--verify", "--quiet", ref],
            cwd=repo_root,
            capture_output=True,
            check=False,
        )
        return result.returncode == 0

    def list_worktrees(self, repo_root: Path) -> list[WorktreeSection]:
        result = subprocess.run(
            ["git", "worktree", "list", "--porcelain"],
            cwd=repo_root,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            logger.debug("git worktree list failed: %s", result.stderr.strip())
            return []
        return parse_worktree_porcelain(result.stdout)

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
        cmd = ["git", "worktree", "add"]
        if force:
            cmd.append("--force")

        if create_branch:
            cmd.extend(["-b", branch, str(path), start_point or "HEAD"])
            context = f"add worktree with new branch '{branch}' at {path}"
        else:
            cmd.extend([str(path), branch])
            context = f"add worktree for branch '{branch}' at {path}"

        run_subprocess_with_context(cmd, operation_context=context, cwd=repo_root)

    def remove_worktree(self, repo_root: Path, path: Path, *, force: bool) -> None:
        cmd = ["git", "worktree", "remove"]
        if force:
            cmd.append("--force")
        cmd.append(str(path))
        run_subprocess_with_context(
            cmd,
            operation_context=f"remove worktree at {path}",
            cwd=repo_root,
        )

    def create_tracking_branch(self, repo_root: Path, branch: str, remote_ref: str) -> None:
        run_subprocess_with_context(
            ["git", "branch", "--track", branch, remote_ref],
            operation_context=f"create tracking branch '{branch}' from '{remote_ref}'",
            cwd=repo_root,
        )

    def delete_branch(self, repo_root: Path, branch: str, *, force: bool) -> None:
        flag = "-D" if force else "-d"
        run_subprocess_with_context(
            ["git", "branch", flag, branch],
            operation_context=f"delete branch '{branch}'",
            cwd=repo_root,
        )

    def fetch(self, repo_root: Path, remote: str) -> None:
        run_subprocess_with_context(
            ["git", "fetch", remote],
            operation_context=f"fetch from '{remote}'",
            cwd=repo_root,
        )
