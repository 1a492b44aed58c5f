"""Creating and removing worktrees.

Creation picks a git-level strategy from whether the branch exists locally
and/or on the remote:

    track mode | remote | local | strategy
    -----------+--------+-------+-------------------------------
    remote     |  yes   |   *   | remote-tracking
    remote     |  no    |   *   | RemoteBranchNotFound
    local      |   *    |  yes  | local-reuse
    local      |   *    |  no   | LocalBranchNotFound
    none       |   *    |   *   | new-branch (from the start ref)
    auto       |  yes   |  no   | remote-tracking
    auto       |   *    |  yes  | local-reuse
    auto       |  no    |  no   | new-branch

Each git mutation is a separate subprocess call. If the tracking branch is
created but ``git worktree add`` then fails, the branch is left behind; it is
harmless and the next attempt reuses it.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from gtr.cli.output import user_output, warning
from gtr.core.default_branch import DEFAULT_REMOTE
from gtr.core.errors import (
    LocalBranchNotFound,
    MissingRequiredName,
    ProvisioningFailed,
    RemovalFailed,
    RemoteBranchNotFound,
    WorktreeAlreadyExists,
    WorktreeNotFound,
)
from gtr.core.git.abc import Git
from gtr.core.naming import worktree_dir_name

logger = logging.getLogger(__name__)


class TrackMode(Enum):
    AUTO = "auto"
    REMOTE = "remote"
    LOCAL = "local"
    NONE = "none"


class Strategy(Enum):
    REMOTE_TRACKING = "remote-tracking"
    LOCAL_REUSE = "local-reuse"
    NEW_BRANCH = "new-branch"


@dataclass(frozen=True)
class ProvisioningRequest:
    """What to create.

    Attributes:
        branch_name: Branch to check out in the new worktree
        from_ref: Start point when a new branch has to be created
        track_mode: How to choose between remote, local and new branches
        skip_fetch: Skip ``git fetch`` before probing refs
        force: Allow the branch to be checked out in more than one worktree
        custom_name: Suffix for the directory name; required with force
    """

    branch_name: str
    from_ref: str
    track_mode: TrackMode = TrackMode.AUTO
    skip_fetch: bool = False
    force: bool = False
    custom_name: str | None = None


def choose_strategy(
    track_mode: TrackMode, *, remote_exists: bool, local_exists: bool, branch: str
) -> Strategy:
    """Apply the tracking decision table.

    Raises:
        RemoteBranchNotFound: track_mode is remote and the remote branch is missing
        LocalBranchNotFound: track_mode is local and the local branch is missing
    """
    match track_mode:
        case TrackMode.REMOTE:
            if not remote_exists:
                raise RemoteBranchNotFound(f"{DEFAULT_REMOTE}/{branch}")
            return Strategy.REMOTE_TRACKING
        case TrackMode.LOCAL:
            if not local_exists:
                raise LocalBranchNotFound(branch)
            return Strategy.LOCAL_REUSE
        case TrackMode.NONE:
            return Strategy.NEW_BRANCH
        case TrackMode.AUTO:
            if remote_exists and not local_exists:
                return Strategy.REMOTE_TRACKING
            if local_exists:
                return Strategy.LOCAL_REUSE
            return Strategy.NEW_BRANCH


def worktree_path_for(base_dir: Path, prefix: str, branch: str, custom_name: str | None) -> Path:
    return base_dir / f"{prefix}{worktree_dir_name(branch, custom_name)}"


def _fetch(git: Git, repo_root: Path) -> None:
    user_output(f"Fetching remote branches from {DEFAULT_REMOTE}...")
    try:
        git.fetch(repo_root, DEFAULT_REMOTE)
    except RuntimeError as e:
        logger.debug("Fetch failed: %s", e)
        warning(f"Could not fetch from {DEFAULT_REMOTE}")


def create_worktree(
    git: Git,
    *,
    repo_root: Path,
    base_dir: Path,
    prefix: str,
    request: ProvisioningRequest,
) -> Path:
    """Create a worktree for `request` and return its path.

    Raises:
        MissingRequiredName: force was requested without a custom name
        WorktreeAlreadyExists: the target directory already exists (force does not relax this)
        RemoteBranchNotFound / LocalBranchNotFound: the track mode's branch is missing
        ProvisioningFailed: git failed; the attempted strategy is recorded
    """
    branch = request.branch_name
    if request.force and not request.custom_name:
        raise MissingRequiredName(branch)

    worktree_path = worktree_path_for(base_dir, prefix, branch, request.custom_name)
    if worktree_path.exists():
        raise WorktreeAlreadyExists(worktree_path.name, worktree_path)

    base_dir.mkdir(parents=True, exist_ok=True)

    if not request.skip_fetch:
        _fetch(git, repo_root)

    remote_ref = f"{DEFAULT_REMOTE}/{branch}"
    remote_exists = git.ref_exists(repo_root, f"refs/remotes/{remote_ref}")
    local_exists = git.ref_exists(repo_root, f"refs/heads/{branch}")
    strategy = choose_strategy(
        request.track_mode,
        remote_exists=remote_exists,
        local_exists=local_exists,
        branch=branch,
    )
    logger.debug(
        "Provisioning %s: remote_exists=%s local_exists=%s mode=%s strategy=%s",
        branch,
        remote_exists,
        local_exists,
        request.track_mode.value,
        strategy.value,
    )

    try:
        match strategy:
            case Strategy.REMOTE_TRACKING:
                if not local_exists:
                    user_output(f"Creating local branch {branch} tracking {remote_ref}")
                    _create_tracking_branch(git, repo_root, branch, remote_ref)
                git.add_worktree(
                    repo_root,
                    worktree_path,
                    branch=branch,
                    start_point=None,
                    create_branch=False,
                    force=request.force,
                )
            case Strategy.LOCAL_REUSE:
                user_output(f"Using existing local branch {branch}")
                git.add_worktree(
                    repo_root,
                    worktree_path,
                    branch=branch,
                    start_point=None,
                    create_branch=False,
                    force=request.force,
                )
            case Strategy.NEW_BRANCH:
                user_output(f"Creating new branch {branch} from {request.from_ref}")
                git.add_worktree(
                    repo_root,
                    worktree_path,
                    branch=branch,
                    start_point=request.from_ref,
                    create_branch=True,
                    force=request.force,
                )
    except RuntimeError as e:
        raise ProvisioningFailed(branch, strategy.value, str(e)) from e

    return worktree_path


def _create_tracking_branch(git: Git, repo_root: Path, branch: str, remote_ref: str) -> None:
    # The branch may already exist from an earlier attempt; the worktree add decides
    try:
        git.create_tracking_branch(repo_root, branch, remote_ref)
    except RuntimeError as e:
        logger.debug("Tracking branch creation failed: %s", e)


def remove_worktree(git: Git, *, repo_root: Path, path: Path, force: bool) -> None:
    """Remove the worktree at `path`.

    Raises:
        WorktreeNotFound: `path` is not a directory
        RemovalFailed: git refused; carries git's message
    """
    if not path.is_dir():
        raise WorktreeNotFound(path.name, path=path)

    try:
        git.remove_worktree(repo_root, path, force=force)
    except RuntimeError as e:
        raise RemovalFailed(path, str(e)) from e


def delete_branch(git: Git, *, repo_root: Path, branch: str, force: bool) -> None:
    """Delete a local branch after its worktree is gone.

    Raises:
        RuntimeError: git refused (e.g. unmerged branch without force)
    """
    git.delete_branch(repo_root, branch, force=force)
