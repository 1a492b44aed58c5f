"""Mapping user-supplied identifiers to worktrees.

An identifier is either the reserved token "1" (the main repository) or a
branch name. Resolution order, first match wins:

1. "1" -> main repository
2. the branch currently checked out in the main repository -> main repository
3. ``<base_dir>/<prefix><sanitized identifier>`` exists -> that worktree
4. a ``<base_dir>/<prefix>*`` directory whose current branch equals the identifier
5. WorktreeNotFound
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from gtr.core.errors import WorktreeNotFound
from gtr.core.git.abc import Git
from gtr.core.naming import sanitize_branch_name
from gtr.core.worktree_status import (
    WorktreeSection,
    WorktreeStatus,
    classify_status,
    find_section,
    status_reason,
)

logger = logging.getLogger(__name__)

MAIN_REPO_ID = "1"
DETACHED_BRANCH = "(detached)"


@dataclass(frozen=True)
class WorktreeRecord:
    """A resolved worktree.

    Attributes:
        is_main: True exactly for the checkout at the repository root
        path: Absolute path of the checkout
        branch: Checked-out branch, "(detached)" for a detached HEAD, "" if unknown
        status: Status derived from git's worktree listing at resolution time
        reason: Lock or prune reason git reported for that status, "" if none
    """

    is_main: bool
    path: Path
    branch: str
    status: WorktreeStatus
    reason: str = ""


def current_branch_of(git: Git, path: Path) -> str:
    """Branch checked out at `path`.

    Prefers ``git branch --show-current``; falls back to resolving HEAD for
    older git versions, where a detached HEAD reads as the literal ``HEAD``.
    """
    branch = git.get_current_branch(path)
    if not branch:
        branch = git.get_abbrev_ref_head(path) or ""
    if branch == "HEAD":
        return DETACHED_BRANCH
    return branch


def _record(
    git: Git, sections: list[WorktreeSection], *, is_main: bool, path: Path
) -> WorktreeRecord:
    section = find_section(sections, path)
    branch = current_branch_of(git, path)
    if not branch and section is not None and section.branch:
        # Checkout unreadable (e.g. prunable); git still knows its branch
        branch = section.branch
    return WorktreeRecord(
        is_main=is_main,
        path=path,
        branch=branch,
        status=classify_status(section),
        reason=status_reason(section),
    )


def candidate_dirs(base_dir: Path, prefix: str) -> list[Path]:
    """Directories under `base_dir` whose name starts with `prefix`, sorted by name."""
    if not base_dir.is_dir():
        return []
    return sorted(
        entry for entry in base_dir.iterdir() if entry.is_dir() and entry.name.startswith(prefix)
    )


def resolve_target(
    git: Git,
    identifier: str,
    *,
    repo_root: Path,
    base_dir: Path,
    prefix: str,
) -> WorktreeRecord:
    """Resolve an identifier to a worktree record.

    Raises:
        WorktreeNotFound: If no worktree matches
    """
    sections = git.list_worktrees(repo_root)

    if identifier == MAIN_REPO_ID:
        return _record(git, sections, is_main=True, path=repo_root)

    main_branch = current_branch_of(git, repo_root)
    if main_branch == identifier:
        logger.debug("'%s' is checked out in the main repository", identifier)
        return _record(git, sections, is_main=True, path=repo_root)

    direct = base_dir / f"{prefix}{sanitize_branch_name(identifier)}"
    if direct.is_dir():
        logger.debug("'%s' resolved by directory name: %s", identifier, direct)
        return _record(git, sections, is_main=False, path=direct)

    for candidate in candidate_dirs(base_dir, prefix):
        if current_branch_of(git, candidate) == identifier:
            logger.debug("'%s' resolved by branch scan: %s", identifier, candidate)
            return _record(git, sections, is_main=False, path=candidate)

    raise WorktreeNotFound(identifier)


def list_worktree_records(
    git: Git,
    *,
    repo_root: Path,
    base_dir: Path,
    prefix: str,
) -> list[WorktreeRecord]:
    """Main repository first, then every managed worktree directory."""
    sections = git.list_worktrees(repo_root)
    records = [_record(git, sections, is_main=True, path=repo_root)]
    for candidate in candidate_dirs(base_dir, prefix):
        records.append(_record(git, sections, is_main=False, path=candidate))
    return records
