"""Branch name to directory name mapping."""

import re

_UNSAFE_CHARS = re.compile(r'[/\\ :*?"<>|]')


def sanitize_branch_name(branch: str) -> str:
    """Convert a branch name into a directory-safe worktree name.

    Each of ``/ \\ space : * ? " < > |`` becomes ``-``, then leading and
    trailing ``-`` runs are stripped. Interior runs are kept as-is.

    The mapping is many-to-one: ``feature/auth`` and ``feature auth`` both
    become ``feature-auth`` and therefore share a worktree directory.

    Examples:
        >>> sanitize_branch_name("feature/auth")
        'feature-auth'
        >>> sanitize_branch_name("/fix: bug/")
        'fix--bug'
    """
    return _UNSAFE_CHARS.sub("-", branch).strip("-")


def worktree_dir_name(branch: str, custom_name: str | None) -> str:
    """Directory name for a new worktree, with an optional distinguishing suffix."""
    name = sanitize_branch_name(branch)
    if custom_name:
        return f"{name}-{custom_name}"
    return name
