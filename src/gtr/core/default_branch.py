"""Default branch (the ref new branches start from)."""

from pathlib import Path

from gtr.core.config_keys import DEFAULT_BRANCH
from gtr.core.config_resolver import ConfigResolver
from gtr.core.git.abc import Git

DEFAULT_REMOTE = "origin"
AUTO = "auto"


def resolve_default_branch(git: Git, config: ConfigResolver, repo_root: Path) -> str:
    """Resolve the default branch for a repository.

    Order:
    1. ``gtr.defaultBranch`` / ``$GTR_DEFAULT_BRANCH`` unless it is ``auto``
    2. target of ``refs/remotes/origin/HEAD``
    3. ``main`` if ``origin/main`` exists, else ``master`` if ``origin/master`` exists
    4. ``main``
    """
    configured = config.get(DEFAULT_BRANCH.name, AUTO)
    if configured != AUTO:
        return configured

    remote_prefix = f"refs/remotes/{DEFAULT_REMOTE}/"
    remote_head = git.resolve_symbolic_ref(repo_root, f"{remote_prefix}HEAD")
    if remote_head is not None and remote_head.startswith(remote_prefix):
        return remote_head.removeprefix(remote_prefix)

    for candidate in ("main", "master"):
        if git.ref_exists(repo_root, f"{remote_prefix}{candidate}"):
            return candidate

    return "main"
