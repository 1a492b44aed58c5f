"""Where worktrees live on disk."""

import logging
import os
import re
from pathlib import Path

from gtr.cli.output import warning
from gtr.core.config_keys import WORKTREES_DIR, WORKTREES_PREFIX
from gtr.core.config_resolver import ConfigResolver

logger = logging.getLogger(__name__)


def default_base_dir(repo_root: Path) -> Path:
    """``<parent>/<repo name>-worktrees``, a sibling of the repository."""
    return repo_root.parent / f"{repo_root.name}-worktrees"


def expand_base_dir(value: str, repo_root: Path) -> Path:
    """Turn a configured worktrees directory into an absolute path.

    A leading ``~`` expands to the home directory. Relative values are relative
    to the repository root, never to the current working directory.
    """
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = repo_root / path
    # ".." collapses lexically; symlinks are left unresolved
    return Path(os.path.normpath(path))


def is_ignored_by_gitignore(repo_root: Path, rel_path: str) -> bool:
    """Check whether .gitignore has a line covering `rel_path`.

    Matches ``rel``, ``/rel``, ``rel/``, ``/rel/`` and ``rel/*`` spellings.
    Returns False when there is no .gitignore.
    """
    gitignore = repo_root / ".gitignore"
    if not gitignore.is_file():
        return False

    escaped = re.escape(rel_path.rstrip("/"))
    pattern = re.compile(rf"^/?{escaped}/?$|^/?{escaped}/\*?$")
    for line in gitignore.read_text(encoding="utf-8", errors="replace").splitlines():
        if pattern.match(line.strip()):
            return True
    return False


def warn_if_inside_repo(repo_root: Path, base_dir: Path) -> None:
    """Warn when worktrees would be created inside the repository unignored."""
    if base_dir == repo_root or not base_dir.is_relative_to(repo_root):
        return

    rel_path = base_dir.relative_to(repo_root).as_posix()
    if is_ignored_by_gitignore(repo_root, rel_path):
        return

    logger.debug("Worktrees directory %s is inside %s and not ignored", base_dir, repo_root)
    warning(f"Worktrees are inside repository at: {rel_path}")
    warning(f"Consider adding '/{rel_path}/' to .gitignore to avoid committing worktrees")


def resolve_base_dir(config: ConfigResolver, repo_root: Path) -> Path:
    """Resolve the directory that holds this repository's worktrees.

    Reads ``gtr.worktrees.dir`` (then ``$GTR_WORKTREES_DIR``). When unset the
    default is a sibling directory of the repository.
    """
    configured = config.get(WORKTREES_DIR.name)
    if not configured:
        return default_base_dir(repo_root)

    base_dir = expand_base_dir(configured, repo_root)
    warn_if_inside_repo(repo_root, base_dir)
    return base_dir


def resolve_prefix(config: ConfigResolver) -> str:
    """Directory-name prefix for worktrees (``gtr.worktrees.prefix``), empty by default."""
    return config.get(WORKTREES_PREFIX.name)
