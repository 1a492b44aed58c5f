"""Copying untracked files (env files, local settings) into new worktrees."""

import fnmatch
import logging
import shutil
from collections.abc import Sequence
from pathlib import Path, PurePosixPath

from gtr.cli.output import warning

logger = logging.getLogger(__name__)


def is_safe_pattern(pattern: str) -> bool:
    """Patterns must stay inside the repository: no absolute paths, no ``..``."""
    if not pattern or PurePosixPath(pattern).is_absolute() or pattern.startswith("~"):
        return False
    return ".." not in PurePosixPath(pattern).parts


def _matches_any(rel_path: str, patterns: Sequence[str]) -> bool:
    for pattern in patterns:
        if fnmatch.fnmatch(rel_path, pattern):
            return True
        # "node_modules" excludes everything below it too
        if rel_path.startswith(pattern.rstrip("/") + "/"):
            return True
    return False


def _safe_patterns(patterns: Sequence[str], setting: str) -> list[str]:
    safe = []
    for pattern in patterns:
        if is_safe_pattern(pattern):
            safe.append(pattern)
        else:
            warning(f"Skipping unsafe {setting} pattern: {pattern}")
    return safe


def _is_git_metadata(rel_path: PurePosixPath) -> bool:
    return bool(rel_path.parts) and rel_path.parts[0] == ".git"


def copy_files(
    src_root: Path,
    dst_root: Path,
    includes: Sequence[str],
    excludes: Sequence[str],
) -> list[Path]:
    """Copy regular files matching `includes` from `src_root` into `dst_root`.

    Relative layout is preserved. Files matching any of `excludes` are skipped,
    as is anything under ``.git``. Existing files in the destination are
    overwritten.

    Returns:
        Destination paths of the copied files, in copy order
    """
    copied: list[Path] = []
    exclude_patterns = _safe_patterns(excludes, "exclude")

    for pattern in _safe_patterns(includes, "include"):
        matches = sorted(src_root.glob(pattern))
        if not matches:
            logger.debug("Copy pattern %r matched nothing", pattern)
        for match in matches:
            if not match.is_file():
                continue
            rel_path = PurePosixPath(match.relative_to(src_root).as_posix())
            if _is_git_metadata(rel_path) or _matches_any(str(rel_path), exclude_patterns):
                continue

            destination = dst_root / rel_path
            if destination in copied:
                continue
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(match, destination)
            copied.append(destination)
            logger.debug("Copied %s", rel_path)

    return copied


def copy_directories(
    src_root: Path,
    dst_root: Path,
    include_dirs: Sequence[str],
    exclude_dirs: Sequence[str],
) -> list[Path]:
    """Copy whole directories matching `include_dirs` into `dst_root`.

    `exclude_dirs` patterns are relative to `src_root` and prune matching
    directories (or sub-directories of an included directory) from the copy.

    Returns:
        Destination paths of the copied directories
    """
    copied: list[Path] = []
    exclude_patterns = _safe_patterns(exclude_dirs, "excludeDirs")

    def ignore(directory: str, names: list[str]) -> list[str]:
        rel_dir = Path(directory).relative_to(src_root).as_posix()
        ignored = []
        for name in names:
            rel_path = name if rel_dir == "." else f"{rel_dir}/{name}"
            if _matches_any(rel_path, exclude_patterns):
                ignored.append(name)
        return ignored

    for pattern in _safe_patterns(include_dirs, "includeDirs"):
        for match in sorted(src_root.glob(pattern)):
            if not match.is_dir():
                continue
            rel_path = PurePosixPath(match.relative_to(src_root).as_posix())
            if _is_git_metadata(rel_path) or _matches_any(str(rel_path), exclude_patterns):
                continue

            destination = dst_root / rel_path
            shutil.copytree(match, destination, ignore=ignore, dirs_exist_ok=True, symlinks=True)
            copied.append(destination)
            logger.debug("Copied directory %s", rel_path)

    return copied
