"""Helpers shared by CLI commands."""

from dataclasses import dataclass
from pathlib import Path

from gtr.core.base_dir import resolve_base_dir, resolve_prefix
from gtr.core.context import GtrContext
from gtr.core.errors import NotInRepository
from gtr.core.identity import WorktreeRecord, resolve_target
from gtr.core.repo_discovery import RepoContext


@dataclass(frozen=True)
class WorktreeLayout:
    """Where this repository's worktrees live."""

    repo: RepoContext
    base_dir: Path
    prefix: str


def discover_repo_context(ctx: GtrContext) -> RepoContext:
    """Return the repository discovered at startup.

    Raises:
        NotInRepository: The command was run outside a git repository
    """
    if isinstance(ctx.repo, RepoContext):
        return ctx.repo
    raise NotInRepository(ctx.cwd)


def resolve_layout(ctx: GtrContext) -> WorktreeLayout:
    repo = discover_repo_context(ctx)
    config = ctx.config
    return WorktreeLayout(
        repo=repo,
        base_dir=resolve_base_dir(config, repo.root),
        prefix=resolve_prefix(config),
    )


def resolve_worktree(ctx: GtrContext, layout: WorktreeLayout, identifier: str) -> WorktreeRecord:
    return resolve_target(
        ctx.git,
        identifier,
        repo_root=layout.repo.root,
        base_dir=layout.base_dir,
        prefix=layout.prefix,
    )
