from pathlib import Path

import click

from gtr.cli.core import resolve_layout
from gtr.cli.ensure import Ensure
from gtr.cli.error_boundary import cli_error_boundary
from gtr.cli.output import machine_output, user_output
from gtr.core.config_keys import (
    COPY_EXCLUDE,
    COPY_EXCLUDE_DIRS,
    COPY_INCLUDE,
    COPY_INCLUDE_DIRS,
)
from gtr.core.config_resolver import ConfigResolver
from gtr.core.context import GtrContext
from gtr.core.default_branch import DEFAULT_REMOTE, resolve_default_branch
from gtr.core.file_copy import copy_directories, copy_files
from gtr.core.git.abc import Git
from gtr.core.hooks import HookPhase, hook_env, run_hooks
from gtr.core.identity import DETACHED_BRANCH, current_branch_of
from gtr.core.provisioning import ProvisioningRequest, TrackMode, create_worktree


def _default_start_ref(git: Git, config: ConfigResolver, repo_root: Path) -> str:
    """Default branch, as a remote-tracking ref when there is no local copy of it."""
    default_branch = resolve_default_branch(git, config, repo_root)
    if git.ref_exists(repo_root, f"refs/heads/{default_branch}"):
        return default_branch
    if git.ref_exists(repo_root, f"refs/remotes/{DEFAULT_REMOTE}/{default_branch}"):
        return f"{DEFAULT_REMOTE}/{default_branch}"
    return default_branch


def copy_configured_files(config: ConfigResolver, repo_root: Path, worktree_path: Path) -> None:
    """Copy the files and directories selected by ``gtr.copy.*`` into a new worktree."""
    includes = config.get_all(COPY_INCLUDE.name)
    include_dirs = config.get_all(COPY_INCLUDE_DIRS.name)
    if not includes and not include_dirs:
        return

    copied = copy_files(repo_root, worktree_path, includes, config.get_all(COPY_EXCLUDE.name))
    copied_dirs = copy_directories(
        repo_root, worktree_path, include_dirs, config.get_all(COPY_EXCLUDE_DIRS.name)
    )
    user_output(f"Copied {len(copied)} file(s) and {len(copied_dirs)} directory(ies)")


@click.command("new")
@click.argument("branch", metavar="BRANCH")
@click.option(
    "--from",
    "from_ref",
    type=str,
    default=None,
    help="Ref to start a new branch from. Defaults to the repository's default branch.",
)
@click.option(
    "--from-current",
    is_flag=True,
    help="Start a new branch from the branch checked out in the current directory.",
)
@click.option(
    "--track",
    type=click.Choice([mode.value for mode in TrackMode]),
    default=TrackMode.AUTO.value,
    show_default=True,
    help="How to pick between remote, local and new branches.",
)
@click.option("--no-copy", is_flag=True, help="Skip copying files configured in gtr.copy.*.")
@click.option("--no-fetch", is_flag=True, help="Skip fetching from origin (for offline work).")
@click.option(
    "--force",
    is_flag=True,
    help="Allow a branch that is already checked out elsewhere. Requires --name.",
)
@click.option(
    "--name",
    "custom_name",
    type=str,
    default=None,
    help="Suffix for the worktree directory name (<branch>-<name>).",
)
@click.pass_obj
@cli_error_boundary
def new_cmd(
    ctx: GtrContext,
    branch: str,
    from_ref: str | None,
    from_current: bool,
    track: str,
    no_copy: bool,
    no_fetch: bool,
    force: bool,
    custom_name: str | None,
) -> None:
    """Create a worktree for BRANCH.

    With --track auto (the default) an existing local branch is reused, a
    branch that only exists on origin is checked out tracking it, and anything
    else becomes a new branch. The worktree path is printed on stdout.
    """
    Ensure.invariant(
        not (from_ref is not None and from_current), "Cannot use both --from and --from-current"
    )
    Ensure.invariant(bool(branch.strip()), "Branch name must not be empty")

    layout = resolve_layout(ctx)
    repo_root = layout.repo.root
    config = ctx.config

    if from_current:
        current = current_branch_of(ctx.git, ctx.cwd)
        Ensure.invariant(
            bool(current) and current != DETACHED_BRANCH,
            "--from-current needs a checked-out branch, but HEAD is detached",
        )
        from_ref = current
    elif from_ref is None:
        from_ref = _default_start_ref(ctx.git, config, repo_root)

    request = ProvisioningRequest(
        branch_name=branch,
        from_ref=from_ref,
        track_mode=TrackMode(track),
        skip_fetch=no_fetch,
        force=force,
        custom_name=custom_name,
    )
    worktree_path = create_worktree(
        ctx.git,
        repo_root=repo_root,
        base_dir=layout.base_dir,
        prefix=layout.prefix,
        request=request,
    )
    user_output(click.style("Worktree created: ", fg="green") + str(worktree_path))

    if not no_copy:
        copy_configured_files(config, repo_root, worktree_path)

    run_hooks(
        ctx.shell,
        HookPhase.POST_CREATE,
        config.get_all(HookPhase.POST_CREATE.config_key.name),
        cwd=worktree_path,
        env=hook_env(repo_root=repo_root, worktree_path=worktree_path, branch=branch),
    )

    machine_output(str(worktree_path))
