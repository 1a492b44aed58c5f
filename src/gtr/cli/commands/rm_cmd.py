import click

from gtr.cli.core import WorktreeLayout, resolve_layout, resolve_worktree
from gtr.cli.output import user_output, warning
from gtr.core.context import GtrContext
from gtr.core.errors import GtrError, HookFailed, RemovalFailed
from gtr.core.hooks import HookPhase, hook_env, run_hooks
from gtr.core.identity import DETACHED_BRANCH
from gtr.core.provisioning import delete_branch, remove_worktree


def _remove_one(
    ctx: GtrContext,
    layout: WorktreeLayout,
    identifier: str,
    *,
    delete_branch_flag: bool,
    force: bool,
    yes: bool,
) -> None:
    repo_root = layout.repo.root
    config = ctx.config
    record = resolve_worktree(ctx, layout, identifier)
    if record.is_main:
        raise RemovalFailed(record.path, "Cannot remove the main repository")

    env = hook_env(repo_root=repo_root, worktree_path=record.path, branch=record.branch)
    try:
        run_hooks(
            ctx.shell,
            HookPhase.PRE_REMOVE,
            config.get_all(HookPhase.PRE_REMOVE.config_key.name),
            cwd=record.path,
            env=env,
        )
    except HookFailed as e:
        if not force:
            raise
        warning(f"{e} (continuing because of --force)")

    remove_worktree(ctx.git, repo_root=repo_root, path=record.path, force=force)
    user_output(click.style("Removed worktree: ", fg="green") + str(record.path))

    branch = record.branch
    if delete_branch_flag and branch and branch != DETACHED_BRANCH:
        if yes or click.confirm(f"Delete branch '{branch}'?", default=False, err=True):
            try:
                delete_branch(ctx.git, repo_root=repo_root, branch=branch, force=force)
                user_output(f"Deleted branch {branch}")
            except RuntimeError as e:
                warning(f"Could not delete branch {branch}: {e}")

    run_hooks(
        ctx.shell,
        HookPhase.POST_REMOVE,
        config.get_all(HookPhase.POST_REMOVE.config_key.name),
        cwd=repo_root,
        env=env,
    )


@click.command("rm")
@click.argument("identifiers", metavar="IDENTIFIER...", nargs=-1, required=True)
@click.option("--delete-branch", is_flag=True, help="Also delete the worktree's local branch.")
@click.option(
    "--force",
    is_flag=True,
    help="Remove even with uncommitted changes or failing preRemove hooks; force-delete branch.",
)
@click.option("--yes", is_flag=True, help="Do not ask before deleting branches.")
@click.pass_obj
def rm_cmd(
    ctx: GtrContext,
    identifiers: tuple[str, ...],
    delete_branch: bool,
    force: bool,
    yes: bool,
) -> None:
    """Remove one or more worktrees.

    Each IDENTIFIER is a branch name. Failures are reported per identifier;
    the remaining identifiers are still processed.
    """
    try:
        layout = resolve_layout(ctx)
    except GtrError as e:
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from None

    failures = 0
    for identifier in identifiers:
        try:
            _remove_one(
                ctx, layout, identifier, delete_branch_flag=delete_branch, force=force, yes=yes
            )
        except GtrError as e:
            user_output(click.style("Error: ", fg="red") + str(e))
            failures += 1

    if failures:
        raise SystemExit(1)
