import click

from gtr.cli.core import resolve_layout, resolve_worktree
from gtr.cli.error_boundary import cli_error_boundary
from gtr.cli.output import machine_output, user_output
from gtr.core.context import GtrContext
from gtr.core.identity import MAIN_REPO_ID


@click.command("go")
@click.argument("identifier", metavar="IDENTIFIER")
@click.pass_obj
@cli_error_boundary
def go_cmd(ctx: GtrContext, identifier: str) -> None:
    """Print the path of a worktree.

    IDENTIFIER is a branch name, or "1" for the main repository. Only the path
    goes to stdout, so the command composes with cd:

      cd "$(gtr go feature/auth)"
    """
    layout = resolve_layout(ctx)
    record = resolve_worktree(ctx, layout, identifier)

    if record.is_main:
        user_output(f"Main repo [{MAIN_REPO_ID}]: {click.style(record.branch, fg='yellow')}")
    else:
        user_output(f"Worktree: {click.style(record.branch, fg='yellow')}")

    machine_output(str(record.path))
