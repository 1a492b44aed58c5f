import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from gtr.cli.core import resolve_layout
from gtr.cli.error_boundary import cli_error_boundary
from gtr.cli.output import machine_output, user_output
from gtr.core.context import GtrContext
from gtr.core.identity import MAIN_REPO_ID, WorktreeRecord, list_worktree_records
from gtr.core.worktree_status import WorktreeStatus

_STATUS_STYLES = {
    WorktreeStatus.OK: "green",
    WorktreeStatus.DETACHED: "yellow",
    WorktreeStatus.LOCKED: "magenta",
    WorktreeStatus.PRUNABLE: "red",
    WorktreeStatus.MISSING: "red",
}


def _render_table(records: list[WorktreeRecord]) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("branch", style="cyan", no_wrap=True)
    table.add_column("path", no_wrap=True)
    table.add_column("status", no_wrap=True)

    for record in records:
        label = record.branch or "(unknown)"
        if record.is_main:
            label = f"{label} [{MAIN_REPO_ID}]"
        status = record.status.value
        if record.reason:
            status = f"{status}: {record.reason}"
        table.add_row(
            Text(label),
            Text(str(record.path)),
            Text(status, style=_STATUS_STYLES[record.status]),
        )

    console = Console(stderr=True, width=200, force_terminal=True)
    console.print(table)


def _list_worktrees(ctx: GtrContext, porcelain: bool) -> None:
    layout = resolve_layout(ctx)
    records = list_worktree_records(
        ctx.git,
        repo_root=layout.repo.root,
        base_dir=layout.base_dir,
        prefix=layout.prefix,
    )

    if porcelain:
        for record in records:
            machine_output(f"{record.path}\t{record.branch}\t{record.status.value}")
        return

    _render_table(records)
    if len(records) == 1:
        user_output()
        user_output("No worktrees yet. Create one with: gtr new <branch>")


@click.command("list")
@click.option(
    "--porcelain",
    is_flag=True,
    help="Machine-readable output: path, branch and status separated by tabs.",
)
@click.pass_obj
@cli_error_boundary
def list_cmd(ctx: GtrContext, porcelain: bool) -> None:
    """List the main repository and its worktrees."""
    _list_worktrees(ctx, porcelain)


# Register ls as a hidden alias (won't show in help)
@click.command("ls", hidden=True)
@click.option("--porcelain", is_flag=True, help="Machine-readable output.")
@click.pass_obj
@cli_error_boundary
def ls_cmd(ctx: GtrContext, porcelain: bool) -> None:
    """List the main repository and its worktrees (alias of 'list')."""
    _list_worktrees(ctx, porcelain)
