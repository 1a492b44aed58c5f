"""Opening worktrees in editors and AI tools."""

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from gtr.cli.core import resolve_layout, resolve_worktree
from gtr.cli.ensure import Ensure
from gtr.cli.error_boundary import cli_error_boundary
from gtr.cli.output import user_output
from gtr.core.adapters import LauncherKind
from gtr.core.config_keys import AI_DEFAULT, EDITOR_DEFAULT, ConfigKey
from gtr.core.context import GtrContext

NO_LAUNCHER = "none"


def _launch(
    ctx: GtrContext,
    kind: LauncherKind,
    default_key: ConfigKey,
    identifier: str,
    name: str | None,
    args: tuple[str, ...],
) -> None:
    if name is None:
        name = ctx.config.get(default_key.name)
    Ensure.invariant(
        bool(name) and name != NO_LAUNCHER,
        f"No {kind.value} configured. Set {default_key.name} or pass --{kind.value}",
    )

    launcher = ctx.launchers.get_launcher(kind, name)
    layout = resolve_layout(ctx)
    record = resolve_worktree(ctx, layout, identifier)

    user_output(f"Opening {record.path} in {launcher.name}")
    exit_code = launcher.launch(record.path, args)
    if exit_code != 0:
        raise SystemExit(exit_code)


@click.command("editor")
@click.argument("identifier", metavar="IDENTIFIER")
@click.option("--editor", "editor_name", help="Editor to use instead of gtr.editor.default.")
@click.pass_obj
@cli_error_boundary
def editor_cmd(ctx: GtrContext, identifier: str, editor_name: str | None) -> None:
    """Open a worktree in an editor."""
    _launch(ctx, LauncherKind.EDITOR, EDITOR_DEFAULT, identifier, editor_name, ())


@click.command("ai", context_settings=dict(ignore_unknown_options=True))
@click.argument("identifier", metavar="IDENTIFIER")
@click.option("--ai", "ai_name", help="AI tool to use instead of gtr.ai.default.")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
@cli_error_boundary
def ai_cmd(ctx: GtrContext, identifier: str, ai_name: str | None, args: tuple[str, ...]) -> None:
    """Start an AI coding tool inside a worktree.

    Extra ARGS are passed to the tool unchanged.
    """
    _launch(ctx, LauncherKind.AI, AI_DEFAULT, identifier, ai_name, args)


@click.command("adapter")
@click.pass_obj
def adapter_cmd(ctx: GtrContext) -> None:
    """List the built-in editor and AI tool adapters and whether they are installed."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("kind", no_wrap=True)
    table.add_column("name", style="cyan", no_wrap=True)
    table.add_column("available", no_wrap=True)

    for kind in LauncherKind:
        for launcher in ctx.launchers.launchers(kind):
            if launcher.probe():
                available = Text("yes", style="green")
            else:
                available = Text("no", style="dim")
            table.add_row(Text(kind.value), Text(launcher.name), available)

    console = Console(stderr=True, width=200, force_terminal=True)
    console.print(table)
