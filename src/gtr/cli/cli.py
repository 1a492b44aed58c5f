import logging
import os

import click

from gtr.cli.commands.config_cmd import config_group
from gtr.cli.commands.go_cmd import go_cmd
from gtr.cli.commands.launch_cmd import adapter_cmd, ai_cmd, editor_cmd
from gtr.cli.commands.list_cmd import list_cmd, ls_cmd
from gtr.cli.commands.new_cmd import new_cmd
from gtr.cli.commands.rm_cmd import rm_cmd
from gtr.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

# Enable debug logging if GTR_DEBUG environment variable is set
if os.getenv("GTR_DEBUG"):
    logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="gtr")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Manage git worktrees next to your repository."""
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context()


cli.add_command(new_cmd)
cli.add_command(rm_cmd)
cli.add_command(go_cmd)
cli.add_command(list_cmd)
cli.add_command(ls_cmd)
cli.add_command(config_group)
cli.add_command(editor_cmd)
cli.add_command(ai_cmd)
cli.add_command(adapter_cmd)


def main() -> None:
    """CLI entry point used by the `gtr` console script."""
    cli()
