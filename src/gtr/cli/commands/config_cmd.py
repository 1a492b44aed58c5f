from collections.abc import Callable
from typing import Any, TypeVar

import click

from gtr.cli.ensure import Ensure
from gtr.cli.error_boundary import cli_error_boundary
from gtr.cli.output import machine_output, user_output
from gtr.core.config_keys import GTR_NAMESPACE, canonical_name, lookup_key
from gtr.core.config_resolver import AUTO_SCOPE, parse_scope
from gtr.core.config_store import ConfigScope
from gtr.core.context import GtrContext

F = TypeVar("F", bound=Callable[..., Any])


def scope_options(func: F) -> F:
    """Add the mutually exclusive --local/--global/--system/--project flags as `scope`."""
    options = [
        click.option(
            "--project",
            "scope",
            flag_value=ConfigScope.PROJECT_FILE.value,
            help="Use the committed .gtrconfig file.",
        ),
        click.option(
            "--system", "scope", flag_value=ConfigScope.SYSTEM.value, help="Use system git config."
        ),
        click.option(
            "--global",
            "scope",
            flag_value=ConfigScope.GLOBAL.value,
            help="Use global (per-user) git config.",
        ),
        click.option(
            "--local",
            "scope",
            flag_value=ConfigScope.LOCAL.value,
            help="Use the repository's git config (default for writes).",
        ),
    ]
    # applied bottom-up so --help lists them local, global, system, project
    for option in options:
        func = option(func)
    return func


def _validate_key(key: str) -> str:
    Ensure.invariant(
        key.lower().startswith(GTR_NAMESPACE),
        f"Config key must start with '{GTR_NAMESPACE}': {key}",
    )
    return canonical_name(key)


@click.group("config")
def config_group() -> None:
    """Read and write gtr configuration.

    Reads merge every scope: local git config, .gtrconfig, global, system, then
    environment variables. Writes go to local git config unless a scope flag
    is given.
    """


@config_group.command("get")
@click.argument("key", metavar="KEY")
@scope_options
@click.pass_obj
@cli_error_boundary
def get_cmd(ctx: GtrContext, key: str, scope: str | None) -> None:
    """Print the effective value of KEY.

    Multi-valued keys print one value per line. Exits 1 without output when
    the key is unset.
    """
    key = _validate_key(key)
    config = ctx.config
    multi_valued = lookup_key(key).multi_valued

    if scope is None:
        values = config.get_all(key) if multi_valued else [config.get(key)]
    elif multi_valued:
        values = config.get_all_in_scope(key, parse_scope(scope))
    else:
        value = config.get_in_scope(key, parse_scope(scope))
        values = [value] if value is not None else []

    values = [value for value in values if value]
    if not values:
        raise SystemExit(1)
    for value in values:
        machine_output(value)


@config_group.command("set")
@click.argument("key", metavar="KEY")
@click.argument("value", metavar="VALUE")
@scope_options
@click.pass_obj
@cli_error_boundary
def set_cmd(ctx: GtrContext, key: str, value: str, scope: str | None) -> None:
    """Set KEY to VALUE, replacing any existing values."""
    key = _validate_key(key)
    target = parse_scope(scope or ConfigScope.LOCAL.value)
    ctx.config.set(key, value, target)
    user_output(f"Set {key} = {value} ({target.label})")


@config_group.command("add")
@click.argument("key", metavar="KEY")
@click.argument("value", metavar="VALUE")
@scope_options
@click.pass_obj
@cli_error_boundary
def add_cmd(ctx: GtrContext, key: str, value: str, scope: str | None) -> None:
    """Append VALUE to a multi-valued KEY."""
    key = _validate_key(key)
    target = parse_scope(scope or ConfigScope.LOCAL.value)
    ctx.config.add(key, value, target)
    user_output(f"Added {key} = {value} ({target.label})")


@config_group.command("unset")
@click.argument("key", metavar="KEY")
@scope_options
@click.pass_obj
@cli_error_boundary
def unset_cmd(ctx: GtrContext, key: str, scope: str | None) -> None:
    """Remove every value of KEY. Unsetting a missing key is not an error."""
    key = _validate_key(key)
    target = parse_scope(scope or ConfigScope.LOCAL.value)
    ctx.config.unset(key, target)
    user_output(f"Unset {key} ({target.label})")


@config_group.command("list")
@scope_options
@click.pass_obj
@cli_error_boundary
def list_cmd(ctx: GtrContext, scope: str | None) -> None:
    """List gtr configuration, labelled by origin when merged."""
    entries = ctx.config.list_entries(scope or AUTO_SCOPE)
    if not entries:
        user_output("No gtr configuration found")
        return

    for entry in entries:
        if scope is None:
            machine_output(f"{entry.key} = {entry.value}  [{entry.origin.label}]")
        else:
            machine_output(f"{entry.key} = {entry.value}")
