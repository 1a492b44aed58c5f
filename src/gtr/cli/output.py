"""Output utilities for CLI commands with clear intent.

user_output() is for humans and goes to stderr, so that machine_output()
results on stdout (paths for `cd "$(gtr go ...)"`, porcelain listings) stay
clean for shell consumption.
"""

from typing import Any

import click


def user_output(message: Any = "", nl: bool = True) -> None:
    """Print a diagnostic or informational message to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: Any = "", nl: bool = True) -> None:
    """Print a machine-readable result to stdout."""
    click.echo(message, nl=nl)


def warning(message: str) -> None:
    user_output(click.style("Warning: ", fg="yellow") + message)
