"""Error boundary handling for CLI commands.

Catches gtr's own error taxonomy at command entry points and displays a clean
error message without a stack trace.
"""

import functools
import logging
from collections.abc import Callable
from typing import Any, TypeVar

import click

from gtr.cli.output import user_output
from gtr.core.errors import GtrError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Callable[..., Any])


def cli_error_boundary(func: T) -> T:
    """Decorator that turns a GtrError into a red "Error:" line and exit code 1.

    All other exceptions bubble up normally with full stack traces.

    Example:
        @click.command()
        @click.pass_obj
        @cli_error_boundary
        def my_command(ctx):
            ...
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except GtrError as e:
            logger.debug("%s: %s", type(e).__name__, e)
            user_output(click.style("Error: ", fg="red") + str(e))
            raise SystemExit(1) from None

    return wrapper  # type: ignore[return-value]
