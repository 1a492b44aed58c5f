"""Tests for the CLI error boundary decorator."""

from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from gtr.cli.error_boundary import cli_error_boundary
from gtr.core.errors import WorktreeAlreadyExists


@click.command()
@click.argument("mode")
@cli_error_boundary
def _command(mode: str) -> None:
    if mode == "gtr":
        raise WorktreeAlreadyExists("feature-auth", Path("/repo-worktrees/feature-auth"))
    if mode == "bug":
        raise ValueError("unexpected")
    click.echo("ok")


def test_success_passes_through() -> None:
    result = CliRunner().invoke(_command, ["fine"])

    assert result.exit_code == 0
    assert result.stdout == "ok\n"


def test_gtr_error_becomes_clean_message() -> None:
    result = CliRunner().invoke(_command, ["gtr"])

    assert result.exit_code == 1
    assert "Error: Worktree feature-auth already exists at" in result.stderr
    assert "Traceback" not in result.output


def test_other_exceptions_propagate() -> None:
    with pytest.raises(ValueError, match="unexpected"):
        CliRunner().invoke(_command, ["bug"], catch_exceptions=False)
