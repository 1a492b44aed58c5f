"""Tests for RealGit command construction and output handling.

subprocess.run is patched; no git repository is needed.
"""

import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from gtr.core.git.real import RealGit

REPO = Path("/repo")


def _completed(stdout: str = "", returncode: int = 0, stderr: str = "") -> Mock:
    result = Mock(spec=subprocess.CompletedProcess)
    result.returncode = returncode
    result.stdout = stdout
    result.stderr = stderr
    return result


def test_get_git_common_dir_relative_output_is_made_absolute(tmp_path: Path) -> None:
    with patch("gtr.core.git.real.subprocess.run") as mock_run:
        mock_run.return_value = _completed(".git\n")

        result = RealGit().get_git_common_dir(tmp_path)

    assert result == (tmp_path / ".git").resolve()


def test_get_git_common_dir_outside_repo() -> None:
    with patch("gtr.core.git.real.subprocess.run") as mock_run:
        mock_run.return_value = _completed("", returncode=128, stderr="fatal: not a git repo")

        assert RealGit().get_git_common_dir(Path("/tmp")) is None


def test_current_branch_empty_output_means_detached() -> None:
    with patch("gtr.core.git.real.subprocess.run") as mock_run:
        mock_run.return_value = _completed("\n")

        assert RealGit().get_current_branch(REPO) is None

    assert mock_run.call_args.args[0] == ["git", "branch", "--show-current"]


def test_ref_exists_uses_show_ref_verify() -> None:
    with patch("gtr.core.git.real.subprocess.run") as mock_run:
        mock_run.return_value = _completed(returncode=1)

        assert not RealGit().ref_exists(REPO, "refs/remotes/origin/feature")

    assert mock_run.call_args.args[0] == [
        "git",
        "show-ref",
        "--verify",
        "--quiet",
        "refs/remotes/origin/feature",
    ]


def test_list_worktrees_parses_porcelain() -> None:
    porcelain = "worktree /repo\nHEAD abc\nbranch refs/heads/main\n\n"
    with patch("gtr.core.git.real.subprocess.run") as mock_run:
        mock_run.return_value = _completed(porcelain)

        sections = RealGit().list_worktrees(REPO)

    assert [(s.path, s.branch) for s in sections] == [(Path("/repo"), "main")]


def test_list_worktrees_failure_is_empty() -> None:
    with patch("gtr.core.git.real.subprocess.run") as mock_run:
        mock_run.return_value = _completed(returncode=128, stderr="fatal")

        assert RealGit().list_worktrees(REPO) == []


@pytest.mark.parametrize(
    ("kwargs", "expected_tail"),
    [
        (
            {"branch": "feat", "start_point": "origin/main", "create_branch": True, "force": False},
            ["-b", "feat", "/repo-worktrees/feat", "origin/main"],
        ),
        (
            {"branch": "feat", "start_point": None, "create_branch": True, "force": False},
            ["-b", "feat", "/repo-worktrees/feat", "HEAD"],
        ),
        (
            {"branch": "feat", "start_point": None, "create_branch": False, "force": True},
            ["--force", "/repo-worktrees/feat", "feat"],
        ),
    ],
)
def test_add_worktree_command(kwargs: dict, expected_tail: list[str]) -> None:
    with patch("gtr.core.subprocess.subprocess.run") as mock_run:
        mock_run.return_value = _completed()

        RealGit().add_worktree(REPO, Path("/repo-worktrees/feat"), **kwargs)

    cmd = mock_run.call_args.args[0]
    assert cmd[:3] == ["git", "worktree", "add"]
    assert cmd[3:] == expected_tail
    assert mock_run.call_args.kwargs["cwd"] == REPO


def test_add_worktree_failure_raises_with_git_message() -> None:
    with patch("gtr.core.subprocess.subprocess.run") as mock_run:
        mock_run.side_effect = subprocess.CalledProcessError(
            returncode=128,
            cmd=["git", "worktree", "add"],
            stderr="fatal: 'feat' is already checked out at '/repo'",
        )

        with pytest.raises(RuntimeError, match="already checked out"):
            RealGit().add_worktree(
                REPO,
                Path("/repo-worktrees/feat"),
                branch="feat",
                start_point=None,
                create_branch=False,
                force=False,
            )


def test_remove_worktree_and_branch_commands() -> None:
    with patch("gtr.core.subprocess.subprocess.run") as mock_run:
        mock_run.return_value = _completed()
        git = RealGit()

        git.remove_worktree(REPO, Path("/wt"), force=True)
        git.delete_branch(REPO, "feat", force=False)
        git.delete_branch(REPO, "feat", force=True)
        git.create_tracking_branch(REPO, "feat", "origin/feat")
        git.fetch(REPO, "origin")

    commands = [call.args[0] for call in mock_run.call_args_list]
    assert commands == [
        ["git", "worktree", "remove", "--force", "/wt"],
        ["git", "branch", "-d", "feat"],
        ["git", "branch", "-D", "feat"],
        ["git", "branch", "--track", "feat", "origin/feat"],
        ["git", "fetch", "origin"],
    ]
