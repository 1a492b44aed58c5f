"""Tests for worktrees directory resolution."""

from pathlib import Path

import pytest

from gtr.core.base_dir import (
    default_base_dir,
    expand_base_dir,
    is_ignored_by_gitignore,
    resolve_base_dir,
    resolve_prefix,
)
from gtr.core.config_resolver import ConfigResolver
from gtr.core.config_store import ConfigScope
from tests.fakes.config_store import FakeConfigStore


def _config(value: str | None = None, prefix: str | None = None) -> ConfigResolver:
    entries: list[tuple[str, str]] = []
    if value is not None:
        entries.append(("gtr.worktrees.dir", value))
    if prefix is not None:
        entries.append(("gtr.worktrees.prefix", prefix))
    return ConfigResolver(FakeConfigStore(entries={ConfigScope.LOCAL: entries}), {})


def test_default_is_sibling_directory() -> None:
    assert default_base_dir(Path("/home/u/code/app")) == Path("/home/u/code/app-worktrees")


def test_relative_value_is_relative_to_repo_root() -> None:
    assert expand_base_dir(".worktrees", Path("/r")) == Path("/r/.worktrees")


def test_parent_relative_value_is_normalized() -> None:
    assert expand_base_dir("../trees", Path("/code/app")) == Path("/code/trees")


def test_absolute_value_is_kept() -> None:
    assert expand_base_dir("/var/trees", Path("/r")) == Path("/var/trees")


def test_tilde_expands_to_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    assert expand_base_dir("~/trees", Path("/r")) == tmp_path / "trees"


def test_resolve_base_dir_unset_uses_default(tmp_path: Path) -> None:
    repo_root = tmp_path / "app"

    assert resolve_base_dir(_config(), repo_root) == tmp_path / "app-worktrees"


def test_resolve_base_dir_from_environment(tmp_path: Path) -> None:
    config = ConfigResolver(FakeConfigStore(), {"GTR_WORKTREES_DIR": str(tmp_path / "env")})

    assert resolve_base_dir(config, tmp_path / "app") == tmp_path / "env"


@pytest.mark.parametrize(
    "line", [".worktrees", "/.worktrees", ".worktrees/", "/.worktrees/", ".worktrees/*"]
)
def test_gitignore_spellings_are_recognized(tmp_path: Path, line: str) -> None:
    (tmp_path / ".gitignore").write_text(f"node_modules\n{line}\n", encoding="utf-8")

    assert is_ignored_by_gitignore(tmp_path, ".worktrees")


def test_gitignore_without_matching_line(tmp_path: Path) -> None:
    (tmp_path / ".gitignore").write_text("node_modules\n.worktrees-old\n", encoding="utf-8")

    assert not is_ignored_by_gitignore(tmp_path, ".worktrees")


def test_no_gitignore_is_not_ignored(tmp_path: Path) -> None:
    assert not is_ignored_by_gitignore(tmp_path, ".worktrees")


def test_inside_repo_without_ignore_warns(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    base_dir = resolve_base_dir(_config(".worktrees"), tmp_path)

    assert base_dir == tmp_path / ".worktrees"
    err = capsys.readouterr().err
    assert "Worktrees are inside repository at: .worktrees" in err
    assert "/.worktrees/" in err


def test_inside_repo_with_ignore_is_silent(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / ".gitignore").write_text("/.worktrees/\n", encoding="utf-8")

    resolve_base_dir(_config(".worktrees"), tmp_path)

    assert capsys.readouterr().err == ""


def test_outside_repo_is_silent(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    resolve_base_dir(_config("../elsewhere"), tmp_path / "app")

    assert capsys.readouterr().err == ""


def test_prefix_defaults_to_empty() -> None:
    assert resolve_prefix(_config()) == ""
    assert resolve_prefix(_config(prefix="wt-")) == "wt-"
