"""Tests for the editor, ai and adapter commands."""

from pathlib import Path

from click.testing import CliRunner

from gtr.cli.cli import cli
from gtr.core.adapters import LauncherKind, LauncherRegistry
from gtr.core.config_store import ConfigScope
from tests.fakes.config_store import FakeConfigStore
from tests.fakes.launcher import FakeLauncher
from tests.fakes.shell import FakeShell
from tests.test_utils.env_helpers import SimulatedRepoEnv, section


def _registry(*launchers: tuple[LauncherKind, FakeLauncher]) -> LauncherRegistry:
    by_kind: dict[LauncherKind, dict] = {LauncherKind.EDITOR: {}, LauncherKind.AI: {}}
    for kind, launcher in launchers:
        by_kind[kind][launcher.name] = launcher
    return LauncherRegistry(by_kind)


def _feature_env(tmp_path: Path):
    env = SimulatedRepoEnv(tmp_path)
    feature = env.create_worktree_dir("feature-auth")
    git = env.fake_git(
        current_branches={feature: "feature/auth"},
        worktree_sections=[section(feature, branch="feature/auth")],
    )
    return env, feature, git


def test_editor_uses_configured_default(tmp_path: Path) -> None:
    env, feature, git = _feature_env(tmp_path)
    cursor = FakeLauncher("cursor")
    store = FakeConfigStore(entries={ConfigScope.LOCAL: [("gtr.editor.default", "cursor")]})
    ctx = env.build_context(
        git=git, config_store=store, launchers=_registry((LauncherKind.EDITOR, cursor))
    )

    result = CliRunner().invoke(cli, ["editor", "feature/auth"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert cursor.launch_calls == [(feature, [])]
    assert f"Opening {feature} in cursor" in result.stderr


def test_editor_option_overrides_default(tmp_path: Path) -> None:
    env, feature, git = _feature_env(tmp_path)
    cursor = FakeLauncher("cursor")
    zed = FakeLauncher("zed")
    store = FakeConfigStore(entries={ConfigScope.LOCAL: [("gtr.editor.default", "cursor")]})
    ctx = env.build_context(
        git=git,
        config_store=store,
        launchers=_registry((LauncherKind.EDITOR, cursor), (LauncherKind.EDITOR, zed)),
    )

    result = CliRunner().invoke(cli, ["editor", "1", "--editor", "zed"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert zed.launch_calls == [(env.repo_root, [])]
    assert cursor.launch_calls == []


def test_editor_not_configured(tmp_path: Path) -> None:
    env, _, git = _feature_env(tmp_path)

    result = CliRunner().invoke(cli, ["editor", "feature/auth"], obj=env.build_context(git=git))

    assert result.exit_code == 1
    assert "No editor configured. Set gtr.editor.default or pass --editor" in result.stderr


def test_editor_none_means_not_configured(tmp_path: Path) -> None:
    env, _, git = _feature_env(tmp_path)
    store = FakeConfigStore(entries={ConfigScope.GLOBAL: [("gtr.editor.default", "none")]})

    result = CliRunner().invoke(
        cli, ["editor", "feature/auth"], obj=env.build_context(git=git, config_store=store)
    )

    assert result.exit_code == 1
    assert "No editor configured" in result.stderr


def test_unknown_editor_lists_available(tmp_path: Path) -> None:
    env, _, git = _feature_env(tmp_path)
    zed = FakeLauncher("zed")
    ctx = env.build_context(git=git, launchers=_registry((LauncherKind.EDITOR, zed)))

    result = CliRunner().invoke(cli, ["editor", "feature/auth", "--editor", "notepad"], obj=ctx)

    assert result.exit_code == 1
    assert "Unknown editor adapter: 'notepad'. Available: zed" in result.stderr


def test_unavailable_editor(tmp_path: Path) -> None:
    env, _, git = _feature_env(tmp_path)
    zed = FakeLauncher("zed", available=False)
    ctx = env.build_context(git=git, launchers=_registry((LauncherKind.EDITOR, zed)))

    result = CliRunner().invoke(cli, ["editor", "feature/auth", "--editor", "zed"], obj=ctx)

    assert result.exit_code == 1
    assert "'zed' is not available" in result.stderr


def test_editor_unknown_worktree(tmp_path: Path) -> None:
    env, _, git = _feature_env(tmp_path)
    zed = FakeLauncher("zed")
    ctx = env.build_context(git=git, launchers=_registry((LauncherKind.EDITOR, zed)))

    result = CliRunner().invoke(cli, ["editor", "nope", "--editor", "zed"], obj=ctx)

    assert result.exit_code == 1
    assert "Worktree not found for branch: nope" in result.stderr
    assert zed.launch_calls == []


def test_builtin_editor_runs_through_shell(tmp_path: Path) -> None:
    env, feature, git = _feature_env(tmp_path)
    shell = FakeShell(installed_tools={"code": "/usr/local/bin/code"})

    result = CliRunner().invoke(
        cli,
        ["editor", "feature/auth", "--editor", "vscode"],
        obj=env.build_context(git=git, shell=shell),
    )

    assert result.exit_code == 0, result.output
    assert shell.command_calls == [(["code", str(feature)], feature, {})]


def test_ai_passes_extra_arguments(tmp_path: Path) -> None:
    env, feature, git = _feature_env(tmp_path)
    claude = FakeLauncher("claude")
    store = FakeConfigStore(entries={ConfigScope.LOCAL: [("gtr.ai.default", "claude")]})
    ctx = env.build_context(
        git=git, config_store=store, launchers=_registry((LauncherKind.AI, claude))
    )

    result = CliRunner().invoke(cli, ["ai", "feature/auth", "--resume", "abc"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert claude.launch_calls == [(feature, ["--resume", "abc"])]


def test_builtin_ai_tool_starts_inside_worktree(tmp_path: Path) -> None:
    env, feature, git = _feature_env(tmp_path)
    shell = FakeShell(installed_tools={"aider": "/usr/local/bin/aider"})

    result = CliRunner().invoke(
        cli,
        ["ai", "feature/auth", "--ai", "aider", "--model", "sonnet"],
        obj=env.build_context(git=git, shell=shell),
    )

    assert result.exit_code == 0, result.output
    assert shell.command_calls == [(["aider", "--model", "sonnet"], feature, {})]


def test_ai_tool_exit_code_is_propagated(tmp_path: Path) -> None:
    env, _, git = _feature_env(tmp_path)
    claude = FakeLauncher("claude", exit_code=2)
    ctx = env.build_context(git=git, launchers=_registry((LauncherKind.AI, claude)))

    result = CliRunner().invoke(cli, ["ai", "feature/auth", "--ai", "claude"], obj=ctx)

    assert result.exit_code == 2


def test_adapter_lists_builtin_launchers(tmp_path: Path) -> None:
    env = SimulatedRepoEnv(tmp_path)
    shell = FakeShell(installed_tools={"cursor": "/usr/local/bin/cursor"})

    result = CliRunner().invoke(cli, ["adapter"], obj=env.build_context(shell=shell))

    assert result.exit_code == 0, result.output
    assert "cursor" in result.stderr
    assert "claude" in result.stderr
    assert "yes" in result.stderr
    assert "no" in result.stderr
