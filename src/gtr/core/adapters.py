"""Editor and AI-tool launchers.

A launcher knows how to check whether its tool is installed (``probe``) and how
to open a worktree with it (``launch``). Launchers are looked up by kind and
name in a ``LauncherRegistry``; the built-in set wraps well-known command-line
programs.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import Enum
from pathlib import Path

from gtr.core.errors import AdapterUnavailable, UnknownAdapter
from gtr.core.shell import Shell


class LauncherKind(Enum):
    EDITOR = "editor"
    AI = "ai"


class Launcher(ABC):
    """A tool that can be opened on a worktree."""

    name: str

    @abstractmethod
    def probe(self) -> bool:
        """Return True if the tool can be launched on this machine."""
        ...

    @abstractmethod
    def launch(self, path: Path, args: Sequence[str]) -> int:
        """Open the tool on `path` and return its exit code.

        Raises:
            AdapterUnavailable: The tool is not installed
        """
        ...


class CommandLauncher(Launcher):
    """Launcher backed by an executable on PATH.

    Args:
        name: Adapter name users select (``gtr.editor.default=cursor``)
        command: Program and fixed leading arguments
        shell: Used to locate and run the program
        pass_path: Append the worktree path as an argument. Editors take the
            path; AI tools are started inside it instead.
    """

    def __init__(self, name: str, command: list[str], shell: Shell, *, pass_path: bool) -> None:
        self.name = name
        self.command = command
        self._shell = shell
        self._pass_path = pass_path

    def probe(self) -> bool:
        return self._shell.get_installed_tool_path(self.command[0]) is not None

    def launch(self, path: Path, args: Sequence[str]) -> int:
        if not self.probe():
            raise AdapterUnavailable(self.name, self.command[0])

        argv = list(self.command)
        if self._pass_path:
            argv.append(str(path))
        argv.extend(args)
        return self._shell.run_command(argv, cwd=path)


EDITOR_COMMANDS: dict[str, list[str]] = {
    "cursor": ["cursor"],
    "code": ["code"],
    "vscode": ["code"],
    "zed": ["zed"],
    "idea": ["idea"],
    "pycharm": ["pycharm"],
    "webstorm": ["webstorm"],
    "sublime": ["subl"],
    "nvim": ["nvim"],
    "vim": ["vim"],
    "emacs": ["emacs"],
}

AI_COMMANDS: dict[str, list[str]] = {
    "claude": ["claude"],
    "aider": ["aider"],
    "codex": ["codex"],
    "gemini": ["gemini"],
    "opencode": ["opencode"],
    "copilot": ["copilot"],
}


class LauncherRegistry:
    """Launchers indexed by kind, then by name."""

    def __init__(self, launchers: dict[LauncherKind, dict[str, Launcher]]) -> None:
        self._launchers = launchers

    def get_launcher(self, kind: LauncherKind, name: str) -> Launcher:
        """Look up a launcher by name.

        Raises:
            UnknownAdapter: No launcher of that kind has this name
        """
        by_name = self._launchers.get(kind, {})
        launcher = by_name.get(name.lower())
        if launcher is None:
            raise UnknownAdapter(kind.value, name, list(by_name))
        return launcher

    def names(self, kind: LauncherKind) -> list[str]:
        return sorted(self._launchers.get(kind, {}))

    def launchers(self, kind: LauncherKind) -> list[Launcher]:
        by_name = self._launchers.get(kind, {})
        return [by_name[name] for name in sorted(by_name)]


def default_registry(shell: Shell) -> LauncherRegistry:
    return LauncherRegistry(
        {
            LauncherKind.EDITOR: {
                name: CommandLauncher(name, command, shell, pass_path=True)
                for name, command in EDITOR_COMMANDS.items()
            },
            LauncherKind.AI: {
                name: CommandLauncher(name, command, shell, pass_path=False)
                for name, command in AI_COMMANDS.items()
            },
        }
    )
