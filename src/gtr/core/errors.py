"""Error taxonomy for gtr operations.

Every failure the core can report is a subclass of GtrError. CLI commands catch
GtrError at the command boundary and render it as a styled "Error:" line; the
core never prints errors itself.
"""

from pathlib import Path


class GtrError(Exception):
    """Base class for all gtr failures."""


class NotInRepository(GtrError):
    def __init__(self, cwd: Path) -> None:
        self.cwd = cwd
        super().__init__(f"Not in a git repository: {cwd}")


class WorktreeNotFound(GtrError):
    """No worktree matches an identifier (or a path is not a worktree directory)."""

    def __init__(self, identifier: str, *, path: Path | None = None) -> None:
        self.identifier = identifier
        self.path = path
        if path is not None:
            message = f"Worktree directory not found: {path}"
        else:
            message = f"Worktree not found for branch: {identifier}"
        super().__init__(message)


class WorktreeAlreadyExists(GtrError):
    def __init__(self, name: str, path: Path) -> None:
        self.name = name
        self.path = path
        super().__init__(f"Worktree {name} already exists at {path}")


class RemoteBranchNotFound(GtrError):
    def __init__(self, remote_ref: str) -> None:
        self.remote_ref = remote_ref
        super().__init__(f"Remote branch {remote_ref} does not exist")


class LocalBranchNotFound(GtrError):
    def __init__(self, branch: str) -> None:
        self.branch = branch
        super().__init__(f"Local branch {branch} does not exist")


class ProvisioningFailed(GtrError):
    """git refused to create the worktree.

    The attempted strategy is kept so callers can tell the user which path of
    the tracking decision table failed.
    """

    def __init__(self, branch: str, strategy: str, detail: str) -> None:
        self.branch = branch
        self.strategy = strategy
        self.detail = detail
        super().__init__(
            f"Failed to create worktree for branch '{branch}' (strategy: {strategy})\n{detail}"
        )


class RemovalFailed(GtrError):
    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to remove worktree at {path}\n{detail}")


class InvalidScope(GtrError):
    def __init__(self, scope: str, reason: str | None = None) -> None:
        self.scope = scope
        message = f"Invalid config scope: '{scope}'"
        if reason is not None:
            message += f" ({reason})"
        super().__init__(message)


class MissingRequiredName(GtrError):
    def __init__(self, branch: str) -> None:
        self.branch = branch
        super().__init__(
            f"--force requires --name to create a distinct worktree for branch '{branch}'"
        )


class ConfigWriteFailed(GtrError):
    def __init__(self, key: str, scope: str, detail: str) -> None:
        self.key = key
        self.scope = scope
        self.detail = detail
        super().__init__(f"Failed to write config key '{key}' in {scope} scope\n{detail}")


class HookFailed(GtrError):
    def __init__(self, phase: str, command: str, exit_code: int) -> None:
        self.phase = phase
        self.command = command
        self.exit_code = exit_code
        super().__init__(f"{phase} hook failed (exit code {exit_code}): {command}")


class UnknownAdapter(GtrError):
    def __init__(self, kind: str, name: str, available: list[str]) -> None:
        self.kind = kind
        self.name = name
        super().__init__(
            f"Unknown {kind} adapter: '{name}'. Available: {', '.join(sorted(available))}"
        )


class AdapterUnavailable(GtrError):
    def __init__(self, name: str, command: str) -> None:
        self.name = name
        self.command = command
        super().__init__(f"'{name}' is not available: command '{command}' not found on PATH")
