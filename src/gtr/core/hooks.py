"""Lifecycle hooks configured under ``gtr.hook.*``."""

import logging
from collections.abc import Mapping, Sequence
from enum import Enum
from pathlib import Path

from gtr.cli.output import user_output
from gtr.core.config_keys import HOOK_POST_CREATE, HOOK_POST_REMOVE, HOOK_PRE_REMOVE, ConfigKey
from gtr.core.errors import HookFailed
from gtr.core.shell import Shell

logger = logging.getLogger(__name__)


class HookPhase(Enum):
    POST_CREATE = "postCreate"
    PRE_REMOVE = "preRemove"
    POST_REMOVE = "postRemove"

    @property
    def config_key(self) -> ConfigKey:
        return _PHASE_KEYS[self]


_PHASE_KEYS = {
    HookPhase.POST_CREATE: HOOK_POST_CREATE,
    HookPhase.PRE_REMOVE: HOOK_PRE_REMOVE,
    HookPhase.POST_REMOVE: HOOK_POST_REMOVE,
}


def hook_env(*, repo_root: Path, worktree_path: Path, branch: str) -> dict[str, str]:
    return {
        "REPO_ROOT": str(repo_root),
        "WORKTREE_PATH": str(worktree_path),
        "BRANCH": branch,
    }


def run_hooks(
    shell: Shell,
    phase: HookPhase,
    commands: Sequence[str],
    *,
    cwd: Path,
    env: Mapping[str, str],
) -> None:
    """Run each hook command through ``sh -c`` in `cwd`, in order.

    Raises:
        HookFailed: on the first command that exits non-zero (later commands do not run)
    """
    for command in commands:
        user_output(f"Running {phase.value} hook: {command}")
        logger.debug("Hook %s in %s: %s", phase.value, cwd, command)
        exit_code = shell.run_command(["sh", "-c", command], cwd=cwd, env=env)
        if exit_code != 0:
            raise HookFailed(phase.value, command, exit_code)
