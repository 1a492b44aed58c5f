"""Static table of known gtr configuration keys.

Public keys live in the ``gtr.`` namespace of git config. Keys that teams may
share through the committed ``.gtrconfig`` file have a second, shorter name in
that file (``gtr.worktrees.dir`` <-> ``worktrees.dir``). Keys without such a
mapping are invisible to the project-file backend.
"""

from dataclasses import dataclass

GTR_NAMESPACE = "gtr."
PROJECT_CONFIG_FILENAME = ".gtrconfig"


@dataclass(frozen=True)
class ConfigKey:
    """A known configuration key.

    Attributes:
        name: Public key, e.g. ``gtr.worktrees.dir``
        file_key: Key in the project file, or None when the key is not shared there
        env_var: Environment variable consulted after all stores, if any
        multi_valued: True for ordered-set keys read with get_all()
    """

    name: str
    file_key: str | None
    env_var: str | None = None
    multi_valued: bool = False


WORKTREES_DIR = ConfigKey("gtr.worktrees.dir", "worktrees.dir", env_var="GTR_WORKTREES_DIR")
WORKTREES_PREFIX = ConfigKey(
    "gtr.worktrees.prefix", "worktrees.prefix", env_var="GTR_WORKTREES_PREFIX"
)
DEFAULT_BRANCH = ConfigKey("gtr.defaultBranch", "defaults.branch", env_var="GTR_DEFAULT_BRANCH")
EDITOR_DEFAULT = ConfigKey("gtr.editor.default", "defaults.editor", env_var="GTR_EDITOR_DEFAULT")
AI_DEFAULT = ConfigKey("gtr.ai.default", "defaults.ai", env_var="GTR_AI_DEFAULT")

COPY_INCLUDE = ConfigKey("gtr.copy.include", "copy.include", multi_valued=True)
COPY_EXCLUDE = ConfigKey("gtr.copy.exclude", "copy.exclude", multi_valued=True)
COPY_INCLUDE_DIRS = ConfigKey("gtr.copy.includeDirs", "copy.includeDirs", multi_valued=True)
COPY_EXCLUDE_DIRS = ConfigKey("gtr.copy.excludeDirs", "copy.excludeDirs", multi_valued=True)

HOOK_POST_CREATE = ConfigKey("gtr.hook.postCreate", "hooks.postCreate", multi_valued=True)
HOOK_PRE_REMOVE = ConfigKey("gtr.hook.preRemove", "hooks.preRemove", multi_valued=True)
HOOK_POST_REMOVE = ConfigKey("gtr.hook.postRemove", "hooks.postRemove", multi_valued=True)

KNOWN_KEYS: tuple[ConfigKey, ...] = (
    WORKTREES_DIR,
    WORKTREES_PREFIX,
    DEFAULT_BRANCH,
    EDITOR_DEFAULT,
    AI_DEFAULT,
    COPY_INCLUDE,
    COPY_EXCLUDE,
    COPY_INCLUDE_DIRS,
    COPY_EXCLUDE_DIRS,
    HOOK_POST_CREATE,
    HOOK_PRE_REMOVE,
    HOOK_POST_REMOVE,
)

# git prints section and variable names lowercased, so lookups ignore case
_BY_NAME = {key.name.lower(): key for key in KNOWN_KEYS}
_BY_FILE_KEY = {key.file_key.lower(): key for key in KNOWN_KEYS if key.file_key is not None}


def lookup_key(name: str) -> ConfigKey:
    """Return the table entry for a public key.

    Unknown keys are still usable: they get no file mapping and no env var.
    """
    known = _BY_NAME.get(name.lower())
    if known is not None:
        return known
    return ConfigKey(name, None)


def to_file_key(name: str) -> str | None:
    """Map a public key to its project-file key, or None if it has none."""
    return lookup_key(name).file_key


def from_file_key(file_key: str) -> str | None:
    """Map a project-file key back to its public key.

    Keys already written in public form pass through unchanged; anything else
    unmapped returns None and is skipped by callers.
    """
    known = _BY_FILE_KEY.get(file_key.lower())
    if known is not None:
        return known.name
    if file_key.startswith(GTR_NAMESPACE):
        return canonical_name(file_key)
    return None


def canonical_name(name: str) -> str:
    """Spell a key the way the table does (``gtr.defaultbranch`` -> ``gtr.defaultBranch``)."""
    return lookup_key(name).name
