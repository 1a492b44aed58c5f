"""Configuration resolution across scopes.

Precedence (highest to lowest):

1. local git config
2. .gtrconfig in the repository root (team defaults)
3. global git config
4. system git config
5. environment variable mapped to the key
6. caller-supplied fallback

Nothing is cached: every lookup reads the stores again, so a write followed by
a read in the same process sees the new value.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from gtr.cli.output import warning
from gtr.core.config_keys import GTR_NAMESPACE, canonical_name, from_file_key, lookup_key
from gtr.core.config_store import STORE_SCOPES, ConfigScope, ConfigStore
from gtr.core.errors import ConfigWriteFailed, InvalidScope

logger = logging.getLogger(__name__)

AUTO_SCOPE = "auto"
WRITE_SCOPES = frozenset(STORE_SCOPES)

_KEY_PATTERN = r"^gtr\."


@dataclass(frozen=True)
class ConfigEntry:
    """A key/value pair and the scope it came from (for listing)."""

    key: str
    value: str
    origin: ConfigScope


def parse_scope(name: str) -> ConfigScope:
    """Parse a user-supplied scope name.

    Accepts the scope values plus ``.gtrconfig``/``file`` as aliases for the
    project file and a leading ``--`` (``--global``).

    Raises:
        InvalidScope: If the name is not a known scope
    """
    normalized = name.strip().removeprefix("--").lower()
    if normalized in (".gtrconfig", "file"):
        return ConfigScope.PROJECT_FILE
    for scope in ConfigScope:
        if scope.value == normalized:
            return scope
    raise InvalidScope(name)


class ConfigResolver:
    """Merges the config stores per key.

    Args:
        store: Backend for the four git-config stores
        environ: Environment consulted after the stores (os.environ in production)
    """

    def __init__(self, store: ConfigStore, environ: Mapping[str, str]) -> None:
        self._store = store
        self._environ = environ

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _store_key(self, key: str, scope: ConfigScope) -> str | None:
        """Key to use in a given store, or None when the store cannot see it."""
        if scope is ConfigScope.PROJECT_FILE:
            return lookup_key(key).file_key
        return key

    def get_all_in_scope(self, key: str, scope: ConfigScope) -> list[str]:
        """All values of a key in one store (project file keys are mapped)."""
        store_key = self._store_key(key, scope)
        if store_key is None:
            return []
        return self._store.get_all(scope, store_key)

    def get_in_scope(self, key: str, scope: ConfigScope) -> str | None:
        """Effective value of a key in one store.

        The last value wins, matching ``git config --get``. None when absent.
        """
        values = self.get_all_in_scope(key, scope)
        if not values:
            return None
        return values[-1]

    def get(self, key: str, default: str = "") -> str:
        """Resolve a singular key through all tiers.

        Empty values in a store count as unset and fall through to the next tier.
        """
        for scope in STORE_SCOPES:
            value = self.get_in_scope(key, scope)
            if value:
                logger.debug("Config %s=%r from %s", key, value, scope.value)
                return value

        env_var = lookup_key(key).env_var
        if env_var is not None:
            env_value = self._environ.get(env_var, "")
            if env_value:
                logger.debug("Config %s=%r from $%s", key, env_value, env_var)
                return env_value

        return default

    def get_all(self, key: str) -> list[str]:
        """Merge a multi-valued key across stores.

        Values are concatenated local, project, global, system and de-duplicated
        by value, keeping the first (highest priority) occurrence.
        """
        merged: list[str] = []
        seen: set[str] = set()
        for scope in STORE_SCOPES:
            for value in self.get_all_in_scope(key, scope):
                if value in seen:
                    continue
                seen.add(value)
                merged.append(value)
        return merged

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _write_target(self, key: str, scope: ConfigScope | str) -> tuple[ConfigScope, str]:
        resolved = parse_scope(scope) if isinstance(scope, str) else scope
        if resolved not in WRITE_SCOPES:
            raise InvalidScope(resolved.value, "not a writable config store")
        store_key = self._store_key(key, resolved)
        if store_key is None:
            raise InvalidScope(resolved.value, f"'{key}' has no {resolved.label} equivalent")
        return resolved, store_key

    def set(self, key: str, value: str, scope: ConfigScope | str = ConfigScope.LOCAL) -> None:
        resolved, store_key = self._write_target(key, scope)
        try:
            self._store.set_value(resolved, store_key, value)
        except RuntimeError as e:
            raise ConfigWriteFailed(key, resolved.value, str(e)) from e

    def add(self, key: str, value: str, scope: ConfigScope | str = ConfigScope.LOCAL) -> None:
        resolved, store_key = self._write_target(key, scope)
        try:
            self._store.add_value(resolved, store_key, value)
        except RuntimeError as e:
            raise ConfigWriteFailed(key, resolved.value, str(e)) from e

    def unset(self, key: str, scope: ConfigScope | str = ConfigScope.LOCAL) -> None:
        resolved, store_key = self._write_target(key, scope)
        try:
            self._store.unset_all(resolved, store_key)
        except RuntimeError as e:
            raise ConfigWriteFailed(key, resolved.value, str(e)) from e

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def list_entries(self, scope: ConfigScope | str = AUTO_SCOPE) -> list[ConfigEntry]:
        """List gtr configuration.

        ``auto`` merges every store with origin labels, de-duplicating by
        (key, value) so multi-valued keys keep all their distinct values. A
        single scope lists that store's raw entries. An unknown scope name is
        reported and treated as ``auto``.
        """
        if scope == AUTO_SCOPE:
            return self._list_merged()

        resolved: ConfigScope | None = None
        if isinstance(scope, ConfigScope):
            resolved = scope
        else:
            try:
                resolved = parse_scope(scope)
            except InvalidScope:
                resolved = None

        if resolved is None or resolved not in WRITE_SCOPES:
            name = scope.value if isinstance(scope, ConfigScope) else scope
            logger.debug("Unknown config scope %r, listing auto", name)
            warning(f"Unknown scope '{name}', using 'auto'")
            return self._list_merged()

        if resolved is ConfigScope.PROJECT_FILE:
            pairs = self._store.get_regexp(resolved, ".")
        else:
            pairs = self._store.get_regexp(resolved, _KEY_PATTERN)
        return [ConfigEntry(key=key, value=value, origin=resolved) for key, value in pairs]

    def _list_merged(self) -> list[ConfigEntry]:
        entries: list[ConfigEntry] = []
        seen: set[tuple[str, str]] = set()

        for scope in STORE_SCOPES:
            if scope is ConfigScope.PROJECT_FILE:
                pairs = []
                for file_key, value in self._store.get_regexp(scope, "."):
                    public_key = from_file_key(file_key)
                    if public_key is not None:
                        pairs.append((public_key, value))
            else:
                pairs = [
                    (canonical_name(key), value)
                    for key, value in self._store.get_regexp(scope, _KEY_PATTERN)
                    if key.lower().startswith(GTR_NAMESPACE)
                ]

            for key, value in pairs:
                if (key, value) in seen:
                    continue
                seen.add((key, value))
                entries.append(ConfigEntry(key=key, value=value, origin=scope))

        return entries
