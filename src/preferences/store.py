################################################################################
# File Name: store.py
# Purpose/Description: JSON-backed preference store and version record
# Author: Michael Cornelison
# Creation Date: 2026-10-19
# Copyright: (c) 2026 Michael Cornelison. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-19    | M. Cornelison | Initial implementation
# ================================================================================
################################################################################

"""
Preference store module.

Provides:
- PreferenceStore: thread-safe key-value store persisted as a JSON file
- VersionStore: the "last recorded application version" kept in the store

Writes go to a temporary file that replaces the original, so a crash while
saving leaves the previous preferences intact.

Usage:
    from preferences.store import PreferenceStore, VersionStore

    store = PreferenceStore('data/preferences.json')
    versions = VersionStore(store)
    if versions.getCurrentVersion() < 140:
        ...
    versions.setCurrentVersion(140)
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any

from .defaults import DEFAULT_PREFERENCES
from .exceptions import PreferenceStoreError

logger = logging.getLogger(__name__)

# Preference key holding the last recorded application version
P_CURRENT_VERSION = 'currentVersion'


class PreferenceStore:
    """
    Thread-safe JSON-backed preference store.

    The file is read lazily on first access. A missing file is an empty
    store; a corrupt file is logged and treated as empty, so a damaged
    preference file never blocks startup.

    Example:
        store = PreferenceStore('data/preferences.json')
        store.setBoolean('taskKillerHelpDismissed', True)
        store.getBoolean('taskKillerHelpDismissed')  # True
    """

    def __init__(self, path: str | Path | None = None):
        """
        Initialize the store.

        Args:
            path: JSON file location. None keeps preferences in memory only.
        """
        self._path = Path(path) if path is not None else None
        self._lock = threading.RLock()
        self._values: dict[str, Any] | None = None

    @property
    def path(self) -> Path | None:
        """Location of the backing file, None for an in-memory store."""
        return self._path

    # ================================================================================
    # Persistence
    # ================================================================================

    def _load(self) -> dict[str, Any]:
        if self._values is not None:
            return self._values

        values: dict[str, Any] = {}
        if self._path is not None and self._path.exists():
            try:
                with open(self._path, 'r', encoding='utf-8') as f:
                    loaded = json.load(f)
                if isinstance(loaded, dict):
                    values = loaded
                else:
                    logger.warning(f"Ignoring non-object preference file: {self._path}")
            except (json.JSONDecodeError, OSError) as e:
                logger.warning(f"Failed to load preferences from {self._path}: {e}")

        self._values = values
        return values

    def _save(self) -> None:
        if self._path is None or self._values is None:
            return

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmpName = tempfile.mkstemp(
                prefix='.preferences-', suffix='.tmp', dir=str(self._path.parent)
            )
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(self._values, f, indent=2, sort_keys=True)
                os.replace(tmpName, self._path)
            except BaseException:
                if os.path.exists(tmpName):
                    os.unlink(tmpName)
                raise
        except OSError as e:
            raise PreferenceStoreError(
                f"Failed to save preferences: {e}",
                details={'path': str(self._path)}
            ) from e

    # ================================================================================
    # Generic access
    # ================================================================================

    def contains(self, key: str) -> bool:
        """Check whether a key has been set."""
        with self._lock:
            return key in self._load()

    def get(self, key: str, default: Any = None) -> Any:
        """Get a raw value, or default if unset."""
        with self._lock:
            return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a raw JSON-serializable value and persist the store."""
        with self._lock:
            self._load()[key] = value
            self._save()

    def remove(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if the key existed
        """
        with self._lock:
            values = self._load()
            if key not in values:
                return False
            del values[key]
            self._save()
            return True

    def getAll(self) -> dict[str, Any]:
        """Get a copy of all stored values."""
        with self._lock:
            return dict(self._load())

    # ================================================================================
    # Typed access
    # ================================================================================

    def getBoolean(self, key: str, default: bool = False) -> bool:
        value = self.get(key)
        return value if isinstance(value, bool) else default

    def setBoolean(self, key: str, value: bool) -> None:
        self.set(key, bool(value))

    def getString(self, key: str, default: str | None = None) -> str | None:
        value = self.get(key)
        return value if isinstance(value, str) else default

    def setString(self, key: str, value: str) -> None:
        self.set(key, str(value))

    def getInt(self, key: str, default: int = 0) -> int:
        value = self.get(key)
        if isinstance(value, bool):
            return default
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                return int(value)
            except ValueError:
                return default
        return default

    def setInt(self, key: str, value: int) -> None:
        self.set(key, int(value))

    # ================================================================================
    # Defaults
    # ================================================================================

    def setPreferenceDefaults(self, defaults: dict[str, Any] | None = None) -> int:
        """
        Fill in default values for keys that are not set.

        Existing values are never overwritten.

        Args:
            defaults: Defaults to apply (module DEFAULT_PREFERENCES if None)

        Returns:
            Number of keys that received a default
        """
        defaults = DEFAULT_PREFERENCES if defaults is None else defaults

        with self._lock:
            values = self._load()
            applied = 0
            for key, value in defaults.items():
                if key not in values:
                    values[key] = value
                    applied += 1

            if applied:
                self._save()

        logger.debug(f"Preference defaults applied | count={applied}")
        return applied


class VersionStore:
    """
    Last recorded application version, persisted in a PreferenceStore.

    A version of 0 means "never recorded" (fresh install).
    """

    def __init__(self, store: PreferenceStore, key: str = P_CURRENT_VERSION):
        self._store = store
        self._key = key

    def getCurrentVersion(self) -> int:
        """Get the last recorded version, 0 if never set."""
        return self._store.getInt(self._key, 0)

    def setCurrentVersion(self, version: int) -> None:
        """Record the given version as the current one."""
        self._store.setInt(self._key, version)
        logger.debug(f"Recorded application version | version={version}")
