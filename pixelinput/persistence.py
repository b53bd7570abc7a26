"""Persistent key/value storage shared by every widget in the process.

Values are stored in a JSON file in an OS-appropriate location and survive
application restarts. Several processes may share the file; whichever wrote
last wins, and readers pick up changes made by other processes.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional

import platformdirs

from .constants import InputConstants

logger = logging.getLogger(__name__)


def default_store_dir() -> Path:
    """Directory holding the store file, overridable from the environment."""
    override = os.environ.get(InputConstants.STORE_DIR_ENV)
    if override:
        return Path(override)
    return Path(platformdirs.user_data_dir(InputConstants.STORE_APP_NAME))


class PersistentStore:
    """String store backed by a JSON file.

    The file is re-read whenever its modification time changes, so a value
    written by another process is visible to the next ``get_item``. If the
    file cannot be written the value is still kept in memory for the rest of
    the session.
    """

    def __init__(self, directory: Optional[Path] = None):
        """Initialize the store.

        Args:
            directory: Directory of the store file. Defaults to the user data
                directory for pixelinput.
        """
        self._store_dir = Path(directory) if directory is not None else default_store_dir()
        self._store_file = self._store_dir / InputConstants.STORE_FILENAME
        self._cache: Optional[Dict[str, str]] = None
        self._cache_mtime: Optional[float] = None

    @property
    def path(self) -> Path:
        return self._store_file

    def _ensure_store_dir(self) -> None:
        """Ensure the store directory exists."""
        try:
            self._store_dir.mkdir(parents=True, exist_ok=True)
        except (OSError, PermissionError) as e:
            logger.warning(f"Could not create store directory {self._store_dir}: {e}")

    def _file_mtime(self) -> Optional[float]:
        try:
            return self._store_file.stat().st_mtime
        except OSError:
            return None

    def _load_all(self) -> Dict[str, str]:
        """Load all values, reusing the cache while the file is unchanged.

        Returns:
            Dictionary mapping keys to values. Empty if the file doesn't exist
            or can't be read.
        """
        mtime = self._file_mtime()
        if self._cache is not None and mtime == self._cache_mtime:
            return self._cache

        if mtime is None:
            # Keep in-memory values when the file was never written
            if self._cache is None:
                self._cache = {}
            return self._cache

        try:
            with open(self._store_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError, PermissionError) as e:
            logger.warning(f"Could not load store from {self._store_file}: {e}")
            data = {}

        if not isinstance(data, dict):
            logger.warning("Store file has invalid format (not a dict), ignoring")
            data = {}

        self._cache = {str(k): v for k, v in data.items() if isinstance(v, str)}
        self._cache_mtime = mtime
        return self._cache

    def _save_all(self, values: Dict[str, str]) -> bool:
        """Save all values to disk atomically.

        Returns:
            True if save was successful, False otherwise.
        """
        self._cache = values
        self._ensure_store_dir()

        # Atomic write pattern (temp file + rename)
        temp_file = self._store_file.with_suffix('.tmp')

        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(values, f, indent=2)
            temp_file.replace(self._store_file)
            self._cache_mtime = self._file_mtime()
            return True

        except (OSError, PermissionError) as e:
            logger.warning(f"Could not save store to {self._store_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

    def get_item(self, key: str) -> Optional[str]:
        """Return the value stored under ``key``, or None."""
        return self._load_all().get(key)

    def set_item(self, key: str, value: str) -> bool:
        """Store ``value`` under ``key``.

        Returns:
            True if the value reached the disk, False if only memory has it.
        """
        values = dict(self._load_all())
        values[key] = value
        return self._save_all(values)

    def remove_item(self, key: str) -> bool:
        values = dict(self._load_all())
        if key not in values:
            return True
        del values[key]
        return self._save_all(values)

    def clear(self) -> bool:
        """Remove every stored value."""
        return self._save_all({})

    def clear_cache(self) -> None:
        """Forget the in-memory copy so the next read goes to disk."""
        self._cache = None
        self._cache_mtime = None


# Global instance
_store: Optional[PersistentStore] = None


def get_store() -> PersistentStore:
    """Get the process-wide persistent store.

    Returns:
        The shared PersistentStore instance.
    """
    global _store
    if _store is None:
        _store = PersistentStore()
    return _store


def set_store(store: Optional[PersistentStore]) -> None:
    """Replace the process-wide store; None recreates it on next use."""
    global _store
    _store = store


def reset_store() -> None:
    """Drop the process-wide store instance.

    The next ``get_store`` builds a fresh one from the current environment,
    which is how tests isolate clipboard state.
    """
    set_store(None)
