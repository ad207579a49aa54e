"""Application context - the boundary a front end talks to.

The context owns the profile store, the engine and the lock that serializes
access to the store. Front ends create one context at start-up, load the
settings, pass the context to their handlers and save on shutdown.
"""

import logging
import threading
from pathlib import Path

from password_maker.config import resolve_settings_path
from password_maker.engine.password_engine import GenerationResult, PasswordEngine
from password_maker.errors import ConfigError
from password_maker.profiles.base import Profile
from password_maker.profiles.loader import SettingsLoader
from password_maker.profiles.store import ProfileStore

logger = logging.getLogger(__name__)


class AppContext:
    """Shared state for one password maker session.

    Every store read or mutation, and every generation, happens under one
    re-entrant lock, so callers on different threads never observe a store
    whose active index is out of bounds.
    """

    def __init__(
        self,
        store: ProfileStore | None = None,
        engine: PasswordEngine | None = None,
        settings_path: Path | str | None = None,
        loader: SettingsLoader | None = None,
    ):
        self._store = store if store is not None else ProfileStore()
        self.engine = engine or PasswordEngine()
        self.loader = loader or SettingsLoader()
        self._settings_path = Path(settings_path) if settings_path is not None else None
        self._lock = threading.RLock()

    @property
    def settings_path(self) -> Path:
        """The settings file; resolved from the environment unless given.

        Raises:
            ConfigError: If no path was given and none can be resolved
        """
        if self._settings_path is not None:
            return self._settings_path
        return resolve_settings_path()

    # Persistence

    def create_settings(self) -> None:
        """Replace the store with one holding a single default profile."""
        with self._lock:
            self._store = ProfileStore.with_default()

    def load_settings(self) -> ConfigError | None:
        """Load the store from the settings file.

        On failure the store is replaced by one default profile and the
        error is returned rather than raised.
        """
        try:
            path = self.settings_path
            store = self.loader.load_file(path)
        except ConfigError as e:
            logger.warning("Using default settings (%s): %s", e.kind.value, e)
            self.create_settings()
            return e

        with self._lock:
            self._store = store
        logger.info("Loaded %d profile(s) from %s", len(store), path)
        return None

    def save_settings(self) -> ConfigError | None:
        """Write the store to the settings file.

        Returns:
            The error if saving failed, None otherwise
        """
        try:
            path = self.settings_path
            with self._lock:
                self.loader.save_file(self._store, path)
        except ConfigError as e:
            logger.error("Cannot save settings (%s): %s", e.kind.value, e)
            return e

        logger.info("Saved settings to %s", path)
        return None

    # Derivation

    def generate(self, url: str, master: str) -> GenerationResult:
        """Derive the password for ``url`` with the active profile.

        An empty store generates with the default profile. Failures are
        returned in the result; ``result.text`` is either the password or the
        error message to show in its place.
        """
        with self._lock:
            profile = self._store.get_active_profile()
            return self.engine.try_generate(url, master, profile)

    def verify(self, master: str) -> str:
        """Return the profile-independent checksum of ``master``."""
        return self.engine.verify(master)

    def used_text(self, url: str) -> str:
        """Return the derivation key the active profile builds from ``url``."""
        with self._lock:
            profile = self._store.get_active_profile()
        return self.engine.used_text(url, profile)

    # Profile store

    def add(self, name: str) -> Profile:
        with self._lock:
            return self._store.add(name)

    def delete(self) -> Profile | None:
        with self._lock:
            return self._store.delete()

    def get_active_index(self) -> int | None:
        with self._lock:
            return self._store.active_index

    def set_active_index(self, index: int) -> None:
        with self._lock:
            self._store.set_active_index(index)
            logger.debug("Active profile index is now %s", self._store.active_index)

    def get_active_profile(self) -> Profile:
        with self._lock:
            return self._store.get_active_profile()

    def set_active_profile(self, profile: Profile) -> bool:
        with self._lock:
            return self._store.set_active_profile(profile)

    def list_names(self) -> list[str]:
        with self._lock:
            return self._store.list_names()

    def snapshot(self) -> ProfileStore:
        """Return an independent copy of the current store."""
        with self._lock:
            return self._store.copy()
