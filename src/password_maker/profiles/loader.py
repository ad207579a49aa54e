"""Settings Loader for reading and writing the profile store as YAML."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from password_maker.config import resolve_settings_path
from password_maker.errors import ConfigError, ConfigErrorKind
from password_maker.profiles.base import Profile
from password_maker.profiles.store import ProfileStore

logger = logging.getLogger(__name__)


class SettingsLoader:
    """Loads and saves a ProfileStore from/to YAML files.

    Every failure is raised as ``ConfigError`` with a kind naming the step
    that failed: opening, reading, decoding or writing.
    """

    def load_file(self, path: Path | str) -> ProfileStore:
        """Load a store from a YAML settings file.

        Args:
            path: Path to the settings file

        Returns:
            Loaded ProfileStore instance

        Raises:
            ConfigError: open_read, read or decode
        """
        path = Path(path)
        try:
            f = open(path, "rb")
        except OSError as e:
            raise ConfigError(
                ConfigErrorKind.OPEN_READ,
                f"Cannot open settings file {path}: {e.strerror or e}",
            ) from e

        with f:
            try:
                raw = f.read()
            except OSError as e:
                raise ConfigError(
                    ConfigErrorKind.READ,
                    f"Cannot read settings file {path}: {e.strerror or e}",
                ) from e

        try:
            content = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ConfigError(
                ConfigErrorKind.READ,
                f"Settings file {path} is not valid UTF-8",
            ) from e

        store = self.load_from_string(content)
        logger.debug("Loaded %d profile(s) from %s", len(store), path)
        return store

    def load_from_string(self, content: str) -> ProfileStore:
        """Load a store from a YAML string.

        Raises:
            ConfigError: decode
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                ConfigErrorKind.DECODE,
                f"Settings are not valid YAML: {e}",
            ) from e

        return self._parse_settings(data)

    def _parse_settings(self, data: Any) -> ProfileStore:
        """Parse store data from YAML structure."""
        if not isinstance(data, dict):
            raise ConfigError(
                ConfigErrorKind.DECODE,
                "Settings must be a mapping with 'profiles' and 'active_index'",
            )

        profiles_data = data.get("profiles") or []
        if not isinstance(profiles_data, list):
            raise ConfigError(ConfigErrorKind.DECODE, "'profiles' must be a list")

        active_index = data.get("active_index")
        if active_index is not None and (
            isinstance(active_index, bool) or not isinstance(active_index, int)
        ):
            raise ConfigError(
                ConfigErrorKind.DECODE,
                f"'active_index' must be an integer or null, got {active_index!r}",
            )

        profiles = []
        for i, p_data in enumerate(profiles_data):
            if not isinstance(p_data, dict):
                raise ConfigError(
                    ConfigErrorKind.DECODE,
                    f"profiles[{i}] must be a mapping",
                )
            try:
                profiles.append(Profile.model_validate(p_data))
            except ValidationError as e:
                raise ConfigError(
                    ConfigErrorKind.DECODE,
                    f"profiles[{i}] is invalid: {e.error_count()} error(s)",
                ) from e

        return ProfileStore(profiles, active_index)

    def save_file(self, store: ProfileStore, path: Path | str) -> None:
        """Save a store to a YAML file.

        Args:
            store: The store to save
            path: Path for the output file

        Raises:
            ConfigError: open_write or write
        """
        path = Path(path)
        content = self.dump_to_string(store)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            f = open(path, "w", encoding="utf-8")
        except OSError as e:
            raise ConfigError(
                ConfigErrorKind.OPEN_WRITE,
                f"Cannot open settings file {path} for writing: {e.strerror or e}",
            ) from e

        try:
            with f:
                f.write(content)
        except OSError as e:
            raise ConfigError(
                ConfigErrorKind.WRITE,
                f"Cannot write settings file {path}: {e.strerror or e}",
            ) from e

        logger.debug("Saved %d profile(s) to %s", len(store), path)

    def dump_to_string(self, store: ProfileStore) -> str:
        """Serialize a store to YAML."""
        return yaml.dump(
            self._store_to_dict(store),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )

    def _store_to_dict(self, store: ProfileStore) -> dict[str, Any]:
        """Convert a ProfileStore to a dictionary for YAML serialization."""
        return {
            "active_index": store.active_index,
            "profiles": [p.model_dump(mode="json") for p in store],
        }


def load_settings(path: Path | str | None = None) -> ProfileStore:
    """Convenience function to load the profile store.

    Args:
        path: Settings file; resolved from the environment when None

    Raises:
        ConfigError: On any failure, including an unresolvable config root
    """
    if path is None:
        path = resolve_settings_path()
    return SettingsLoader().load_file(path)


def save_settings(store: ProfileStore, path: Path | str | None = None) -> None:
    """Convenience function to save the profile store.

    Raises:
        ConfigError: On any failure, including an unresolvable config root
    """
    if path is None:
        path = resolve_settings_path()
    SettingsLoader().save_file(store, path)
