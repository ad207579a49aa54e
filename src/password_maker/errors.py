"""Error taxonomy for password derivation and settings persistence.

Two families exist:

- ``SettingsError``: a profile cannot be used for derivation (unknown hash
  algorithm, bad leet configuration, empty alphabet, ...). Front ends show
  the message in place of a password.
- ``ConfigError``: the settings file could not be located, read, decoded or
  written. These are recoverable; callers fall back to a default store.

Messages never include the master secret.
"""

from enum import Enum


class SettingsErrorKind(str, Enum):
    """Machine-checkable reasons a profile cannot derive a password."""

    UNKNOWN_HASH_ALGORITHM = "unknown_hash_algorithm"
    INVALID_LEET_MODE = "invalid_leet_mode"
    INVALID_LEET_LEVEL = "invalid_leet_level"
    NO_ACTIVE_PROFILE = "no_active_profile"
    EMPTY_ALPHABET = "empty_alphabet"
    INVALID_PASSWORD_LENGTH = "invalid_password_length"


class ConfigErrorKind(str, Enum):
    """Machine-checkable reasons the settings file could not be used."""

    NO_HOME = "no_home"
    OPEN_READ = "open_read"
    READ = "read"
    DECODE = "decode"
    OPEN_WRITE = "open_write"
    WRITE = "write"


class PasswordMakerError(Exception):
    """Base exception for all password_maker failures."""

    kind: Enum

    def __init__(self, kind: Enum, message: str = ""):
        super().__init__(message or kind.value.replace("_", " "))
        self.kind = kind

    @property
    def message(self) -> str:
        return str(self)


class SettingsError(PasswordMakerError):
    """Raised when profile parameters cannot be used for derivation."""

    kind: SettingsErrorKind

    def __init__(self, kind: SettingsErrorKind, message: str = ""):
        super().__init__(kind, message)


class UnknownHashAlgorithm(SettingsError):
    """Raised when a hash algorithm name does not match any backend."""

    def __init__(self, name: str):
        super().__init__(
            SettingsErrorKind.UNKNOWN_HASH_ALGORITHM,
            f"Unknown hash algorithm: {name!r}",
        )
        self.name = name


class ConfigError(PasswordMakerError):
    """Raised when the settings file cannot be located, read or written."""

    kind: ConfigErrorKind

    def __init__(self, kind: ConfigErrorKind, message: str = ""):
        super().__init__(kind, message)
