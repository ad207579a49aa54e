"""
Password Maker - reproducible site passwords from one master secret.

Passwords are derived, never stored: a keyed hash of the site address under
the master secret is rendered over a per-profile alphabet, so the same
inputs always give the same password.
"""

__version__ = "0.1.0"

from password_maker.context import AppContext
from password_maker.engine.password_engine import GenerationResult, PasswordEngine
from password_maker.errors import (
    ConfigError,
    ConfigErrorKind,
    PasswordMakerError,
    SettingsError,
    SettingsErrorKind,
    UnknownHashAlgorithm,
)
from password_maker.hashing.backends import HashAlgorithm
from password_maker.profiles.base import Profile
from password_maker.profiles.store import ProfileStore

__all__ = [
    "AppContext",
    "GenerationResult",
    "PasswordEngine",
    "ConfigError",
    "ConfigErrorKind",
    "PasswordMakerError",
    "SettingsError",
    "SettingsErrorKind",
    "UnknownHashAlgorithm",
    "HashAlgorithm",
    "Profile",
    "ProfileStore",
]
