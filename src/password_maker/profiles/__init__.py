"""Profiles module - named derivation settings and their storage.

Profiles are user-owned configurations that specify:
- The hash algorithm and leet usage
- The output alphabet, length, prefix and suffix
- Which parts of a URL feed the derivation

They contain no secrets and no derived passwords.
"""

from password_maker.profiles.base import (
    DEFAULT_ALPHABET,
    DEFAULT_PROFILE,
    Profile,
    ProfileBuilder,
    default_profile,
)
from password_maker.profiles.loader import SettingsLoader, load_settings, save_settings
from password_maker.profiles.store import ProfileStore

__all__ = [
    "DEFAULT_ALPHABET",
    "DEFAULT_PROFILE",
    "Profile",
    "ProfileBuilder",
    "default_profile",
    "ProfileStore",
    "SettingsLoader",
    "load_settings",
    "save_settings",
]
