"""Profile Store - ordered profiles plus the active selection.

Invariant: when the store holds profiles, ``active_index`` is a valid index
into them; when it is empty, ``active_index`` is None. Reads of the active
profile on an empty store return a copy of the default profile.

The store is not thread-safe on its own; ``AppContext`` serializes access.
"""

import logging
from typing import Iterable, Iterator

from password_maker.profiles.base import Profile, default_profile

logger = logging.getLogger(__name__)


class ProfileStore:
    """Ordered collection of named profiles with one active entry."""

    def __init__(
        self,
        profiles: Iterable[Profile] | None = None,
        active_index: int | None = 0,
    ):
        self._profiles: list[Profile] = [p.model_copy(deep=True) for p in profiles or []]
        self._active_index: int | None = None
        if self._profiles:
            self.set_active_index(0 if active_index is None else active_index)

    @classmethod
    def with_default(cls) -> "ProfileStore":
        """Create a store holding exactly one default profile."""
        return cls([default_profile()])

    @property
    def active_index(self) -> int | None:
        return self._active_index

    def get_active_index(self) -> int | None:
        return self._active_index

    def set_active_index(self, index: int) -> None:
        """Select a profile by index.

        An out of range index (including a negative one) selects the last
        profile. On an empty store there is nothing to select and the index
        stays None.
        """
        if not self._profiles:
            self._active_index = None
            return

        if 0 <= index < len(self._profiles):
            self._active_index = index
        else:
            self._active_index = len(self._profiles) - 1

    def has_active_profile(self) -> bool:
        return self._active_index is not None

    def add(self, name: str) -> Profile:
        """Append a copy of the default profile named ``name`` and select it."""
        profile = default_profile().renamed(name)
        self._profiles.append(profile)
        self._active_index = len(self._profiles) - 1
        logger.info("Added profile %r at index %d", name, self._active_index)
        return profile.model_copy(deep=True)

    def delete(self) -> Profile | None:
        """Remove the active profile.

        The profile now at the same position becomes active, or the new last
        one if the removed profile was last. Deleting from an empty store is
        a no-op.

        Returns:
            The removed profile, or None if the store was empty
        """
        if self._active_index is None:
            return None

        removed = self._profiles.pop(self._active_index)
        if not self._profiles:
            self._active_index = None
        elif self._active_index >= len(self._profiles):
            self._active_index = len(self._profiles) - 1

        logger.info("Deleted profile %r", removed.name)
        return removed

    def get_active_profile(self) -> Profile:
        """Return a copy of the active profile, or of the default profile."""
        if self._active_index is None:
            return default_profile()
        return self._profiles[self._active_index].model_copy(deep=True)

    def set_active_profile(self, profile: Profile) -> bool:
        """Replace the active profile with a copy of ``profile``.

        Returns:
            False if the store has no active profile, True otherwise
        """
        if self._active_index is None:
            return False
        self._profiles[self._active_index] = profile.model_copy(deep=True)
        return True

    def list_names(self) -> list[str]:
        """Profile names in store order."""
        return [p.name for p in self._profiles]

    def get_names(self) -> list[str]:
        """Alias of ``list_names``."""
        return self.list_names()

    def find(self, name: str) -> int | None:
        """Return the index of the first profile named ``name``."""
        for index, profile in enumerate(self._profiles):
            if profile.name == name:
                return index
        return None

    def profiles(self) -> list[Profile]:
        """Copies of all profiles, in order."""
        return [p.model_copy(deep=True) for p in self._profiles]

    def copy(self) -> "ProfileStore":
        return ProfileStore(self._profiles, self._active_index)

    def __len__(self) -> int:
        return len(self._profiles)

    def __iter__(self) -> Iterator[Profile]:
        """Iterate over copies of the profiles."""
        return iter(self.profiles())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProfileStore):
            return NotImplemented
        return (
            self._profiles == other._profiles
            and self._active_index == other._active_index
        )

    def __repr__(self) -> str:
        return f"ProfileStore(names={self.list_names()!r}, active_index={self._active_index!r})"
