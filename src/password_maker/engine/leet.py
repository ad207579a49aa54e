"""Leet speak substitution.

Conversion lower-cases its input and replaces each letter by the entry of
the substitution table for the selected level. Higher levels replace more
letters and use longer replacements. Characters other than ``a``-``z``
pass through unchanged.
"""

from dataclasses import dataclass
from enum import Enum
from string import ascii_lowercase

from password_maker.errors import SettingsError, SettingsErrorKind

MIN_LEET_LEVEL = 1
MAX_LEET_LEVEL = 9

# One row per level, one entry per letter a..z.
LEET_TABLE: tuple[tuple[str, ...], ...] = (
    ("4", "b", "c", "d", "3", "f", "g", "h", "i", "j", "k", "1", "m",
     "n", "0", "p", "9", "r", "s", "7", "u", "v", "w", "x", "y", "z"),
    ("4", "b", "c", "d", "3", "f", "g", "h", "1", "j", "k", "1", "m",
     "n", "0", "p", "9", "r", "5", "7", "u", "v", "w", "x", "y", "2"),
    ("4", "8", "c", "d", "3", "f", "6", "h", "'", "j", "k", "1", "m",
     "n", "0", "p", "9", "r", "5", "7", "u", "v", "w", "x", "'/", "2"),
    ("@", "8", "c", "d", "3", "f", "6", "h", "'", "j", "k", "1", "m",
     "n", "0", "p", "9", "r", "5", "7", "u", "v", "w", "x", "'/", "2"),
    ("@", "|3", "c", "d", "3", "f", "6", "#", "!", "7", "|<", "1", "m",
     "n", "0", "|>", "9", "|2", "$", "7", "u", "\\/", "w", "x", "'/", "2"),
    ("@", "|3", "c", "|)", "&", "|=", "6", "#", "!", ",|", "|<", "1", "m",
     "n", "0", "|>", "9", "|2", "$", "7", "u", "\\/", "w", "x", "'/", "2"),
    ("@", "|3", "[", "|)", "&", "|=", "6", "#", "!", ",|", "|<", "1", "^^",
     "^/", "0", "|*", "9", "|2", "5", "7", "(_)", "\\/", "\\/\\/", "><", "'/", "2"),
    ("@", "8", "(", "|)", "&", "|=", "6", "|-|", "!", "_|", "|(", "1", "|\\/|",
     "|\\|", "()", "|>", "(,)", "|2", "$", "|", "|_|", "\\/", "\\^/", ")(", "'/", "\"/_"),
    ("@", "8", "(", "|)", "&", "|=", "6", "|-|", "!", "_|", "|{", "|_", "/\\/\\",
     "|\\|", "()", "|>", "(,)", "|2", "$", "|", "|_|", "\\/", "\\^/", ")(", "'/", "\"/_"),
)

_LEET_MAPS: tuple[dict[str, str], ...] = tuple(
    dict(zip(ascii_lowercase, row)) for row in LEET_TABLE
)


class LeetMode(str, Enum):
    """When the leet substitution is applied."""

    NOT_AT_ALL = "NotAtAll"
    BEFORE = "Before"
    AFTER = "After"
    BEFORE_AND_AFTER = "BeforeAndAfter"

    @classmethod
    def from_name(cls, name: "str | LeetMode | None") -> "LeetMode":
        """Look up a mode by name, ignoring case. Empty means NotAtAll."""
        if isinstance(name, LeetMode):
            return name
        if name is None or (isinstance(name, str) and not name.strip()):
            return cls.NOT_AT_ALL
        if isinstance(name, str):
            normalized = name.strip().lower().replace("_", "").replace("-", "")
            for mode in cls:
                if mode.value.lower() == normalized:
                    return mode
        raise SettingsError(
            SettingsErrorKind.INVALID_LEET_MODE,
            f"Invalid leet mode: {name!r}",
        )

    @classmethod
    def names(cls) -> list[str]:
        return [mode.value for mode in cls]

    @property
    def applies_before(self) -> bool:
        return self in (LeetMode.BEFORE, LeetMode.BEFORE_AND_AFTER)

    @property
    def applies_after(self) -> bool:
        return self in (LeetMode.AFTER, LeetMode.BEFORE_AND_AFTER)


def validate_leet_level(level: int | None) -> int:
    """Return ``level`` if it is an integer in 1..9.

    Raises:
        SettingsError: For anything else; levels are never clamped
    """
    if isinstance(level, bool) or not isinstance(level, int):
        raise SettingsError(
            SettingsErrorKind.INVALID_LEET_LEVEL,
            f"Leet level must be an integer from {MIN_LEET_LEVEL} to {MAX_LEET_LEVEL}, got {level!r}",
        )
    if not MIN_LEET_LEVEL <= level <= MAX_LEET_LEVEL:
        raise SettingsError(
            SettingsErrorKind.INVALID_LEET_LEVEL,
            f"Leet level must be from {MIN_LEET_LEVEL} to {MAX_LEET_LEVEL}, got {level}",
        )
    return level


def leet_convert(level: int, text: str) -> str:
    """Apply the substitution table for ``level`` to ``text``."""
    table = _LEET_MAPS[validate_leet_level(level) - 1]
    return "".join(table.get(char, char) for char in text.lower())


@dataclass(frozen=True)
class LeetTransform:
    """A validated leet configuration.

    ``before`` is applied to the master secret, ``after`` to each rendered
    output block. Both are the identity unless the mode selects them.
    """

    mode: LeetMode = LeetMode.NOT_AT_ALL
    level: int | None = None

    @classmethod
    def create(cls, mode: "str | LeetMode | None", level: int | None) -> "LeetTransform":
        """Build a transform, validating the mode and level combination.

        The level is only checked when the mode is not NotAtAll.

        Raises:
            SettingsError: On an unknown mode or an out of range level
        """
        leet_mode = LeetMode.from_name(mode)
        if leet_mode is LeetMode.NOT_AT_ALL:
            return cls()
        return cls(mode=leet_mode, level=validate_leet_level(level))

    @property
    def enabled(self) -> bool:
        return self.mode is not LeetMode.NOT_AT_ALL

    def before(self, text: str) -> str:
        if not self.mode.applies_before:
            return text
        return leet_convert(self.level, text)

    def after(self, text: str) -> str:
        if not self.mode.applies_after:
            return text
        return leet_convert(self.level, text)
