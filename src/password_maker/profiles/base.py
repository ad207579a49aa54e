"""Profile model - a named bundle of derivation parameters.

Profiles declare how a password is derived (algorithm, alphabet, length,
which URL parts are used, leet usage) but hold no secrets and no derived
output. String-typed choices (hash algorithm, leet mode) are resolved when
a password is generated, so a profile with an unknown algorithm can still
be loaded, shown and corrected.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from password_maker.engine.leet import LeetMode
from password_maker.engine.url_parsing import UrlMode
from password_maker.hashing.backends import HashAlgorithm

DEFAULT_PROFILE_NAME = "default"

DEFAULT_ALPHABET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
    "`~!@#$%^&*()_-+={}|[]\\:\";'<>?,./"
)

ALPHANUMERIC_ALPHABET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
)

_LEET_LEVEL_WORDS = {
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
}


class Profile(BaseModel):
    """Derivation parameters for one kind of site."""

    name: str = Field(default=DEFAULT_PROFILE_NAME, description="Profile name")
    hash_algorithm: str = Field(
        default=HashAlgorithm.MD5.value,
        description="Hash algorithm name"
    )
    leet_mode: str = Field(
        default=LeetMode.NOT_AT_ALL.value,
        description="When to apply leet substitution"
    )
    leet_level: int | None = Field(
        default=None,
        description="Leet intensity, 1-9; ignored when leet_mode is NotAtAll"
    )
    alphabet: str = Field(
        default=DEFAULT_ALPHABET,
        description="Characters the password is drawn from"
    )
    username: str = Field(default="", description="Appended to the derivation key")
    modifier: str = Field(default="", description="Appended after the username")
    password_length: int = Field(
        default=8,
        ge=0,
        description="Number of generated characters, excluding prefix and suffix"
    )
    prefix: str = Field(default="", description="Prepended verbatim")
    suffix: str = Field(default="", description="Appended verbatim")

    use_domain: bool = Field(default=True, description="Use the domain")
    use_subdomain: bool = Field(default=True, description="Use subdomains")
    use_protocol: bool = Field(default=False, description="Use the protocol")
    use_params: bool = Field(
        default=False,
        description="Use path and query (only with url_mode 'all')"
    )
    use_userinfo: bool = Field(default=False, description="Use user info")
    url_mode: UrlMode = Field(
        default=UrlMode.COMPONENTS,
        description="Whether path and query may contribute to the key"
    )

    @field_validator("leet_level", mode="before")
    @classmethod
    def _parse_leet_level(cls, value: Any) -> Any:
        """Accept blank strings, digit strings and level words ("Three")."""
        if not isinstance(value, str):
            return value

        text = value.strip()
        if not text:
            return None
        if text.isdigit():
            return int(text)
        return _LEET_LEVEL_WORDS.get(text.lower(), value)

    def renamed(self, name: str) -> "Profile":
        """Return a deep copy carrying a different name."""
        copy = self.model_copy(deep=True)
        copy.name = name
        return copy


DEFAULT_PROFILE = Profile()


def default_profile() -> Profile:
    """Return a fresh copy of the default profile.

    The module-level ``DEFAULT_PROFILE`` is never handed out directly, so it
    cannot be mutated by callers.
    """
    return DEFAULT_PROFILE.model_copy(deep=True)


class ProfileBuilder:
    """Fluent builder for creating Profiles."""

    def __init__(self, name: str):
        self._profile = default_profile().renamed(name)

    def hash_algorithm(self, algorithm: HashAlgorithm | str) -> "ProfileBuilder":
        if isinstance(algorithm, HashAlgorithm):
            algorithm = algorithm.value
        self._profile.hash_algorithm = algorithm
        return self

    def leet(self, mode: LeetMode | str, level: int | None = None) -> "ProfileBuilder":
        if isinstance(mode, LeetMode):
            mode = mode.value
        self._profile.leet_mode = mode
        self._profile.leet_level = level
        return self

    def alphabet(self, alphabet: str) -> "ProfileBuilder":
        self._profile.alphabet = alphabet
        return self

    def length(self, length: int) -> "ProfileBuilder":
        self._profile.password_length = length
        return self

    def username(self, username: str) -> "ProfileBuilder":
        self._profile.username = username
        return self

    def modifier(self, modifier: str) -> "ProfileBuilder":
        self._profile.modifier = modifier
        return self

    def prefix(self, prefix: str) -> "ProfileBuilder":
        self._profile.prefix = prefix
        return self

    def suffix(self, suffix: str) -> "ProfileBuilder":
        self._profile.suffix = suffix
        return self

    def url_parts(
        self,
        protocol: bool | None = None,
        userinfo: bool | None = None,
        subdomain: bool | None = None,
        domain: bool | None = None,
        params: bool | None = None,
    ) -> "ProfileBuilder":
        """Set URL inclusion flags; None leaves a flag unchanged."""
        flags = {
            "use_protocol": protocol,
            "use_userinfo": userinfo,
            "use_subdomain": subdomain,
            "use_domain": domain,
            "use_params": params,
        }
        for field_name, value in flags.items():
            if value is not None:
                setattr(self._profile, field_name, value)
        return self

    def url_mode(self, mode: UrlMode | str) -> "ProfileBuilder":
        if isinstance(mode, str):
            mode = UrlMode(mode)
        self._profile.url_mode = mode
        return self

    def build(self) -> Profile:
        # Round trip through validation so builder input gets the same checks
        # as keyword construction.
        return Profile.model_validate(self._profile.model_dump())
