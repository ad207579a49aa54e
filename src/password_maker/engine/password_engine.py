"""Password Engine - derives site passwords from a master secret.

The engine orchestrates one derivation:

- builds the derivation key from the URL and the profile's URL flags
- applies leet to the master secret when the profile asks for it
- expands keyed digests of ``key + username + modifier`` under the master
- renders the digests over the profile's alphabet, applying leet after
  encoding when asked, and wraps the result with prefix and suffix

Profiles are read, never stored; every call resolves its parameters anew.
"""

import logging
from dataclasses import dataclass
from string import ascii_lowercase, ascii_uppercase
from typing import TYPE_CHECKING

from password_maker.engine.encoding import BaseEncoder
from password_maker.engine.leet import LeetTransform
from password_maker.engine.url_parsing import UrlParsing
from password_maker.errors import SettingsError, SettingsErrorKind
from password_maker.hashing.backends import HashAlgorithm, HashBackend, HashBackendRegistry
from password_maker.hashing.keyed import KeyedHash

if TYPE_CHECKING:
    from password_maker.profiles.base import Profile

logger = logging.getLogger(__name__)

MAX_PASSWORD_LENGTH = 1024

VERIFY_ALGORITHM = HashAlgorithm.SHA256
VERIFY_ALPHABET = ascii_uppercase + ascii_lowercase
VERIFY_LENGTH = 3


@dataclass(frozen=True)
class DerivationParameters:
    """A profile resolved into ready-to-use derivation parts."""

    backend: HashBackend
    leet: LeetTransform
    encoder: BaseEncoder
    url_parsing: UrlParsing
    password_length: int
    username: str = ""
    modifier: str = ""
    prefix: str = ""
    suffix: str = ""


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a generation attempt: a password or the reason there is none."""

    password: str | None = None
    error: SettingsError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def text(self) -> str:
        """The password, or the error message shown in its place."""
        if self.error is not None:
            return str(self.error)
        return self.password or ""


class PasswordEngine:
    """Engine for deriving passwords from profiles."""

    def __init__(self, hash_registry: HashBackendRegistry | None = None):
        self.hash_registry = hash_registry or HashBackendRegistry()

    def resolve(self, profile: "Profile") -> DerivationParameters:
        """Validate a profile and resolve it into derivation parameters.

        Raises:
            SettingsError: If the algorithm, leet settings, alphabet or
                length cannot be used
        """
        backend = self.hash_registry.resolve(profile.hash_algorithm)
        leet = LeetTransform.create(profile.leet_mode, profile.leet_level)
        encoder = BaseEncoder(profile.alphabet)

        if not 0 <= profile.password_length <= MAX_PASSWORD_LENGTH:
            raise SettingsError(
                SettingsErrorKind.INVALID_PASSWORD_LENGTH,
                f"Password length must be from 0 to {MAX_PASSWORD_LENGTH}, "
                f"got {profile.password_length}",
            )

        return DerivationParameters(
            backend=backend,
            leet=leet,
            encoder=encoder,
            url_parsing=UrlParsing.from_profile(profile),
            password_length=profile.password_length,
            username=profile.username,
            modifier=profile.modifier,
            prefix=profile.prefix,
            suffix=profile.suffix,
        )

    def used_text(self, url: str, profile: "Profile") -> str:
        """Return the derivation key ``url`` yields under ``profile``."""
        return UrlParsing.from_profile(profile).parse(url)

    def generate(self, url: str, master: str, profile: "Profile") -> str:
        """Derive the password for ``url``.

        Args:
            url: Site address, parsed with the profile's URL flags
            master: The master secret
            profile: Derivation parameters

        Returns:
            prefix + generated characters + suffix

        Raises:
            SettingsError: If the profile cannot be used
        """
        params = self.resolve(profile)
        return self._derive(params, params.url_parsing.parse(url), master)

    def derive(self, used_text: str, master: str, profile: "Profile") -> str:
        """Derive a password from an already built derivation key."""
        params = self.resolve(profile)
        return self._derive(params, used_text, master)

    def try_generate(self, url: str, master: str, profile: "Profile") -> GenerationResult:
        """Like ``generate`` but reports settings errors as a result value."""
        try:
            return GenerationResult(password=self.generate(url, master, profile))
        except SettingsError as e:
            logger.warning(
                "Cannot generate with profile %r: %s", profile.name, e.kind.value
            )
            return GenerationResult(error=e)

    def verify(self, master: str) -> str:
        """Return a short checksum of ``master``.

        The derivation uses fixed parameters and no URL, so the same master
        secret always gives the same three letters regardless of profiles.
        """
        params = DerivationParameters(
            backend=self.hash_registry.resolve(VERIFY_ALGORITHM),
            leet=LeetTransform(),
            encoder=BaseEncoder(VERIFY_ALPHABET),
            url_parsing=UrlParsing(),
            password_length=VERIFY_LENGTH,
        )
        # Empty message. Clients that hash a single space here produce
        # different checksums for the same master secret.
        return self._derive(params, "", master)

    def _derive(self, params: DerivationParameters, used_text: str, master: str) -> str:
        message = (used_text + params.username + params.modifier).encode("utf-8")
        key = params.leet.before(master).encode("utf-8")

        keyed = KeyedHash(params.backend)
        generated = params.encoder.encode_stream(
            keyed.iter_blocks(key, message),
            params.password_length,
            transform=params.leet.after if params.leet.mode.applies_after else None,
        )
        return f"{params.prefix}{generated}{params.suffix}"
