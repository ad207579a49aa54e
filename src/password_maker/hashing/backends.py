"""Digest backends for the supported hash algorithm family.

Each backend wraps a pycryptodome hash module and exposes its digest size
and block size as constants. Backends are pure: the same input always
yields the same digest.
"""

from dataclasses import dataclass
from enum import Enum
from types import ModuleType
from typing import Iterator

from Crypto.Hash import MD4, MD5, RIPEMD160, SHA1, SHA256

from password_maker.errors import UnknownHashAlgorithm


class HashAlgorithm(str, Enum):
    """Supported hash algorithms, by canonical name."""

    MD4 = "md4"
    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"
    RIPEMD160 = "ripemd160"

    @classmethod
    def from_name(cls, name: "str | HashAlgorithm") -> "HashAlgorithm":
        """Look up an algorithm by name.

        Matching ignores surrounding whitespace, case, ``-`` and ``_``, so
        ``"MD5"`` and ``"Md5"`` both resolve to ``HashAlgorithm.MD5``. Keyed
        spellings such as ``"HmacMd5"`` name no backend and are rejected.

        Raises:
            UnknownHashAlgorithm: If no algorithm matches
        """
        if isinstance(name, HashAlgorithm):
            return name
        if not isinstance(name, str):
            raise UnknownHashAlgorithm(str(name))

        normalized = name.strip().lower().replace("-", "").replace("_", "")

        try:
            return cls(normalized)
        except ValueError:
            raise UnknownHashAlgorithm(name) from None

    @classmethod
    def names(cls) -> list[str]:
        """Canonical names, in declaration order."""
        return [algorithm.value for algorithm in cls]


@dataclass(frozen=True)
class HashBackend:
    """A single digest algorithm."""

    algorithm: HashAlgorithm
    digest_size: int
    block_size: int
    module: ModuleType

    @property
    def name(self) -> str:
        return self.algorithm.value

    def hash(self, data: bytes) -> bytes:
        """Return the digest of ``data``."""
        return self.module.new(data).digest()


class HashBackendRegistry:
    """Name to backend lookup table.

    The default table holds the five supported algorithms; all of them use
    a 64 byte block.
    """

    def __init__(self):
        self._backends: dict[HashAlgorithm, HashBackend] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register the built-in backends."""
        self.register(HashBackend(HashAlgorithm.MD4, 16, 64, MD4))
        self.register(HashBackend(HashAlgorithm.MD5, 16, 64, MD5))
        self.register(HashBackend(HashAlgorithm.SHA1, 20, 64, SHA1))
        self.register(HashBackend(HashAlgorithm.SHA256, 32, 64, SHA256))
        self.register(HashBackend(HashAlgorithm.RIPEMD160, 20, 64, RIPEMD160))

    def register(self, backend: HashBackend) -> None:
        """Register a backend, replacing any backend for the same algorithm."""
        self._backends[backend.algorithm] = backend

    def get(self, name: "str | HashAlgorithm") -> HashBackend | None:
        """Get a backend by name.

        Returns:
            The backend or None if the name is unknown or unregistered
        """
        try:
            algorithm = HashAlgorithm.from_name(name)
        except UnknownHashAlgorithm:
            return None
        return self._backends.get(algorithm)

    def resolve(self, name: "str | HashAlgorithm") -> HashBackend:
        """Get a backend by name.

        Raises:
            UnknownHashAlgorithm: If the name is unknown or unregistered
        """
        backend = self.get(name)
        if backend is None:
            raise UnknownHashAlgorithm(str(getattr(name, "value", name)))
        return backend

    def list_algorithms(self) -> list[HashAlgorithm]:
        """List all registered algorithms."""
        return list(self._backends.keys())

    def __contains__(self, name: "str | HashAlgorithm") -> bool:
        return self.get(name) is not None

    def __iter__(self) -> Iterator[HashBackend]:
        return iter(self._backends.values())

    def __len__(self) -> int:
        return len(self._backends)
