"""Keyed hash construction and entropy expansion.

``KeyedHash.digest`` is HMAC (RFC 2104) over the backend's hash module,
computed by ``Crypto.Hash.HMAC``.

Expansion produces further blocks by appending ``"\\n" + counter`` to the
key (counter starting at 1), so block ``i`` of a given key and message is
always the same bytes.
"""

from itertools import count
from typing import Iterator

from Crypto.Hash import HMAC

from password_maker.hashing.backends import HashBackend


class KeyedHash:
    """Keyed digest over a single hash backend."""

    def __init__(self, backend: HashBackend):
        self.backend = backend

    @property
    def block_size(self) -> int:
        return self.backend.block_size

    @property
    def digest_size(self) -> int:
        return self.backend.digest_size

    def digest(self, key: bytes, message: bytes) -> bytes:
        """Compute one keyed digest of ``message`` under ``key``."""
        return HMAC.new(key, message, digestmod=self.backend.module).digest()

    def block(self, key: bytes, message: bytes, index: int) -> bytes:
        """Compute expansion block ``index`` (0 is the plain keyed digest)."""
        if index < 0:
            raise ValueError(f"Block index must be non-negative, got {index}")
        if index:
            key = key + b"\n" + str(index).encode("ascii")
        return self.digest(key, message)

    def iter_blocks(self, key: bytes, message: bytes) -> Iterator[bytes]:
        """Yield blocks 0, 1, 2, ... without end."""
        for index in count():
            yield self.block(key, message, index)

    def expand(self, key: bytes, message: bytes, size: int) -> bytes:
        """Return the first ``size`` bytes of the concatenated blocks."""
        if size < 0:
            raise ValueError(f"Size must be non-negative, got {size}")

        buffer = bytearray()
        for block in self.iter_blocks(key, message):
            if len(buffer) >= size:
                break
            buffer.extend(block)
        return bytes(buffer[:size])
