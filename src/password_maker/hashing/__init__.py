"""Hashing module - digest backends and the keyed construction built on them."""

from password_maker.hashing.backends import HashAlgorithm, HashBackend, HashBackendRegistry
from password_maker.hashing.keyed import KeyedHash

__all__ = [
    "HashAlgorithm",
    "HashBackend",
    "HashBackendRegistry",
    "KeyedHash",
]
