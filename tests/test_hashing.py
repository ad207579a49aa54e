"""Tests for the Hashing module."""

import hashlib
import hmac

import pytest
from Crypto.Hash import HMAC, MD4, RIPEMD160

from password_maker.errors import SettingsErrorKind, UnknownHashAlgorithm
from password_maker.hashing.backends import HashAlgorithm, HashBackendRegistry
from password_maker.hashing.keyed import KeyedHash


@pytest.fixture
def registry():
    return HashBackendRegistry()


class TestHashAlgorithm:
    """Tests for algorithm name lookup."""

    @pytest.mark.parametrize("name", ["md5", "MD5", "Md5", " md5 "])
    def test_aliases_resolve_to_md5(self, name):
        assert HashAlgorithm.from_name(name) is HashAlgorithm.MD5

    @pytest.mark.parametrize("name", ["HmacMd5", "hmac-md5", "HMAC_SHA256", "hmacsha1"])
    def test_keyed_spellings_are_rejected(self, name):
        with pytest.raises(UnknownHashAlgorithm):
            HashAlgorithm.from_name(name)

    def test_ripemd_spellings(self):
        assert HashAlgorithm.from_name("RipeMD160") is HashAlgorithm.RIPEMD160
        assert HashAlgorithm.from_name("ripemd-160") is HashAlgorithm.RIPEMD160

    def test_unknown_name_is_an_error(self):
        with pytest.raises(UnknownHashAlgorithm) as exc_info:
            HashAlgorithm.from_name("sha3")

        assert exc_info.value.kind is SettingsErrorKind.UNKNOWN_HASH_ALGORITHM
        assert "sha3" in str(exc_info.value)

    def test_names(self):
        assert HashAlgorithm.names() == ["md4", "md5", "sha1", "sha256", "ripemd160"]


class TestHashBackendRegistry:
    """Tests for HashBackendRegistry."""

    def test_default_backends(self, registry):
        assert len(registry) == 5
        assert set(registry.list_algorithms()) == set(HashAlgorithm)

    @pytest.mark.parametrize(
        "name,digest_size",
        [("md4", 16), ("md5", 16), ("sha1", 20), ("sha256", 32), ("ripemd160", 20)],
    )
    def test_sizes(self, registry, name, digest_size):
        backend = registry.resolve(name)

        assert backend.digest_size == digest_size
        assert backend.block_size == backend.module.block_size == 64
        assert len(backend.hash(b"abc")) == digest_size

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("md4", "31d6cfe0d16ae931b73c59d7e0c089c0"),
            ("md5", "d41d8cd98f00b204e9800998ecf8427e"),
            ("sha1", "da39a3ee5e6b4b0d3255bfef95601890afd80709"),
            ("sha256", "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"),
            ("ripemd160", "9c1185a5c5e9fc54612808977ee8f548b2258d31"),
        ],
    )
    def test_empty_input_digests(self, registry, name, expected):
        assert registry.resolve(name).hash(b"").hex() == expected

    def test_get_unknown_returns_none(self, registry):
        assert registry.get("whirlpool") is None
        assert "whirlpool" not in registry
        assert "SHA256" in registry

    def test_resolve_unknown_raises(self, registry):
        with pytest.raises(UnknownHashAlgorithm):
            registry.resolve("whirlpool")


class TestKeyedHash:
    """Tests for the keyed construction."""

    @pytest.mark.parametrize("name", ["md5", "sha1", "sha256"])
    def test_matches_stdlib_hmac(self, registry, name):
        keyed = KeyedHash(registry.resolve(name))
        key, message = b"master", b"www.example.com"

        assert keyed.digest(key, message) == hmac.new(key, message, getattr(hashlib, name)).digest()

    @pytest.mark.parametrize("name,module", [("md4", MD4), ("ripemd160", RIPEMD160)])
    def test_matches_pycryptodome_hmac(self, registry, name, module):
        keyed = KeyedHash(registry.resolve(name))
        key, message = b"master", b"www.example.com"

        assert keyed.digest(key, message) == HMAC.new(key, message, digestmod=module).digest()

    def test_rfc2104_vector(self, registry):
        keyed = KeyedHash(registry.resolve("md5"))

        digest = keyed.digest(b"Jefe", b"what do ya want for nothing?")
        assert digest.hex() == "750c783e6ab0b503eaa86e310a5db738"

    def test_rfc2202_sha1_vector(self, registry):
        keyed = KeyedHash(registry.resolve("sha1"))

        digest = keyed.digest(b"\x0b" * 20, b"Hi There")
        assert digest.hex() == "b617318655057264e28bc0b6fb378c8ef146be00"

    def test_long_key_is_hashed_first(self, registry):
        keyed = KeyedHash(registry.resolve("sha256"))
        key = b"k" * 100

        assert keyed.digest(key, b"msg") == hmac.new(key, b"msg", hashlib.sha256).digest()
        assert keyed.digest(key, b"msg") == keyed.digest(hashlib.sha256(key).digest(), b"msg")

    def test_empty_key_and_message(self, registry):
        keyed = KeyedHash(registry.resolve("sha1"))

        assert keyed.digest(b"", b"") == hmac.new(b"", b"", hashlib.sha1).digest()

    def test_block_zero_is_plain_digest(self, registry):
        keyed = KeyedHash(registry.resolve("md5"))

        assert keyed.block(b"k", b"m", 0) == keyed.digest(b"k", b"m")

    def test_blocks_append_counter_to_key(self, registry):
        keyed = KeyedHash(registry.resolve("md5"))

        assert keyed.block(b"k", b"m", 1) == keyed.digest(b"k\n1", b"m")
        assert keyed.block(b"k", b"m", 12) == keyed.digest(b"k\n12", b"m")

    def test_negative_block_index(self, registry):
        with pytest.raises(ValueError):
            KeyedHash(registry.resolve("md5")).block(b"k", b"m", -1)

    def test_iter_blocks_order(self, registry):
        keyed = KeyedHash(registry.resolve("sha1"))
        blocks = keyed.iter_blocks(b"k", b"m")

        assert [next(blocks) for _ in range(3)] == [keyed.block(b"k", b"m", i) for i in range(3)]


class TestExpand:
    """Tests for entropy expansion."""

    def test_expand_is_deterministic(self, registry):
        keyed = KeyedHash(registry.resolve("md5"))

        assert keyed.expand(b"k", b"m", 100) == keyed.expand(b"k", b"m", 100)

    def test_expand_length(self, registry):
        keyed = KeyedHash(registry.resolve("md5"))

        assert len(keyed.expand(b"k", b"m", 0)) == 0
        assert len(keyed.expand(b"k", b"m", 15)) == 15
        assert len(keyed.expand(b"k", b"m", 50)) == 50

    def test_expand_concatenates_blocks_in_order(self, registry):
        keyed = KeyedHash(registry.resolve("sha256"))
        expected = b"".join(keyed.block(b"k", b"m", i) for i in range(3))

        assert keyed.expand(b"k", b"m", 96) == expected
        assert keyed.expand(b"k", b"m", 40) == expected[:40]

    def test_expand_negative_size(self, registry):
        with pytest.raises(ValueError):
            KeyedHash(registry.resolve("md5")).expand(b"k", b"m", -1)
