"""Tests for the hash functions."""

import hashlib
import zlib

import pytest

from conhash.hashers import (
    HASHERS,
    Crc32Hasher,
    Md5Hasher,
    Sha1Hasher,
    create_hasher,
    to_bytes,
)


class TestCrc32Hasher:
    """Tests for Crc32Hasher."""

    def test_known_check_value(self):
        """CRC-32 of the standard check string should be 0xCBF43926."""
        assert Crc32Hasher().hash(b"123456789") == 0xCBF43926

    def test_matches_zlib(self):
        """Crc32Hasher should agree with zlib."""
        assert Crc32Hasher().hash(b"cache-a0") == zlib.crc32(b"cache-a0")

    def test_empty_input(self):
        assert Crc32Hasher().hash(b"") == 0


class TestDigestHashers:
    """Tests for the truncated digest hashers."""

    def test_md5_prefix_is_numeric(self):
        """MD5 key should be the integer value of the first 8 hex chars."""
        assert Md5Hasher().hash(b"") == 0xD41D8CD9

    def test_sha1_prefix_is_numeric(self):
        """SHA-1 key should be the integer value of the first 8 hex chars."""
        assert Sha1Hasher().hash(b"") == 0xDA39A3EE

    @pytest.mark.parametrize("cls,algo", [(Md5Hasher, "md5"), (Sha1Hasher, "sha1")])
    def test_matches_hexdigest_prefix(self, cls, algo):
        """Keys should equal int(hexdigest[:8], 16) for arbitrary input."""
        data = b"resource:42"
        expected = int(hashlib.new(algo, data).hexdigest()[:8], 16)
        assert cls().hash(data) == expected

    @pytest.mark.parametrize("cls", [Md5Hasher, Sha1Hasher])
    def test_returns_int_not_hex_string(self, cls):
        """Digest keys must compare as integers alongside CRC-32 keys."""
        key = cls().hash(b"abc")
        assert isinstance(key, int)
        assert key < 2**32


class TestHasherContract:
    """Properties shared by every hasher."""

    @pytest.mark.parametrize("name", sorted(HASHERS))
    def test_deterministic(self, name):
        hasher = create_hasher(name)
        assert hasher.hash(b"abc") == hasher.hash(b"abc")

    @pytest.mark.parametrize("name", sorted(HASHERS))
    def test_32_bit_range(self, name):
        """Every hasher should produce keys in [0, 2**32)."""
        hasher = create_hasher(name)
        for i in range(500):
            key = hasher.hash(f"target-{i}".encode())
            assert 0 <= key < 2**32


class TestCreateHasher:
    """Tests for the hasher factory."""

    def test_create_by_name(self):
        assert isinstance(create_hasher("crc32"), Crc32Hasher)
        assert isinstance(create_hasher("md5"), Md5Hasher)
        assert isinstance(create_hasher("sha1"), Sha1Hasher)

    def test_case_insensitive(self):
        assert isinstance(create_hasher("MD5"), Md5Hasher)

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown hasher"):
            create_hasher("sha256")


class TestToBytes:
    def test_str_encoded_utf8(self):
        assert to_bytes("café") == "café".encode("utf-8")

    def test_bytes_passthrough(self):
        assert to_bytes(b"\x00\xff") == b"\x00\xff"

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            to_bytes(42)
