# AGI-HPC Project - High-Performance Computing Architecture for AGI
# Copyright (c) 2025 Andrew H. Bond
# Contact: agi.hpc@gmail.com
#
# Licensed under the AGI-HPC Responsible AI License v1.0.

"""
Hash functions used to place targets and resources on the ring.

Every hasher maps a byte string to an unsigned 32-bit integer, so ring
positions always compare numerically no matter which hasher is used.

Usage:
    from conhash.hashers import create_hasher

    hasher = create_hasher("md5")
    position = hasher.hash(b"my-key")
"""

from __future__ import annotations

import hashlib
import zlib
from abc import ABC, abstractmethod
from typing import Dict, Type, Union

KEY_BITS = 32
KEY_MASK = (1 << KEY_BITS) - 1


def to_bytes(value: Union[str, bytes]) -> bytes:
    """Encode a target or resource key for hashing."""
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode("utf-8")
    raise TypeError(f"Expected str or bytes, got {type(value).__name__}")


# ---------------------------------------------------------------------------
# Hasher Interface
# ---------------------------------------------------------------------------


class Hasher(ABC):
    """Deterministic mapping from bytes to a ring position."""

    name: str = ""

    @abstractmethod
    def hash(self, data: bytes) -> int:
        """Return the position for ``data`` in ``[0, 2**32)``."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Crc32Hasher(Hasher):
    """CRC-32 checksum."""

    name = "crc32"

    def hash(self, data: bytes) -> int:
        return zlib.crc32(data) & KEY_MASK


class _DigestHasher(Hasher):
    """Truncates a cryptographic digest to its leading 32 bits.

    The prefix is read as a big-endian integer, which is the numeric value
    of the first eight hex characters of the digest.
    """

    algorithm = ""

    def hash(self, data: bytes) -> int:
        digest = hashlib.new(self.algorithm, data).digest()
        return int.from_bytes(digest[: KEY_BITS // 8], "big")


class Md5Hasher(_DigestHasher):
    name = "md5"
    algorithm = "md5"


class Sha1Hasher(_DigestHasher):
    name = "sha1"
    algorithm = "sha1"


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


HASHERS: Dict[str, Type[Hasher]] = {
    Crc32Hasher.name: Crc32Hasher,
    Md5Hasher.name: Md5Hasher,
    Sha1Hasher.name: Sha1Hasher,
}


def create_hasher(name: str) -> Hasher:
    """Create a hasher by name.

    Args:
        name: One of "crc32", "md5", "sha1" (case-insensitive)

    Returns:
        Hasher instance
    """
    key = name.lower()
    if key not in HASHERS:
        raise ValueError(
            f"Unknown hasher: {name} (expected one of {', '.join(sorted(HASHERS))})"
        )
    return HASHERS[key]()
