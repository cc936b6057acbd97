"""
Pytest fixtures for conhash tests.
"""

from typing import Dict, Optional

import pytest

from conhash import ConsistentHash, Md5Hasher
from conhash.hashers import Hasher


class FakeHasher(Hasher):
    """Table-driven hasher so ring positions are known in advance."""

    name = "fake"

    def __init__(self, table: Dict[str, int], default: Optional[int] = None):
        self.table = table
        self.default = default
        self.calls = []

    def hash(self, data: bytes) -> int:
        key = data.decode("utf-8")
        self.calls.append(key)
        if key in self.table:
            return self.table[key]
        if self.default is None:
            raise KeyError(key)
        return self.default


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep CONHASH_* variables from the host out of the tests."""
    for name in ("CONHASH_HASHER", "CONHASH_REPLICAS", "CONHASH_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_hasher_cls():
    return FakeHasher


@pytest.fixture
def ring():
    """An empty ring with default settings."""
    return ConsistentHash()


@pytest.fixture
def populated_ring():
    """An MD5 ring with five targets."""
    ring = ConsistentHash(hasher=Md5Hasher(), replicas=64)
    ring.add_targets([f"cache-{i}" for i in range(5)])
    return ring


@pytest.fixture
def sample_keys():
    return [f"user:{i}" for i in range(2000)]
