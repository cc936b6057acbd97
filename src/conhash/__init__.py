# AGI-HPC Project - High-Performance Computing Architecture for AGI
# Copyright (c) 2025 Andrew H. Bond
# Contact: agi.hpc@gmail.com
#
# Licensed under the AGI-HPC Responsible AI License v1.0.

"""
Consistent hashing for mapping resource keys onto a dynamic set of targets.

Provides:
- Virtual node placement with configurable replica count
- Pluggable 32-bit hash functions (CRC-32, MD5, SHA-1)
- Ordered multi-target lookup for replication

Usage:
    from conhash import ConsistentHash, Md5Hasher

    ring = ConsistentHash(hasher=Md5Hasher(), replicas=64)
    ring.add_targets(["cache-a", "cache-b"])
    ring.lookup("user:1001")
"""

from conhash.hashers import (
    Hasher,
    Crc32Hasher,
    Md5Hasher,
    Sha1Hasher,
    create_hasher,
)
from conhash.ring import (
    ConsistentHash,
    RingError,
    DuplicateTargetError,
    UnknownTargetError,
    InvalidCountError,
    NoTargetsError,
)
from conhash.config import ConfigError, RingConfig, load_ring_config, build_ring
from conhash.analysis import DistributionReport, measure_distribution

__all__ = [
    # Ring
    "ConsistentHash",
    # Errors
    "RingError",
    "DuplicateTargetError",
    "UnknownTargetError",
    "InvalidCountError",
    "NoTargetsError",
    # Hashers
    "Hasher",
    "Crc32Hasher",
    "Md5Hasher",
    "Sha1Hasher",
    "create_hasher",
    # Config
    "ConfigError",
    "RingConfig",
    "load_ring_config",
    "build_ring",
    # Analysis
    "DistributionReport",
    "measure_distribution",
]
