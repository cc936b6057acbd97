# AGI-HPC Project - High-Performance Computing Architecture for AGI
# Copyright (c) 2025 Andrew H. Bond
# Contact: agi.hpc@gmail.com
#
# Licensed under the AGI-HPC Responsible AI License v1.0.

"""
Ring configuration.

Usage:
    from conhash.config import load_ring_config, build_ring

    # Load from YAML file
    config = load_ring_config("configs/ring.yaml")
    ring = build_ring(config)

YAML layout:
    ring:
      hasher: md5
      replicas: 64
      targets: [cache-a, cache-b]
      log_level: INFO

Environment Variables (override file values):
    CONHASH_HASHER      Hasher name: crc32, md5, sha1 (default: crc32)
    CONHASH_REPLICAS    Virtual nodes per target (default: 32)
    CONHASH_LOG_LEVEL   Logging level (default: INFO)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from conhash.hashers import HASHERS, create_hasher
from conhash.ring import DEFAULT_REPLICAS, ConsistentHash

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    pass


# ---------------------------------------------------------------------------
# Environment Variable Helpers
# ---------------------------------------------------------------------------


def _env_int(name: str, default: int) -> int:
    """Get integer from environment variable."""
    val = os.getenv(name)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        logger.warning(
            "[conhash][config] invalid int for %s: %s, using default %d",
            name,
            val,
            default,
        )
        return default


def _env_str(name: str, default: str) -> str:
    """Get string from environment variable."""
    return os.getenv(name, default)


# ---------------------------------------------------------------------------
# Configuration Dataclass
# ---------------------------------------------------------------------------


@dataclass
class RingConfig:
    """Construction options for a ring plus its initial targets."""

    hasher: str = field(default_factory=lambda: _env_str("CONHASH_HASHER", "crc32"))
    replicas: int = field(
        default_factory=lambda: _env_int("CONHASH_REPLICAS", DEFAULT_REPLICAS)
    )
    targets: List[str] = field(default_factory=list)
    log_level: str = field(
        default_factory=lambda: _env_str("CONHASH_LOG_LEVEL", "INFO")
    )

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not isinstance(self.hasher, str):
            raise ConfigError(f"Invalid hasher: {self.hasher!r}")
        if self.hasher.lower() not in HASHERS:
            raise ConfigError(f"Unknown hasher: {self.hasher}")
        if isinstance(self.replicas, bool) or not isinstance(self.replicas, int):
            raise ConfigError(f"Invalid replicas: {self.replicas!r}")
        if self.replicas < 1:
            raise ConfigError(f"Invalid replicas: {self.replicas}")


# ---------------------------------------------------------------------------
# Configuration Loading
# ---------------------------------------------------------------------------


def load_ring_config(config_path: Optional[str] = None) -> RingConfig:
    """
    Load ring configuration from YAML file with environment overrides.

    Args:
        config_path: Path to YAML config file (optional)

    Returns:
        RingConfig instance
    """
    if not config_path:
        config = RingConfig()
    else:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        config = _load_from_yaml(path)

    logger.info(
        "[conhash][config] loaded hasher=%s replicas=%d targets=%d",
        config.hasher,
        config.replicas,
        len(config.targets),
    )
    return config


def _load_from_yaml(path: Path) -> RingConfig:
    """Load configuration from YAML file."""
    with open(path, "r") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if raw is None:
        return RingConfig()
    if not isinstance(raw, dict):
        raise ConfigError(f"Config root must be a mapping: {path}")

    section = raw.get("ring", {})
    if not isinstance(section, dict):
        raise ConfigError("'ring' section must be a mapping.")

    return _merge_config(section)


def _merge_config(data: Dict[str, Any]) -> RingConfig:
    """Build a config from file values, preserving env overrides."""
    kwargs: Dict[str, Any] = {}

    if "hasher" in data and not os.getenv("CONHASH_HASHER"):
        kwargs["hasher"] = str(data["hasher"])
    if "replicas" in data and not os.getenv("CONHASH_REPLICAS"):
        kwargs["replicas"] = data["replicas"]
    if "log_level" in data and not os.getenv("CONHASH_LOG_LEVEL"):
        kwargs["log_level"] = str(data["log_level"])
    if "targets" in data:
        targets = data["targets"] or []
        if not isinstance(targets, list):
            raise ConfigError("'targets' must be a list.")
        kwargs["targets"] = [str(t) for t in targets]

    return RingConfig(**kwargs)


def build_ring(config: RingConfig) -> ConsistentHash:
    """Create a ring from configuration and add its targets."""
    ring = ConsistentHash(hasher=create_hasher(config.hasher), replicas=config.replicas)
    ring.add_targets(config.targets)
    return ring
