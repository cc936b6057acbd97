# AGI-HPC Project - High-Performance Computing Architecture for AGI
# Copyright (c) 2025 Andrew H. Bond
# Contact: agi.hpc@gmail.com
#
# Licensed under the AGI-HPC Responsible AI License v1.0.

"""
Command line lookup tool.

Usage:
    conhash-lookup --targets cache-a,cache-b,cache-c --count 2 user:1 user:2
    conhash-lookup --config configs/ring.yaml --sample 10000
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from conhash.analysis import measure_distribution
from conhash.config import ConfigError, RingConfig, build_ring, load_ring_config
from conhash.hashers import HASHERS
from conhash.ring import RingError

logger = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = "WARNING"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Look up resource keys on a consistent hashing ring"
    )

    parser.add_argument(
        "keys",
        nargs="*",
        help="Resource keys to look up",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML ring config",
    )

    parser.add_argument(
        "--targets",
        type=str,
        default=None,
        help="Comma-separated targets (overrides config)",
    )

    parser.add_argument(
        "--hasher",
        type=str,
        choices=sorted(HASHERS),
        default=None,
        help="Hash function (overrides config)",
    )

    parser.add_argument(
        "--replicas",
        type=int,
        default=None,
        help="Virtual nodes per target (overrides config)",
    )

    parser.add_argument(
        "--count",
        type=int,
        default=1,
        help="Number of distinct targets per key",
    )

    parser.add_argument(
        "--sample",
        type=int,
        default=0,
        help="Report key distribution over N synthetic keys",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (overrides config)",
    )

    return parser.parse_args(argv)


def setup_logging(level: str) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _resolve_config(args: argparse.Namespace) -> RingConfig:
    config = load_ring_config(args.config)
    if args.targets is None and args.hasher is None and args.replicas is None:
        return config

    targets = config.targets
    if args.targets is not None:
        targets = [t.strip() for t in args.targets.split(",") if t.strip()]

    return RingConfig(
        hasher=args.hasher or config.hasher,
        replicas=args.replicas if args.replicas is not None else config.replicas,
        targets=targets,
        log_level=config.log_level,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = _resolve_config(args)
    except ConfigError as e:
        setup_logging(args.log_level or DEFAULT_LOG_LEVEL)
        logger.error("[conhash][cli] %s", e)
        return 2

    setup_logging(args.log_level or config.log_level)

    try:
        ring = build_ring(config)

        for key in args.keys:
            print(f"{key} -> {','.join(ring.lookup_list(key, args.count))}")

        if args.sample > 0:
            report = measure_distribution(
                ring, (f"key-{i}" for i in range(args.sample))
            )
            for target, n in report.counts.items():
                print(f"{target}: {n}")
            print(
                f"mean={report.mean:.1f} std={report.std:.1f} "
                f"cv={report.coefficient_of_variation:.4f}"
            )
    except RingError as e:
        logger.error("[conhash][cli] %s", e)
        return 2

    return 0


if __name__ == "__main__":
    import sys

    sys.exit(main())
