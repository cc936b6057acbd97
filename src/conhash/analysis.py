# AGI-HPC Project - High-Performance Computing Architecture for AGI
# Copyright (c) 2025 Andrew H. Bond
# Contact: agi.hpc@gmail.com
#
# Licensed under the AGI-HPC Responsible AI License v1.0.

"""
Key distribution measurement for a ring.

Used to check how evenly keys spread across targets and how many keys move
when membership changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping

import numpy as np

from conhash.ring import ConsistentHash

logger = logging.getLogger(__name__)


@dataclass
class DistributionReport:
    """Keys per target over a sample."""

    counts: Dict[str, int] = field(default_factory=dict)
    total_keys: int = 0
    mean: float = 0.0
    std: float = 0.0

    @property
    def coefficient_of_variation(self) -> float:
        """Standard deviation relative to the mean (0 is perfectly even)."""
        if self.mean == 0:
            return 0.0
        return self.std / self.mean

    def to_dict(self) -> Dict:
        return {
            "counts": dict(self.counts),
            "total_keys": self.total_keys,
            "mean": self.mean,
            "std": self.std,
            "cv": self.coefficient_of_variation,
        }


def snapshot_owners(ring: ConsistentHash, keys: Iterable[str]) -> Dict[str, str]:
    """Map each key to its current owner."""
    return {key: ring.lookup(key) for key in keys}


def measure_distribution(
    ring: ConsistentHash, keys: Iterable[str]
) -> DistributionReport:
    """Count how many sample keys each target owns.

    Args:
        ring: Ring to measure
        keys: Sample of resource keys

    Returns:
        DistributionReport with per-target counts and spread statistics
    """
    if len(ring) == 0:
        return DistributionReport()

    counts: Dict[str, int] = {target: 0 for target in ring.get_all_targets()}
    total = 0
    for key in keys:
        counts[ring.lookup(key)] += 1
        total += 1

    if total == 0:
        return DistributionReport(counts=counts)

    values = np.array(list(counts.values()), dtype=np.float64)
    report = DistributionReport(
        counts=counts,
        total_keys=total,
        mean=float(values.mean()),
        std=float(values.std()),
    )

    logger.debug(
        "[conhash][analysis] keys=%d targets=%d cv=%.4f",
        total,
        len(counts),
        report.coefficient_of_variation,
    )
    return report


def remapped_keys(before: Mapping[str, str], after: Mapping[str, str]) -> List[str]:
    """Keys present in both mappings whose owner changed."""
    return [
        key for key, owner in before.items() if key in after and after[key] != owner
    ]
