# AGI-HPC Project - High-Performance Computing Architecture for AGI
# Copyright (c) 2025 Andrew H. Bond
# Contact: agi.hpc@gmail.com
#
# Licensed under the AGI-HPC Responsible AI License v1.0.

"""
Consistent hashing ring implementation.

Maps resource keys onto a named set of targets using virtual nodes, so that
adding or removing a target relocates only the keys it owned.

Usage:
    from conhash import ConsistentHash

    ring = ConsistentHash()
    ring.add_targets(["cache-a", "cache-b", "cache-c"])

    owner = ring.lookup("user:1001")
    replicas = ring.lookup_list("user:1001", 2)

The ring is a plain in-memory structure with no locking. Callers sharing one
across threads must serialize mutations and lookups themselves, or build a
new ring per membership change and swap the reference.
"""

from __future__ import annotations

import bisect
import itertools
import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple, Union

from conhash.hashers import Crc32Hasher, Hasher, to_bytes

logger = logging.getLogger(__name__)

DEFAULT_REPLICAS = 32


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class RingError(Exception):
    """Base class for ring misuse errors."""

    pass


class DuplicateTargetError(RingError):
    """Raised when adding a target that is already on the ring."""

    def __init__(self, target: str):
        super().__init__(f"Target '{target}' already exists.")
        self.target = target


class UnknownTargetError(RingError):
    """Raised when referring to a target that is not on the ring."""

    def __init__(self, target: str):
        super().__init__(f"Target '{target}' does not exist.")
        self.target = target


class InvalidCountError(RingError):
    """Raised when fewer than one target is requested."""

    def __init__(self, count):
        super().__init__(f"Invalid count requested: {count}")
        self.count = count


class NoTargetsError(RingError):
    """Raised when looking up a key on an empty ring."""

    pass


# ---------------------------------------------------------------------------
# Hash Ring
# ---------------------------------------------------------------------------


class ConsistentHash:
    """
    Consistent hashing ring with virtual nodes.

    Each target is hashed onto the ring ``replicas`` times, at
    ``hash(target + str(i))`` for ``i`` in ``range(replicas)``. A resource
    belongs to the first target found clockwise from its own position.

    Two virtual nodes hashing to the same position keep only the most
    recently added one.
    """

    def __init__(
        self, hasher: Optional[Hasher] = None, replicas: int = DEFAULT_REPLICAS
    ):
        """
        Initialize the ring.

        Args:
            hasher: Hash function for targets and resources (default CRC-32)
            replicas: Number of virtual nodes per target
        """
        if hasher is None:
            hasher = Crc32Hasher()
        if not callable(getattr(hasher, "hash", None)):
            raise TypeError(f"Hasher must provide a hash() method: {hasher!r}")
        if isinstance(replicas, bool) or not isinstance(replicas, int) or replicas < 1:
            raise ValueError(f"Invalid replicas: {replicas!r}")

        self._hasher = hasher
        self._replicas = replicas

        # position -> target
        self._position_targets: Dict[int, str] = {}
        # target -> positions, in insertion order
        self._target_positions: Dict[str, List[int]] = {}
        # (positions, targets) sorted by position; None once a mutation lands
        self._sorted: Optional[Tuple[List[int], List[str]]] = None

        logger.debug(
            "[conhash][ring] initialized hasher=%r replicas=%d", hasher, replicas
        )

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def replicas(self) -> int:
        return self._replicas

    # -----------------------------------------------------------------------
    # Membership
    # -----------------------------------------------------------------------

    def add_target(self, target: str) -> "ConsistentHash":
        """Add a target and its virtual nodes to the ring.

        Args:
            target: Target identifier

        Returns:
            The ring, for chaining

        Raises:
            DuplicateTargetError: If the target is already registered
        """
        if not isinstance(target, str):
            raise TypeError(f"Target must be a str, got {type(target).__name__}")
        if target in self._target_positions:
            raise DuplicateTargetError(target)

        positions = []
        for i in range(self._replicas):
            position = self._hasher.hash(to_bytes(f"{target}{i}"))
            self._position_targets[position] = target
            positions.append(position)

        self._target_positions[target] = positions
        self._sorted = None

        logger.info(
            "[conhash][ring] added target=%s replicas=%d targets=%d positions=%d",
            target,
            self._replicas,
            len(self._target_positions),
            len(self._position_targets),
        )
        return self

    def add_targets(self, targets: Iterable[str]) -> "ConsistentHash":
        """Add several targets in order.

        Stops at the first failure. Targets added before it stay on the ring.
        """
        for target in targets:
            self.add_target(target)
        return self

    def remove_target(self, target: str) -> "ConsistentHash":
        """Remove a target and its virtual nodes from the ring.

        Raises:
            UnknownTargetError: If the target is not registered
        """
        if target not in self._target_positions:
            raise UnknownTargetError(target)

        for position in self._target_positions.pop(target):
            # A later colliding insert may have taken this position over
            if self._position_targets.get(position) == target:
                del self._position_targets[position]

        self._sorted = None

        logger.info(
            "[conhash][ring] removed target=%s targets=%d positions=%d",
            target,
            len(self._target_positions),
            len(self._position_targets),
        )
        return self

    def get_all_targets(self) -> List[str]:
        """Get all registered targets in insertion order."""
        return list(self._target_positions)

    def get_positions(self, target: str) -> List[int]:
        """Get the ring positions generated for a target."""
        if target not in self._target_positions:
            raise UnknownTargetError(target)
        return list(self._target_positions[target])

    @property
    def target_count(self) -> int:
        """Number of registered targets."""
        return len(self._target_positions)

    @property
    def position_count(self) -> int:
        """Number of occupied ring positions."""
        return len(self._position_targets)

    def __len__(self) -> int:
        return len(self._target_positions)

    def __contains__(self, target: object) -> bool:
        return target in self._target_positions

    # -----------------------------------------------------------------------
    # Lookup
    # -----------------------------------------------------------------------

    def _sorted_view(self) -> Tuple[List[int], List[str]]:
        """Ring entries sorted by position, as of the last mutation."""
        if self._sorted is None:
            items = sorted(self._position_targets.items())
            self._sorted = (
                [position for position, _ in items],
                [target for _, target in items],
            )
            logger.debug("[conhash][ring] sorted %d positions", len(items))
        return self._sorted

    def lookup(self, resource: Union[str, bytes]) -> str:
        """Get the target owning a resource.

        Raises:
            NoTargetsError: If no target owns a ring position. Besides an
                empty ring, this happens when collisions left every
                registered target without positions.
        """
        targets = self.lookup_list(resource, 1)
        if not targets:
            if self._target_positions:
                raise NoTargetsError(
                    f"No ring positions for {len(self._target_positions)} targets"
                )
            raise NoTargetsError("No targets exist")
        return targets[0]

    def lookup_list(self, resource: Union[str, bytes], count: int = 1) -> List[str]:
        """Get up to ``count`` distinct targets for a resource.

        Targets are returned in ring order, starting with the first position
        strictly above the resource's position and wrapping to the start.

        Args:
            resource: Resource key
            count: Number of distinct targets wanted

        Returns:
            ``min(count, target_count)`` distinct targets

        Raises:
            InvalidCountError: If count is below 1
        """
        if count < 1:
            raise InvalidCountError(count)

        if not self._target_positions:
            return []

        if len(self._target_positions) == 1:
            return [next(iter(self._target_positions))]

        resource_position = self._hasher.hash(to_bytes(resource))
        positions, owners = self._sorted_view()

        wanted = min(count, len(self._target_positions))
        start = bisect.bisect_right(positions, resource_position)

        results: List[str] = []
        seen: Set[str] = set()

        # Walk clockwise from the resource, then wrap to the start
        for idx in itertools.chain(range(start, len(owners)), range(start)):
            target = owners[idx]
            if target in seen:
                continue
            seen.add(target)
            results.append(target)
            if len(results) == wanted:
                break

        logger.debug(
            "[conhash][ring] lookup position=%d count=%d -> %s",
            resource_position,
            count,
            results,
        )
        return results

    # -----------------------------------------------------------------------
    # Diagnostics
    # -----------------------------------------------------------------------

    def get_load_distribution(self) -> Dict[str, float]:
        """Get the share of ring positions owned by each target.

        Returns:
            Dict mapping target to percentage of positions owned
        """
        if not self._position_targets:
            return {}

        counts: Dict[str, int] = {target: 0 for target in self._target_positions}
        for target in self._position_targets.values():
            counts[target] += 1

        total = len(self._position_targets)
        return {target: n / total * 100 for target, n in counts.items()}

    def __str__(self) -> str:
        return "%s{targets:[%s]}" % (
            type(self).__name__,
            ",".join(self._target_positions),
        )

    __repr__ = __str__
