"""Traffic helpers for network type simulation.

This module provides packet size distributions and endpoint selection helpers
shared by the topology generators and the simulation stepper.
"""

from typing import Callable, Optional, Sequence, Tuple, TypeVar

from nettype_sim.utils.rng import SimulationRNG

T = TypeVar("T")

# Size range in KB for packets injected while stepping
SPAWN_SIZE_RANGE: Tuple[int, int] = (500, 1500)

# Per-step probability of injecting a packet
SPAWN_PROBABILITY: float = 0.2


def variable_size(rng: SimulationRNG, min_size: int, max_size: int) -> Callable[[], int]:
    """Generate variable size packets.

    Args:
        rng: Random source to draw from.
        min_size: Minimum size of packets in KB (inclusive).
        max_size: Maximum size of packets in KB (exclusive).

    Returns:
        Function that returns random packet size in [min_size, max_size).
    """
    return lambda: rng.randint(min_size, max_size)


def other_index(rng: SimulationRNG, index: int, count: int) -> int:
    """Pick a random index in [0, count) that differs from index.

    Uses offset-and-modulo so a single draw always lands on another index.

    Args:
        rng: Random source to draw from.
        index: The index to avoid.
        count: Number of candidates, at least 2.

    Returns:
        An index different from ``index``.
    """
    if count < 2:
        raise ValueError("Need at least two candidates to pick a different one")
    offset = rng.randint(1, count)
    return (index + offset) % count


def distinct_pair(
    rng: SimulationRNG, items: Sequence[T]
) -> Optional[Tuple[T, T]]:
    """Pick two distinct items at random.

    The source is drawn uniformly; the target is redrawn until it differs.

    Args:
        rng: Random source to draw from.
        items: Candidate items.

    Returns:
        A (source, target) pair, or None when fewer than two items exist.
    """
    if len(items) < 2:
        return None
    source = rng.choice(items)
    target = rng.choice(items)
    while target == source:
        target = rng.choice(items)
    return source, target
