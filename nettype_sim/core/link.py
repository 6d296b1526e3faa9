"""Link class for network type simulation.

This module defines the Link class, which represents an undirected,
purely descriptive connection between two nodes.
"""

import math
from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from nettype_sim.core.node import Node


@dataclass(frozen=True, eq=False)
class Link:
    """Represents a network link between nodes.

    Links are undirected: two links with the same endpoints in either order
    and the same nominal figures compare and hash equal.

    Attributes:
        source: Source node ID.
        target: Target node ID.
        distance: Optional nominal distance.
        bandwidth: Optional nominal bandwidth in Mbps.
    """

    source: str
    target: str
    distance: Optional[float] = None
    bandwidth: Optional[float] = None

    @property
    def endpoints(self) -> Tuple[str, str]:
        return (self.source, self.target)

    def connects(self, node_id: str) -> bool:
        """Check whether the link is incident to a node.

        Args:
            node_id: The node to check.

        Returns:
            True if either end of the link is the node.
        """
        return node_id in (self.source, self.target)

    def _key(self) -> Tuple[FrozenSet[str], Optional[float], Optional[float]]:
        return (frozenset(self.endpoints), self.distance, self.bandwidth)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Link):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        """Return string representation of the link.

        Returns:
            String representation of the link.
        """
        bandwidth = f", {self.bandwidth:.0f}Mbps" if self.bandwidth is not None else ""
        return f"Link({self.source}--{self.target}{bandwidth})"


def euclidean_distance(a: Node, b: Node, scale: float = 1.0) -> float:
    """Canvas distance between two nodes, multiplied by scale."""
    return math.hypot(a.x - b.x, a.y - b.y) * scale
