"""Packet class for network type simulation.

This module defines the Packet class, which represents a packet animated
across the canvas from its source node to its target node.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Packet:
    """Represents an in-flight packet.

    Attributes:
        id: Unique identifier for the packet.
        source: Source node ID.
        target: Target node ID.
        size: Size of packet in KB.
        progress: Fraction of the journey completed, 0 at source and 1 on arrival.
        lost: Whether the packet was lost.
        x: Cached horizontal render position.
        y: Cached vertical render position.
    """

    id: str
    source: str
    target: str
    size: int
    progress: float = 0.0
    lost: bool = False
    x: Optional[float] = None
    y: Optional[float] = None

    @property
    def arrived(self) -> bool:
        return self.progress >= 1

    @property
    def is_finished(self) -> bool:
        """Whether the packet leaves the active set on the next step."""
        return self.lost or self.arrived

    @property
    def position(self) -> Optional[Tuple[float, float]]:
        """Cached render position, or None if the packet is not rendered."""
        if self.lost or self.x is None or self.y is None:
            return None
        return (self.x, self.y)


def format_packet_id(sequence: int, token: str) -> str:
    """Build a packet id from a topology-scoped sequence number and a random token."""
    return f"packet-{sequence}-{token}"
