"""Node class for network type simulation.

This module defines the Node class, which represents a device, router,
server or cloud endpoint placed on the simulation canvas.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from nettype_sim.core.enums import NodeKind


@dataclass(frozen=True)
class Node:
    """Represents a network node at a fixed canvas position.

    Attributes:
        id: Unique identifier within a topology.
        x: Horizontal canvas position.
        y: Vertical canvas position.
        kind: Role of the node in the topology.
        name: Optional display name.
    """

    id: str
    x: float
    y: float
    kind: NodeKind
    name: Optional[str] = None

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __repr__(self) -> str:
        """Return string representation of the node.

        Returns:
            String representation of the node.
        """
        return f"Node({self.id}, {self.kind.value}, ({self.x:.0f}, {self.y:.0f}))"
