"""Topology value for network type simulation.

A Topology bundles the nodes, links and live packets of one simulated network
at one instant. Topologies are immutable: stepping produces a new value that
shares the node and link tuples and carries a new packet tuple.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional, Tuple

import networkx as nx

from nettype_sim.core.link import Link
from nettype_sim.core.node import Node
from nettype_sim.core.packet import Packet

# Logical canvas the layouts are drawn on
CANVAS_WIDTH: float = 800.0
CANVAS_HEIGHT: float = 600.0
CANVAS_CENTER: Tuple[float, float] = (CANVAS_WIDTH / 2, CANVAS_HEIGHT / 2)


@dataclass(frozen=True)
class Topology:
    """Nodes, links and in-flight packets of one simulated network.

    Attributes:
        nodes: Nodes in creation order.
        links: Undirected links between nodes.
        packets: Packets currently in the active set.
        packet_counter: Number of packet ids issued over the topology's lifetime.
    """

    nodes: Tuple[Node, ...]
    links: Tuple[Link, ...]
    packets: Tuple[Packet, ...] = ()
    packet_counter: int = 0
    _index: Dict[str, Node] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self):
        """Build the node index after initialization."""
        self._index.update((node.id, node) for node in self.nodes)

    @property
    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]

    def node(self, node_id: str) -> Optional[Node]:
        """Get a node by ID.

        Args:
            node_id: The node to look up.

        Returns:
            The Node, or None if it is not part of this topology.
        """
        return self._index.get(node_id)

    def endpoints(self) -> List[Node]:
        """Get the nodes eligible as spawn endpoints (devices and servers)."""
        return [node for node in self.nodes if node.kind.is_endpoint]

    def incident_links(self, node_id: str) -> List[Link]:
        return [link for link in self.links if link.connects(node_id)]

    def with_packets(
        self, packets: Iterable[Packet], packet_counter: Optional[int] = None
    ) -> "Topology":
        """Return a copy with a different packet set.

        Args:
            packets: The new active packet set.
            packet_counter: The new id counter, unchanged if None.

        Returns:
            A new Topology sharing this topology's nodes and links.
        """
        return replace(
            self,
            packets=tuple(packets),
            packet_counter=(
                self.packet_counter if packet_counter is None else packet_counter
            ),
        )

    def packet_position(self, packet: Packet) -> Optional[Tuple[float, float]]:
        """Interpolate a packet's render position from its progress.

        Args:
            packet: The packet to place.

        Returns:
            The (x, y) position, or None for lost packets and unknown endpoints.
        """
        if packet.lost:
            return None
        source = self.node(packet.source)
        target = self.node(packet.target)
        if source is None or target is None:
            return None
        x = source.x + (target.x - source.x) * packet.progress
        y = source.y + (target.y - source.y) * packet.progress
        return (x, y)

    def to_graph(self) -> nx.Graph:
        """Build an undirected networkx graph of the nodes and links.

        Returns:
            Graph whose nodes carry ``pos``, ``kind`` and ``name`` attributes
            and whose edges carry ``distance`` and ``bandwidth``.
        """
        graph = nx.Graph()
        for node in self.nodes:
            graph.add_node(node.id, pos=node.position, kind=node.kind, name=node.name)
        for link in self.links:
            graph.add_edge(
                link.source,
                link.target,
                distance=link.distance,
                bandwidth=link.bandwidth,
            )
        return graph

    def is_connected(self) -> bool:
        graph = self.to_graph()
        return graph.number_of_nodes() > 0 and nx.is_connected(graph)

    def validate(self) -> None:
        """Check that every reference points at a node of this topology.

        Raises:
            ValueError: If a link or packet references an unknown node, a
                packet targets its own source, or node/packet ids repeat.
        """
        if len(self._index) != len(self.nodes):
            raise ValueError("Who made a topology with duplicate node ids?")

        for link in self.links:
            for node_id in link.endpoints:
                if node_id not in self._index:
                    raise ValueError(f"Link {link} references unknown node {node_id}")

        packet_ids = set()
        for packet in self.packets:
            for node_id in (packet.source, packet.target):
                if node_id not in self._index:
                    raise ValueError(
                        f"Packet {packet.id} references unknown node {node_id}"
                    )
            if packet.source == packet.target:
                raise ValueError(f"Packet {packet.id} targets its own source")
            if packet.id in packet_ids:
                raise ValueError(f"Duplicate packet id {packet.id}")
            packet_ids.add(packet.id)

    def __repr__(self) -> str:
        return (
            f"Topology({len(self.nodes)} nodes, {len(self.links)} links, "
            f"{len(self.packets)} packets)"
        )
