"""Topology generators for network type simulation.

This module builds a synthetic topology for each network type. Every
generator lays its nodes out on the 800x600 canvas, connects each leaf to a
hub, and seeds an initial set of in-flight packets.
"""

import math
from typing import Callable, Dict, List, Optional, Tuple, Union

from loguru import logger

from nettype_sim.core.enums import NetworkType, NodeKind
from nettype_sim.core.link import Link, euclidean_distance
from nettype_sim.core.node import Node
from nettype_sim.core.packet import Packet, format_packet_id
from nettype_sim.core.topology import CANVAS_CENTER, Topology
from nettype_sim.traffic.generators import other_index, variable_size
from nettype_sim.utils.rng import SimulationRNG, ensure_rng


class TopologyBuilder:
    """Accumulates nodes, links and seeded packets for one topology.

    Attributes:
        rng: Random source for every stochastic decision.
        nodes: Nodes added so far.
        links: Links added so far.
        packets: Packets seeded so far.
        packet_counter: Packet ids issued so far.
    """

    def __init__(self, rng: SimulationRNG):
        self.rng = rng
        self.nodes: Dict[str, Node] = {}
        self.links: List[Link] = []
        self.packets: List[Packet] = []
        self.packet_counter = 0

    def add_node(
        self,
        node_id: str,
        x: float,
        y: float,
        kind: NodeKind,
        name: Optional[str] = None,
    ) -> Node:
        """Add a node to the topology.

        Args:
            node_id: Unique identifier for the node.
            x: Horizontal canvas position.
            y: Vertical canvas position.
            kind: Role of the node.
            name: Optional display name.

        Returns:
            The created Node object.
        """
        if node_id in self.nodes:
            raise ValueError(f"Node {node_id} already exists")
        node = Node(node_id, x, y, kind, name)
        self.nodes[node_id] = node
        return node

    def add_link(
        self,
        source: str,
        target: str,
        bandwidth: Optional[float] = None,
        distance: Optional[float] = None,
    ) -> Link:
        if source not in self.nodes or target not in self.nodes:
            raise ValueError(f"Nodes {source} and/or {target} do not exist")
        link = Link(source, target, distance=distance, bandwidth=bandwidth)
        self.links.append(link)
        return link

    def emit(
        self,
        source: str,
        target: str,
        size_range: Tuple[int, int],
        loss_probability: float,
    ) -> Packet:
        """Seed a packet at a random point of its journey.

        Args:
            source: Source node ID.
            target: Target node ID, different from source.
            size_range: Half-open size range in KB.
            loss_probability: Probability the packet starts out lost.

        Returns:
            The seeded Packet.
        """
        self.packet_counter += 1
        packet = Packet(
            id=format_packet_id(self.packet_counter, self.rng.token()),
            source=source,
            target=target,
            size=variable_size(self.rng, *size_range)(),
            progress=self.rng.random(),
            lost=self.rng.chance(loss_probability),
        )
        self.packets.append(packet)
        return packet

    def build(self) -> Topology:
        return Topology(
            nodes=tuple(self.nodes.values()),
            links=tuple(self.links),
            packets=tuple(self.packets),
            packet_counter=self.packet_counter,
        )


def ring_position(
    center: Tuple[float, float], index: int, count: int, radius: float
) -> Tuple[float, float]:
    """Place item index of count evenly on a circle around center."""
    angle = (index / count) * math.pi * 2
    return (
        center[0] + math.cos(angle) * radius,
        center[1] + math.sin(angle) * radius,
    )


def jitter_offset(rng: SimulationRNG, amount: float) -> float:
    """Return +amount or -amount with equal probability."""
    return amount if rng.random() > 0.5 else -amount


def generate_lan_topology(rng: SimulationRNG) -> Topology:
    """Star topology: six PCs around a central switch."""
    builder = TopologyBuilder(rng)
    builder.add_node("switch", *CANVAS_CENTER, NodeKind.ROUTER, "Switch")

    device_count = 6
    device_ids = [f"device{i + 1}" for i in range(device_count)]
    for i, device_id in enumerate(device_ids):
        x, y = ring_position(CANVAS_CENTER, i, device_count, 150)
        builder.add_node(device_id, x, y, NodeKind.DEVICE, f"PC {i + 1}")
        builder.add_link("switch", device_id, bandwidth=1000)

    for i, device_id in enumerate(device_ids):
        if rng.chance(0.5):
            target = device_ids[other_index(rng, i, device_count)]
            builder.emit(device_id, target, (100, 1100), 0.01)

    return builder.build()


def generate_man_topology(rng: SimulationRNG) -> Topology:
    """Backbone router with four building routers, each serving three PCs."""
    builder = TopologyBuilder(rng)
    builder.add_node("backbone", *CANVAS_CENTER, NodeKind.ROUTER, "MAN Backbone")

    building_count = 4
    device_count = 3
    for i in range(building_count):
        building = ring_position(CANVAS_CENTER, i, building_count, 200)
        router_id = f"router{i + 1}"
        builder.add_node(router_id, *building, NodeKind.ROUTER, f"Building {i + 1} Router")
        builder.add_link("backbone", router_id, bandwidth=500)

        for j in range(device_count):
            x, y = ring_position(building, j, device_count, 80)
            device_id = f"device-{i}-{j}"
            builder.add_node(device_id, x, y, NodeKind.DEVICE, f"PC {i}-{j}")
            builder.add_link(router_id, device_id, bandwidth=1000)

    # Traffic only crosses between buildings
    for i in range(building_count):
        for j in range(device_count):
            if rng.chance(0.3):
                target_building = other_index(rng, i, building_count)
                target_device = rng.randint(0, device_count)
                builder.emit(
                    f"device-{i}-{j}",
                    f"device-{target_building}-{target_device}",
                    (500, 1500),
                    0.05,
                )

    return builder.build()


WAN_LOCATIONS: List[Tuple[str, str, float, float]] = [
    ("nyc", "New York", 300, 200),
    ("london", "London", 500, 150),
    ("tokyo", "Tokyo", 600, 250),
    ("sydney", "Sydney", 550, 450),
    ("saopaulo", "São Paulo", 250, 400),
]


def generate_wan_topology(rng: SimulationRNG) -> Topology:
    """Internet cloud linking city servers, each with a client device."""
    builder = TopologyBuilder(rng)
    internet = builder.add_node("internet", *CANVAS_CENTER, NodeKind.CLOUD, "Internet")

    for location_id, name, x, y in WAN_LOCATIONS:
        server = builder.add_node(location_id, x, y, NodeKind.SERVER, name)
        builder.add_link(
            "internet",
            location_id,
            bandwidth=100,
            distance=euclidean_distance(internet, server, scale=10),
        )

        builder.add_node(
            f"device-{location_id}",
            x + jitter_offset(rng, 40),
            y + jitter_offset(rng, 40),
            NodeKind.DEVICE,
            f"{name} Client",
        )
        builder.add_link(location_id, f"device-{location_id}", bandwidth=500)

    for i, (location_id, _, _, _) in enumerate(WAN_LOCATIONS):
        if rng.chance(0.5):
            target_id = WAN_LOCATIONS[other_index(rng, i, len(WAN_LOCATIONS))][0]
            builder.emit(
                f"device-{location_id}", f"device-{target_id}", (1000, 3000), 0.1
            )

    return builder.build()


PAN_DEVICES: List[Tuple[str, str, float, float]] = [
    ("watch", "Smartwatch", 350, 250),
    ("headphones", "Headphones", 450, 250),
    ("laptop", "Laptop", 350, 350),
    ("tablet", "Tablet", 450, 350),
]


def generate_pan_topology(rng: SimulationRNG) -> Topology:
    """A smartphone paired with four personal devices."""
    builder = TopologyBuilder(rng)
    user = builder.add_node("user", *CANVAS_CENTER, NodeKind.DEVICE, "Smartphone")

    for device_id, name, x, y in PAN_DEVICES:
        device = builder.add_node(device_id, x, y, NodeKind.DEVICE, name)
        builder.add_link(
            "user", device_id, bandwidth=50, distance=euclidean_distance(user, device)
        )

        if rng.chance(0.7):
            builder.emit("user", device_id, (100, 600), 0.01)
            if rng.chance(0.3):
                builder.emit(device_id, "user", (50, 250), 0.01)

    return builder.build()


CAN_BUILDINGS: List[Tuple[str, str, float, float]] = [
    ("admin", "Admin Building", 300, 200),
    ("science", "Science Building", 500, 200),
    ("library", "Library", 500, 400),
    ("dorms", "Dormitories", 300, 400),
]


def generate_can_topology(rng: SimulationRNG) -> Topology:
    """Core switch linking campus buildings, each with one or two PCs."""
    builder = TopologyBuilder(rng)
    builder.add_node("core", *CANVAS_CENTER, NodeKind.ROUTER, "Core Switch")

    building_devices: List[List[str]] = []
    for building_id, name, x, y in CAN_BUILDINGS:
        builder.add_node(building_id, x, y, NodeKind.ROUTER, name)
        builder.add_link("core", building_id, bandwidth=800)

        device_ids = []
        for i in range(rng.randint(1, 3)):
            device_id = f"{building_id}-device{i}"
            offset_x = jitter_offset(rng, 1) * rng.random() * 40
            offset_y = jitter_offset(rng, 1) * rng.random() * 40
            builder.add_node(
                device_id, x + offset_x, y + offset_y, NodeKind.DEVICE, f"{name} PC {i + 1}"
            )
            builder.add_link(building_id, device_id, bandwidth=1000)
            device_ids.append(device_id)
        building_devices.append(device_ids)

    for i, device_ids in enumerate(building_devices):
        for device_id in device_ids:
            if rng.chance(0.4):
                target = CAN_BUILDINGS[other_index(rng, i, len(CAN_BUILDINGS))][0]
                builder.emit(device_id, f"{target}-device0", (500, 1500), 0.02)

    return builder.build()


GAN_SATELLITES: List[Tuple[str, float, float]] = [
    ("satellite1", 250, 150),
    ("satellite2", 550, 150),
    ("satellite3", 250, 450),
    ("satellite4", 550, 450),
]

GAN_GROUND_STATIONS: List[Tuple[str, str, float, float, str]] = [
    ("ny", "New York", 200, 300, "satellite1"),
    ("la", "Los Angeles", 150, 350, "satellite3"),
    ("london", "London", 350, 250, "satellite1"),
    ("tokyo", "Tokyo", 650, 300, "satellite2"),
    ("sydney", "Sydney", 600, 350, "satellite4"),
    ("rio", "Rio de Janeiro", 350, 400, "satellite3"),
]


def generate_gan_topology(rng: SimulationRNG) -> Topology:
    """Fully meshed satellites relaying between ground stations."""
    builder = TopologyBuilder(rng)
    for i, (satellite_id, x, y) in enumerate(GAN_SATELLITES):
        builder.add_node(satellite_id, x, y, NodeKind.SERVER, f"Satellite {i + 1}")

    for i, (source, _, _) in enumerate(GAN_SATELLITES):
        for target, _, _ in GAN_SATELLITES[i + 1 :]:
            builder.add_link(source, target, bandwidth=50)

    for station_id, name, x, y, satellite_id in GAN_GROUND_STATIONS:
        builder.add_node(station_id, x, y, NodeKind.ROUTER, name)
        builder.add_link(satellite_id, station_id, bandwidth=50)

    for i, (station_id, _, _, _, _) in enumerate(GAN_GROUND_STATIONS):
        if rng.chance(0.3):
            target = GAN_GROUND_STATIONS[other_index(rng, i, len(GAN_GROUND_STATIONS))][0]
            builder.emit(station_id, target, (1000, 6000), 0.2)

    return builder.build()


WLAN_DEVICE_TYPES: List[str] = ["Laptop", "Smartphone", "Tablet", "Smart TV", "IoT Device"]


def generate_wlan_topology(rng: SimulationRNG) -> Topology:
    """Wireless devices scattered at random around one access point."""
    builder = TopologyBuilder(rng)
    builder.add_node("router", *CANVAS_CENTER, NodeKind.ROUTER, "Wireless Router")

    device_count = 8
    device_ids = [f"device{i}" for i in range(device_count)]
    for i, device_id in enumerate(device_ids):
        angle = rng.random() * math.pi * 2
        distance = rng.uniform(50, 200)
        x = CANVAS_CENTER[0] + math.cos(angle) * distance
        y = CANVAS_CENTER[1] + math.sin(angle) * distance
        device_type = rng.choice(WLAN_DEVICE_TYPES)
        builder.add_node(device_id, x, y, NodeKind.DEVICE, f"{device_type} {i + 1}")
        builder.add_link("router", device_id, bandwidth=300)

    for i, device_id in enumerate(device_ids):
        if rng.chance(0.5):
            if rng.random() > 0.5:
                target = "router"
            else:
                target = device_ids[other_index(rng, i, device_count)]
            builder.emit(device_id, target, (500, 2000), 0.05)

    return builder.build()


EPN_BRANCHES: List[Tuple[str, str, float, float, NodeKind]] = [
    ("branch1", "Branch Office 1", 250, 300, NodeKind.ROUTER),
    ("branch2", "Branch Office 2", 550, 300, NodeKind.ROUTER),
    ("remote1", "Remote Worker 1", 300, 400, NodeKind.DEVICE),
    ("remote2", "Remote Worker 2", 500, 400, NodeKind.DEVICE),
]


def generate_epn_topology(rng: SimulationRNG) -> Topology:
    """Headquarters, VPN gateway and cloud core with branch and remote sites."""
    builder = TopologyBuilder(rng)
    builder.add_node("hq", 400, 200, NodeKind.SERVER, "Headquarters")
    builder.add_node("vpn", 400, 300, NodeKind.ROUTER, "VPN Gateway")
    builder.add_node("cloud", 400, 400, NodeKind.CLOUD, "Cloud Services")
    builder.add_link("hq", "vpn", bandwidth=500)
    builder.add_link("vpn", "cloud", bandwidth=300)

    for branch_id, name, x, y, kind in EPN_BRANCHES:
        builder.add_node(branch_id, x, y, kind, name)
        builder.add_link("vpn", branch_id, bandwidth=100)

        if rng.chance(0.7):
            target = rng.choice(["hq", "cloud"])
            builder.emit(branch_id, target, (500, 1500), 0.05)
            if rng.chance(0.3):
                builder.emit(target, branch_id, (500, 2000), 0.05)

    return builder.build()


VPN_ENDPOINTS: List[Tuple[str, str, float, float]] = [
    ("company", "Company Network", 250, 200),
    ("home", "Home Network", 550, 200),
    ("cafe", "Coffee Shop", 250, 400),
    ("hotel", "Hotel WiFi", 550, 400),
]


def generate_vpn_topology(rng: SimulationRNG) -> Topology:
    """Encrypted tunnels over the internet between four remote networks."""
    builder = TopologyBuilder(rng)
    builder.add_node("internet", *CANVAS_CENTER, NodeKind.CLOUD, "Internet")

    for endpoint_id, name, x, y in VPN_ENDPOINTS:
        builder.add_node(endpoint_id, x, y, NodeKind.ROUTER, name)
        builder.add_link("internet", endpoint_id, bandwidth=50)

        device_id = f"device-{endpoint_id}"
        builder.add_node(
            device_id,
            x + jitter_offset(rng, 50),
            y + jitter_offset(rng, 50),
            NodeKind.DEVICE,
            f"{name} User",
        )
        builder.add_link(endpoint_id, device_id, bandwidth=100)

    for i, (endpoint_id, _, _, _) in enumerate(VPN_ENDPOINTS):
        if rng.chance(0.5):
            target = VPN_ENDPOINTS[other_index(rng, i, len(VPN_ENDPOINTS))][0]
            builder.emit(f"device-{endpoint_id}", f"device-{target}", (500, 1500), 0.05)

    return builder.build()


SAN_STORAGE_TYPES: List[str] = ["SSD Array", "HDD Array", "Tape Library", "Flash Storage"]


def generate_san_topology(rng: SimulationRNG) -> Topology:
    """Servers and storage arrays on either side of a storage fabric."""
    builder = TopologyBuilder(rng)
    builder.add_node("fabric", *CANVAS_CENTER, NodeKind.ROUTER, "Storage Fabric")

    server_count = 4
    for i in range(server_count):
        builder.add_node(f"server{i}", 250, 200 + i * 70, NodeKind.SERVER, f"Server {i + 1}")
        builder.add_link("fabric", f"server{i}", bandwidth=1500)

    for i, storage_type in enumerate(SAN_STORAGE_TYPES):
        storage_id = f"storage{i}"
        builder.add_node(storage_id, 550, 200 + i * 70, NodeKind.SERVER, storage_type)
        builder.add_link("fabric", storage_id, bandwidth=1500)

        # Writes flow server -> storage, reads flow back
        for j in range(server_count):
            if rng.chance(0.3):
                builder.emit(f"server{j}", storage_id, (1000, 11000), 0.01)
            if rng.chance(0.2):
                builder.emit(storage_id, f"server{j}", (5000, 25000), 0.01)

    return builder.build()


TOPOLOGY_GENERATORS: Dict[NetworkType, Callable[[SimulationRNG], Topology]] = {
    NetworkType.LAN: generate_lan_topology,
    NetworkType.MAN: generate_man_topology,
    NetworkType.WAN: generate_wan_topology,
    NetworkType.PAN: generate_pan_topology,
    NetworkType.CAN: generate_can_topology,
    NetworkType.GAN: generate_gan_topology,
    NetworkType.WLAN: generate_wlan_topology,
    NetworkType.EPN: generate_epn_topology,
    NetworkType.VPN: generate_vpn_topology,
    NetworkType.SAN: generate_san_topology,
}


def generate(
    network_type: Union[NetworkType, str], rng: Optional[SimulationRNG] = None
) -> Topology:
    """Generate a topology for a network type.

    Args:
        network_type: A NetworkType or its code.
        rng: Random source; a fresh unseeded one is used if None.

    Returns:
        A new Topology with its initial packet set.
    """
    network_type = NetworkType.parse(network_type)
    topology = TOPOLOGY_GENERATORS[network_type](ensure_rng(rng))
    logger.debug(
        f"Generated {network_type.value} topology: {len(topology.nodes)} nodes, "
        f"{len(topology.links)} links, {len(topology.packets)} packets"
    )
    return topology
